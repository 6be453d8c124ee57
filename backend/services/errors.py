"""Error taxonomy for embedding generation, similarity and matching."""


class CompetencyMatchError(Exception):
    """Base class for all competency matching errors."""


class ProviderError(CompetencyMatchError):
    """Embedding provider call failed or timed out.

    The only error worth retrying; the retry/skip policy belongs to the caller.
    """


class DimensionMismatch(CompetencyMatchError, ValueError):
    """Two vectors of unequal length were compared or stored together."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Embedding dimension mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class EmptySelection(CompetencyMatchError, ValueError):
    """Matching was requested with no selected competencies."""

    def __init__(self) -> None:
        super().__init__("At least one competency must be selected")
