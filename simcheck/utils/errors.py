class SimilarityError(Exception):
    """Base class for similarity engine errors."""


class AlgorithmUnavailable(SimilarityError):
    """A scorer cannot produce a value for this pair; its entry is omitted."""

    def __init__(self, algorithm: str, reason: str):
        self.algorithm = algorithm
        self.reason = reason
        super().__init__(f"{algorithm} unavailable: {reason}")


class ComputationOverflow(AlgorithmUnavailable):
    """Document length exceeds the ceiling for an O(n*m) scorer."""

    def __init__(self, algorithm: str, length: int, ceiling: int):
        self.length = length
        self.ceiling = ceiling
        super().__init__(algorithm, f"document length {length} exceeds ceiling {ceiling}")


class ConfigurationError(SimilarityError):
    """Malformed configuration, rejected before any comparison begins."""
