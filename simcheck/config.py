import os
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from simcheck.utils.errors import ConfigurationError

load_dotenv()

# ───── Scoring ─────
FLAG_THRESHOLD = float(os.getenv("SIMCHECK_FLAG_THRESHOLD", 0.5))
MIN_REPORT_SCORE = float(os.getenv("SIMCHECK_MIN_REPORT_SCORE", 0.0))
LINE_MATCH_CUTOFF = float(os.getenv("SIMCHECK_LINE_MATCH_CUTOFF", 0.80))

# ───── Fingerprinting ─────
KGRAM_SIZE = int(os.getenv("SIMCHECK_KGRAM_SIZE", 5))
WINDOW_SIZE = int(os.getenv("SIMCHECK_WINDOW_SIZE", 4))

# ───── Resource limits ─────
MAX_DOCUMENT_LENGTH = int(os.getenv("SIMCHECK_MAX_DOCUMENT_LENGTH", 20000))
MAX_WORKERS = int(os.getenv("SIMCHECK_MAX_WORKERS", 4))
PARALLEL_ALGORITHMS = os.getenv("SIMCHECK_PARALLEL_ALGORITHMS", "false").lower() == "true"

# ───── Algorithms ─────
ALGORITHM_NAMES = ["jaccard", "cosine", "tfidf", "levenshtein", "lcs", "winnowing", "ast", "semantic"]
ENABLED_ALGORITHMS = (
    [a.strip() for a in os.getenv("SIMCHECK_ALGORITHMS").split(",") if a.strip()]
    if os.getenv("SIMCHECK_ALGORITHMS") else list(ALGORITHM_NAMES)
)
EMBEDDING_MODEL_NAME = os.getenv("SIMCHECK_EMBEDDING_MODEL", "all-MiniLM-L6-v2")
SEMANTIC_ENABLED = os.getenv("SIMCHECK_SEMANTIC_ENABLED", "false").lower() == "true"

# ───── Tables: (lower bound, value), highest bound first ─────
TOKEN_THRESHOLD_TABLE = ((0.8, 0.20), (0.6, 0.30), (0.4, 0.40), (0.0, 0.50))
SIMILARITY_BUCKETS = ((0.9, "exact"), (0.7, "high"), (0.4, "medium"), (0.0, "low"))
BUCKET_LABELS = {"exact", "high", "medium", "low"}

LOG_LEVEL = os.getenv("SIMCHECK_LOG_LEVEL", "INFO")


def _check_descending(table: Tuple[Tuple[float, object], ...], name: str) -> None:
    if not table:
        raise ValueError(f"{name} must not be empty")
    bounds = [row[0] for row in table]
    if bounds != sorted(bounds, reverse=True) or len(set(bounds)) != len(bounds):
        raise ValueError(f"{name} lower bounds must be strictly descending")
    if bounds[-1] > 0.0:
        raise ValueError(f"{name} must end with a 0.0 lower bound")


class DetectionConfig(BaseModel):
    """Configuration bundle passed explicitly into every comparison."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    flag_threshold: float = Field(FLAG_THRESHOLD, ge=0.0, le=1.0)
    min_report_score: float = Field(MIN_REPORT_SCORE, ge=0.0, le=1.0)
    line_match_cutoff: float = Field(LINE_MATCH_CUTOFF, gt=0.0, le=1.0)
    kgram_size: int = Field(KGRAM_SIZE, gt=0)
    window_size: int = Field(WINDOW_SIZE, gt=0)
    max_document_length: int = Field(MAX_DOCUMENT_LENGTH, gt=0)
    max_workers: int = Field(MAX_WORKERS, gt=0)
    parallel_algorithms: bool = PARALLEL_ALGORITHMS
    algorithms: List[str] = Field(default_factory=lambda: list(ENABLED_ALGORITHMS))
    weights: Dict[str, float] = Field(default_factory=dict)
    token_threshold_table: Tuple[Tuple[float, float], ...] = TOKEN_THRESHOLD_TABLE
    similarity_buckets: Tuple[Tuple[float, str], ...] = SIMILARITY_BUCKETS

    @field_validator("algorithms")
    @classmethod
    def _known_algorithms(cls, value: List[str]) -> List[str]:
        unknown = [a for a in value if a not in ALGORITHM_NAMES]
        if unknown:
            raise ValueError(f"unknown algorithms: {', '.join(unknown)}")
        if not value:
            raise ValueError("at least one algorithm must be enabled")
        return value

    @field_validator("weights")
    @classmethod
    def _valid_weights(cls, value: Dict[str, float]) -> Dict[str, float]:
        for name, weight in value.items():
            if name not in ALGORITHM_NAMES:
                raise ValueError(f"weight given for unknown algorithm '{name}'")
            if weight < 0:
                raise ValueError(f"weight for '{name}' must be non-negative")
        return value

    @model_validator(mode="after")
    def _valid_tables(self) -> "DetectionConfig":
        _check_descending(self.token_threshold_table, "token_threshold_table")
        _check_descending(self.similarity_buckets, "similarity_buckets")
        for _, threshold in self.token_threshold_table:
            if not 0.0 <= threshold <= 1.0:
                raise ValueError("token thresholds must lie in [0, 1]")
        for _, label in self.similarity_buckets:
            if label not in BUCKET_LABELS:
                raise ValueError(f"unknown similarity bucket '{label}'")
        return self


def load_config(overrides: Optional[Dict] = None, **kwargs) -> DetectionConfig:
    """Build a DetectionConfig from the environment defaults plus overrides.

    Raises ConfigurationError before any comparison runs if the bundle is malformed.
    """
    values = dict(overrides or {})
    values.update(kwargs)
    try:
        return DetectionConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
