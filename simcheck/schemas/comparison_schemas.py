from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Dict, List, Optional
from datetime import datetime


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---- Inputs ----

class Submission(_Frozen):
    id: str
    author: Optional[str] = None
    content: str = ""
    submitted_at: Optional[datetime] = None


# ---- Matching ----

class TextSpan(_Frozen):
    start_line: int = Field(..., ge=1)   # 1-based, inclusive
    end_line: int = Field(..., ge=1)
    text: str

    @model_validator(mode="after")
    def _ordered(self) -> "TextSpan":
        if self.end_line < self.start_line:
            raise ValueError("end_line must not precede start_line")
        return self


class MatchedSegment(_Frozen):
    span_a: TextSpan
    span_b: TextSpan
    similarity: float = Field(..., ge=0.0, le=1.0)
    match_type: str     # "exact" | "containment" | "token"


class PlagiarismMatch(_Frozen):
    submission_a: str
    submission_b: str
    author_a: Optional[str] = None
    author_b: Optional[str] = None
    overall_score: float = Field(..., ge=0.0, le=1.0)
    algorithms: Dict[str, float] = Field(default_factory=dict)
    segments: List[MatchedSegment] = Field(default_factory=list)
    flagged: bool
    flag_threshold: float = Field(..., ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _flag_consistent(self) -> "PlagiarismMatch":
        if self.flagged != (self.overall_score >= self.flag_threshold):
            raise ValueError("flagged must equal overall_score >= flag_threshold")
        return self


# ---- Line analytics ----

class LineMatchRecord(_Frozen):
    line: int = Field(..., ge=1)
    similarity: float = Field(..., ge=0.0, le=1.0)
    matched: bool
    highlighted: bool = False
    category: str = "none"


class SimilarityDistribution(_Frozen):
    exact: int = 0      # [0.9, 1.0]
    high: int = 0       # [0.7, 0.9)
    medium: int = 0     # [0.4, 0.7)
    low: int = 0        # (0, 0.4)
    none: int = 0       # 0

    @property
    def total(self) -> int:
        return self.exact + self.high + self.medium + self.low + self.none


class HeatmapCell(_Frozen):
    line: int
    similarity: float
    category: str
    label: str          # e.g. "Line 3: High similarity (75%)"


class TrendPoint(_Frozen):
    x: float            # position along the document, percent
    y: float            # similarity, percent


class LineAnalytics(_Frozen):
    total_lines: int
    matched_lines: int
    unique_lines: int
    match_percentage: float
    unique_percentage: float
    match_cutoff: float
    distribution: SimilarityDistribution
    distribution_percentages: Dict[str, float] = Field(default_factory=dict)
    heatmap: List[HeatmapCell] = Field(default_factory=list)
    trend: List[TrendPoint] = Field(default_factory=list)


class SideReport(_Frozen):
    submission_id: str
    token_threshold: float
    lines: List[LineMatchRecord]
    analytics: LineAnalytics


class ComparisonReport(_Frozen):
    match: PlagiarismMatch
    side_a: SideReport
    side_b: SideReport


# ---- Batch ----

class SkippedPair(_Frozen):
    submission_a: str
    submission_b: str
    reason: str


class BatchResult(_Frozen):
    total_pairs: int
    matches: List[PlagiarismMatch] = Field(default_factory=list)
    skipped: List[SkippedPair] = Field(default_factory=list)
    processing_time: str = ""


# ---- Requests ----

class CompareRequest(BaseModel):
    submission_a: Submission
    submission_b: Submission
    config: Optional[Dict] = None


class BatchRequest(BaseModel):
    submissions: List[Submission]
    config: Optional[Dict] = None
