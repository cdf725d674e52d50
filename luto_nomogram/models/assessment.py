"""
API request / response schemas for the nomogram endpoints.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AssessmentRequest(BaseModel):
    """Finding flags to score. Omitted findings count as absent."""
    findings: Dict[str, bool] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {"example": {
            "findings": {"oligohydramnios": True, "megacystis": True}
        }}


class ToggleRequest(AssessmentRequest):
    """Current flags plus the finding to flip."""
    finding: str


class BreakdownTermResponse(BaseModel):
    name: str
    label: str
    value: float


class ScoreResponse(BaseModel):
    logit: float
    probability: float
    percentage: float
    band: str
    label: str
    alert: bool
    breakdown: List[BreakdownTermResponse]
    no_additional_risk_factors: bool


class AssessmentResponse(BaseModel):
    """Normalised six-key assessment and its score."""
    findings: Dict[str, bool]
    result: ScoreResponse


class FindingInfo(BaseModel):
    finding: str
    label: str
    coefficient: float


class CitationInfo(BaseModel):
    authors: str
    journal: str
    year: int
    reference: str


class ModelResponse(BaseModel):
    intercept: float
    coefficients: List[FindingInfo]
    baseline_prevalence: float
    target_population: str
    formula: str
    citation: CitationInfo


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    uptime_seconds: float
    model: Optional[str] = None
