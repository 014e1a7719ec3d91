"""Pydantic schema for the SEO/niche classification with guardrails validation"""
from typing import Any, List
from pydantic import Field, field_validator, model_validator

from core.schemas import CamelModel
from generation.guardrails.rules import validate_seo_payload

UNCONFIGURED_RECOMMENDATION = "configure the classifier for full analysis"
CLASSIFIER_ERROR_RECOMMENDATION = "classifier error"

class SeoAnalysis(CamelModel):
    """Classifier verdict on the caption and hashtags"""
    score: int = Field(..., ge=0, le=100)
    niche: str
    recommendations: List[str] = Field(..., max_length=3)

    @model_validator(mode="before")
    @classmethod
    def validate_guardrails(cls, data: Any) -> Any:
        if isinstance(data, SeoAnalysis):
            return data
        violations = validate_seo_payload(data)
        if violations:
            raise ValueError(f"Classifier guardrail violations: {violations}")
        return data

    @field_validator("score", mode="before")
    @classmethod
    def round_score(cls, v):
        return round(v) if isinstance(v, float) else v

    @classmethod
    def unconfigured(cls) -> "SeoAnalysis":
        return cls(score=50, niche="undetermined", recommendations=[UNCONFIGURED_RECOMMENDATION])

    @classmethod
    def classifier_error(cls) -> "SeoAnalysis":
        return cls(score=50, niche="undetermined", recommendations=[CLASSIFIER_ERROR_RECOMMENDATION])
