from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator


class RecommendationRequest(BaseModel):
    """Request para generar una recomendación de siembra."""

    crop_id: str = Field(min_length=1)
    soil_id: str = Field(min_length=1)
    desired_yield: float = Field(gt=0, allow_inf_nan=False)

    @field_validator("crop_id", "soil_id")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        """Rechaza identificadores compuestos solo por espacios."""
        normalised = value.strip()
        if not normalised:
            raise ValueError("el identificador no puede estar vacío")
        return normalised


class Recommendation(BaseModel):
    """Recomendación de siembra derivada; se recalcula en cada request."""

    best_time: List[str] = Field(default_factory=list)
    confidence: int = Field(ge=0, le=100)
    expected_yield: float = Field(ge=0.0)
    recommendations: List[str] = Field(default_factory=list)
