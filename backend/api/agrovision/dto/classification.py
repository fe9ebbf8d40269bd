from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class DiseaseDetails(BaseModel):
    """Contenido legible de una enfermedad detectada."""

    name: str
    symptoms: List[str] = Field(default_factory=list)
    treatment: List[str] = Field(default_factory=list)
    prevention: List[str] = Field(default_factory=list)


class ClassificationReport(BaseModel):
    """Reporte de clasificación de una imagen de hoja."""

    disease: str
    confidence: int = Field(ge=0, le=100)
    details: DiseaseDetails


class ErrorResponse(BaseModel):
    error: str
