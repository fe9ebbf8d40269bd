from __future__ import annotations

from typing import List

from pydantic import BaseModel


class ClimateRecordResponse(BaseModel):
    month: str
    temperature: float
    rainfall: float
    humidity: float
    suitable_crops: List[str]
    season: str


class CropResponse(BaseModel):
    id: str
    name: str
    season: str
    growth_duration: str
    ideal_temperature: str
    water_requirement: str
    soil_preference: List[str]


class SoilTypeResponse(BaseModel):
    id: str
    name: str
    description: str
    characteristics: List[str]


class DiseaseClassResponse(BaseModel):
    """Clase de enfermedad en el orden de salida del modelo."""

    index: int
    id: str
    name: str
    source: str
