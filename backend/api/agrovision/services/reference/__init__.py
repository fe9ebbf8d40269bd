"""Tablas estáticas de clima, cultivos y suelos."""
from .data import CROPS, MONTHLY_CLIMATE, SOIL_TYPES, get_reference_tables
from .tables import (
    MONTHS,
    ClimateRecord,
    Crop,
    ReferenceTables,
    SoilType,
)

__all__ = [
    "CROPS",
    "MONTHLY_CLIMATE",
    "SOIL_TYPES",
    "MONTHS",
    "ClimateRecord",
    "Crop",
    "ReferenceTables",
    "SoilType",
    "get_reference_tables",
]
