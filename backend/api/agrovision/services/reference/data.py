"""Dataset estático de clima mensual, catálogo de cultivos y tipos de suelo.

Valores promedio para la llanura indo-gangética: temperatura media en °C,
precipitación mensual en mm y humedad relativa en %.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from ...core.logging import get_logger
from .tables import ClimateRecord, Crop, ReferenceTables, SoilType


logger = get_logger("reference.data")


MONTHLY_CLIMATE: Tuple[ClimateRecord, ...] = (
    ClimateRecord("January", 14.5, 18.0, 70.0, frozenset({"tomato", "potato"}), "Rabi"),
    ClimateRecord("February", 17.5, 20.0, 62.0, frozenset({"tomato", "maize"}), "Rabi"),
    ClimateRecord("March", 23.0, 14.0, 50.0, frozenset({"maize"}), "Zaid"),
    ClimateRecord("April", 29.0, 9.0, 38.0, frozenset({"cotton"}), "Zaid"),
    ClimateRecord("May", 33.0, 22.0, 40.0, frozenset({"cotton", "rice"}), "Zaid"),
    ClimateRecord("June", 32.5, 95.0, 60.0, frozenset({"rice", "maize", "cotton"}), "Kharif"),
    ClimateRecord("July", 30.0, 230.0, 80.0, frozenset({"rice", "maize"}), "Kharif"),
    ClimateRecord("August", 29.5, 240.0, 83.0, frozenset({"tomato"}), "Kharif"),
    ClimateRecord("September", 28.5, 140.0, 78.0, frozenset({"tomato", "potato"}), "Kharif"),
    ClimateRecord("October", 25.5, 30.0, 68.0, frozenset({"wheat", "potato", "tomato"}), "Rabi"),
    ClimateRecord("November", 20.0, 6.0, 65.0, frozenset({"wheat", "potato"}), "Rabi"),
    ClimateRecord("December", 15.5, 8.0, 70.0, frozenset({"wheat", "potato"}), "Rabi"),
)


CROPS: Tuple[Crop, ...] = (
    Crop(
        id="rice",
        name="Rice",
        season="Kharif",
        growth_duration="120-150 days",
        ideal_temperature="22-32°C",
        water_requirement="High",
        soil_preference=frozenset({"alluvial", "black"}),
    ),
    Crop(
        id="wheat",
        name="Wheat",
        season="Rabi",
        growth_duration="110-130 days",
        ideal_temperature="12-25°C",
        water_requirement="Moderate",
        soil_preference=frozenset({"alluvial", "black"}),
    ),
    Crop(
        id="maize",
        name="Maize",
        season="Kharif",
        growth_duration="90-110 days",
        ideal_temperature="21-30°C",
        water_requirement="Moderate",
        soil_preference=frozenset({"alluvial", "red", "sandy"}),
    ),
    Crop(
        id="cotton",
        name="Cotton",
        season="Kharif",
        growth_duration="150-180 days",
        ideal_temperature="20-30°C",
        water_requirement="Moderate",
        soil_preference=frozenset({"black", "red"}),
    ),
    Crop(
        id="tomato",
        name="Tomato",
        season="Rabi",
        growth_duration="90-150 days",
        ideal_temperature="20-25°C",
        water_requirement="Moderate",
        soil_preference=frozenset({"red", "sandy", "alluvial"}),
    ),
    Crop(
        id="potato",
        name="Potato",
        season="Rabi",
        growth_duration="90-120 days",
        ideal_temperature="15-20°C",
        water_requirement="Moderate",
        soil_preference=frozenset({"sandy", "alluvial"}),
    ),
)


SOIL_TYPES: Tuple[SoilType, ...] = (
    SoilType(
        id="alluvial",
        name="Alluvial Soil",
        description="Deposited by rivers; deep, fertile and easy to work.",
        characteristics=("high fertility", "good water retention", "rich in potash"),
    ),
    SoilType(
        id="black",
        name="Black Soil",
        description="Clay-rich soil formed from basalt, also known as regur.",
        characteristics=("high moisture retention", "rich in calcium and magnesium"),
    ),
    SoilType(
        id="red",
        name="Red Soil",
        description="Formed from crystalline rocks; red from iron oxides.",
        characteristics=("good drainage", "iron-rich composition"),
    ),
    SoilType(
        id="laterite",
        name="Laterite Soil",
        description="Leached soil of high-rainfall regions, low in nutrients.",
        characteristics=("acidic reaction", "good drainage", "needs organic matter"),
    ),
    SoilType(
        id="sandy",
        name="Sandy Loam",
        description="Light, well-aerated soil that warms quickly in spring.",
        characteristics=("excellent aeration", "fast warming"),
    ),
)


@lru_cache
def get_reference_tables() -> ReferenceTables:
    """Retorna las tablas por defecto, construidas una sola vez por proceso."""
    tables = ReferenceTables(MONTHLY_CLIMATE, CROPS, SOIL_TYPES)
    logger.debug(
        "Tablas de referencia cargadas",
        extra={
            "meses": len(tables.climate),
            "cultivos": len(tables.crops),
            "suelos": len(tables.soils),
        },
    )
    return tables
