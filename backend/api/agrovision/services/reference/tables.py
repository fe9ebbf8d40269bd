"""Tablas de referencia de clima mensual, cultivos y tipos de suelo."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ...exceptions import ReferenceNotFoundError
from ...utils import as_string


MONTHS: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class ClimateRecord:
    """Clima promedio de un mes calendario y cultivos aptos para sembrar en él."""

    month: str
    temperature: float
    rainfall: float
    humidity: float
    suitable_crops: frozenset
    season: str


@dataclass(frozen=True)
class Crop:
    """Ficha estática de un cultivo del catálogo."""

    id: str
    name: str
    season: str
    growth_duration: str
    ideal_temperature: str
    water_requirement: str
    soil_preference: frozenset


@dataclass(frozen=True)
class SoilType:
    """Ficha estática de un tipo de suelo."""

    id: str
    name: str
    description: str
    characteristics: Tuple[str, ...]


class ReferenceTables:
    """Servicio de consulta de solo lectura sobre las tablas estáticas.

    El clima se indexa por nombre de mes y siempre se recorre en orden
    calendario, independientemente del orden de los registros recibidos.
    """

    def __init__(
        self,
        climate: Iterable[ClimateRecord],
        crops: Iterable[Crop],
        soils: Iterable[SoilType],
    ) -> None:
        climate_by_month = {record.month: record for record in climate}
        unknown = set(climate_by_month) - set(MONTHS)
        if unknown:
            raise ValueError(f"Meses inválidos en tabla de clima: {', '.join(sorted(unknown))}")

        self._climate: Tuple[ClimateRecord, ...] = tuple(
            climate_by_month[month] for month in MONTHS if month in climate_by_month
        )
        self._crops: Dict[str, Crop] = {crop.id: crop for crop in crops}
        self._soils: Dict[str, SoilType] = {soil.id: soil for soil in soils}

    @property
    def climate(self) -> Tuple[ClimateRecord, ...]:
        return self._climate

    @property
    def crops(self) -> List[Crop]:
        return list(self._crops.values())

    @property
    def soils(self) -> List[SoilType]:
        return list(self._soils.values())

    def find_crop(self, crop_id: str) -> Optional[Crop]:
        return self._crops.get(crop_id)

    def find_soil(self, soil_id: str) -> Optional[SoilType]:
        return self._soils.get(soil_id)

    def get_climate(self, month: str) -> ClimateRecord:
        """Busca el clima de un mes sin distinguir mayúsculas."""
        wanted = as_string(month)
        for record in self._climate:
            if record.month.lower() == wanted:
                return record
        raise ReferenceNotFoundError("mes", month)

    def months_suitable_for(self, crop_id: str) -> List[str]:
        """Meses, en orden calendario, cuyo clima admite sembrar el cultivo."""
        return [record.month for record in self._climate if crop_id in record.suitable_crops]

