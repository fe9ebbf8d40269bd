"""Cálculo de aptitud de siembra a partir de cultivo, suelo y rendimiento deseado.

El puntaje combina tres factores:
- Aptitud del suelo: 1.0 si el suelo está entre los preferidos del cultivo, 0.8 si no.
- Factor estacional: 1.0 si el cultivo tiene más de 3 meses aptos, 0.9 si no.
- Amplitud de la ventana: fracción de meses del año aptos para el cultivo.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ...core.logging import get_logger
from ...dto.recommendation import Recommendation
from ...exceptions import ReferenceNotFoundError
from ...utils import round_half_up, validate_identifier, validate_positive
from ..reference import MONTHS, ReferenceTables, SoilType, get_reference_tables


logger = get_logger("suitability.scorer")


FIXED_ADVICE: Tuple[str, ...] = (
    "Prepare soil 2 weeks before planting",
    "Ensure proper irrigation system",
    "Monitor soil moisture regularly",
)


class UnknownIdPolicy(str, Enum):
    """Qué hacer cuando el cultivo o el suelo no existen en las tablas."""

    DEFAULT = "default"
    RAISE = "raise"


@dataclass(frozen=True)
class SuitabilityFactors:
    suitable_months: Tuple[str, ...]
    soil_suitability: float
    seasonal_yield_factor: float

    @property
    def window_fraction(self) -> float:
        return len(self.suitable_months) / len(MONTHS)


class SuitabilityScorer:
    """Función pura sobre las tablas de referencia; no mantiene estado mutable."""

    MATCHING_SOIL = 1.0
    FALLBACK_SOIL = 0.8
    WIDE_WINDOW = 1.0
    NARROW_WINDOW = 0.9
    WIDE_WINDOW_MIN_MONTHS = 3

    SOIL_WEIGHT = 40
    SEASON_WEIGHT = 40
    WINDOW_WEIGHT = 20

    def __init__(
        self,
        tables: Optional[ReferenceTables] = None,
        *,
        policy: UnknownIdPolicy = UnknownIdPolicy.DEFAULT,
    ) -> None:
        """Inicializa el scorer.

        Args:
            tables: Tablas de referencia; por defecto el dataset estático
            policy: Política para identificadores desconocidos
        """
        self._tables = tables if tables is not None else get_reference_tables()
        self._policy = UnknownIdPolicy(policy)

    @property
    def policy(self) -> UnknownIdPolicy:
        return self._policy

    def factors(self, crop_id: str, soil_id: str) -> SuitabilityFactors:
        """Calcula los factores intermedios del puntaje.

        Raises:
            ReferenceNotFoundError: Solo con política ``RAISE`` y cultivo desconocido
        """
        suitable_months = tuple(self._tables.months_suitable_for(crop_id))

        crop = self._tables.find_crop(crop_id)
        if crop is None:
            self._on_unknown("cultivo", crop_id)
        if crop is not None and soil_id in crop.soil_preference:
            soil_suitability = self.MATCHING_SOIL
        else:
            soil_suitability = self.FALLBACK_SOIL

        if len(suitable_months) > self.WIDE_WINDOW_MIN_MONTHS:
            seasonal_yield_factor = self.WIDE_WINDOW
        else:
            seasonal_yield_factor = self.NARROW_WINDOW

        return SuitabilityFactors(
            suitable_months=suitable_months,
            soil_suitability=soil_suitability,
            seasonal_yield_factor=seasonal_yield_factor,
        )

    def score(self, crop_id: str, soil_id: str, desired_yield: float) -> Recommendation:
        """Genera la recomendación de siembra.

        Args:
            crop_id: Identificador del cultivo
            soil_id: Identificador del tipo de suelo
            desired_yield: Rendimiento objetivo en tn/ha (mayor a cero)

        Returns:
            Recomendación con meses aptos, confianza, rendimiento esperado y consejos

        Raises:
            ReferenceNotFoundError: Solo con política ``RAISE`` e identificadores desconocidos
        """
        factors = self.factors(crop_id, soil_id)

        soil = self._tables.find_soil(soil_id)
        if soil is None:
            self._on_unknown("suelo", soil_id)

        expected_yield = desired_yield * factors.soil_suitability * factors.seasonal_yield_factor
        confidence = round_half_up(
            factors.soil_suitability * self.SOIL_WEIGHT
            + factors.seasonal_yield_factor * self.SEASON_WEIGHT
            + factors.window_fraction * self.WINDOW_WEIGHT
        )
        confidence = max(0, min(100, confidence))

        recommendation = Recommendation(
            best_time=list(factors.suitable_months),
            confidence=confidence,
            expected_yield=expected_yield,
            recommendations=self._build_advice(factors.suitable_months, soil),
        )

        logger.info(
            "Recomendación de siembra calculada",
            extra={
                "cultivo": crop_id,
                "suelo": soil_id,
                "meses_aptos": len(factors.suitable_months),
                "confianza": confidence,
            },
        )
        return recommendation

    @staticmethod
    def _build_advice(suitable_months: Tuple[str, ...], soil: Optional[SoilType]) -> List[str]:
        advice = [f"Best planting months: {', '.join(suitable_months)}", *FIXED_ADVICE]
        if soil is not None:
            advice.extend(f"Utilize {characteristic}" for characteristic in soil.characteristics)
        return advice

    def _on_unknown(self, kind: str, identifier: str) -> None:
        if self._policy is UnknownIdPolicy.RAISE:
            raise ReferenceNotFoundError(kind, identifier)
        logger.warning(
            "Identificador desconocido, se usan valores por defecto",
            extra={"tipo": kind, "id": identifier},
        )


def get_recommendation(
    crop_id: str,
    soil_id: str,
    desired_yield: float,
    *,
    scorer: Optional[SuitabilityScorer] = None,
) -> Recommendation:
    """Punto de entrada de scoring: valida la selección y delega en el scorer.

    Raises:
        InputError: Si falta el cultivo o el suelo, o el rendimiento no es positivo
        ReferenceNotFoundError: Solo con política ``RAISE`` e identificadores desconocidos
    """
    crop_id = validate_identifier(crop_id, field="crop_id")
    soil_id = validate_identifier(soil_id, field="soil_id")
    desired_yield = validate_positive(desired_yield, field="desired_yield")
    return (scorer or SuitabilityScorer()).score(crop_id, soil_id, desired_yield)
