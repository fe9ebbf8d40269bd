"""Composición del reporte de diagnóstico a partir de la clase detectada."""
from __future__ import annotations

from typing import Mapping, Optional

from ...dto.classification import ClassificationReport, DiseaseDetails
from ...exceptions import ReferenceNotFoundError
from .taxonomy import DISEASE_TAXONOMY, DiseaseInfo, display_name


class DiagnosticComposer:
    """Mapea la clase detectada a un reporte legible usando la taxonomía."""

    def __init__(self, taxonomy: Optional[Mapping[str, DiseaseInfo]] = None) -> None:
        self._taxonomy = taxonomy if taxonomy is not None else DISEASE_TAXONOMY

    def compose(self, detected_class_id: str, confidence: int) -> ClassificationReport:
        """Construye el reporte de clasificación.

        Args:
            detected_class_id: Identificador de la clase con mayor probabilidad
            confidence: Confianza entera entre 0 y 100

        Returns:
            Reporte con nombre, síntomas, tratamiento y prevención de la clase

        Raises:
            ReferenceNotFoundError: Si la clase no existe en la taxonomía
        """
        info = self._taxonomy.get(detected_class_id)
        if info is None:
            raise ReferenceNotFoundError("enfermedad", detected_class_id)

        return ClassificationReport(
            disease=detected_class_id,
            confidence=confidence,
            details=DiseaseDetails(
                name=display_name(detected_class_id),
                symptoms=list(info.symptoms),
                treatment=list(info.treatment),
                prevention=list(info.prevention),
            ),
        )
