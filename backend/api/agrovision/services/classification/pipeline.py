"""Pipeline de clasificación: preprocesamiento, inferencia y composición del diagnóstico."""
from __future__ import annotations

from typing import Optional

from ...core.logging import get_logger
from ...dto.classification import ClassificationReport
from .classifier_service import ClassifierService
from .composer import DiagnosticComposer
from .preprocessor import ImagePreprocessor


logger = get_logger("classification.pipeline")


class ClassificationPipeline:
    """Orquesta los componentes; los errores se propagan sin modificar al controlador."""

    def __init__(
        self,
        classifier: ClassifierService,
        *,
        preprocessor: Optional[ImagePreprocessor] = None,
        composer: Optional[DiagnosticComposer] = None,
    ) -> None:
        self._classifier = classifier
        self._preprocessor = preprocessor or ImagePreprocessor()
        self._composer = composer or DiagnosticComposer()

    async def classify(self, image_bytes: bytes) -> ClassificationReport:
        """Clasifica una imagen de hoja.

        Args:
            image_bytes: Contenido crudo de la imagen

        Returns:
            Reporte con la enfermedad detectada, su confianza y el asesoramiento

        Raises:
            DecodeError: Si la imagen no se puede decodificar
            InferenceError: Si el modelo no está disponible o la inferencia falla
            ReferenceNotFoundError: Si la clase detectada no existe en la taxonomía
        """
        tensor = self._preprocessor.preprocess(image_bytes)
        class_id, confidence = await self._classifier.classify(tensor)
        report = self._composer.compose(class_id, confidence)
        logger.debug("Reporte de diagnóstico compuesto", extra={"enfermedad": report.disease})
        return report
