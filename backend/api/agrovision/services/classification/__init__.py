"""Clasificación de enfermedades a partir de imágenes de hojas."""
from .classifier_service import ClassifierService, ModelState
from .composer import DiagnosticComposer
from .model_backend import InferenceBackend, JoblibModelBackend
from .pipeline import ClassificationPipeline
from .preprocessor import ImagePreprocessor
from .taxonomy import DISEASE_CLASSES, DISEASE_TAXONOMY, DiseaseInfo, display_name

__all__ = [
    "DISEASE_CLASSES",
    "DISEASE_TAXONOMY",
    "ClassificationPipeline",
    "ClassifierService",
    "DiagnosticComposer",
    "DiseaseInfo",
    "ImagePreprocessor",
    "InferenceBackend",
    "JoblibModelBackend",
    "ModelState",
    "display_name",
]
