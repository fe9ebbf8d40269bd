"""Dependency injection para FastAPI."""
from __future__ import annotations

from fastapi import Depends, Request

from .core.config import Settings, get_settings
from .services.classification import ClassificationPipeline, ClassifierService
from .services.reference import ReferenceTables, get_reference_tables
from .services.suitability import SuitabilityScorer, UnknownIdPolicy


def get_tables() -> ReferenceTables:
    """Proporciona las tablas de referencia estáticas."""
    return get_reference_tables()


def get_suitability_scorer(
    tables: ReferenceTables = Depends(get_tables),
    settings: Settings = Depends(get_settings),
) -> SuitabilityScorer:
    """Proporciona el scorer con la política de identificadores configurada."""
    policy = UnknownIdPolicy.RAISE if settings.strict_reference_lookup else UnknownIdPolicy.DEFAULT
    return SuitabilityScorer(tables, policy=policy)


def get_classifier_service(request: Request) -> ClassifierService:
    """Proporciona el ClassifierService único, creado al construir la aplicación."""
    return request.app.state.classifier_service


def get_classification_pipeline(
    classifier: ClassifierService = Depends(get_classifier_service),
) -> ClassificationPipeline:
    """Proporciona el pipeline de clasificación sobre el servicio compartido."""
    return ClassificationPipeline(classifier)
