from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from . import __version__
from .controllers.classification_controller import router as classification_router
from .controllers.health_controller import router as health_router
from .controllers.recommendations_controller import router as recommendations_router
from .controllers.reference_controller import router as reference_router
from .core.config import Settings, settings as default_settings
from .core.logging import get_logger
from .middleware.cors import CORSHeadersMiddleware
from .services.classification import ClassifierService, InferenceBackend, JoblibModelBackend


logger = get_logger("main")


def build_classifier_service(settings: Settings) -> ClassifierService:
    """Construye el único ClassifierService del proceso a partir de la configuración."""
    backend: Optional[InferenceBackend] = None
    if settings.model_url:
        backend = JoblibModelBackend(settings.model_url, fetch_timeout=settings.model_load_timeout)
    else:
        logger.warning("MODEL_URL no configurado; /classify responderá con error")
    return ClassifierService(
        backend,
        load_timeout=settings.model_load_timeout,
        inference_timeout=settings.inference_timeout,
    )


def create_app(
    settings: Optional[Settings] = None,
    classifier_service: Optional[ClassifierService] = None,
) -> FastAPI:
    settings = settings or default_settings

    application = FastAPI(
        title="AgroVision API",
        version=__version__,
        description="API de recomendaciones de siembra y diagnóstico de enfermedades en hojas",
    )

    # CORS abierto: cualquier origen, cabeceras del cliente web
    application.add_middleware(CORSHeadersMiddleware)

    # El modelo se carga en el primer request de clasificación, no al arrancar
    application.state.classifier_service = classifier_service or build_classifier_service(settings)

    application.include_router(health_router)
    application.include_router(classification_router)
    application.include_router(recommendations_router)
    application.include_router(reference_router)
    return application


app = create_app()
