"""Configuración centralizada de logging."""
import logging

import structlog

from .config import settings


logging.basicConfig(format="%(message)s", level=getattr(logging, settings.log_level, logging.INFO))

# Logging estructurado en JSON para todos los componentes
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

def get_logger(name: str) -> structlog.BoundLogger:
    """Obtiene un logger configurado con el nombre especificado."""
    return structlog.get_logger(name)
