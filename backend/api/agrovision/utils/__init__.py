"""Utilidades comunes del sistema."""
from .type_converters import as_string, round_half_up
from .validators import validate_identifier, validate_positive

__all__ = [
    "as_string",
    "round_half_up",
    "validate_identifier",
    "validate_positive",
]
