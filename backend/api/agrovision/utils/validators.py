"""Validadores compartidos entre diferentes módulos."""
from __future__ import annotations

import math
from typing import Any

from ..exceptions import InputError


def validate_identifier(value: Any, *, field: str) -> str:
    """Valida que un identificador de selección no esté vacío.
    
    Args:
        value: Identificador recibido
        field: Nombre del campo para mensajes de error
        
    Returns:
        Identificador sin espacios en los extremos
        
    Raises:
        InputError: Si el identificador está vacío o ausente
    """
    normalised = str(value).strip() if value is not None else ""
    if not normalised:
        raise InputError(f"{field} es obligatorio")
    return normalised


def validate_positive(value: Any, *, field: str) -> float:
    """Valida que un valor numérico sea estrictamente positivo.
    
    Args:
        value: Valor a validar
        field: Nombre del campo para mensajes de error

    Returns:
        Valor convertido a float

    Raises:
        InputError: Si el valor no es numérico o no es mayor a cero
    """
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InputError(f"{field} debe ser numérico") from exc
    if not math.isfinite(number) or number <= 0:
        raise InputError(f"{field} debe ser mayor a cero")
    return number
