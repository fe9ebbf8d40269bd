"""Conversores de tipos para sanitización de datos."""
from __future__ import annotations

import math
from typing import Any, Optional


def as_string(value: Any) -> Optional[str]:
    """Convierte un valor a string normalizado (lowercase, sin espacios).
    
    Args:
        value: Valor a convertir
        
    Returns:
        string normalizado si tiene contenido, None en caso contrario
    """
    if value is None:
        return None
    normalised = str(value).strip().lower()
    return normalised or None


def round_half_up(value: float) -> int:
    """Redondea al entero más cercano, con los empates hacia arriba.

    ``round`` de Python usa redondeo bancario (``round(70.5) == 70``); los
    porcentajes de confianza se redondean como ``70.5 -> 71``.

    Args:
        value: Valor a redondear

    Returns:
        Entero redondeado
    """
    return int(math.floor(value + 0.5))
