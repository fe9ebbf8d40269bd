"""Excepciones de dominio compartidas entre servicios y controladores."""
from __future__ import annotations

from typing import Optional


class AgroVisionError(Exception):
    """Base de todos los errores de dominio de la aplicación."""


class InputError(AgroVisionError):
    """Entrada incompleta o inválida (imagen ausente, cultivo o suelo sin seleccionar)."""


class DecodeError(AgroVisionError):
    """Los bytes recibidos no representan una imagen decodificable."""


class InferenceError(AgroVisionError):
    """El modelo no está disponible o la inferencia no pudo completarse.

    ``cause`` identifica el motivo: ``unavailable``, ``load_failed``, ``timeout``,
    ``shape_mismatch``, ``inference_failed`` o ``invalid_output``.
    """

    def __init__(self, message: str, *, cause: str = "unavailable") -> None:
        super().__init__(message)
        self.cause = cause


class ReferenceNotFoundError(AgroVisionError, LookupError):
    """Identificador de cultivo, suelo o enfermedad inexistente en las tablas de referencia."""

    def __init__(self, kind: str, identifier: Optional[str]) -> None:
        super().__init__(f"{kind} desconocido: {identifier!r}")
        self.kind = kind
        self.identifier = identifier


__all__ = [
    "AgroVisionError",
    "DecodeError",
    "InferenceError",
    "InputError",
    "ReferenceNotFoundError",
]
