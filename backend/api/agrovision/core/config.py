"""Application configuration management."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional


_TRUE_VALUES = {"1", "true", "yes", "on"}


def _read_positive_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} debe ser numérico, recibido: {raw!r}") from exc
    if value <= 0:
        raise RuntimeError(f"{name} debe ser mayor a cero, recibido: {raw!r}")
    return value


class Settings:
    """Container for environment-driven configuration."""

    def __init__(self) -> None:
        self.model_url: Optional[str] = os.environ.get("MODEL_URL") or None
        self.model_load_timeout: float = _read_positive_float("MODEL_LOAD_TIMEOUT_SECONDS", 60.0)
        self.inference_timeout: float = _read_positive_float("INFERENCE_TIMEOUT_SECONDS", 10.0)
        self.strict_reference_lookup: bool = (
            os.environ.get("STRICT_REFERENCE_LOOKUP", "false").strip().lower() in _TRUE_VALUES
        )
        self.log_level: str = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid repeated environment parsing."""

    return Settings()


settings: Settings = get_settings()


__all__: tuple[str, ...] = ("settings", "get_settings", "Settings")
