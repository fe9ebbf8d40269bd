"""Verifica que el modelo configurado en MODEL_URL se pueda cargar antes de iniciar la API.

Uso: python -m agrovision.scripts.check_model [--source URL_O_RUTA]
"""
from __future__ import annotations

import argparse
import asyncio
from typing import Optional, Sequence

from agrovision.core.config import get_settings
from agrovision.exceptions import InferenceError
from agrovision.services.classification import ClassifierService, JoblibModelBackend


async def _load(source: str, timeout: float) -> None:
    backend = JoblibModelBackend(source, fetch_timeout=timeout)
    service = ClassifierService(backend, load_timeout=timeout)
    await service.ensure_ready()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Verifica la carga del modelo de clasificación.")
    parser.add_argument("--source", help="URL o ruta del artefacto (por defecto MODEL_URL)")
    args = parser.parse_args(argv)

    settings = get_settings()
    source = args.source or settings.model_url
    if not source:
        print("[check_model] MODEL_URL no configurado y no se indicó --source.", flush=True)
        return 1

    print(f"[check_model] Cargando modelo desde {source}...", flush=True)
    try:
        asyncio.run(_load(source, settings.model_load_timeout))
    except InferenceError as exc:
        print(f"[check_model] Error ({exc.cause}): {exc}", flush=True)
        return 1

    print("[check_model] Modelo cargado correctamente.", flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
