"""Carga y ejecución del modelo de clasificación preentrenado."""
from __future__ import annotations

import asyncio
import io
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence, Tuple
from urllib.parse import urlparse

import httpx
import joblib
import numpy as np

from ...core.logging import get_logger
from ...exceptions import InferenceError
from .taxonomy import DISEASE_CLASSES


logger = get_logger("classification.model_backend")


DEFAULT_INPUT_SHAPE: Tuple[int, int, int] = (224, 224, 3)


class InferenceBackend(Protocol):
    """Capacidad mínima que necesita ClassifierService de un runtime de inferencia."""

    @property
    def input_shape(self) -> Tuple[int, ...]:
        ...

    async def load(self) -> None:
        ...

    def predict(self, tensor: np.ndarray) -> np.ndarray:
        ...


class JoblibModelBackend:
    """Modelo serializado con joblib y obtenido desde una URL o una ruta local.

    El artefacto puede ser un estimador con ``predict_proba`` o un diccionario
    ``{"model": estimador, "classes": [...], "input_shape": [224, 224, 3]}``.
    """

    def __init__(
        self,
        source: str,
        *,
        class_ids: Sequence[str] = DISEASE_CLASSES,
        input_shape: Tuple[int, ...] = DEFAULT_INPUT_SHAPE,
        fetch_timeout: Optional[float] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Inicializa el backend.

        Args:
            source: URL ``http(s)://``, URL ``file://`` o ruta al artefacto
            class_ids: Clases en el orden en que se devuelven las probabilidades
            input_shape: Forma esperada por muestra, sin la dimensión de batch
            fetch_timeout: Timeout de la descarga HTTP en segundos
            http_transport: Transporte httpx alternativo (tests, proxies)
        """
        self._source = source
        self._class_ids = tuple(class_ids)
        self._input_shape = tuple(input_shape)
        self._fetch_timeout = fetch_timeout
        self._http_transport = http_transport

        self._model: Any = None
        self._column_order: Optional[list[int]] = None
        self._is_loaded = False

    @property
    def source(self) -> str:
        return self._source

    @property
    def input_shape(self) -> Tuple[int, ...]:
        return self._input_shape

    async def load(self) -> None:
        """Descarga y deserializa el artefacto.

        Raises:
            InferenceError: Si la descarga falla o el artefacto no es un clasificador válido
        """
        if self._is_loaded:
            logger.debug("Modelo ya cargado, omitiendo carga")
            return

        blob = await self._fetch()
        # joblib.load es CPU-bound: fuera del event loop para que el timeout de carga aplique
        model, classes, input_shape = await asyncio.to_thread(self._deserialize, blob)

        if not callable(getattr(model, "predict_proba", None)):
            raise InferenceError(
                f"El artefacto de {self._source} no expone predict_proba",
                cause="load_failed",
            )

        self._model = model
        self._column_order = self._resolve_column_order(classes)
        if input_shape is not None:
            self._input_shape = tuple(int(dim) for dim in input_shape)
        self._is_loaded = True

        logger.info(
            "Modelo cargado exitosamente",
            extra={
                "source": self._source,
                "bytes": len(blob),
                "input_shape": list(self._input_shape),
            },
        )

    def predict(self, tensor: np.ndarray) -> np.ndarray:
        """Retorna el vector de probabilidades en el orden de ``class_ids``."""
        if not self._is_loaded:
            raise InferenceError(
                "El modelo no ha sido cargado. Llame a load() antes de predecir.",
                cause="unavailable",
            )

        features = np.asarray(tensor, dtype=np.float32).reshape(tensor.shape[0], -1)
        probabilities = np.asarray(self._model.predict_proba(features), dtype=np.float64)[0]
        if self._column_order is not None:
            probabilities = probabilities[self._column_order]
        return probabilities

    async def _fetch(self) -> bytes:
        parsed = urlparse(self._source)
        try:
            if parsed.scheme in ("http", "https"):
                async with httpx.AsyncClient(
                    follow_redirects=True,
                    timeout=self._fetch_timeout,
                    transport=self._http_transport,
                ) as client:
                    response = await client.get(self._source)
                    response.raise_for_status()
                    return response.content

            path = Path(parsed.path) if parsed.scheme == "file" else Path(self._source)
            return await asyncio.to_thread(path.read_bytes)
        except (httpx.HTTPError, OSError) as exc:
            logger.warning(
                "No se pudo obtener el artefacto del modelo",
                extra={"source": self._source, "error": str(exc)},
            )
            raise InferenceError(
                f"No se pudo obtener el modelo desde {self._source}: {exc}",
                cause="load_failed",
            ) from exc

    def _deserialize(self, blob: bytes) -> Tuple[Any, Optional[Sequence[Any]], Optional[Sequence[int]]]:
        """Deserializa el artefacto.

        Returns:
            Tupla de (modelo, etiquetas de clase, forma de entrada)
        """
        try:
            bundle = joblib.load(io.BytesIO(blob))
        except Exception as exc:  # pylint: disable=broad-except
            raise InferenceError(
                f"El artefacto de {self._source} no se pudo deserializar: {exc}",
                cause="load_failed",
            ) from exc

        if isinstance(bundle, dict):
            if "model" not in bundle:
                raise InferenceError(
                    "El artefacto no contiene la clave 'model'",
                    cause="load_failed",
                )
            model = bundle["model"]
            classes = bundle.get("classes")
            input_shape = bundle.get("input_shape")
        else:
            model = bundle
            classes = None
            input_shape = None

        if classes is None:
            classes = getattr(model, "classes_", None)
        return model, classes, input_shape

    def _resolve_column_order(self, classes: Optional[Sequence[Any]]) -> Optional[list[int]]:
        """Calcula qué columna de ``predict_proba`` corresponde a cada clase."""
        if classes is None:
            return None

        labels = list(classes)
        if all(isinstance(label, str) for label in labels):
            wanted: list[Any] = list(self._class_ids)
        else:
            labels = [int(label) for label in labels]
            wanted = list(range(len(self._class_ids)))

        missing = [label for label in wanted if label not in labels]
        if missing:
            raise InferenceError(
                f"El modelo no provee probabilidades para las clases: {missing}",
                cause="load_failed",
            )
        return [labels.index(label) for label in wanted]
