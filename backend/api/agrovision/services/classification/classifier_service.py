"""Servicio de clasificación con carga diferida del modelo (single-flight).

Ciclo de vida: ``UNLOADED -> LOADING -> READY``. El primer request dispara la
carga; los requests concurrentes esperan la misma tarea en vuelo. Una vez en
``READY`` la instancia se conserva durante toda la vida del proceso. Si la
carga falla el servicio vuelve a ``UNLOADED`` y el próximo request reintenta.
"""
from __future__ import annotations

import asyncio
import time
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from ...core.logging import get_logger
from ...exceptions import InferenceError
from ...utils import round_half_up
from .model_backend import InferenceBackend
from .taxonomy import DISEASE_CLASSES


logger = get_logger("classification.classifier_service")


class ModelState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"


class ClassifierService:
    """Dueño explícito del modelo de clasificación; se construye una vez por proceso."""

    def __init__(
        self,
        backend: Optional[InferenceBackend],
        *,
        class_ids: Sequence[str] = DISEASE_CLASSES,
        load_timeout: float = 60.0,
        inference_timeout: float = 10.0,
    ) -> None:
        """Inicializa el servicio.

        Args:
            backend: Runtime de inferencia; None si no hay modelo configurado
            class_ids: Clases alineadas con el vector de probabilidades
            load_timeout: Tiempo máximo para cargar el modelo, en segundos
            inference_timeout: Tiempo máximo de una inferencia, en segundos
        """
        self._backend = backend
        self._class_ids = tuple(class_ids)
        self._load_timeout = load_timeout
        self._inference_timeout = inference_timeout

        self._state = ModelState.UNLOADED
        self._load_task: Optional[asyncio.Task] = None

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def class_ids(self) -> Tuple[str, ...]:
        return self._class_ids

    async def ensure_ready(self) -> None:
        """Lleva el servicio a ``READY`` o propaga el error de carga.

        Raises:
            InferenceError: Si no hay modelo configurado, la carga falla o excede el timeout
        """
        if self._state is ModelState.READY:
            return
        if self._backend is None:
            raise InferenceError(
                "No hay modelo de clasificación configurado (MODEL_URL)",
                cause="unavailable",
            )

        # Sin await entre el chequeo y la creación: una sola tarea por carga
        if self._load_task is None:
            self._state = ModelState.LOADING
            self._load_task = asyncio.ensure_future(self._load())
            self._load_task.add_done_callback(self._consume_load_error)

        # shield: si un request se cancela, la carga compartida sigue su curso
        await asyncio.shield(self._load_task)

    async def _load(self) -> None:
        started = time.perf_counter()
        logger.info("Iniciando carga del modelo de clasificación")
        try:
            await asyncio.wait_for(self._backend.load(), timeout=self._load_timeout)
        except asyncio.TimeoutError as exc:
            self._reset()
            logger.error(
                "Timeout al cargar el modelo de clasificación",
                extra={"timeout_s": self._load_timeout},
            )
            raise InferenceError(
                f"La carga del modelo excedió {self._load_timeout:g}s",
                cause="timeout",
            ) from exc
        except InferenceError as exc:
            self._reset()
            logger.error("Falló la carga del modelo", extra={"error": str(exc), "cause": exc.cause})
            raise
        except Exception as exc:  # pylint: disable=broad-except
            self._reset()
            logger.exception("Error inesperado al cargar el modelo")
            raise InferenceError(f"No se pudo cargar el modelo: {exc}", cause="load_failed") from exc

        self._state = ModelState.READY
        logger.info(
            "Modelo de clasificación listo",
            extra={"duracion_s": round(time.perf_counter() - started, 3)},
        )

    @staticmethod
    def _consume_load_error(task: asyncio.Task) -> None:
        # La carga puede fallar cuando todos los requests que la esperaban ya se cancelaron
        if not task.cancelled():
            task.exception()

    def _reset(self) -> None:
        self._state = ModelState.UNLOADED
        self._load_task = None

    async def predict(self, tensor: np.ndarray) -> np.ndarray:
        """Ejecuta la inferencia y retorna un vector con una probabilidad por clase.

        Raises:
            InferenceError: Si el modelo no está disponible, la forma del tensor no
                coincide, la inferencia falla o excede el timeout
        """
        await self.ensure_ready()

        expected_shape = (1, *self._backend.input_shape)
        if tuple(tensor.shape) != expected_shape:
            raise InferenceError(
                f"Forma de tensor {tuple(tensor.shape)} no coincide con la esperada {expected_shape}",
                cause="shape_mismatch",
            )

        try:
            raw = await asyncio.wait_for(
                asyncio.to_thread(self._backend.predict, tensor),
                timeout=self._inference_timeout,
            )
        except asyncio.TimeoutError as exc:
            logger.error("Timeout en inferencia", extra={"timeout_s": self._inference_timeout})
            raise InferenceError(
                f"La inferencia excedió {self._inference_timeout:g}s",
                cause="timeout",
            ) from exc
        except InferenceError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Error inesperado durante la inferencia")
            raise InferenceError(f"Error durante la inferencia: {exc}", cause="inference_failed") from exc

        return self._validate_probabilities(raw)

    def _validate_probabilities(self, raw: np.ndarray) -> np.ndarray:
        probabilities = np.asarray(raw, dtype=np.float64).reshape(-1)
        if probabilities.size != len(self._class_ids):
            raise InferenceError(
                f"El modelo devolvió {probabilities.size} probabilidades, "
                f"se esperaban {len(self._class_ids)}",
                cause="invalid_output",
            )
        if not np.all(np.isfinite(probabilities)) or np.any(probabilities < 0):
            raise InferenceError(
                "El modelo devolvió probabilidades negativas o no finitas",
                cause="invalid_output",
            )
        return probabilities

    def select(self, probabilities: Sequence[float]) -> Tuple[str, int]:
        """Elige la clase más probable; ante empates gana el menor índice.

        Returns:
            Tupla de (id de clase, confianza entera 0-100)
        """
        values = np.asarray(probabilities, dtype=np.float64)
        detected_index = int(np.argmax(values))
        confidence = max(0, min(100, round_half_up(float(values[detected_index]) * 100)))
        return self._class_ids[detected_index], confidence

    async def classify(self, tensor: np.ndarray) -> Tuple[str, int]:
        """Atajo de ``predict`` seguido de ``select``."""
        probabilities = await self.predict(tensor)
        class_id, confidence = self.select(probabilities)
        logger.info(
            "Imagen clasificada",
            extra={"enfermedad": class_id, "confianza": confidence},
        )
        return class_id, confidence
