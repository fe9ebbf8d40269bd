"""Preprocesamiento de imágenes de hojas para el clasificador."""
from __future__ import annotations

import io
from typing import Tuple

import numpy as np
from PIL import Image

from ...core.logging import get_logger
from ...exceptions import DecodeError


logger = get_logger("classification.preprocessor")


# Modos de Pillow con 1, 2, 3 o 4 canales que se pueden llevar a RGB sin ambigüedad
SUPPORTED_MODES = frozenset({"1", "L", "LA", "P", "RGB", "RGBA", "RGBX"})

# Escala de grises de 16 bits (PNG de 16 bits se abre como I;16* o I)
WIDE_GRAYSCALE_MODES = frozenset({"I", "I;16", "I;16B", "I;16L", "I;16N"})


class ImagePreprocessor:
    """Decodifica bytes de imagen a un tensor normalizado ``(1, H, W, 3)`` en ``[0, 1]``."""

    def __init__(self, size: Tuple[int, int] = (224, 224)) -> None:
        """Inicializa el preprocesador.

        Args:
            size: Alto y ancho de salida en píxeles
        """
        self._height, self._width = size

    @property
    def output_shape(self) -> Tuple[int, int, int, int]:
        return (1, self._height, self._width, 3)

    def preprocess(self, image_bytes: bytes) -> np.ndarray:
        """Convierte la imagen en el tensor de entrada del modelo.

        Args:
            image_bytes: Contenido crudo del archivo subido

        Returns:
            Arreglo float32 de forma ``(1, H, W, 3)`` con valores en ``[0, 1]``

        Raises:
            DecodeError: Si los bytes están vacíos, no son una imagen o el modo de color no es soportado
        """
        image = self._decode(image_bytes)
        resized = image.resize((self._width, self._height), Image.Resampling.BILINEAR)
        pixels = np.asarray(resized, dtype=np.float32)
        tensor = np.expand_dims(pixels, axis=0) / 255.0
        return tensor.astype(np.float32, copy=False)

    @staticmethod
    def _decode(image_bytes: bytes) -> Image.Image:
        if not image_bytes:
            raise DecodeError("La imagen está vacía")

        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (OSError, SyntaxError, ValueError, EOFError, Image.DecompressionBombError) as exc:
            logger.warning(
                "No se pudo decodificar la imagen",
                extra={"bytes": len(image_bytes), "error": str(exc)},
            )
            raise DecodeError(f"No se pudo decodificar la imagen: {exc}") from exc

        if image.mode in WIDE_GRAYSCALE_MODES:
            image = ImagePreprocessor._to_8bit_grayscale(image)

        if image.mode not in SUPPORTED_MODES:
            raise DecodeError(f"Modo de color no soportado: {image.mode}")

        if image.mode != "RGB":
            image = image.convert("RGB")
        return image

    @staticmethod
    def _to_8bit_grayscale(image: Image.Image) -> Image.Image:
        """Lleva intensidades de 0-65535 al rango 0-255 en modo ``L``."""
        wide = np.asarray(image, dtype=np.float64)
        narrow = np.rint(np.clip(wide, 0, 65535) / 257.0).astype(np.uint8)
        return Image.fromarray(narrow)
