"""Configuración global para tests."""
import io
from typing import Tuple

import pytest
from PIL import Image


def make_image_bytes(
    size: Tuple[int, int] = (64, 48),
    mode: str = "RGB",
    color=(34, 139, 34),
    fmt: str = "PNG",
) -> bytes:
    """Genera una imagen sólida codificada en memoria."""
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def anyio_backend():
    """Selecciona asyncio como backend para las pruebas asincronicas."""

    return "asyncio"


@pytest.fixture
def leaf_png() -> bytes:
    return make_image_bytes(size=(320, 240))


@pytest.fixture
def image_factory():
    return make_image_bytes
