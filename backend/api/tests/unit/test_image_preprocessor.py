"""Tests unitarios del preprocesamiento de imágenes."""
import io

import numpy as np
import pytest
from PIL import Image

from agrovision.exceptions import DecodeError
from agrovision.services.classification import ImagePreprocessor


@pytest.mark.parametrize(
    "size, mode, color",
    [
        ((640, 480), "RGB", (10, 200, 30)),
        ((1, 1), "RGB", (255, 0, 0)),
        ((100, 700), "L", 128),
        ((224, 224), "RGBA", (0, 0, 255, 100)),
        ((50, 50), "P", 3),
    ],
)
def test_forma_y_rango_del_tensor(image_factory, size, mode, color):
    tensor = ImagePreprocessor().preprocess(image_factory(size=size, mode=mode, color=color))

    assert tensor.shape == (1, 224, 224, 3)
    assert tensor.dtype == np.float32
    assert tensor.min() >= 0.0
    assert tensor.max() <= 1.0


def test_normaliza_intensidades_a_unidad(image_factory):
    preprocessor = ImagePreprocessor()

    white = preprocessor.preprocess(image_factory(color=(255, 255, 255)))
    black = preprocessor.preprocess(image_factory(color=(0, 0, 0)))

    assert np.allclose(white, 1.0)
    assert np.allclose(black, 0.0)


def test_conserva_canales_en_orden_rgb(image_factory):
    tensor = ImagePreprocessor().preprocess(image_factory(color=(255, 0, 51)))

    assert np.allclose(tensor[0, 100, 100], [1.0, 0.0, 0.2])


def test_jpeg_se_decodifica(image_factory):
    tensor = ImagePreprocessor().preprocess(image_factory(size=(300, 200), fmt="JPEG"))

    assert tensor.shape == (1, 224, 224, 3)


def test_tamano_configurable(image_factory):
    preprocessor = ImagePreprocessor(size=(32, 64))

    tensor = preprocessor.preprocess(image_factory())

    assert tensor.shape == (1, 32, 64, 3) == preprocessor.output_shape


@pytest.mark.parametrize("payload", [b"", b"not an image", b"\x89PNG\r\n\x1a\n\x00\x00"])
def test_bytes_invalidos_lanzan_decode_error(payload):
    with pytest.raises(DecodeError):
        ImagePreprocessor().preprocess(payload)


def test_imagen_truncada_lanza_decode_error():
    noise = np.random.default_rng(0).integers(0, 255, size=(128, 128, 3), dtype=np.uint8)
    buffer = io.BytesIO()
    Image.fromarray(noise).save(buffer, format="PNG")
    truncated = buffer.getvalue()[: len(buffer.getvalue()) // 2]

    with pytest.raises(DecodeError):
        ImagePreprocessor().preprocess(truncated)


def test_modo_de_color_no_soportado(image_factory):
    cmyk = image_factory(mode="CMYK", color=(0, 0, 0, 0), fmt="JPEG")

    with pytest.raises(DecodeError, match="CMYK"):
        ImagePreprocessor().preprocess(cmyk)


def test_escala_de_grises_de_16_bits():
    buffer = io.BytesIO()
    Image.fromarray(np.full((40, 40), 30000, dtype=np.uint16)).save(buffer, format="PNG")

    tensor = ImagePreprocessor().preprocess(buffer.getvalue())

    assert tensor.shape == (1, 224, 224, 3)
    assert np.allclose(tensor, 30000 / 65535, atol=0.01)
