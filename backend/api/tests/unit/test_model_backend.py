"""Tests del backend joblib contra estimadores reales de scikit-learn."""
import asyncio
import contextlib
import io
import time

import httpx
import joblib
import numpy as np
import pytest
from sklearn.dummy import DummyClassifier

from agrovision.exceptions import InferenceError
from agrovision.services.classification import ClassifierService, JoblibModelBackend


N_FEATURES = 224 * 224 * 3


def _fitted_prior_classifier(labels, n_features=N_FEATURES):
    features = np.zeros((len(labels), n_features), dtype=np.float32)
    return DummyClassifier(strategy="prior").fit(features, labels)


def _dump(obj) -> bytes:
    buffer = io.BytesIO()
    joblib.dump(obj, buffer)
    return buffer.getvalue()


@pytest.mark.anyio
async def test_carga_desde_ruta_y_predice(anyio_backend, tmp_path):
    path = tmp_path / "model.joblib"
    joblib.dump(_fitted_prior_classifier([0, 1, 1, 2]), path)
    backend = JoblibModelBackend(str(path))

    await backend.load()
    probabilities = backend.predict(np.zeros((1, 224, 224, 3), dtype=np.float32))

    assert np.allclose(probabilities, [0.25, 0.5, 0.25])


@pytest.mark.anyio
async def test_reordena_etiquetas_de_texto(anyio_backend, tmp_path):
    # classes_ queda ordenado alfabéticamente: rice_blast, tomato_late_blight, wheat_rust
    model = _fitted_prior_classifier(["wheat_rust", "rice_blast", "rice_blast", "tomato_late_blight"])
    path = tmp_path / "model.joblib"
    joblib.dump(model, path)
    backend = JoblibModelBackend(path.as_uri())

    await backend.load()
    probabilities = backend.predict(np.zeros((1, 224, 224, 3), dtype=np.float32))

    assert np.allclose(probabilities, [0.25, 0.5, 0.25])


@pytest.mark.anyio
async def test_bundle_con_forma_de_entrada_de_extremo_a_extremo(anyio_backend, tmp_path):
    model = _fitted_prior_classifier([2, 2, 2, 0, 1], n_features=8 * 8 * 3)
    path = tmp_path / "bundle.joblib"
    joblib.dump({"model": model, "input_shape": [8, 8, 3]}, path)
    service = ClassifierService(JoblibModelBackend(str(path)))

    class_id, confidence = await service.classify(np.zeros((1, 8, 8, 3), dtype=np.float32))

    assert class_id == "wheat_rust"
    assert confidence == 60


@pytest.mark.anyio
async def test_descarga_http(anyio_backend):
    artifact = _dump(_fitted_prior_classifier([0, 1, 2, 2]))
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, content=artifact)

    backend = JoblibModelBackend(
        "https://models.example.com/plant_disease.joblib",
        http_transport=httpx.MockTransport(handler),
    )

    await backend.load()

    assert requested == ["https://models.example.com/plant_disease.joblib"]
    probabilities = backend.predict(np.zeros((1, 224, 224, 3), dtype=np.float32))
    assert np.allclose(probabilities, [0.25, 0.25, 0.5])


@pytest.mark.anyio
async def test_descarga_http_fallida(anyio_backend):
    backend = JoblibModelBackend(
        "https://models.example.com/missing.joblib",
        http_transport=httpx.MockTransport(lambda request: httpx.Response(404)),
    )

    with pytest.raises(InferenceError) as exc_info:
        await backend.load()

    assert exc_info.value.cause == "load_failed"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "content",
    [
        b"definitely not a joblib file",
        _dump({"weights": [1, 2, 3]}),
        _dump({"model": {"not": "an estimator"}}),
        _dump(_fitted_prior_classifier(["rice_blast", "wheat_rust"], n_features=4)),
    ],
)
async def test_artefactos_invalidos(anyio_backend, tmp_path, content):
    path = tmp_path / "broken.joblib"
    path.write_bytes(content)

    with pytest.raises(InferenceError) as exc_info:
        await JoblibModelBackend(str(path)).load()

    assert exc_info.value.cause == "load_failed"


@pytest.mark.anyio
async def test_archivo_inexistente(anyio_backend, tmp_path):
    with pytest.raises(InferenceError) as exc_info:
        await JoblibModelBackend(str(tmp_path / "nope.joblib")).load()

    assert exc_info.value.cause == "load_failed"


def test_predecir_sin_cargar():
    with pytest.raises(InferenceError) as exc_info:
        JoblibModelBackend("model.joblib").predict(np.zeros((1, 224, 224, 3)))

    assert exc_info.value.cause == "unavailable"


class _SlowArtifact:
    """Artefacto cuya deserialización tarda ``delay`` segundos."""

    def __init__(self, delay):
        self.delay = delay

    def __reduce__(self):
        return (time.sleep, (self.delay,))


@pytest.mark.anyio
async def test_deserializacion_lenta_respeta_timeout_de_carga(anyio_backend, tmp_path):
    path = tmp_path / "slow.joblib"
    joblib.dump(_SlowArtifact(1.0), path)
    service = ClassifierService(JoblibModelBackend(str(path)), load_timeout=0.1)

    ticks = []

    async def ticker():
        while True:
            ticks.append(time.perf_counter())
            await asyncio.sleep(0.02)

    ticker_task = asyncio.ensure_future(ticker())
    started = time.perf_counter()
    try:
        with pytest.raises(InferenceError) as exc_info:
            await service.ensure_ready()
        elapsed = time.perf_counter() - started
    finally:
        ticker_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await ticker_task

    assert exc_info.value.cause == "timeout"
    assert elapsed < 0.8
    # El event loop sigue atendiendo otras tareas mientras se deserializa
    assert len(ticks) >= 3
