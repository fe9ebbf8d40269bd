import numpy as np
import pytest
from fastapi.testclient import TestClient

from agrovision.main import create_app
from agrovision.services.classification import ClassifierService


CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-headers": "authorization, x-client-info, apikey, content-type",
}


class _StubBackend:
    input_shape = (224, 224, 3)

    def __init__(self, probabilities):
        self.probabilities = probabilities
        self.load_calls = 0

    async def load(self):
        self.load_calls += 1

    def predict(self, tensor):
        return np.asarray(self.probabilities)


def _assert_cors(response):
    for header, value in CORS_HEADERS.items():
        assert response.headers[header] == value


@pytest.fixture()
def backend() -> _StubBackend:
    return _StubBackend([0.1, 0.7, 0.2])


@pytest.fixture()
def client(backend) -> TestClient:
    return TestClient(create_app(classifier_service=ClassifierService(backend)))


def test_clasificacion_happy_path(client: TestClient, backend, leaf_png):
    response = client.post(
        "/classify",
        files={"image": ("leaf.png", leaf_png, "image/png")},
    )

    assert response.status_code == 200
    _assert_cors(response)
    assert response.headers["content-type"].startswith("application/json")

    data = response.json()
    assert data["disease"] == "rice_blast"
    assert data["confidence"] == 70
    details = data["details"]
    assert details["name"] == "Rice Blast"
    assert isinstance(details["symptoms"], list) and details["symptoms"]
    assert isinstance(details["treatment"], list) and details["treatment"]
    assert isinstance(details["prevention"], list) and details["prevention"]
    assert backend.load_calls == 1


def test_modelo_se_carga_una_vez_entre_requests(client: TestClient, backend, leaf_png):
    for _ in range(3):
        response = client.post("/classify", files={"image": ("leaf.png", leaf_png, "image/png")})
        assert response.status_code == 200

    assert backend.load_calls == 1


def test_sin_imagen_retorna_500(client: TestClient):
    response = client.post("/classify", data={"note": "sin archivo"})

    assert response.status_code == 500
    _assert_cors(response)
    assert response.json() == {"error": "No image provided"}


@pytest.mark.parametrize("as_multipart", [False, True])
def test_campo_image_de_texto_retorna_500(client: TestClient, as_multipart, leaf_png):
    files = {"adjunto": ("leaf.png", leaf_png, "image/png")} if as_multipart else None

    response = client.post("/classify", data={"image": "not-a-file"}, files=files)

    assert response.status_code == 500
    _assert_cors(response)
    assert response.json() == {"error": "The image field must be a file upload"}


def test_imagen_invalida_retorna_500(client: TestClient):
    response = client.post(
        "/classify",
        files={"image": ("leaf.png", b"not an image", "image/png")},
    )

    assert response.status_code == 500
    _assert_cors(response)
    assert "decodificar" in response.json()["error"]


def test_modelo_no_configurado_retorna_500(leaf_png):
    client = TestClient(create_app(classifier_service=ClassifierService(None)))

    response = client.post("/classify", files={"image": ("leaf.png", leaf_png, "image/png")})

    assert response.status_code == 500
    assert "MODEL_URL" in response.json()["error"]


def test_salida_invalida_del_modelo_retorna_500(leaf_png):
    client = TestClient(create_app(classifier_service=ClassifierService(_StubBackend([1.0]))))

    response = client.post("/classify", files={"image": ("leaf.png", leaf_png, "image/png")})

    assert response.status_code == 500
    assert set(response.json()) == {"error"}


@pytest.mark.parametrize("path", ["/classify", "/api/v1/recommendations", "/cualquier/ruta"])
def test_preflight_options(client: TestClient, path):
    response = client.options(
        path,
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 200
    assert response.content == b""
    _assert_cors(response)


def test_health_informa_estado_del_modelo(client: TestClient, leaf_png):
    before = client.get("/health")
    assert before.status_code == 200
    assert before.json() == {"status": "ok", "model_state": "unloaded"}
    _assert_cors(before)

    client.post("/classify", files={"image": ("leaf.png", leaf_png, "image/png")})

    after = client.get("/health")
    assert after.json() == {"status": "ok", "model_state": "ready"}
