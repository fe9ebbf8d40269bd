"""Tests del script de verificación del modelo."""
import joblib
import numpy as np
from sklearn.dummy import DummyClassifier

from agrovision.scripts.check_model import main


def test_artefacto_valido_retorna_cero(tmp_path, capsys):
    model = DummyClassifier(strategy="prior").fit(np.zeros((3, 4)), [0, 1, 2])
    path = tmp_path / "model.joblib"
    joblib.dump(model, path)

    assert main(["--source", str(path)]) == 0
    assert "Modelo cargado correctamente" in capsys.readouterr().out


def test_artefacto_inexistente_retorna_uno(tmp_path, capsys):
    assert main(["--source", str(tmp_path / "missing.joblib")]) == 1
    assert "load_failed" in capsys.readouterr().out
