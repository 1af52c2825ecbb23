import pytest
from fastapi.testclient import TestClient

from logimaster.api.deps import Settings, get_settings
from logimaster.api.main import app
from logimaster.rules.loader import DEFAULT_RULES_PATH


@pytest.fixture
def override_settings(tmp_path):
    def _settings():
        s = Settings()
        s.data_dir = str(tmp_path / "data")
        s.rules_path = DEFAULT_RULES_PATH
        return s

    app.dependency_overrides[get_settings] = _settings
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_settings):
    return TestClient(app)


@pytest.fixture
def seeded(client):
    """A driver, vehicle, client and helper; returns their ids."""
    driver = client.post("/api/registry/drivers", json={"nome": "ana", "pix": "ana@pix"})
    helper = client.post("/api/registry/helpers", json={"nome": "beto"})
    client.post("/api/registry/vehicles", json={"placa": "abc1234", "modelo": "volvo"})
    client.post(
        "/api/registry/clients", json={"cnpj": "11222333000181", "razaoSocial": "acme"}
    )
    return {"driver": driver.json()["id"], "helper": helper.json()["id"]}
