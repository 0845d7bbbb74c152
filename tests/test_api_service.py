from __future__ import annotations

import pytest

try:
    from fastapi.testclient import TestClient

    from vocabulary_lid.api_service import API_SCHEMA_VERSION, create_app
except Exception:  # pragma: no cover
    TestClient = None  # type: ignore[assignment]
    API_SCHEMA_VERSION = 1  # type: ignore[assignment]
    create_app = None  # type: ignore[assignment]

pytestmark = pytest.mark.skipif(
    TestClient is None or create_app is None, reason="FastAPI service dependencies are not installed."
)


@pytest.fixture()
def client() -> "TestClient":
    assert TestClient is not None and create_app is not None
    return TestClient(create_app())


def _train(client: "TestClient") -> None:
    r = client.post(
        "/train",
        json={
            "records": [
                {"text": "hello world", "language": "English"},
                {"text": "bonjour le monde", "language": "fr"},
                {"text": "qapla", "language": "Klingon"},
            ]
        },
    )
    assert r.status_code == 200
    data = r.json()
    assert data["n_records"] == 2
    assert data["n_skipped"] == 1
    assert data["validation"] is None


def test_healthz(client: "TestClient") -> None:
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "schema_version": API_SCHEMA_VERSION}


def test_classify_learns_between_requests(client: "TestClient") -> None:
    _train(client)
    r = client.post("/classify", json={"text": "hello there", "unknown_field": "ignored"})
    assert r.status_code == 200
    data = r.json()
    assert data["schema_version"] == API_SCHEMA_VERSION
    assert data["winner"] == "english"
    assert data["scores"] == {"english": 1.0}

    r = client.get("/vocabulary/en")
    assert r.status_code == 200
    words = {w["text"]: w for w in r.json()["words"]}
    assert words["hello"]["kind"] == "axiom"
    assert words["there"]["weight"] == pytest.approx(0.25)


def test_classify_without_winner(client: "TestClient") -> None:
    r = client.post("/classify", json={"text": "nothing known"})
    assert r.status_code == 200
    assert r.json()["winner"] is None


def test_train_with_validation_split(client: "TestClient") -> None:
    records = [{"text": "hello world", "language": "en"}] * 10
    r = client.post("/train", json={"records": records, "axiom_ratio": 0.5, "seed": 1})
    assert r.status_code == 200
    validation = r.json()["validation"]
    assert validation["n_validated"] == 5
    assert validation["accuracy"] == 1.0


def test_train_rejects_bad_ratio(client: "TestClient") -> None:
    r = client.post("/train", json={"records": [], "axiom_ratio": 3.0})
    assert r.status_code == 400


def test_future_schema_version_is_rejected(client: "TestClient") -> None:
    r = client.post("/classify", json={"schema_version": API_SCHEMA_VERSION + 1, "text": "hi"})
    assert r.status_code == 400


def test_unknown_language_vocabulary(client: "TestClient") -> None:
    assert client.get("/vocabulary/klingon").status_code == 404
