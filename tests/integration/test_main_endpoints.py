from unittest.mock import patch

from sqlalchemy.exc import OperationalError


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "service": "roster-service"}


def test_build_info(client, monkeypatch):
    monkeypatch.setenv("VERSION", "1.2.3")
    monkeypatch.setenv("BUILD_SHA", "abc123")
    monkeypatch.delenv("IMAGE_TAG", raising=False)

    data = client.get("/build-info").json()

    assert data["service_name"] == "roster-service"
    assert data["version"] == "1.2.3"
    assert data["build_sha"] == "abc123"
    assert data["image_tag"] is None


def test_invalid_body_is_400_with_details(client):
    res = client.post("/api/Teams", json={"name": 123, "description": []})
    assert res.status_code == 400
    assert isinstance(res.json()["detail"], list)


def test_datastore_failure_is_500(client):
    failure = OperationalError("SELECT", {}, Exception("connection lost"))
    with patch("sqlalchemy.orm.Session.get", side_effect=failure):
        res = client.get("/api/Teams/1")

    assert res.status_code == 500
    assert res.json()["detail"].startswith("Failed to read Team")


def test_static_segments_are_not_ids(client):
    assert client.get("/api/Members/count").json() == {"count": 0}
    assert client.get("/api/Teams/findOne").status_code == 404
