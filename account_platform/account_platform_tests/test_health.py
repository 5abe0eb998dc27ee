from unittest.mock import patch


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_ready(client):
    response = client.get("/ready")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ready"
    assert body["database"] == "connected"


def test_not_ready_when_database_unreachable(client):
    with patch("account_platform.account_platform.account_service.routes.health.check_db_connection", return_value=False):
        response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["detail"]["database"] == "disconnected"
