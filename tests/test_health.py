import chatapp.health as health


def test_health_reports_database_up(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "ok"
    assert data["database"] == "up"
    assert data["uptime"] >= 0


def test_health_degraded_when_database_down(client, monkeypatch):
    monkeypatch.setattr(health, "ping", lambda: False)
    resp = client.get("/health")
    assert resp.status_code == 503
    assert resp.get_json()["database"] == "down"
    assert resp.get_json()["status"] == "degraded"
