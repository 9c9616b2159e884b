class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    def test_health_check_reports_services(self, client):
        data = client.get("/health").json()
        assert data["services"]["database"]["status"] == "up"
        assert data["services"]["cache"]["status"] == "up"
        assert "response_time_ms" in data["services"]["database"]

    def test_cache_down_returns_503(self, client, monkeypatch):
        from modules.core import views

        def _fail():
            raise ConnectionError("redis unreachable")

        monkeypatch.setitem(views.PROBES, "cache", _fail)
        response = client.get("/health")
        assert response.status_code == 503
        assert response.json()["services"]["cache"] == {"status": "down"}
