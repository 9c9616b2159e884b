import logging
import uuid

from config.settings import mask_sensitive_data


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        assert str(uuid.UUID(request_id, version=4)) == request_id

    def test_correlation_id_in_logs(self, api_client_with_correlation, caplog):
        client, cid = api_client_with_correlation
        with caplog.at_level(logging.INFO):
            client.get("/health")
        assert any(cid in record.getMessage() for record in caplog.records)


class TestSensitiveDataMasking:
    def test_token_masked(self):
        result = mask_sensitive_data(None, None, {"header": "token=abc123xyz"})
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_cnpj_masked(self):
        result = mask_sensitive_data(None, None, {"cnpj": "12.345.678/0001-90"})
        assert "12.345.678/0001-90" not in result["cnpj"]

    def test_order_number_unchanged(self):
        result = mask_sensitive_data(None, None, {"op": "OP-20260101-ABC123"})
        assert result["op"] == "OP-20260101-ABC123"


class TestRequestIdSanitizing:
    def test_rejects_header_with_spaces(self, client):
        response = client.get("/health", HTTP_X_REQUEST_ID="bad id\ninjected")
        assert response["X-Request-ID"] != "bad id\ninjected"
        uuid.UUID(response["X-Request-ID"])
