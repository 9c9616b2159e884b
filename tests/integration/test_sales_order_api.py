"""Integration tests for the sales order API.

Covers:
- Create / list / retrieve.
- POST /status/ with allowed and denied transitions (400 + reason).
- Approving a quote opens a linked confirmed order.
- PATCH and DELETE permission checks (409).
- GET /workflow/.
- Authentication enforcement.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.core.models import OutboxEvent
from modules.sales_orders.constants import OrderKind, SalesOrderStatus
from modules.sales_orders.models import SalesOrder, SalesOrderStatusHistory

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/sales-orders/"


def _url(order, suffix: str = "") -> str:
    return f"{BASE_URL}{order.id}/{suffix}"


@pytest.fixture()
def confirmed_order():
    return SalesOrder.objects.create(
        customer_name="Malhas Horizonte",
        kind=OrderKind.CONFIRMED_ORDER,
    )


@pytest.fixture()
def quote():
    return SalesOrder.objects.create(customer_name="Malhas Horizonte")


class TestAuthentication:
    def test_requires_authentication(self, api_client):
        response = api_client.get(BASE_URL)
        assert response.status_code == 401


class TestCreate:
    def test_create_quote(self, auth_client):
        response = auth_client.post(
            BASE_URL,
            {"customer_name": "Tecelagem Sul", "total_amount": "1500.00"},
            format="json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["kind"] == "quote"
        assert body["status"] == "pending"
        assert body["order_number"].startswith("PED-")
        assert body["can_edit"] is True
        assert len(body["status_history"]) == 1
        assert OutboxEvent.objects.filter(event_type="SalesOrderCreated").exists()

    def test_invalid_kind(self, auth_client):
        response = auth_client.post(
            BASE_URL,
            {"customer_name": "Tecelagem Sul", "kind": "wholesale"},
            format="json",
        )
        assert response.status_code == 400

    def test_blank_customer(self, auth_client):
        response = auth_client.post(
            BASE_URL, {"customer_name": "   "}, format="json"
        )
        assert response.status_code == 400


class TestRead:
    def test_list_filters_by_kind(self, auth_client, quote, confirmed_order):
        response = auth_client.get(BASE_URL, {"kind": "confirmed_order"})

        assert response.status_code == 200
        ids = [item["id"] for item in response.json()["results"]]
        assert ids == [str(confirmed_order.id)]

    def test_retrieve_unknown(self, auth_client):
        response = auth_client.get(f"{BASE_URL}{uuid4()}/")
        assert response.status_code == 404


class TestChangeStatus:
    def test_allowed(self, auth_client, confirmed_order):
        response = auth_client.post(
            _url(confirmed_order, "status/"),
            {"status": "approved", "notes": "Pagamento confirmado"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        history = SalesOrderStatusHistory.objects.filter(
            sales_order=confirmed_order, new_status="approved"
        ).get()
        assert history.old_status == "pending"
        assert history.notes == "Pagamento confirmado"

    def test_approving_quote_opens_confirmed_order(self, auth_client, quote):
        response = auth_client.post(
            _url(quote, "status/"), {"status": "approved"}, format="json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["kind"] == "quote"
        assert body["status"] == "approved"

        confirmed = SalesOrder.objects.get(source_quote=quote)
        assert body["converted_order"] == str(confirmed.id)
        assert confirmed.kind == OrderKind.CONFIRMED_ORDER
        assert confirmed.status == SalesOrderStatus.APPROVED
        assert confirmed.customer_name == quote.customer_name
        history = confirmed.status_history.get()
        assert history.notes == f"Convertido do orçamento {quote.order_number}"

        payload = OutboxEvent.objects.get(event_type="QuoteConverted").payload
        assert payload["aggregate_id"] == str(quote.id)
        assert payload["confirmed_order_id"] == str(confirmed.id)

        detail = auth_client.get(_url(confirmed)).json()
        assert detail["source_quote"] == str(quote.id)
        assert detail["can_edit"] is True

    def test_rejecting_quote_opens_nothing(self, auth_client, quote):
        response = auth_client.post(
            _url(quote, "status/"), {"status": "rejected"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["converted_order"] is None
        assert SalesOrder.objects.count() == 1

    def test_production_locked(self, auth_client, confirmed_order):
        SalesOrder.objects.filter(pk=confirmed_order.pk).update(
            status=SalesOrderStatus.IN_PRODUCTION
        )

        response = auth_client.post(
            _url(confirmed_order, "status/"), {"status": "canceled"}, format="json"
        )

        assert response.status_code == 400
        body = response.json()
        assert body["reason"] == "PRODUCTION_LOCKED"
        assert body["current_status"] == "in_production"
        assert body["requested_status"] == "canceled"

    def test_in_production_cannot_be_set_by_hand(self, auth_client, confirmed_order):
        SalesOrder.objects.filter(pk=confirmed_order.pk).update(
            status=SalesOrderStatus.APPROVED
        )
        response = auth_client.post(
            _url(confirmed_order, "status/"),
            {"status": "in_production"},
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["reason"] == "GENERIC_INVALID"

    def test_unknown_status_rejected_at_boundary(self, auth_client, quote):
        response = auth_client.post(
            _url(quote, "status/"), {"status": "shipped"}, format="json"
        )
        assert response.status_code == 400
        assert "status" in response.json()


class TestEditAndDelete:
    def test_patch_status_is_refused(self, auth_client, quote):
        response = auth_client.patch(_url(quote), {"status": "approved"}, format="json")
        assert response.status_code == 400

    def test_patch_pending_quote(self, auth_client, quote):
        response = auth_client.patch(
            _url(quote), {"customer_name": "Malhas Norte"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["customer_name"] == "Malhas Norte"

    def test_patch_pending_confirmed_order_conflicts(self, auth_client, confirmed_order):
        response = auth_client.patch(
            _url(confirmed_order), {"notes": "x"}, format="json"
        )
        assert response.status_code == 409

    def test_delete_quote_is_soft(self, auth_client, quote):
        response = auth_client.delete(_url(quote))

        assert response.status_code == 204
        assert not SalesOrder.objects.alive().filter(pk=quote.pk).exists()
        assert SalesOrder.objects.filter(pk=quote.pk).exists()
        assert OutboxEvent.objects.filter(event_type="SalesOrderDeleted").exists()

    def test_delete_confirmed_order_conflicts(self, auth_client, confirmed_order):
        response = auth_client.delete(_url(confirmed_order))
        assert response.status_code == 409


class TestWorkflow:
    def test_workflow_state(self, auth_client, quote):
        response = auth_client.get(_url(quote, "workflow/"))

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "pending"
        assert body["kind"] == "quote"
        assert body["next_status"] == "approved"
        assert [o["value"] for o in body["allowed_transitions"]] == [
            "approved",
            "rejected",
            "canceled",
        ]
        assert body["can_delete"] is True
