import pytest

from xpay_payments import Customer, PaymentMethods, WebhookEndpoint, compute_signature


pytestmark = pytest.mark.unit

MERCHANT_URL = "https://server.xpay-bits.com/v1/api/merchants/merchant_123"


class TestCustomers:
    def test_create(self, client, session):
        session.reply({"id": "cus_1", "email": "ama@example.com", "name": "Ama"})
        response = client.customers.create({"email": "ama@example.com", "name": "Ama"})

        call = session.calls[0]
        assert call["method"] == "POST"
        assert call["url"] == f"{MERCHANT_URL}/customers"
        assert call["json"] == {"email": "ama@example.com", "name": "Ama"}
        assert Customer.from_mapping(response.data).email == "ama@example.com"

    def test_update_uses_put(self, client, session):
        session.reply({"id": "cus_1"})
        client.customers.update("cus_1", {"phone": "+231770000000"})
        assert session.calls[0]["method"] == "PUT"
        assert session.calls[0]["url"] == f"{MERCHANT_URL}/customers/cus_1"

    def test_retrieve_and_delete(self, client, session):
        session.reply({"id": "cus_1"}).reply({"deleted": True})
        client.customers.retrieve("cus_1")
        response = client.customers.delete("cus_1")

        assert [c["method"] for c in session.calls] == ["GET", "DELETE"]
        assert response.data == {"deleted": True}

    def test_list_filters(self, client, session):
        session.reply({"customers": [], "total": 0, "has_more": False})
        client.customers.list(email="ama@example.com", offset=20)
        assert session.calls[0]["params"] == {"offset": "20", "email": "ama@example.com"}


class TestWebhooks:
    def test_create(self, client, session):
        session.reply(
            {
                "id": "wh_1",
                "url": "https://shop.test/hooks",
                "events": ["payment.succeeded"],
                "environment": "sandbox",
                "is_active": True,
                "secret": "whsec_abc",
            }
        )
        response = client.webhooks.create(
            {"url": "https://shop.test/hooks", "events": ["payment.succeeded"]}
        )

        assert session.calls[0]["method"] == "POST"
        assert session.calls[0]["url"] == f"{MERCHANT_URL}/webhooks"

        assert session.calls[0]["json"] == {
            "url": "https://shop.test/hooks",
            "events": ["payment.succeeded"],
        }
        endpoint = WebhookEndpoint.from_mapping(response.data)
        assert endpoint.secret == "whsec_abc"
        assert "whsec_abc" not in repr(endpoint)

    def test_create_with_description(self, client, session):
        session.reply({"id": "wh_1"})
        request = {
            "url": "https://shop.test/hooks",
            "events": ["payment.failed"],
            "description": "Shop",
        }
        client.webhooks.create(request)
        assert session.calls[0]["json"] == request

    def test_crud_paths(self, client, session):
        for _ in range(5):
            session.reply({})
        client.webhooks.list()
        client.webhooks.retrieve("wh_1")
        client.webhooks.update("wh_1", {"events": ["payment.succeeded"]})
        client.webhooks.delete("wh_1")
        client.webhooks.test("wh_1")

        assert [(c["method"], c["url"]) for c in session.calls] == [
            ("GET", f"{MERCHANT_URL}/webhooks"),
            ("GET", f"{MERCHANT_URL}/webhooks/wh_1"),
            ("PUT", f"{MERCHANT_URL}/webhooks/wh_1"),
            ("DELETE", f"{MERCHANT_URL}/webhooks/wh_1"),
            ("POST", f"{MERCHANT_URL}/webhooks/wh_1/test"),
        ]

    def test_verify_created_secret_round_trip(self, client):
        payload = '{"event":"payment.succeeded"}'
        signature = compute_signature(payload, "whsec_abc")
        assert client.webhooks.verify_signature(payload, signature, "whsec_abc") is True


class TestClient:
    def test_ping(self, client, session):
        session.reply({"status": "ok"})
        result = client.ping()

        assert session.calls[0]["url"] == "https://server.xpay-bits.com/v1/healthz"
        assert result["success"] is True
        assert "timestamp" in result

    def test_get_payment_methods(self, client, session):
        session.reply(
            {
                "success": True,
                "data": {
                    "available_methods": [
                        {"type": "orange", "display_name": "Orange Money", "currencies": ["LRD"]}
                    ],
                    "country": "LR",
                    "default_currency": "LRD",
                    "stripe_config": {"publishable_key": "pk_test"},
                },
            }
        )
        methods = client.get_payment_methods()

        assert isinstance(methods, PaymentMethods)
        assert methods.find("orange").currencies == ("LRD",)
        assert methods.find("stripe") is None
        assert methods.stripe_publishable_key == "pk_test"

    def test_context_manager_closes_session(self, client, session):
        with client:
            pass
        assert session.closed is True
