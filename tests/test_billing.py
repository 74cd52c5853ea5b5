"""
Tests for the plan catalog, Stripe checkout, and webhook-driven plan sync
"""

import hashlib
import hmac
import json
import time
from unittest.mock import MagicMock, patch

import pytest
import stripe
from sqlmodel import Session, select

from attendance_tracker.core.config import Settings
from attendance_tracker.core.exceptions import BillingNotConfigured, CompanyNotFound
from attendance_tracker.core.plans import build_plan_catalog
from attendance_tracker.models import Company
from attendance_tracker.services.stripe_billing import StripeBillingService

WEBHOOK_SECRET = "whsec_test_secret"


def sign(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int = None) -> str:
    timestamp = timestamp or int(time.time())
    digest = hmac.new(secret.encode(), f"{timestamp}.{payload}".encode(), hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def send_event(client, event_type: str, obj: dict, event_id: str = "evt_1"):
    payload = json.dumps({"id": event_id, "type": event_type, "data": {"object": obj}})
    return client.post(
        "/api/subscription/webhook",
        content=payload,
        headers={"Stripe-Signature": sign(payload), "Content-Type": "application/json"},
    )


def acme_company(engine) -> Company:
    with Session(engine) as session:
        return session.exec(select(Company).where(Company.name == "Acme")).one()


@pytest.fixture
def customer(engine, acme):
    """Link Acme to Stripe customer cus_acme"""
    with Session(engine) as session:
        company = session.exec(select(Company).where(Company.name == "Acme")).one()
        company.stripe_customer_id = "cus_acme"
        session.add(company)
        session.commit()
    return "cus_acme"


def checkout_completed(customer_id: str, price_id: str = "price_growth") -> dict:
    return {
        "id": "cs_test_1",
        "object": "checkout.session",
        "mode": "subscription",
        "customer": customer_id,
        "metadata": {"company_id": "1", "price_id": price_id},
    }


def subscription(customer_id: str, price_id: str, status: str) -> dict:
    return {
        "id": "sub_1",
        "object": "subscription",
        "customer": customer_id,
        "status": status,
        "items": {"data": [{"price": {"id": price_id}}]},
    }


def test_catalog_lookups(catalog):
    assert catalog.default.key == "tier1"
    assert catalog.default.max_employees == 5
    assert catalog.by_price("price_growth").key == "tier2"
    assert catalog.by_price("price_business").max_employees == 50
    assert catalog.by_price("price_unknown") is None
    assert catalog.by_price(None) is None
    assert catalog.get("tier2").max_employees == 10
    assert catalog.get("tier9") is None
    assert len(catalog) == 3


def test_catalog_without_prices_has_no_paid_lookup():
    catalog = build_plan_catalog(Settings(STRIPE_PRICE_TIER2=None, STRIPE_PRICE_TIER3=None))

    assert catalog.by_price("price_growth") is None
    assert catalog.get("tier3").price_id is None


def test_status_reports_plan_and_usage(client, acme):
    client.post("/api/employees", json={"name": "Ann", "nfc_card_id": "C1"}, headers=acme)

    response = client.get("/api/subscription/status", headers=acme)

    assert response.status_code == 200
    assert response.json() == {
        "plan": "tier1",
        "planName": "Starter",
        "status": "active",
        "employeeCount": 1,
        "maxEmployees": 5,
    }


def test_plans_endpoint(client, acme):
    plans = client.get("/api/subscription/plans", headers=acme).json()

    assert [plan["key"] for plan in plans] == ["tier1", "tier2", "tier3"]
    assert plans[1]["priceId"] == "price_growth"


def test_checkout_completed_upgrades_company(client, engine, customer):
    response = send_event(client, "checkout.session.completed", checkout_completed(customer))

    assert response.status_code == 200
    assert response.json() == {"received": True}
    company = acme_company(engine)
    assert company.subscription_plan == "tier2"
    assert company.max_employees == 10
    assert company.subscription_status == "active"


def test_replayed_event_is_idempotent(client, engine, customer):
    obj = checkout_completed(customer, "price_business")
    send_event(client, "checkout.session.completed", obj)
    first = acme_company(engine)

    assert send_event(client, "checkout.session.completed", obj).status_code == 200

    second = acme_company(engine)
    assert (second.subscription_plan, second.max_employees, second.subscription_status) == \
        (first.subscription_plan, first.max_employees, first.subscription_status) == ("tier3", 50, "active")


def test_upgrade_raises_seat_limit(client, acme, customer):
    for i in range(5):
        client.post("/api/employees", json={"name": f"W{i}", "nfc_card_id": f"C{i}"}, headers=acme)
    assert client.post("/api/employees", json={"name": "W5", "nfc_card_id": "C5"}, headers=acme).status_code == 403

    send_event(client, "checkout.session.completed", checkout_completed(customer))

    assert client.post("/api/employees", json={"name": "W5", "nfc_card_id": "C5"}, headers=acme).status_code == 201


def test_checkout_completed_reads_price_from_line_items(client, engine, customer):
    obj = checkout_completed(customer)
    obj["metadata"] = {}
    line_items = MagicMock(data=[MagicMock(price=MagicMock(id="price_business"))])

    with patch("stripe.checkout.Session.list_line_items", return_value=line_items) as list_line_items:
        send_event(client, "checkout.session.completed", obj)

    list_line_items.assert_called_once()
    assert acme_company(engine).subscription_plan == "tier3"


def test_unknown_price_leaves_company_unchanged(client, engine, customer):
    response = send_event(client, "checkout.session.completed", checkout_completed(customer, "price_mystery"))

    assert response.status_code == 200
    company = acme_company(engine)
    assert (company.subscription_plan, company.max_employees) == ("tier1", 5)


def test_unknown_customer_is_ignored(client, engine, customer):
    response = send_event(client, "checkout.session.completed", checkout_completed("cus_nobody"))

    assert response.status_code == 200
    assert acme_company(engine).subscription_plan == "tier1"


def test_payment_mode_checkout_is_ignored(client, engine, customer):
    obj = checkout_completed(customer)
    obj["mode"] = "payment"

    send_event(client, "checkout.session.completed", obj)

    assert acme_company(engine).subscription_plan == "tier1"


def test_subscription_updated_syncs_status(client, engine, customer):
    send_event(client, "customer.subscription.updated", subscription(customer, "price_growth", "past_due"))

    company = acme_company(engine)
    assert company.subscription_plan == "tier2"
    assert company.max_employees == 10
    assert company.subscription_status == "past_due"


def test_subscription_deleted_downgrades(client, engine, customer):
    send_event(client, "checkout.session.completed", checkout_completed(customer, "price_business"))

    send_event(client, "customer.subscription.deleted", subscription(customer, "price_business", "canceled"), "evt_2")

    company = acme_company(engine)
    assert company.subscription_plan == "tier1"
    assert company.max_employees == 5
    assert company.subscription_status == "canceled"


def test_unhandled_event_type_is_acknowledged(client, customer):
    response = send_event(client, "invoice.paid", {"id": "in_1", "customer": customer})

    assert response.status_code == 200


def test_bad_signature_is_400(client, engine, customer):
    payload = json.dumps({"id": "evt_1", "type": "checkout.session.completed",
                          "data": {"object": checkout_completed(customer)}})

    response = client.post(
        "/api/subscription/webhook",
        content=payload,
        headers={"Stripe-Signature": sign(payload, secret="whsec_wrong")},
    )

    assert response.status_code == 400
    assert acme_company(engine).subscription_plan == "tier1"


def test_missing_signature_is_400(client, customer):
    response = client.post("/api/subscription/webhook", content=b"{}")

    assert response.status_code == 400


def test_tampered_payload_is_400(client, customer):
    payload = json.dumps({"id": "evt_1", "type": "invoice.paid", "data": {"object": {}}})
    signature = sign(payload)

    response = client.post(
        "/api/subscription/webhook",
        content=payload.replace("invoice.paid", "customer.subscription.deleted"),
        headers={"Stripe-Signature": signature},
    )

    assert response.status_code == 400


def test_sync_failure_still_acknowledged(client, customer):
    with patch("attendance_tracker.api.subscription.apply_event", side_effect=RuntimeError("db down")):
        response = send_event(client, "checkout.session.completed", checkout_completed(customer))

    assert response.status_code == 200
    assert response.json() == {"received": True}


def test_create_checkout_session(client, engine, acme):
    customer = MagicMock(id="cus_new")
    checkout = MagicMock(id="cs_test_9", url="https://checkout.stripe.test/cs_test_9")

    with patch("stripe.Customer.create", return_value=customer) as create_customer, \
            patch("stripe.checkout.Session.create", return_value=checkout) as create_session:
        first = client.post("/api/subscription/create-checkout-session", json={"priceId": "price_growth"}, headers=acme)
        second = client.post("/api/subscription/create-checkout-session", json={"priceId": "price_growth"}, headers=acme)

    assert first.status_code == 200
    assert first.json() == {"id": "cs_test_9", "url": "https://checkout.stripe.test/cs_test_9"}
    assert second.status_code == 200
    create_customer.assert_called_once()
    assert create_session.call_count == 2
    kwargs = create_session.call_args.kwargs
    assert kwargs["customer"] == "cus_new"
    assert kwargs["mode"] == "subscription"
    assert kwargs["line_items"] == [{"price": "price_growth", "quantity": 1}]
    assert acme_company(engine).stripe_customer_id == "cus_new"


def test_checkout_unknown_price_is_400(client, acme):
    with patch("stripe.Customer.create") as create_customer:
        response = client.post("/api/subscription/create-checkout-session", json={"priceId": "price_nope"}, headers=acme)

    assert response.status_code == 400
    create_customer.assert_not_called()


def test_checkout_provider_error_is_500(client, acme):
    with patch("stripe.Customer.create", side_effect=stripe.StripeError("boom")):
        response = client.post("/api/subscription/create-checkout-session", json={"priceId": "price_growth"}, headers=acme)

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to create checkout session."


def test_checkout_requires_auth(client):
    response = client.post("/api/subscription/create-checkout-session", json={"priceId": "price_growth"})

    assert response.status_code == 401


def test_downgrade_below_roster_keeps_employees_and_warns(client, engine, acme, customer):
    send_event(client, "checkout.session.completed", checkout_completed(customer, "price_business"))
    for i in range(12):
        assert client.post("/api/employees", json={"name": f"W{i}", "nfc_card_id": f"C{i}"}, headers=acme).status_code == 201

    with patch("attendance_tracker.services.subscriptions.logger") as logger:
        response = send_event(
            client, "customer.subscription.updated", subscription(customer, "price_growth", "active"), "evt_2"
        )

    assert response.status_code == 200
    warnings = [call.args[0] for call in logger.warning.call_args_list]
    assert any("12 employees" in message and "10 seats" in message for message in warnings)

    status = client.get("/api/subscription/status", headers=acme).json()
    assert (status["plan"], status["employeeCount"], status["maxEmployees"]) == ("tier2", 12, 10)
    assert client.post("/api/employees", json={"name": "W12", "nfc_card_id": "C12"}, headers=acme).status_code == 403


def test_upgrade_within_capacity_does_not_warn(client, customer):
    with patch("attendance_tracker.services.subscriptions.logger") as logger:
        send_event(client, "checkout.session.completed", checkout_completed(customer))

    logger.warning.assert_not_called()


def test_malformed_payload_with_valid_signature_is_400(client, customer):
    payload = "{not json"

    response = client.post("/api/subscription/webhook", content=payload, headers={"Stripe-Signature": sign(payload)})

    assert response.status_code == 400


def test_construct_event_parses_verified_payload():
    billing = StripeBillingService(Settings())
    payload = json.dumps({"id": "evt_9", "type": "customer.subscription.deleted",
                          "data": {"object": {"id": "sub_9", "customer": "cus_9"}}})

    event = billing.construct_event(payload.encode(), sign(payload))

    assert event["id"] == "evt_9"
    assert event["type"] == "customer.subscription.deleted"
    assert event["data"]["object"].get("customer") == "cus_9"


def test_construct_event_without_secret_is_not_configured():
    billing = StripeBillingService(Settings(STRIPE_WEBHOOK_SECRET=None))

    with pytest.raises(BillingNotConfigured):
        billing.construct_event(b"{}", "t=1,v1=abc")


def test_status_for_missing_company_is_404(client, acme):
    with patch("attendance_tracker.api.subscription.subscription_summary", side_effect=CompanyNotFound(99)):
        response = client.get("/api/subscription/status", headers=acme)

    assert response.status_code == 404
    assert response.json() == {"message": "Company not found."}


def test_status_store_failure_is_500(client, acme):
    with patch("attendance_tracker.api.subscription.subscription_summary", side_effect=RuntimeError("db down")):
        response = client.get("/api/subscription/status", headers=acme)

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to fetch subscription status."}
