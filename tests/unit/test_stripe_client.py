import pytest
import stripe

from bistro.errors import PaymentGatewayError
from bistro.payments.stripe_client import StripeGateway


def test_create_intent_uses_card_and_currency(monkeypatch):
    captured = {}

    def _create(**kwargs):
        captured.update(kwargs)
        return {"id": "pi_1", "client_secret": "pi_1_secret"}

    monkeypatch.setattr(stripe.PaymentIntent, "create", _create)

    intent = StripeGateway(api_key="sk_test_x", currency="usd").create_intent(1235)

    assert intent == {"id": "pi_1", "client_secret": "pi_1_secret"}
    assert captured == {"amount": 1235, "currency": "usd", "payment_method_types": ["card"]}


def test_create_intent_wraps_stripe_errors(monkeypatch):
    def _declined(**kwargs):
        raise stripe.CardError("Your card was declined.", param="card", code="card_declined")

    monkeypatch.setattr(stripe.PaymentIntent, "create", _declined)

    with pytest.raises(PaymentGatewayError) as exc:
        StripeGateway(api_key="sk_test_x").create_intent(1000)
    assert exc.value.status_code == 500


def test_create_intent_rejects_negative_amount(monkeypatch):
    def _never(**kwargs):
        raise AssertionError("stripe ne doit pas être appelé")

    monkeypatch.setattr(stripe.PaymentIntent, "create", _never)
    with pytest.raises(PaymentGatewayError):
        StripeGateway(api_key="sk_test_x").create_intent(-1)


def test_create_intent_without_client_secret(monkeypatch):
    monkeypatch.setattr(stripe.PaymentIntent, "create", lambda **kw: {"id": "pi_1"})
    with pytest.raises(PaymentGatewayError):
        StripeGateway(api_key="sk_test_x").create_intent(100)
