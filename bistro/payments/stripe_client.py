"""
Adaptateur Stripe: centralise la configuration et la création des PaymentIntents.
"""
import logging
from typing import Any, Dict, Optional

import stripe

from bistro.config import STRIPE_SECRET_KEY, PAYMENT_CURRENCY
from bistro.errors import PaymentGatewayError

logger = logging.getLogger(__name__)

# module bistro.payments.stripe_client
def require_stripe(api_key: Optional[str] = None):
    """
    Prépare et retourne le module stripe prêt à l'emploi.
    - Configure stripe.api_key via la clé fournie ou STRIPE_SECRET_KEY.
    - En absence de clé, les appels échoueront côté SDK (AuthenticationError).
    """
    key = api_key or STRIPE_SECRET_KEY
    if key:
        stripe.api_key = key
    return stripe


class StripeGateway:
    """
    Passerelle de paiement: montant en unités mineures -> PaymentIntent confirmé.
    Toute erreur SDK (refus, réseau, clé absente) devient PaymentGatewayError.
    """

    def __init__(self, api_key: Optional[str] = None, currency: str = PAYMENT_CURRENCY):
        self.api_key = api_key or STRIPE_SECRET_KEY
        self.currency = currency

    def create_intent(self, amount_minor: int, currency: Optional[str] = None) -> Dict[str, Any]:
        """
        Crée un PaymentIntent carte.
        Retour: {"id": "pi_...", "client_secret": "pi_..._secret_..."}
        """
        if amount_minor < 0:
            raise PaymentGatewayError("Amount must be non-negative")
        currency = (currency or self.currency).lower()
        try:
            require_stripe(self.api_key)
            intent = stripe.PaymentIntent.create(
                amount=amount_minor,
                currency=currency,
                payment_method_types=["card"],
            )
        except stripe.StripeError as e:
            logger.exception("payments.stripe_client.create_intent failed amount=%s currency=%s", amount_minor, currency)
            raise PaymentGatewayError(f"Failed to create payment intent: {getattr(e, 'user_message', None) or e}") from e

        # stripe retourne un StripeObject; on le traite comme dict-compatible
        data = dict(intent)
        if not data.get("client_secret"):
            raise PaymentGatewayError("Payment intent without client secret")
        return {"id": data.get("id"), "client_secret": data.get("client_secret")}
