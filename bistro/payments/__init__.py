"""
Module 'payments' (feature-first): point d'entrée public.
Réunit modèles de requête, client Stripe, repository BD et coordinateur de règlement.
"""

from .models import CheckoutRequest, PaymentRecord, SettlementRequest, SettlementResult, to_minor_units
from .stripe_client import StripeGateway, require_stripe
from .repository import insert_payment, fetch_payment_prices, fetch_payment_menu_items
from .service import SettlementCoordinator

__all__ = [
    # models
    "CheckoutRequest",
    "PaymentRecord",
    "SettlementRequest",
    "SettlementResult",
    "to_minor_units",
    # stripe
    "StripeGateway",
    "require_stripe",
    # repository
    "insert_payment",
    "fetch_payment_prices",
    "fetch_payment_menu_items",
    # services
    "SettlementCoordinator",
]
