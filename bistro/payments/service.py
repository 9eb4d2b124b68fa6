"""
Cas d'usage 'payments': règlement d'un panier.

Ordre des étapes (un seul appel settle):
  1) validation de la requête (aucun effet de bord en cas d'échec)
  2) PaymentIntent Stripe sur le montant en unités mineures
  3) insertion de l'enregistrement 'payments'
  4) suppression ensembliste des entrées 'carts' référencées
Pas de transaction entre 3) et 4): un échec en 4) laisse un paiement
enregistré et un panier non vidé, remonté via CartCleanupError.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from bistro.carts import repository as carts_repository
from bistro.errors import CartCleanupError, StoreError
from bistro.infra.supabase_client import Store
from bistro.payments import repository
from bistro.payments.models import (
    CheckoutRequest,
    PaymentRecord,
    SettlementRequest,
    SettlementResult,
)
from bistro.payments.stripe_client import StripeGateway

logger = logging.getLogger(__name__)


class SettlementCoordinator:
    def __init__(self, store: Store, gateway: StripeGateway):
        self.store = store
        self.gateway = gateway

    def create_checkout(self, price: Any) -> Dict[str, str]:
        """
        Crée un PaymentIntent pour le montant du panier affiché au client.
        Retour: {"clientSecret": "..."}
        """
        req = CheckoutRequest.parse({"price": price})
        intent = self.gateway.create_intent(req.amount_minor)
        return {"clientSecret": intent["client_secret"]}

    def settle(
        self,
        user_email: Any,
        price: Any,
        cart_ids: Any,
        menu_item_ids: Optional[List[Any]] = None,
    ) -> SettlementResult:
        req = SettlementRequest.parse({
            "userEmail": user_email,
            "price": price,
            "cartIds": cart_ids,
            "menuItemIds": menu_item_ids,
        })
        return self.settle_request(req)

    def settle_request(self, req: SettlementRequest) -> SettlementResult:
        intent = self.gateway.create_intent(req.amount_minor)

        record = PaymentRecord(
            email=req.user_email,
            price=req.price,
            amount_minor=req.amount_minor,
            transaction_id=intent.get("id"),
            menu_item_ids=list(req.menu_item_ids),
            cart_ids=list(req.cart_ids),
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        payment = repository.insert_payment(self.store, record)

        try:
            deleted = carts_repository.delete_cart_entries(self.store, req.cart_ids)
        except StoreError as e:
            logger.error(
                "payments.settle partial failure: payment_id=%s recorded, carts not cleared cart_ids=%s",
                payment.id,
                req.cart_ids,
            )
            raise CartCleanupError(payment.to_api()) from e

        logger.info(
            "payments.settle ok payment_id=%s email=%s amount_minor=%s deleted=%s/%s",
            payment.id,
            payment.email,
            payment.amount_minor,
            deleted,
            len(req.cart_ids),
        )
        return SettlementResult(payment=payment, deleted_count=deleted)
