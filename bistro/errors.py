"""
Taxonomie des erreurs métier du backend.

Chaque erreur porte un message lisible et le code HTTP sous lequel elle est
exposée; le handler enregistré dans bistro.app_setup.exceptions les
convertit en réponse JSON {"detail": ...}. Aucune n'est rejouée
automatiquement.
"""
from typing import Any, Dict, Optional


class BistroError(Exception):
    status_code = 500
    default_message = "Erreur interne"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_content(self) -> Dict[str, Any]:
        return {"detail": self.message}


class InvalidRequest(BistroError):
    """Corps de requête mal formé (ex: cartIds vide ou absent)."""
    status_code = 400
    default_message = "Requête invalide"


class Unauthorized(BistroError):
    """Jeton absent, mal formé ou expiré."""
    status_code = 401
    default_message = "Unauthorized access"


class Forbidden(BistroError):
    """Identité vérifiée mais rôle insuffisant."""
    status_code = 403
    default_message = "Forbidden access"


class PaymentGatewayError(BistroError):
    """Le fournisseur de paiement a refusé la charge ou est injoignable."""
    status_code = 500
    default_message = "Failed to create payment intent"


class StoreError(BistroError):
    """Échec générique de persistance."""
    status_code = 500
    default_message = "Failed to access the store"


class CartCleanupError(StoreError):
    """
    Le paiement est enregistré mais la suppression des entrées panier a échoué.
    L'état partiel n'est pas annulé: l'enregistrement est renvoyé à l'appelant.
    """
    default_message = "Payment recorded but cart cleanup failed"

    def __init__(self, payment: Dict[str, Any], message: Optional[str] = None):
        super().__init__(message)
        self.payment = payment

    def to_content(self) -> Dict[str, Any]:
        content = super().to_content()
        content["paymentResult"] = self.payment
        return content
