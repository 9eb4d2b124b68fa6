"""
Accès aux données pour la feature 'payments' (table 'payments').
Les enregistrements ne sont jamais modifiés ni supprimés ici.
"""
from typing import Any, Dict, List
import logging

from bistro.errors import StoreError
from bistro.infra.supabase_client import Store
from bistro.payments.models import PaymentRecord

logger = logging.getLogger(__name__)

# module bistro.payments.repository
def insert_payment(store: Store, record: PaymentRecord) -> PaymentRecord:
    """
    Insère un enregistrement de paiement et retourne la ligne créée (id inclus).
    - Soulève StoreError si l'insertion échoue ou ne renvoie aucune ligne.
    """
    try:
        res = store.table("payments").insert(record.to_row()).execute()
    except Exception as e:
        logger.exception("payments.repository.insert_payment failed email=%s", record.email)
        raise StoreError("Failed to process payment") from e
    rows = res.data or []
    if not rows:
        logger.error("payments.repository.insert_payment returned no row email=%s", record.email)
        raise StoreError("Failed to process payment")
    return PaymentRecord.from_row(rows[0])


def fetch_payment_prices(store: Store) -> List[Dict[str, Any]]:
    """Toutes les lignes {id, price} (lecture paginée, aucune ligne omise)."""
    try:
        return store.fetch_all("payments", "id, price")
    except Exception as e:
        logger.exception("payments.repository.fetch_payment_prices failed")
        raise StoreError("Failed to fetch payments") from e


def fetch_payment_menu_items(store: Store) -> List[Dict[str, Any]]:
    """Toutes les lignes {id, menu_item_ids} pour la ventilation par catégorie."""
    try:
        return store.fetch_all("payments", "id, menu_item_ids")
    except Exception as e:
        logger.exception("payments.repository.fetch_payment_menu_items failed")
        raise StoreError("Failed to fetch payments") from e
