"""
Accès aux entrées panier (table 'carts').
La suppression est ensembliste: les IDs déjà supprimés ou inconnus sont ignorés.
"""
from typing import Any, Dict, Iterable, List
import logging

from bistro.errors import StoreError
from bistro.infra.supabase_client import Store

logger = logging.getLogger(__name__)

# module bistro.carts.repository
def list_cart_entries(store: Store, email: str) -> List[Dict[str, Any]]:
    """
    Entrées panier appartenant à un utilisateur.
    - Retourne [] si email vide (comportement historique de GET /carts).
    """
    email = (email or "").strip()
    if not email:
        return []
    try:
        res = store.table("carts").select("*").eq("email", email).execute()
        return res.data or []
    except Exception as e:
        logger.exception("carts.repository.list_cart_entries failed email=%s", email)
        raise StoreError("Failed to fetch cart entries") from e


def delete_cart_entries(store: Store, cart_ids: Iterable[str]) -> int:
    """
    Supprime toutes les entrées dont l'ID figure dans cart_ids.
    Retour: nombre de lignes effectivement supprimées (0 si déjà absentes).
    """
    ids = list(dict.fromkeys(str(i) for i in cart_ids if i))
    if not ids:
        return 0
    try:
        res = store.table("carts").delete().in_("id", ids).execute()
        return len(res.data or [])
    except Exception as e:
        logger.exception("carts.repository.delete_cart_entries failed ids=%s", ids)
        raise StoreError("Failed to delete cart entries") from e


def delete_cart_entry(store: Store, cart_id: str) -> int:
    """Suppression unitaire; supprimer une entrée déjà supprimée est un no-op (0)."""
    return delete_cart_entries(store, [cart_id])
