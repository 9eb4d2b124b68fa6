from typing import Optional
import logging

from bistro.errors import StoreError
from bistro.infra.supabase_client import Store

logger = logging.getLogger(__name__)

# --- Table users (lecture seule pour les contrôles de rôle) ---

def get_user_by_email(store: Store, email: str) -> Optional[dict]:
    """Récupère un utilisateur par email (table users).
    - Retour: dict utilisateur ou None si introuvable
    - Soulève StoreError si la lecture échoue
    """
    email = (email or "").strip()
    if not email:
        return None
    try:
        res = store.table("users").select("id, email, name, role").eq("email", email).limit(1).execute()
    except Exception as e:
        logger.exception("auth.repository.get_user_by_email failed email=%s", email)
        raise StoreError("Failed to fetch user") from e
    rows = res.data or []
    return rows[0] if rows else None
