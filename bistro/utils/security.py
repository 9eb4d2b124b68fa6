from fastapi import Request, Depends
from typing import Optional, Dict, Any

from bistro.auth import service as auth_service
from bistro.infra.dependencies import get_store
from bistro.infra.supabase_client import Store


def get_bearer_token(request: Request) -> Optional[str]:
    """Extrait le jeton de l'en-tête 'Authorization: Bearer <token>' (None si absent)."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.lower().startswith("bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    return token or None


def require_user(token: Optional[str] = Depends(get_bearer_token)) -> Dict[str, Any]:
    """Garde 1: identité vérifiée -> {"email": ...}, sinon Unauthorized (401)."""
    return auth_service.verify_identity(token).unwrap()


def require_admin(
    identity: Dict[str, Any] = Depends(require_user),
    store: Store = Depends(get_store),
) -> Dict[str, Any]:
    """Garde 1 puis garde 2 (rôle admin), sinon Forbidden (403)."""
    return auth_service.require_role(auth_service.ADMIN_ROLE)(store, identity).unwrap()
