"""Gardes d'accès: identité (JWT HS256) puis rôle (table users).

Chaque garde est une fonction indépendante qui retourne un AccessResult;
la composition (identité puis rôle) est faite explicitement par les
dépendances FastAPI de bistro.utils.security.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional
import logging

import jwt

from bistro.auth import repository
from bistro.auth.models import AccessResult
from bistro.config import ACCESS_TOKEN_SECRET, ACCESS_TOKEN_TTL_SECONDS
from bistro.errors import Forbidden, InvalidRequest, Unauthorized
from bistro.infra.supabase_client import Store

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ADMIN_ROLE = "admin"


def _secret(secret: Optional[str]) -> str:
    value = secret or ACCESS_TOKEN_SECRET
    if not value:
        raise RuntimeError("ACCESS_TOKEN_SECRET manquant")
    return value


def issue_token(email: str, secret: Optional[str] = None, ttl_seconds: int = ACCESS_TOKEN_TTL_SECONDS) -> str:
    """Signe un jeton d'accès {email, iat, exp} (1h par défaut)."""
    email = (email or "").strip()
    if not email:
        raise InvalidRequest("email requis")
    now = datetime.now(timezone.utc)
    payload = {"email": email, "iat": now, "exp": now + timedelta(seconds=ttl_seconds)}
    return jwt.encode(payload, _secret(secret), algorithm=ALGORITHM)


def verify_identity(token: Optional[str], secret: Optional[str] = None) -> AccessResult:
    """Vérifie le jeton porteur.
    - Jeton absent, signature invalide, expiré ou sans email -> Unauthorized
    - Succès: identity = {"email": ...}
    """
    if not token:
        return AccessResult.fail(Unauthorized())
    try:
        claims = jwt.decode(token, _secret(secret), algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        logger.info("auth.verify_identity rejected token: %s", e)
        return AccessResult.fail(Unauthorized())
    email = str(claims.get("email") or "").strip()
    if not email:
        return AccessResult.fail(Unauthorized())
    return AccessResult.ok({"email": email})


def user_role(store: Store, email: str) -> Optional[str]:
    user = repository.get_user_by_email(store, email)
    return (user or {}).get("role")


def require_role(role: str) -> Callable[[Store, Dict[str, Any]], AccessResult]:
    """Fabrique un garde de rôle: succès uniquement si users.role == role."""
    def _guard(store: Store, identity: Dict[str, Any]) -> AccessResult:
        email = (identity or {}).get("email")
        if not email or user_role(store, email) != role:
            return AccessResult.fail(Forbidden())
        return AccessResult.ok(identity)
    return _guard


def is_admin(store: Store, email: str) -> bool:
    return user_role(store, email) == ADMIN_ROLE
