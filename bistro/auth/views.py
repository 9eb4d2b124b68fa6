from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from bistro.auth import service as auth_service
from bistro.errors import Forbidden
from bistro.infra.dependencies import get_store
from bistro.infra.supabase_client import Store
from bistro.payments.models import NonBlankStr
from bistro.utils.rate_limit import optional_rate_limit
from bistro.utils.security import require_user

router = APIRouter(tags=["Auth"])


class TokenRequest(BaseModel):
    email: NonBlankStr


@router.post("/jwt", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def issue_jwt(req: TokenRequest) -> Dict[str, str]:
    """Signe un jeton d'accès (1h) pour l'email fourni: {"token": "..."}."""
    return {"token": auth_service.issue_token(req.email)}


@router.get("/users/admin/{email}")
async def user_is_admin(
    email: str,
    user: Dict[str, Any] = Depends(require_user),
    store: Store = Depends(get_store),
) -> Dict[str, bool]:
    """
    Indique si l'email a le rôle admin.
    - Un utilisateur ne peut interroger que son propre email (403 sinon)
    """
    if email != user.get("email"):
        raise Forbidden()
    admin = await run_in_threadpool(auth_service.is_admin, store, email)
    return {"admin": admin}
