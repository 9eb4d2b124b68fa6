import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from bistro.errors import InvalidRequest
from bistro.infra.dependencies import get_settlement_coordinator
from bistro.payments.models import SettlementRequest
from bistro.payments.service import SettlementCoordinator
from bistro.utils.rate_limit import optional_rate_limit
from bistro.utils.security import require_user

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments"])


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise InvalidRequest("Invalid JSON body")

# module bistro.payments.views
@router.post("/create-checkout-session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_checkout_session(
    request: Request,
    user: Dict[str, Any] = Depends(require_user),
    coordinator: SettlementCoordinator = Depends(get_settlement_coordinator),
):
    """
    Crée un PaymentIntent Stripe pour le montant affiché au client.
    - Entrée JSON: { "price": <number> }
    - Sécurité: require_user + rate limit (10 req / 60s)
    - Sortie: { "clientSecret": "..." }
    - Erreurs: 400 si price invalide, 500 si Stripe refuse
    """
    body = await _read_json(request)
    price = body.get("price") if isinstance(body, dict) else None
    result = await run_in_threadpool(coordinator.create_checkout, price)
    logger.info("payments.checkout intent created email=%s", user.get("email"))
    return JSONResponse(result)


@router.post("/payments", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def settle_payment(
    request: Request,
    coordinator: SettlementCoordinator = Depends(get_settlement_coordinator),
):
    """
    Règle un panier: charge, enregistre le paiement puis vide les entrées panier.
    - Entrée JSON: { "price", "cartIds": [...], "menuItemIds": [...], "userEmail" }
    - Sortie: { "paymentResult": {...}, "deleteResult": { "deletedCount": n } }
    - 400 si le corps est invalide (aucun effet de bord), 500 si Stripe ou le store échouent
    """
    body = await _read_json(request)
    req = SettlementRequest.parse(body)
    result = await run_in_threadpool(coordinator.settle_request, req)
    return JSONResponse(result.to_api())
