from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from bistro.admin.service import AnalyticsAggregator
from bistro.infra.dependencies import get_analytics
from bistro.utils.security import require_admin

# module bistro.admin.views
router = APIRouter(tags=["Admin"])


@router.get("/admin-stats")
def admin_stats(
    user: Dict[str, Any] = Depends(require_admin),
    analytics: AnalyticsAggregator = Depends(get_analytics),
):
    """Compteurs du dashboard: revenu total, commandes, utilisateurs, produits."""
    return JSONResponse(analytics.summary().to_api())


@router.get("/order-stats")
def order_stats(
    user: Dict[str, Any] = Depends(require_admin),
    analytics: AnalyticsAggregator = Depends(get_analytics),
):
    items = analytics.category_breakdown()
    return JSONResponse([item.model_dump() for item in items])
