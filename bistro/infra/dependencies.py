"""
Dépendances FastAPI: exposent les ressources ouvertes par le lifespan
(app.state.store, app.state.gateway) et construisent les composants.
"""
from fastapi import Depends, Request

from bistro.admin.service import AnalyticsAggregator
from bistro.infra.supabase_client import Store
from bistro.payments.service import SettlementCoordinator
from bistro.payments.stripe_client import StripeGateway


def get_store(request: Request) -> Store:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Store non initialisé (lifespan non exécuté)")
    return store


def get_gateway(request: Request) -> StripeGateway:
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise RuntimeError("Passerelle de paiement non initialisée (lifespan non exécuté)")
    return gateway


def get_settlement_coordinator(
    store: Store = Depends(get_store),
    gateway: StripeGateway = Depends(get_gateway),
) -> SettlementCoordinator:
    return SettlementCoordinator(store, gateway)


def get_analytics(store: Store = Depends(get_store)) -> AnalyticsAggregator:
    return AnalyticsAggregator(store)
