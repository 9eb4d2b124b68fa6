"""
Registre central des routers.
- Paiements: /create-checkout-session, /payments
- Admin: /admin-stats, /order-stats
- Auth: /jwt, /users/admin/{email}
- Paniers: /carts
- Health: /health
"""
from fastapi import FastAPI

from bistro.admin.views import router as admin_router
from bistro.auth.views import router as auth_router
from bistro.carts.views import router as carts_router
from bistro.health.router import router as health_router
from bistro.payments.views import router as payments_router


def register_routers(app: FastAPI) -> None:
    app.include_router(auth_router)
    app.include_router(payments_router)
    app.include_router(carts_router)
    # Admin
    app.include_router(admin_router)
    # Health & monitoring
    app.include_router(health_router)
