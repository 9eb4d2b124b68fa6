"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- En production, un process manager (ex: gunicorn + workers uvicorn) importe `bistro.asgi:app`.
- Toute la configuration (routes, middlewares, lifespan) est centralisée dans
  bistro.app_setup, ce fichier ne fait qu'exposer l'instance `app`.
"""

from bistro.app import app

if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run(
        "bistro.asgi:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,     # rechargement automatique en dev
    )
