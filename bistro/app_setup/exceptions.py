"""
Gestionnaires d'exceptions.
- BistroError (et sous-classes): code HTTP porté par l'erreur, corps {"detail": ...}
  (+ paymentResult pour un règlement partiellement échoué).
- HTTPException: réponse JSON FastAPI standard.
"""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from bistro.errors import BistroError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BistroError)
    async def bistro_error_handler(request: Request, exc: BistroError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)
