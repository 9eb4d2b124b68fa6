from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse
import hashlib
import logging
import os
import time

from fastapi import HTTPException, Request, Response
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

from bistro.utils.security import get_bearer_token

logger = logging.getLogger(__name__)

# Taille du compteur mémoire au-delà de laquelle les clés expirées sont purgées
PRUNE_THRESHOLD = 1024


def rate_limit_key(request: Request) -> str:
    """Clé de quota: jeton porteur (hashé) en priorité, sinon IP, suffixée par le chemin."""
    token: Optional[str] = get_bearer_token(request)
    path = request.url.path
    if token:
        h = hashlib.sha256(token.encode("utf-8")).hexdigest()[:16]
        return f"user:{h}:{path}"
    ip = request.client.host if request.client else "local"
    return f"ip:{ip}:{path}"


def prune_expired(store: Dict[str, Tuple[int, List[float]]], now: float) -> None:
    """Retire les clés dont tous les hits sont sortis de leur fenêtre."""
    for key in [k for k, (window, hits) in store.items() if not hits or now - hits[-1] >= window]:
        del store[key]


def local_hit(store: Dict[str, Tuple[int, List[float]]], key: str, times: int, seconds: int) -> None:
    """
    Compteur mémoire à fenêtre glissante: store[key] = (fenêtre, horodatages).
    Lève HTTPException 429 au-delà de `times` hits sur `seconds` secondes.
    """
    now = time.time()
    if len(store) >= PRUNE_THRESHOLD:
        prune_expired(store, now)
    _, previous = store.get(key, (seconds, []))
    hits = [t for t in previous if now - t < seconds]
    if len(hits) >= times:
        store[key] = (seconds, hits)
        raise HTTPException(status_code=429, detail="Too Many Requests")
    hits.append(now)
    store[key] = (seconds, hits)


def optional_rate_limit(times: int, seconds: int):
    """
    Dépendance de rate limiting tolérante:
    - LOCAL_RATE_LIMIT_FALLBACK=1: compteur mémoire (fenêtre glissante) sur app.state
    - app.state.rate_limit_enabled=False: aucune limite
    - sinon fastapi-limiter (Redis); une panne du limiteur ne bloque pas la requête
    """
    async def _dep(request: Request, response: Response):
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            store = getattr(request.app.state, "_rl_store", {})
            request.app.state._rl_store = store
            local_hit(store, rate_limit_key(request), times, seconds)
            return

        if getattr(request.app.state, "rate_limit_enabled", None) is False:
            return

        async def _identifier(req: Request) -> str:
            return rate_limit_key(req)

        try:
            await RateLimiter(times=times, seconds=seconds, identifier=_identifier)(request, response)
        except HTTPException:
            raise
        except Exception as e:
            logger.warning("rate limiter unavailable, request allowed: %s", e)
    return _dep


def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)
    limiter_ready = getattr(FastAPILimiter, "redis", None) is not None
    backend = "redis" if limiter_ready else None
    if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
        backend = "memory"

    info: Dict[str, Any] = {
        "enabled": (bool(enabled) if enabled is not None else None),
        "ready": limiter_ready,
        "backend": backend,
    }

    redis_url = os.getenv("RATE_LIMIT_REDIS_URL")
    if backend == "redis" and redis_url:
        p = urlparse(redis_url)
        info["redis"] = {
            "scheme": p.scheme,
            "host": p.hostname,
            "port": p.port,
        }
    return info
