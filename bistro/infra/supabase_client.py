"""
Poignée de store unique (Supabase/PostgREST).

Le client est construit une seule fois au démarrage (lifespan) puis injecté
dans chaque composant; close_store() libère la session HTTP à l'arrêt.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import create_client, Client

from bistro.config import SUPABASE_URL, SUPABASE_KEY, SUPABASE_SERVICE_KEY, STORE_PAGE_SIZE

logger = logging.getLogger(__name__)


class Store:
    """Enveloppe fine autour d'un Client Supabase: tables + lectures paginées."""

    def __init__(self, client: Client, page_size: int = STORE_PAGE_SIZE):
        self.client = client
        self.page_size = max(1, int(page_size))

    def table(self, name: str):
        return self.client.table(name)

    def fetch_all(self, table_name: str, columns: str = "*") -> List[Dict[str, Any]]:
        """
        Lit toutes les lignes d'une table, page par page (range), triées par id.
        - S'arrête dès qu'une page revient incomplète.
        """
        rows: List[Dict[str, Any]] = []
        start = 0
        while True:
            res = (
                self.table(table_name)
                .select(columns)
                .order("id")
                .range(start, start + self.page_size - 1)
                .execute()
            )
            batch = res.data or []
            rows.extend(batch)
            if len(batch) < self.page_size:
                return rows
            start += self.page_size

    def close(self) -> None:
        # Le client sync de postgrest garde une session httpx ouverte
        session = getattr(getattr(self.client, "postgrest", None), "session", None)
        close = getattr(session, "close", None)
        if callable(close):
            close()


def open_store(url: Optional[str] = None, key: Optional[str] = None) -> Store:
    """
    Construit la poignée de store.
    - Préfère SUPABASE_SERVICE_KEY (écritures serveur), sinon SUPABASE_KEY.
    """
    url = url or SUPABASE_URL
    key = key or SUPABASE_SERVICE_KEY or SUPABASE_KEY
    if not url or not key:
        raise RuntimeError("SUPABASE_URL et SUPABASE_SERVICE_KEY (ou SUPABASE_KEY) sont requis")
    logger.info("Opening Supabase store url=%s", url)
    return Store(create_client(url, key))


def close_store(store: Optional[Store]) -> None:
    if store is None:
        return
    try:
        store.close()
    except Exception:
        logger.exception("infra.supabase_client.close_store failed")
