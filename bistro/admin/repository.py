from typing import Literal
import logging

from bistro.errors import StoreError
from bistro.infra.supabase_client import Store

logger = logging.getLogger(__name__)

CountMode = Literal["exact", "planned", "estimated"]

# module bistro.admin.repository
def count_table_rows(store: Store, table_name: str, mode: CountMode = "estimated") -> int:
    """
    Compte les lignes d'une table via l'en-tête Content-Range de PostgREST.
    - mode='estimated' (défaut): rapide, approximatif sur les grosses tables
    - fallback sur len(data) si le compte n'est pas renvoyé
    """
    try:
        res = store.table(table_name).select("id", count=mode).limit(1).execute()
    except Exception as e:
        logger.exception("admin.repository.count_table_rows failed table=%s", table_name)
        raise StoreError(f"Failed to count {table_name}") from e
    if getattr(res, "count", None) is not None:
        return int(res.count)
    return len(res.data or [])
