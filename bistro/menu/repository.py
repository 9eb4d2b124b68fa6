"""
Accès en lecture au catalogue (table 'menu').
"""
from typing import Dict, Iterable, List
import logging

from bistro.errors import StoreError
from bistro.infra.supabase_client import Store
from bistro.menu.models import MenuItem

logger = logging.getLogger(__name__)

# PostgREST encode in_() dans l'URL: on découpe les listes longues
_IN_CHUNK = 100

# module bistro.menu.repository
def fetch_menu_items_by_ids(store: Store, ids: Iterable[str]) -> List[MenuItem]:
    """
    Récupère les items du catalogue par leurs IDs (dédupliqués).
    - Les IDs inconnus sont simplement absents du résultat.
    - Soulève StoreError en cas d'échec de lecture.
    """
    unique_ids = sorted({str(i) for i in ids if i})
    if not unique_ids:
        return []
    items: List[MenuItem] = []
    try:
        for start in range(0, len(unique_ids), _IN_CHUNK):
            chunk = unique_ids[start:start + _IN_CHUNK]
            res = (
                store.table("menu")
                .select("id, name, category, price")
                .in_("id", chunk)
                .execute()
            )
            items.extend(MenuItem.from_row(row) for row in (res.data or []))
    except Exception as e:
        logger.exception("menu.repository.fetch_menu_items_by_ids failed count=%s", len(unique_ids))
        raise StoreError("Failed to fetch menu items") from e
    return items


def get_catalog_map(store: Store, ids: Iterable[str]) -> Dict[str, MenuItem]:
    """Retourne un dict {id: MenuItem} pour les IDs demandés."""
    return {item.id: item for item in fetch_menu_items_by_ids(store, ids)}
