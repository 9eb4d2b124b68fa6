from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from bistro.carts import repository as carts_repository
from bistro.infra.dependencies import get_store
from bistro.infra.supabase_client import Store

# module bistro.carts.views
router = APIRouter(prefix="/carts", tags=["Carts"])


@router.get("")
def list_carts(email: str = Query(default=""), store: Store = Depends(get_store)) -> List[Dict[str, Any]]:
    return carts_repository.list_cart_entries(store, email)


@router.delete("/{cart_id}")
def delete_cart(cart_id: str, store: Store = Depends(get_store)) -> Dict[str, int]:
    """Supprime une entrée panier; déjà supprimée -> deletedCount=0."""
    return {"deletedCount": carts_repository.delete_cart_entry(store, cart_id)}
