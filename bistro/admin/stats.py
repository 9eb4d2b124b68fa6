"""
Logique d'agrégation pure (pas de Stripe, pas de DB).

Équivalent applicatif du pipeline lookup -> unwind -> group -> project:
- unwind_menu_items: une ligne (record, menu_item_id) par référence, doublons conservés
- join_catalog: jointure sur le catalogue, lignes orphelines écartées
- group_by_category: quantité = nombre de lignes, revenu = somme des prix catalogue
"""
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple

from bistro.admin.models import CategorySummary
from bistro.menu.models import MenuItem, to_decimal

# module bistro.admin.stats
def unwind_menu_items(records: Iterable[Dict[str, Any]]) -> Iterator[Tuple[Dict[str, Any], str]]:
    for record in records or []:
        for menu_item_id in record.get("menu_item_ids") or []:
            if menu_item_id is None or menu_item_id == "":
                continue
            yield record, str(menu_item_id)


def referenced_menu_item_ids(records: Iterable[Dict[str, Any]]) -> List[str]:
    return sorted({item_id for _, item_id in unwind_menu_items(records)})


def join_catalog(
    rows: Iterable[Tuple[Dict[str, Any], str]],
    catalog: Mapping[str, MenuItem],
) -> Iterator[Tuple[Dict[str, Any], MenuItem]]:
    for record, menu_item_id in rows:
        item = catalog.get(menu_item_id)
        if item is None:
            continue
        yield record, item


def group_by_category(rows: Iterable[Tuple[Dict[str, Any], MenuItem]]) -> List[CategorySummary]:
    groups: Dict[str, Dict[str, Any]] = {}
    for _, item in rows:
        group = groups.setdefault(item.category, {"quantity": 0, "revenue": Decimal("0")})
        group["quantity"] += 1
        group["revenue"] += item.price
    return [
        CategorySummary(category=category, quantity=g["quantity"], revenue=g["revenue"])
        for category, g in groups.items()
    ]


def category_breakdown(
    records: Iterable[Dict[str, Any]],
    catalog: Mapping[str, MenuItem],
) -> List[CategorySummary]:
    return group_by_category(join_catalog(unwind_menu_items(records), catalog))


def revenue_total(records: Iterable[Dict[str, Any]]) -> Decimal:
    """Somme exacte (Decimal) des prix; 0 pour une liste vide."""
    return sum((to_decimal(r.get("price")) for r in records or []), Decimal("0"))
