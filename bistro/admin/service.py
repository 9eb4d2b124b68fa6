# module bistro.admin.service

from typing import List
import logging

from bistro.admin import repository as admin_repository
from bistro.admin import stats
from bistro.admin.models import CategorySummary, Summary
from bistro.infra.supabase_client import Store
from bistro.menu import repository as menu_repository
from bistro.payments import repository as payments_repository

logger = logging.getLogger(__name__)


class AnalyticsAggregator:
    """Lecture seule: ne modifie jamais le store."""

    def __init__(self, store: Store):
        self.store = store

    def summary(self) -> Summary:
        payments = payments_repository.fetch_payment_prices(self.store)
        return Summary(
            revenue_total=stats.revenue_total(payments),
            order_count=admin_repository.count_table_rows(self.store, "payments"),
            user_count=admin_repository.count_table_rows(self.store, "users"),
            product_count=admin_repository.count_table_rows(self.store, "menu"),
        )

    def category_breakdown(self) -> List[CategorySummary]:
        records = payments_repository.fetch_payment_menu_items(self.store)
        catalog = menu_repository.get_catalog_map(self.store, stats.referenced_menu_item_ids(records))
        result = stats.category_breakdown(records, catalog)
        logger.debug("admin.category_breakdown records=%s categories=%s", len(records), len(result))
        return result
