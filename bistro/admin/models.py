from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, field_serializer


class CategorySummary(BaseModel):
    category: str
    quantity: int
    revenue: Decimal

    @field_serializer("revenue")
    def revenue_as_number(self, revenue: Decimal) -> float:
        return float(revenue)


class Summary(BaseModel):
    """Tableau de bord admin: revenu exact + cardinalités approximatives."""
    revenue_total: Decimal
    order_count: int
    user_count: int
    product_count: int

    def to_api(self) -> Dict[str, Any]:
        # Nombre JSON pour le dashboard: exact jusqu'à 2**53 cents, le Decimal reste la valeur de référence
        return {
            "revenue": float(self.revenue_total),
            "orders": self.order_count,
            "users": self.user_count,
            "products": self.product_count,
        }
