from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, Field


class MenuItem(BaseModel):
    id: str
    name: str = ""
    category: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=0)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "MenuItem":
        """Normalise une ligne de la table 'menu' (id toujours en str, prix en Decimal)."""
        return cls(
            id=str(row.get("id") or ""),
            name=str(row.get("name") or ""),
            category=str(row.get("category") or ""),
            price=to_decimal(row.get("price")),
        )


def to_decimal(value: Any) -> Decimal:
    """
    Convertit un montant venant du store (int, float, str numérique) en Decimal.
    - Passe par str() pour éviter l'expansion binaire des floats (12.345 reste 12.345).
    - None/"" valent 0.
    """
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
