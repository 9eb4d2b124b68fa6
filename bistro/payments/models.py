"""
Contrats de la feature 'payments': requête de règlement validée,
enregistrement de paiement persistant et résultat de règlement.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_serializer,
    field_validator,
)

from bistro.errors import InvalidRequest
from bistro.menu.models import to_decimal

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Plafond Stripe: 8 chiffres en unités mineures (99 999 999 cents)
MAX_PRICE = Decimal("999999.99")


def _coerce_amount(value: Any) -> Any:
    # bool est un int en Python: on le refuse explicitement
    if isinstance(value, bool):
        raise ValueError("price doit être un nombre")
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    return value


def to_minor_units(price: Decimal) -> int:
    """
    Convertit un montant en unités majeures (ex: dollars) en unités mineures (cents).
    Arrondi au plus proche, moitié vers le haut: 12.345 -> 1235.
    """
    return int((to_decimal(price) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class CheckoutRequest(BaseModel):
    price: Decimal = Field(ge=0, le=MAX_PRICE)

    coerce_price = field_validator("price", mode="before")(_coerce_amount)

    @property
    def amount_minor(self) -> int:
        return to_minor_units(self.price)

    @classmethod
    def parse(cls, data: Any) -> "CheckoutRequest":
        if not isinstance(data, dict):
            raise InvalidRequest("Invalid payload: JSON object expected")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidRequest(f"Invalid price: must be a number between 0 and {MAX_PRICE}") from e


class SettlementRequest(BaseModel):
    """
    Corps validé de POST /payments.
    - cartIds: liste non vide d'identifiants non vides (sinon InvalidRequest)
    - price: montant >= 0 en unités majeures
    - menuItemIds: accepte aussi l'ancien nom 'menuItems'
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    user_email: NonBlankStr = Field(validation_alias=AliasChoices("userEmail", "user_email", "email"))
    price: Decimal = Field(ge=0, le=MAX_PRICE)
    cart_ids: List[NonBlankStr] = Field(min_length=1, validation_alias=AliasChoices("cartIds", "cart_ids"))
    menu_item_ids: List[NonBlankStr] = Field(
        default_factory=list,
        validation_alias=AliasChoices("menuItemIds", "menu_item_ids", "menuItems"),
    )

    coerce_price = field_validator("price", mode="before")(_coerce_amount)

    @field_validator("menu_item_ids", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def amount_minor(self) -> int:
        return to_minor_units(self.price)

    @classmethod
    def parse(cls, data: Any) -> "SettlementRequest":
        """Valide un dict brut; toute erreur devient InvalidRequest (400)."""
        if not isinstance(data, dict):
            raise InvalidRequest("Invalid payload: JSON object expected")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            fields = {".".join(str(p) for p in err.get("loc", ())) for err in e.errors()}
            if any(f.split(".")[0] in ("cartIds", "cart_ids") for f in fields) or not fields:
                raise InvalidRequest("Invalid cartIds: must be a non-empty array") from e
            raise InvalidRequest(f"Invalid payload: {', '.join(sorted(fields))}") from e


class PaymentRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    email: str
    price: Decimal
    amount_minor: int = Field(serialization_alias="amountMinor")
    transaction_id: Optional[str] = Field(default=None, serialization_alias="transactionId")
    menu_item_ids: List[str] = Field(default_factory=list, serialization_alias="menuItemIds")
    cart_ids: List[str] = Field(serialization_alias="cartIds")
    created_at: str = Field(serialization_alias="createdAt")

    @field_serializer("price")
    def price_as_number(self, price: Decimal) -> float:
        return float(price)

    def to_row(self) -> Dict[str, Any]:
        """Ligne à insérer dans la table 'payments' (id généré par la base)."""
        row = self.model_dump(exclude={"id"})
        row["price"] = str(self.price)
        return row

    def to_api(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "PaymentRecord":
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            email=str(row.get("email") or ""),
            price=to_decimal(row.get("price")),
            amount_minor=int(row.get("amount_minor") or 0),
            transaction_id=row.get("transaction_id"),
            menu_item_ids=[str(i) for i in (row.get("menu_item_ids") or [])],
            cart_ids=[str(i) for i in (row.get("cart_ids") or [])],
            created_at=str(row.get("created_at") or ""),
        )


class SettlementResult(BaseModel):
    payment: PaymentRecord
    deleted_count: int

    def to_api(self) -> Dict[str, Any]:
        return {
            "paymentResult": self.payment.to_api(),
            "deleteResult": {"deletedCount": self.deleted_count},
        }
