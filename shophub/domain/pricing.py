# shophub/domain/pricing.py
"""
Liczenie podsumowania koszyka.

Jedna funkcja dla widoku koszyka, /cart/summary, /checkout/summary
i samego checkoutu, zeby kwoty nigdy sie nie rozjechaly.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

TAX_RATE = Decimal("0.08")
FREE_SHIPPING_THRESHOLD = Decimal("50.00")
STANDARD_SHIPPING_COST = Decimal("5.99")

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CartSummary:
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    shipping_cost: Decimal
    total: Decimal
    item_count: int
    total_quantity: int

    def as_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "tax_rate": self.tax_rate,
            "tax_amount": self.tax_amount,
            "shipping_cost": self.shipping_cost,
            "total": self.total,
            "item_count": self.item_count,
            "total_quantity": self.total_quantity,
        }


def shipping_for(subtotal: Decimal) -> Decimal:
    #darmowa wysylka dopiero POWYZEJ progu, rowne 50.00 placi
    return ZERO if subtotal > FREE_SHIPPING_THRESHOLD else STANDARD_SHIPPING_COST


def compute_summary(lines: Iterable[Tuple[Decimal, int]]) -> CartSummary:
    """
    lines: pary (aktualna cena produktu, ilosc).
    """
    subtotal = ZERO
    item_count = 0
    total_quantity = 0

    for price, quantity in lines:
        subtotal += Decimal(str(price)) * quantity
        item_count += 1
        total_quantity += quantity

    subtotal = to_money(subtotal)
    tax = to_money(subtotal * TAX_RATE)
    shipping = shipping_for(subtotal)

    return CartSummary(
        subtotal=subtotal,
        tax_rate=TAX_RATE,
        tax_amount=tax,
        shipping_cost=shipping,
        total=to_money(subtotal + tax + shipping),
        item_count=item_count,
        total_quantity=total_quantity,
    )
