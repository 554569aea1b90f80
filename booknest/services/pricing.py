"""
Cart arithmetic.

A *line* is any ``(price, quantity)`` pair. Totals are plain floats; rounding
happens only when a value is shown to a user (see :func:`format_price`).
"""
from typing import Iterable, List, Tuple

from booknest.models.schemas import CartItem, CartSummary

TAX_RATE = 0.10

Line = Tuple[float, int]


def lines_of(items: Iterable[CartItem]) -> List[Line]:
    return [(item.book.price, item.quantity) for item in items]


def subtotal(lines: Iterable[Line]) -> float:
    return sum(price * quantity for price, quantity in lines)


def tax(amount: float) -> float:
    return amount * TAX_RATE


def total(lines: Iterable[Line]) -> float:
    sub = subtotal(lines)
    return sub + tax(sub)


def item_count(lines: Iterable[Line]) -> int:
    return sum(quantity for _, quantity in lines)


def summarize(items: Iterable[CartItem]) -> CartSummary:
    lines = lines_of(items)
    sub = subtotal(lines)
    return CartSummary(subtotal=sub, tax=tax(sub), total=sub + tax(sub), item_count=item_count(lines))


def format_price(amount: float) -> str:
    return f"${amount:.2f}"
