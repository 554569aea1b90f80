from datetime import datetime, timezone
from typing import List, Optional

from booknest.core.errors import InvalidOrder
from booknest.models.schemas import CartItem, Order, User
from booknest.services.pricing import lines_of, subtotal, tax


def build_order(user: Optional[User], items: List[CartItem], shipping_address: str,
                payment_method: str, order_id: Optional[str] = None) -> Order:
    """
    Turn a cart into a pending order.

    The items are deep-copied so later cart edits never reach the order, and
    the totals are fixed here; nothing recomputes them afterwards.
    """
    if user is None or not items:
        raise InvalidOrder("Invalid order data")
    sub = subtotal(lines_of(items))
    return Order(
        id=order_id,
        user_id=user.id,
        user_name=user.name,
        user_email=user.email,
        items=[item.model_copy(deep=True) for item in items],
        subtotal=sub,
        tax=tax(sub),
        total=sub + tax(sub),
        status="pending",
        order_date=datetime.now(timezone.utc),
        shipping_address=shipping_address,
        payment_method=payment_method,
    )
