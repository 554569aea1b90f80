import pytest

from booknest.core.errors import InvalidOrder
from booknest.models.schemas import CartItem, User
from booknest.services.orders import build_order
from tests.conftest import make_book

USER = User(id="u1", name="Ada", email="ada@example.com")


def cart():
    return [CartItem(book=make_book("a", 12.99), quantity=1), CartItem(book=make_book("b", 14.99), quantity=2)]


def test_build_order_requires_user():
    with pytest.raises(InvalidOrder):
        build_order(None, cart(), "1 Main St", "card")


def test_build_order_requires_items():
    with pytest.raises(InvalidOrder):
        build_order(USER, [], "1 Main St", "card")


def test_build_order_snapshots_cart_and_computes_total():
    items = cart()
    order = build_order(USER, items, "1 Main St", "card", order_id="order-1")
    assert order.id == "order-1"
    assert order.status == "pending"
    assert order.items == items
    assert order.subtotal == pytest.approx(42.97)
    assert order.total == pytest.approx(47.267)
    assert order.user_email == "ada@example.com"

    items[0].quantity = 9
    items[0].book.price = 99.0
    assert order.items[0].quantity == 1
    assert order.items[0].book.price == 12.99
