from booknest.services import cart as cart_ops
from tests.conftest import make_book

A = make_book("a", 5.0)
B = make_book("b", 7.5)


def test_add_new_book_appends_with_quantity_one():
    items = cart_ops.add_to_cart([], A)
    assert [(i.book.id, i.quantity) for i in items] == [("a", 1)]


def test_add_existing_book_increments_without_duplicating():
    items = cart_ops.add_to_cart(cart_ops.add_to_cart([], A), B)
    items = cart_ops.add_to_cart(items, A)
    assert [(i.book.id, i.quantity) for i in items] == [("a", 2), ("b", 1)]


def test_add_does_not_mutate_input():
    before = cart_ops.add_to_cart([], A)
    cart_ops.add_to_cart(before, A)
    assert before[0].quantity == 1


def test_update_quantity_sets_exact_value():
    items = cart_ops.add_to_cart([], A)
    items = cart_ops.update_quantity(items, "a", 5)
    assert items[0].quantity == 5


def test_update_quantity_below_one_removes():
    items = cart_ops.add_to_cart(cart_ops.add_to_cart([], A), B)
    assert [i.book.id for i in cart_ops.update_quantity(items, "a", 0)] == ["b"]
    assert [i.book.id for i in cart_ops.update_quantity(items, "b", -3)] == ["a"]


def test_remove_absent_book_is_noop():
    items = cart_ops.add_to_cart([], A)
    after = cart_ops.remove_from_cart(items, "missing")
    assert [(i.book.id, i.quantity) for i in after] == [("a", 1)]


def test_clear_cart():
    assert cart_ops.clear_cart() == []


def test_toggle_wishlist_twice_restores_original():
    original = ["x", "y"]
    once = cart_ops.toggle_wishlist(original, "z")
    assert once == ["x", "y", "z"]
    assert cart_ops.toggle_wishlist(once, "z") == original
    assert cart_ops.toggle_wishlist(cart_ops.toggle_wishlist(original, "x"), "x") == ["y", "x"]
    assert set(cart_ops.toggle_wishlist(cart_ops.toggle_wishlist(original, "x"), "x")) == set(original)
