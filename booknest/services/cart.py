"""
Cart and wishlist mutations.

Every function returns a new list and leaves its input untouched, so callers
can compare before/after states and persist only when something changed.
"""
from typing import List

from booknest.models.schemas import Book, CartItem


def find_item(items: List[CartItem], book_id: str):
    for item in items:
        if item.book.id == book_id:
            return item
    return None


def add_to_cart(items: List[CartItem], book: Book, quantity: int = 1) -> List[CartItem]:
    if find_item(items, book.id) is None:
        return [item.model_copy() for item in items] + [CartItem(book=book, quantity=quantity)]
    return [
        item.model_copy(update={"quantity": item.quantity + quantity}) if item.book.id == book.id else item.model_copy()
        for item in items
    ]


def remove_from_cart(items: List[CartItem], book_id: str) -> List[CartItem]:
    return [item.model_copy() for item in items if item.book.id != book_id]


def update_quantity(items: List[CartItem], book_id: str, quantity: int) -> List[CartItem]:
    if quantity < 1:
        return remove_from_cart(items, book_id)
    return [
        item.model_copy(update={"quantity": quantity}) if item.book.id == book_id else item.model_copy()
        for item in items
    ]


def clear_cart() -> List[CartItem]:
    return []


def toggle_wishlist(wishlist: List[str], book_id: str) -> List[str]:
    if book_id in wishlist:
        return [b for b in wishlist if b != book_id]
    return list(wishlist) + [book_id]
