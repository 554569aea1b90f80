"""
Client-side application state.

:class:`AppStore` owns one :class:`AppState` and is the only thing that
mutates it. Each mutation persists exactly the storage keys it changed;
there is no blanket save of the whole state.
"""
import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from booknest.client.api import BookNestAPI
from booknest.client.storage import (CART_KEY, DARK_MODE_KEY, TOKEN_KEY, USER_KEY, WISHLIST_KEY,
                                     LocalStorage)
from booknest.core.errors import InvalidOrder
from booknest.models.schemas import Book, CamelModel, CartItem, Order, OrderStatus, User
from booknest.services import cart as cart_ops
from booknest.services import pricing
from booknest.services.orders import build_order

logger = logging.getLogger("booknest.client.store")


class AppState(CamelModel):
    user: Optional[User] = None
    books: List[Book] = []
    cart: List[CartItem] = []
    orders: List[Order] = []
    users: List[User] = []
    wishlist: List[str] = []
    is_loading: bool = False
    dark_mode: bool = False


class AppStore:
    def __init__(self, storage: LocalStorage, api: Optional[BookNestAPI] = None):
        self.state = AppState()
        self.storage = storage
        self.api = api
        token = storage.get_item(TOKEN_KEY)
        if api is not None and token:
            api.token = token

    # persistence

    def _persisted(self, key: str):
        if key == USER_KEY:
            return self.state.user.model_dump(mode="json", by_alias=True) if self.state.user else None
        if key == CART_KEY:
            return [item.model_dump(mode="json", by_alias=True) for item in self.state.cart]
        if key == WISHLIST_KEY:
            return list(self.state.wishlist)
        if key == DARK_MODE_KEY:
            return self.state.dark_mode
        raise KeyError(key)

    def save(self, *keys: str):
        for key in keys:
            self.storage.set_item(key, self._persisted(key))

    def load(self):
        """Restore the user, cart, wishlist and dark mode saved by an earlier session."""
        try:
            saved_user = self.storage.get_item(USER_KEY)
            if saved_user:
                self.state.user = User.model_validate(saved_user)

            for raw in self.storage.get_item(CART_KEY) or []:
                item = CartItem.model_validate(raw)
                self.state.cart = cart_ops.add_to_cart(self.state.cart, item.book)
                if item.quantity > 1:
                    self.state.cart = cart_ops.update_quantity(self.state.cart, item.book.id, item.quantity)

            for book_id in self.storage.get_item(WISHLIST_KEY) or []:
                if book_id not in self.state.wishlist:
                    self.state.wishlist = self.state.wishlist + [book_id]

            self.state.dark_mode = bool(self.storage.get_item(DARK_MODE_KEY))
        except ValidationError as e:
            logger.error("Error loading persisted data: %s", e)

    # session

    def login(self, email: str, password: str) -> bool:
        if self.api is None:
            return False
        data = self.api.login(email, password)
        if not data:
            return False
        self.api.token = data["token"]
        self.storage.set_item(TOKEN_KEY, data["token"])
        self.state.user = User.model_validate(data["user"])
        self.save(USER_KEY)
        self.fetch_orders()
        wishlist = self.api.wishlist()
        if wishlist is not None:
            self.state.wishlist = [b["id"] for b in wishlist]
            self.save(WISHLIST_KEY)
        return True

    def signup(self, name: str, email: str, password: str) -> bool:
        if self.api is None or not self.api.register(name, email, password):
            return False
        return self.login(email, password)

    def update_user(self, name: str) -> bool:
        """Rename the signed-in user; the server copy wins when there is one."""
        if self.state.user is None:
            return False
        if self.api is not None and self.api.token:
            data = self.api.update_me(name)
            if data is None:
                return False
            self.state.user = User.model_validate(data)
        else:
            self.state.user = self.state.user.model_copy(update={"name": name})
        self.save(USER_KEY)
        return True

    def logout(self):
        self.state.user = None
        self.state.cart = cart_ops.clear_cart()
        self.state.orders = []
        self.state.users = []
        self.storage.remove_item(USER_KEY)
        self.storage.remove_item(CART_KEY)
        self.storage.remove_item(TOKEN_KEY)
        if self.api is not None:
            self.api.token = None

    # catalog & orders from the server

    def load_books(self, **filters) -> bool:
        if self.api is None:
            return False
        self.state.is_loading = True
        try:
            books = self.api.list_books(**filters)
        finally:
            self.state.is_loading = False
        if books is None:
            return False
        self.state.books = [Book.model_validate(b) for b in books]
        return True

    def fetch_users(self) -> bool:
        """Admin only: load every account into ``state.users``."""
        if self.api is None or not self.api.token:
            return False
        users = self.api.users()
        if users is None:
            return False
        self.state.users = [User.model_validate(u) for u in users]
        return True

    def fetch_orders(self):
        if self.api is None or not self.api.token:
            return
        orders = self.api.my_orders()
        if orders is not None:
            self.state.orders = [Order.model_validate(o) for o in orders]

    # cart

    def add_to_cart(self, book: Book):
        self.state.cart = cart_ops.add_to_cart(self.state.cart, book)
        self.save(CART_KEY)

    def remove_from_cart(self, book_id: str):
        self.state.cart = cart_ops.remove_from_cart(self.state.cart, book_id)
        self.save(CART_KEY)

    def update_cart_quantity(self, book_id: str, quantity: int):
        self.state.cart = cart_ops.update_quantity(self.state.cart, book_id, quantity)
        self.save(CART_KEY)

    def clear_cart(self):
        self.state.cart = cart_ops.clear_cart()
        self.save(CART_KEY)

    def cart_subtotal(self) -> float:
        return pricing.subtotal(pricing.lines_of(self.state.cart))

    def cart_tax(self) -> float:
        return pricing.tax(self.cart_subtotal())

    def cart_total(self) -> float:
        return pricing.total(pricing.lines_of(self.state.cart))

    def cart_items_count(self) -> int:
        return pricing.item_count(pricing.lines_of(self.state.cart))

    # checkout

    def _next_order_id(self) -> str:
        millis = int(time.time() * 1000)
        taken = {o.id for o in self.state.orders}
        while f"order-{millis}" in taken:
            millis += 1
        return f"order-{millis}"

    def create_order(self, shipping_address: str, payment_method: str) -> str:
        """Record an order locally from the current cart and empty the cart."""
        order_id = self._next_order_id()
        order = build_order(self.state.user, self.state.cart, shipping_address, payment_method, order_id=order_id)
        self.state.orders = self.state.orders + [order]
        self.clear_cart()
        return order_id

    def place_order(self, shipping_address: str, payment_method: str) -> Optional[str]:
        """
        Send the local cart to the server and place the order there.

        Returns the server's order id, or ``None`` when any request fails; the
        local cart is kept in that case so the user can retry.
        """
        if self.state.user is None or not self.state.cart:
            raise InvalidOrder("Invalid order data")
        if self.api is None or not self.api.token:
            raise InvalidOrder("Sign in to place an order")
        if self.api.clear_cart() is None:
            return None
        for item in self.state.cart:
            if self.api.add_to_cart(item.book.id, item.quantity) is None:
                return None
        data = self.api.place_order(shipping_address, payment_method)
        if data is None:
            return None
        order = Order.model_validate(data)
        self.state.orders = self.state.orders + [order]
        self.clear_cart()
        return order.id

    def update_order_status(self, order_id: str, status: OrderStatus):
        changes = {"status": status, "updated_at": datetime.now(timezone.utc)}
        self.state.orders = [o.model_copy(update=changes) if o.id == order_id else o for o in self.state.orders]

    # wishlist

    def toggle_wishlist(self, book_id: str) -> List[str]:
        self.state.wishlist = cart_ops.toggle_wishlist(self.state.wishlist, book_id)
        if self.state.user is not None and self.api is not None and self.api.token:
            books = self.api.toggle_wishlist(book_id)
            if books is not None:
                self.state.wishlist = [b["id"] for b in books]
        self.save(WISHLIST_KEY)
        return self.state.wishlist

    def add_to_wishlist(self, book_id: str):
        if book_id not in self.state.wishlist:
            self.toggle_wishlist(book_id)

    def remove_from_wishlist(self, book_id: str):
        if book_id in self.state.wishlist:
            self.toggle_wishlist(book_id)

    # preferences

    def toggle_dark_mode(self):
        self.state.dark_mode = not self.state.dark_mode
        self.save(DARK_MODE_KEY)
