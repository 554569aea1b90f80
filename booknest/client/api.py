import logging
from typing import List, Optional

import httpx

from booknest.core.config import API_URL

logger = logging.getLogger("booknest.client.api")


class BookNestAPI:
    """
    Thin synchronous client for the BookNest REST API.

    Failures never raise: a transport error or a non-2xx response is logged
    and the call returns ``None`` so the caller can report a plain failure.
    """

    def __init__(self, http: Optional[httpx.Client] = None, token: Optional[str] = None):
        self.http = http or httpx.Client(base_url=API_URL, timeout=10.0)
        self.token = token

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def _call(self, method: str, path: str, **kwargs):
        try:
            res = self.http.request(method, path, headers=self._headers(), **kwargs)
            res.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("%s %s failed with %s: %s", method, path, e.response.status_code, e.response.text[:200])
            return None
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            return None
        return res.json()

    # auth
    def login(self, email: str, password: str) -> Optional[dict]:
        return self._call("POST", "/api/auth/login", json={"email": email, "password": password})

    def register(self, name: str, email: str, password: str) -> Optional[dict]:
        return self._call("POST", "/api/auth/register", json={"name": name, "email": email, "password": password})

    # profile & accounts
    def update_me(self, name: str) -> Optional[dict]:
        return self._call("PUT", "/api/user/me", json={"name": name})

    def users(self) -> Optional[List[dict]]:
        return self._call("GET", "/api/admin/users")

    # catalog
    def list_books(self, **params) -> Optional[List[dict]]:
        return self._call("GET", "/api/books", params=params)

    # orders
    def my_orders(self) -> Optional[List[dict]]:
        return self._call("GET", "/api/orders/my")

    def place_order(self, shipping_address: str, payment_method: str) -> Optional[dict]:
        return self._call("POST", "/api/orders/place",
                          json={"shippingAddress": shipping_address, "paymentMethod": payment_method})

    # cart
    def add_to_cart(self, book_id: str, quantity: int = 1) -> Optional[dict]:
        return self._call("POST", "/api/cart", json={"bookId": book_id, "quantity": quantity})

    def clear_cart(self) -> Optional[dict]:
        return self._call("POST", "/api/cart/clear")

    # wishlist
    def wishlist(self) -> Optional[List[dict]]:
        return self._call("GET", "/api/user/wishlist")

    def toggle_wishlist(self, book_id: str) -> Optional[List[dict]]:
        return self._call("POST", "/api/user/wishlist", json={"bookId": book_id})
