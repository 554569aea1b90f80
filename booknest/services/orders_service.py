import logging

from pymongo.database import Database
from pymongo.errors import PyMongoError

from booknest.core.errors import Conflict, InvalidOrder, ServerError
from booknest.db import crud
from booknest.models.schemas import Order, OrderCreate, User
from booknest.services.orders import build_order

logger = logging.getLogger("booknest.orders")


def place_order(db: Database, user: User, payload: OrderCreate) -> Order:
    """
    Turn the user's cart into an order and empty the cart.

    The cart is claimed (emptied) with a single conditional write before the
    order is inserted; if the insert fails the claimed items are pushed back.
    """
    raw_items = crud.get_raw_cart_items(db, user.id)
    if not raw_items:
        raise InvalidOrder("Cart is empty")
    items, missing = crud.populate_cart(db, raw_items)
    if missing:
        raise InvalidOrder(f"Books no longer available: {', '.join(missing)}")
    order = build_order(user, items, payload.shipping_address, payload.payment_method)

    if not crud.claim_cart(db, user.id, raw_items):
        raise Conflict("Cart changed while the order was being placed")
    try:
        placed = crud.insert_order(db, order)
    except PyMongoError:
        logger.exception("Could not create order for user %s, restoring cart", user.id)
        crud.restore_cart(db, user.id, raw_items)
        raise ServerError("Could not create order")
    logger.info("Order %s placed by %s: %d items, total %.2f", placed.id, user.id, len(placed.items), placed.total)
    return placed
