import logging
from typing import List

from fastapi import APIRouter, Depends
from pymongo.database import Database

from booknest.api.deps import get_current_user
from booknest.db import crud
from booknest.db.mongo import get_db
from booknest.models.schemas import BookRef, CartAdd, CartItem, CartOut, CartUpdate, User
from booknest.services import cart as cart_ops
from booknest.services.pricing import summarize

router = APIRouter()
logger = logging.getLogger("booknest.api.cart")


def load_items(db: Database, user: User) -> List[CartItem]:
    items, missing = crud.populate_cart(db, crud.get_raw_cart_items(db, user.id))
    if missing:
        logger.warning("Cart of %s references removed books %s", user.id, missing)
    return items


def cart_out(items: List[CartItem]) -> CartOut:
    return CartOut(items=items, **summarize(items).model_dump())


@router.get("", response_model=CartOut)
def get_cart(user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    return cart_out(load_items(db, user))

@router.post("", response_model=CartOut)
def add_to_cart(payload: CartAdd, user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    book = crud.get_book(db, payload.book_id)
    items = cart_ops.add_to_cart(load_items(db, user), book, payload.quantity)
    crud.save_cart(db, user.id, items)
    return cart_out(items)

@router.post("/update", response_model=CartOut)
def update_quantity(payload: CartUpdate, user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    items = cart_ops.update_quantity(load_items(db, user), payload.book_id, payload.quantity)
    crud.save_cart(db, user.id, items)
    return cart_out(items)

@router.post("/remove", response_model=CartOut)
def remove_from_cart(payload: BookRef, user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    items = cart_ops.remove_from_cart(load_items(db, user), payload.book_id)
    crud.save_cart(db, user.id, items)
    return cart_out(items)

@router.post("/clear", response_model=CartOut)
def clear_cart(user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    items = cart_ops.clear_cart()
    crud.save_cart(db, user.id, items)
    return cart_out(items)
