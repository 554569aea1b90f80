from typing import List

from fastapi import APIRouter, Depends
from pymongo.database import Database

from booknest.api.deps import get_current_user
from booknest.db import crud
from booknest.db.mongo import get_db
from booknest.models.schemas import Book, BookRef, User, UserUpdate
from booknest.services.cart import toggle_wishlist

router = APIRouter()


def wishlist_books(db: Database, wishlist: List[str]) -> List[Book]:
    books = crud.get_books_by_ids(db, wishlist)
    return [books[b] for b in wishlist if b in books]


@router.get("/me", response_model=User)
def me(user: User = Depends(get_current_user)):
    return user

@router.put("/me", response_model=User)
def update_me(payload: UserUpdate, user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    return crud.update_user_name(db, user.id, payload.name)

@router.get("/wishlist", response_model=List[Book])
def get_wishlist(user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    return wishlist_books(db, user.wishlist)

@router.post("/wishlist", response_model=List[Book])
def toggle(payload: BookRef, user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    wishlist = toggle_wishlist(user.wishlist, payload.book_id)
    if payload.book_id in wishlist:
        # only catalog books can be added; removal works for stale ids too
        crud.get_book(db, payload.book_id)
    crud.set_wishlist(db, user.id, wishlist)
    return wishlist_books(db, wishlist)
