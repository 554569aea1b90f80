from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pymongo.database import Database

from booknest.api.deps import get_admin_user
from booknest.db import crud
from booknest.db.mongo import get_db
from booknest.models.schemas import Book, BookIn, BookUpdate

router = APIRouter()

@router.get("", response_model=List[Book])
def list_books(genre: Optional[str] = None, q: Optional[str] = None, featured: Optional[bool] = None,
               limit: int = Query(100, ge=1, le=500), db: Database = Depends(get_db)):
    return crud.list_books(db, genre=genre, q=q, featured=featured, limit=limit)

@router.get("/{book_id}", response_model=Book)
def get_book(book_id: str, db: Database = Depends(get_db)):
    return crud.get_book(db, book_id)

@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(payload: BookIn, admin=Depends(get_admin_user), db: Database = Depends(get_db)):
    return crud.add_book(db, payload)

@router.put("/{book_id}", response_model=Book)
def update_book(book_id: str, payload: BookUpdate, admin=Depends(get_admin_user), db: Database = Depends(get_db)):
    return crud.update_book(db, book_id, payload.model_dump(exclude_unset=True, exclude_none=True))

@router.delete("/{book_id}")
def delete_book(book_id: str, admin=Depends(get_admin_user), db: Database = Depends(get_db)):
    crud.delete_book(db, book_id)
    return {"deleted": True}
