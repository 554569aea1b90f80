import logging
from typing import List

from fastapi import APIRouter, Depends
from pymongo.database import Database

from booknest.api.deps import get_admin_user
from booknest.db import crud
from booknest.db.mongo import get_db
from booknest.db.seed import seed_books
from booknest.models.schemas import AdminStats, User

router = APIRouter()
logger = logging.getLogger("booknest.api.admin")

@router.get("/stats", response_model=AdminStats)
def stats(admin=Depends(get_admin_user), db: Database = Depends(get_db)):
    return AdminStats(
        users=crud.count_users(db),
        books=crud.count_books(db),
        orders=crud.count_orders(db),
        revenue=round(crud.revenue(db), 2),
    )

@router.get("/users", response_model=List[User])
def users(admin=Depends(get_admin_user), db: Database = Depends(get_db)):
    return crud.list_users(db)

@router.post("/seed")
def seed(admin=Depends(get_admin_user), db: Database = Depends(get_db)):
    inserted = seed_books(db)
    logger.info("Seeded %d books", inserted)
    return {"inserted": inserted}
