from typing import List

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from booknest.api.deps import get_admin_user, get_current_user
from booknest.db import crud
from booknest.db.mongo import get_db
from booknest.models.schemas import Order, OrderCreate, OrderStatusUpdate, User
from booknest.services.orders_service import place_order

router = APIRouter()

@router.post("/place", response_model=Order, status_code=status.HTTP_201_CREATED)
def place(payload: OrderCreate, user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    return place_order(db, user, payload)

@router.get("/my", response_model=List[Order])
def my_orders(user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    return crud.list_orders(db, user.id)

@router.get("", response_model=List[Order])
def all_orders(admin=Depends(get_admin_user), db: Database = Depends(get_db)):
    return crud.list_orders(db)

@router.put("/{order_id}", response_model=Order)
def update_status(order_id: str, payload: OrderStatusUpdate, admin=Depends(get_admin_user),
                  db: Database = Depends(get_db)):
    return crud.update_order_status(db, order_id, payload.status)
