import logging

from fastapi import APIRouter, Depends, status
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from booknest.core.errors import Conflict, Unauthorized
from booknest.core.security import create_token, hash_password, verify_password
from booknest.db import crud
from booknest.db.mongo import get_db
from booknest.models.schemas import AuthResponse, UserCreate, UserLogin

router = APIRouter()
logger = logging.getLogger("booknest.api.auth")

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Database = Depends(get_db)):
    email = payload.email.lower()
    if crud.get_user_by_email(db, email):
        raise Conflict("Email already registered")
    # the first account on a fresh install administers the store
    role = "admin" if crud.count_users(db) == 0 else "user"
    try:
        user = crud.create_user(db, payload.name, email, hash_password(payload.password), role)
    except DuplicateKeyError:
        raise Conflict("Email already registered")
    logger.info("Registered %s as %s", user.id, role)
    return AuthResponse(token=create_token(user.id, user.role), user=user)

@router.post("/login", response_model=AuthResponse)
def login(payload: UserLogin, db: Database = Depends(get_db)):
    doc = crud.get_user_by_email(db, payload.email.lower())
    if not doc or not verify_password(payload.password, doc["password"]):
        raise Unauthorized("Invalid credentials")
    user = crud.to_user(doc)
    return AuthResponse(token=create_token(user.id, user.role), user=user)
