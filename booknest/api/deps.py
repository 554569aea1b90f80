from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from pymongo.database import Database

from booknest.core.errors import Forbidden, Unauthorized
from booknest.core.security import decode_token
from booknest.db import crud
from booknest.db.mongo import get_db
from booknest.models.schemas import User

oauth2 = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

def get_current_user(token: str = Depends(oauth2), db: Database = Depends(get_db)) -> User:
    payload = decode_token(token)
    doc = crud.get_user(db, payload["id"])
    if not doc:
        raise Unauthorized("User not found")
    return crud.to_user(doc)

def get_admin_user(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        raise Forbidden("Admin role required")
    return user
