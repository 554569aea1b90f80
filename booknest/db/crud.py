import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from booknest.core.errors import BadRequest, NotFound
from booknest.models.schemas import Book, BookIn, CartItem, Order, User


def now_utc():
    return datetime.now(timezone.utc)


def oid(id_str: str) -> ObjectId:
    if not ObjectId.is_valid(id_str):
        raise BadRequest("Invalid ID")
    return ObjectId(id_str)


def _with_id(doc: dict) -> dict:
    d = {**doc}
    d["id"] = str(d.pop("_id"))
    return d


def to_book(doc: dict) -> Book:
    return Book.model_validate(_with_id(doc))


def to_user(doc: dict) -> User:
    return User.model_validate(_with_id(doc))


def to_order(doc: dict) -> Order:
    return Order.model_validate(_with_id(doc))


# Users

def create_user(db: Database, name: str, email: str, password_hash: str, role: str) -> User:
    doc = {
        "name": name,
        "email": email,
        "password": password_hash,
        "role": role,
        "wishlist": [],
        "join_date": now_utc(),
    }
    res = db["users"].insert_one(doc)
    doc["_id"] = res.inserted_id
    return to_user(doc)


def get_user_by_email(db: Database, email: str) -> Optional[dict]:
    return db["users"].find_one({"email": email})


def get_user(db: Database, user_id: str) -> Optional[dict]:
    if not ObjectId.is_valid(user_id):
        return None
    return db["users"].find_one({"_id": ObjectId(user_id)})


def count_users(db: Database) -> int:
    return db["users"].count_documents({})


def list_users(db: Database) -> List[User]:
    return [to_user(u) for u in db["users"].find({}, {"password": 0}).sort("join_date", DESCENDING)]


def update_user_name(db: Database, user_id: str, name: str) -> User:
    doc = db["users"].find_one_and_update(
        {"_id": oid(user_id)},
        {"$set": {"name": name}},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise NotFound("User not found")
    return to_user(doc)


def set_wishlist(db: Database, user_id: str, wishlist: List[str]):
    db["users"].update_one({"_id": oid(user_id)}, {"$set": {"wishlist": wishlist}})


# Books

def list_books(db: Database, genre: Optional[str] = None, q: Optional[str] = None,
               featured: Optional[bool] = None, limit: int = 100) -> List[Book]:
    filt: Dict[str, Any] = {}
    if genre:
        filt["genre"] = genre
    if q:
        # plain-text search; the query is never a pattern
        pattern = re.escape(q)
        filt["$or"] = [
            {"title": {"$regex": pattern, "$options": "i"}},
            {"author": {"$regex": pattern, "$options": "i"}},
        ]
    if featured is not None:
        filt["featured"] = featured
    return [to_book(b) for b in db["books"].find(filt).limit(limit)]


def get_book(db: Database, book_id: str) -> Book:
    doc = db["books"].find_one({"_id": oid(book_id)})
    if not doc:
        raise NotFound("Book not found")
    return to_book(doc)


def get_books_by_ids(db: Database, book_ids: List[str]) -> Dict[str, Book]:
    ids = [ObjectId(b) for b in book_ids if ObjectId.is_valid(b)]
    if not ids:
        return {}
    return {str(doc["_id"]): to_book(doc) for doc in db["books"].find({"_id": {"$in": ids}})}


def add_book(db: Database, book: BookIn) -> Book:
    doc = book.model_dump()
    res = db["books"].insert_one(doc)
    doc["_id"] = res.inserted_id
    return to_book(doc)


def update_book(db: Database, book_id: str, fields: dict) -> Book:
    _id = oid(book_id)
    if fields:
        res = db["books"].update_one({"_id": _id}, {"$set": fields})
        if res.matched_count == 0:
            raise NotFound("Book not found")
    return get_book(db, book_id)


def delete_book(db: Database, book_id: str):
    res = db["books"].delete_one({"_id": oid(book_id)})
    if res.deleted_count == 0:
        raise NotFound("Book not found")


def count_books(db: Database) -> int:
    return db["books"].count_documents({})


# Carts

def get_raw_cart_items(db: Database, user_id: str) -> List[dict]:
    cart = db["carts"].find_one({"user_id": user_id})
    return (cart or {}).get("items", [])


def populate_cart(db: Database, raw_items: List[dict]) -> Tuple[List[CartItem], List[str]]:
    """Resolve stored ``{book_id, quantity}`` pairs; returns the items and the ids no longer in the catalog."""
    books = get_books_by_ids(db, [it["book_id"] for it in raw_items])
    items, missing = [], []
    for it in raw_items:
        book = books.get(it["book_id"])
        if book is None:
            missing.append(it["book_id"])
            continue
        items.append(CartItem(book=book, quantity=it["quantity"]))
    return items, missing


def save_cart(db: Database, user_id: str, items: List[CartItem]):
    raw = [{"book_id": item.book.id, "quantity": item.quantity} for item in items]
    db["carts"].update_one(
        {"user_id": user_id},
        {"$set": {"items": raw, "updated_at": now_utc()}},
        upsert=True,
    )


def claim_cart(db: Database, user_id: str, expected: List[dict]) -> bool:
    """Empty the cart in one write, only if it still holds ``expected``."""
    claimed = db["carts"].find_one_and_update(
        {"user_id": user_id, "items": expected},
        {"$set": {"items": [], "updated_at": now_utc()}},
    )
    return claimed is not None


def merge_cart_items(first: List[dict], second: List[dict]) -> List[dict]:
    """Combine two raw item lists; a book in both keeps one entry with the quantities summed."""
    merged: Dict[str, dict] = {}
    for it in first + second:
        if it["book_id"] in merged:
            merged[it["book_id"]]["quantity"] += it["quantity"]
        else:
            merged[it["book_id"]] = {"book_id": it["book_id"], "quantity": it["quantity"]}
    return list(merged.values())


def restore_cart(db: Database, user_id: str, raw_items: List[dict]):
    """Put claimed items back, merged with anything added since the claim."""
    current = get_raw_cart_items(db, user_id)
    db["carts"].update_one(
        {"user_id": user_id},
        {"$set": {"items": merge_cart_items(raw_items, current), "updated_at": now_utc()}},
        upsert=True,
    )


# Orders

def insert_order(db: Database, order: Order) -> Order:
    doc = order.model_dump(exclude={"id"})
    doc["updated_at"] = now_utc()
    res = db["orders"].insert_one(doc)
    return order.model_copy(update={"id": str(res.inserted_id), "updated_at": doc["updated_at"]})


def list_orders(db: Database, user_id: Optional[str] = None) -> List[Order]:
    filt = {"user_id": user_id} if user_id else {}
    return [to_order(o) for o in db["orders"].find(filt).sort("order_date", DESCENDING)]


def update_order_status(db: Database, order_id: str, status: str) -> Order:
    doc = db["orders"].find_one_and_update(
        {"_id": oid(order_id)},
        {"$set": {"status": status, "updated_at": now_utc()}},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise NotFound("Order not found")
    return to_order(doc)


def count_orders(db: Database) -> int:
    return db["orders"].count_documents({})


def revenue(db: Database) -> float:
    res = list(db["orders"].aggregate([
        {"$match": {"status": {"$ne": "cancelled"}}},
        {"$group": {"_id": None, "revenue": {"$sum": "$total"}}},
    ]))
    return float(res[0]["revenue"]) if res else 0.0
