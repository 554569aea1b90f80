"""
Pydantic schemas for the BookNest API and client store.

Field names are snake_case in Python and in MongoDB; on the wire they are
camelCase (``inStock``, ``shippingAddress``, ``bookId``), which is what the
web front end sends and expects.
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

Role = Literal["user", "admin"]
OrderStatus = Literal["pending", "confirmed", "completed", "shipped", "delivered", "cancelled"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Books

class BookIn(CamelModel):
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    genre: str
    price: float = Field(..., ge=0)
    description: Optional[str] = None
    image: Optional[str] = None
    rating: float = Field(0.0, ge=0, le=5)
    reviews: int = Field(0, ge=0)
    isbn: Optional[str] = None
    published_year: Optional[int] = None
    pages: Optional[int] = Field(None, ge=1)
    publisher: Optional[str] = None
    language: str = "English"
    in_stock: bool = True
    featured: bool = False


class Book(BookIn):
    id: str


class BookUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    author: Optional[str] = Field(None, min_length=1)
    genre: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    reviews: Optional[int] = Field(None, ge=0)
    isbn: Optional[str] = None
    published_year: Optional[int] = None
    pages: Optional[int] = Field(None, ge=1)
    publisher: Optional[str] = None
    language: Optional[str] = None
    in_stock: Optional[bool] = None
    featured: Optional[bool] = None


# Users & auth

class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=80)
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class User(CamelModel):
    id: str
    name: str
    email: EmailStr
    role: Role = "user"
    join_date: Optional[datetime] = None
    wishlist: List[str] = []


class UserUpdate(CamelModel):
    name: str = Field(..., min_length=1, max_length=80)


class AuthResponse(CamelModel):
    token: str
    user: User


# Cart

class CartItem(CamelModel):
    book: Book
    quantity: int = Field(1, ge=1)


class CartAdd(CamelModel):
    book_id: str
    quantity: int = Field(1, ge=1)


class CartUpdate(CamelModel):
    book_id: str
    quantity: int


class BookRef(CamelModel):
    book_id: str


class CartSummary(CamelModel):
    subtotal: float
    tax: float
    total: float
    item_count: int


class CartOut(CartSummary):
    items: List[CartItem] = []


# Orders

class OrderCreate(CamelModel):
    shipping_address: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1)


class Order(CamelModel):
    id: Optional[str] = None
    user_id: str
    user_name: str
    user_email: EmailStr
    items: List[CartItem]
    subtotal: float
    tax: float
    total: float
    status: OrderStatus = "pending"
    order_date: datetime
    updated_at: Optional[datetime] = None
    shipping_address: str
    payment_method: str


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


# Admin

class AdminStats(CamelModel):
    users: int
    books: int
    orders: int
    revenue: float
