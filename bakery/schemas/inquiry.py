"""
Bakery Pre-Order Service — Bulk order and contact form schemas
"""
from pydantic import BaseModel, EmailStr, Field

from bakery.models.order import Notice


class BulkOrderRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=32)
    company: str | None = Field(None, max_length=255)
    event_date: str | None = Field(None, max_length=64)
    quantity: str = Field(..., min_length=1, max_length=64)
    items: str = Field(..., min_length=1, max_length=2000)
    special_requirements: str | None = Field(None, max_length=2000)


class ContactRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    message: str = Field(..., min_length=10, max_length=5000)


class InquiryResponse(BaseModel):
    status: str
    notice: Notice
