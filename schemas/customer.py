from pydantic import Field, EmailStr, field_validator
from typing import Optional
from datetime import datetime

from schemas.base import CamelModel, blank_to_none, clean_phone

class CustomerBase(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    province: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=10)

    @field_validator('email', 'phone', 'address', 'city', 'province', 'zip_code', mode='before')
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator('full_name')
    @classmethod
    def validate_full_name(cls, v):
        if not v.strip():
            raise ValueError('Full name cannot be empty')
        return v.strip()

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)

class CustomerCreate(CustomerBase):
    pass

class CustomerUpdate(CamelModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    province: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=10)

    @field_validator('email', 'phone', 'address', 'city', 'province', 'zip_code', mode='before')
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator('full_name')
    @classmethod
    def validate_full_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Full name cannot be empty')
        return v.strip() if v else v

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)

class CustomerResponse(CustomerBase):
    id: str
    email: Optional[str] = None
    created_at: datetime
    updated_at: datetime
