from pydantic import Field, EmailStr, field_validator
from typing import Optional
from datetime import datetime

from models.order import Region
from schemas.base import CamelModel, blank_to_none, clean_phone

class DeliveryAgentBase(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: str = Field(..., max_length=20)
    employee_id: str = Field(..., min_length=1, max_length=50)
    region: Region
    is_active: bool = True

    @field_validator('email', mode='before')
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator('full_name', 'employee_id')
    @classmethod
    def strip_required(cls, v):
        if not v.strip():
            raise ValueError('Value cannot be empty')
        return v.strip()

class DeliveryAgentCreate(DeliveryAgentBase):
    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)

class DeliveryAgentUpdate(CamelModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    employee_id: Optional[str] = Field(None, min_length=1, max_length=50)
    region: Optional[Region] = None
    is_active: Optional[bool] = None

    @field_validator('email', mode='before')
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator('full_name', 'employee_id')
    @classmethod
    def strip_required(cls, v):
        if v is None:
            return v
        if not v.strip():
            raise ValueError('Value cannot be empty')
        return v.strip()

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)

class DeliveryAgentResponse(DeliveryAgentBase):
    id: str
    email: Optional[str] = None
    is_active: Optional[bool] = True
    created_at: datetime
    updated_at: datetime
