from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
import re

class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )

def blank_to_none(v):
    """Treat empty form strings as missing values."""
    if isinstance(v, str) and not v.strip():
        return None
    return v

def clean_phone(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    # Remove all non-digit characters
    digits = re.sub(r'\D', '', v)
    if len(digits) < 9 or len(digits) > 15:
        raise ValueError('Phone number must contain 9 to 15 digits')
    return digits
