from pydantic import Field
from typing import Any

from schemas.base import CamelModel

class RateRequest(CamelModel):
    """Quote request. Regions and service type stay free-form strings:
    unknown values fall back to the default tables instead of failing."""
    from_region: str = Field(..., max_length=50)
    to_region: str = Field(..., max_length=50)
    weight: Any = Field(..., description="Package weight in kg")
    service_type: str = Field("regular", max_length=20)

class RateQuote(CamelModel):
    rate: float
    estimated_days: str
