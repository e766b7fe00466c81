from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from database.connection import get_db
from core.response import ErrorResponse
from schemas.order import PublicTrackingResponse
from schemas.rate import RateRequest, RateQuote
from services.order import get_order_by_number
from services.rates import compute_rate

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get(
    "/track/{order_number}",
    response_model=PublicTrackingResponse,
    responses={404: {"model": ErrorResponse}}
)
def track_order(order_number: str, db: Session = Depends(get_db)):
    """Public lookup by order number. Sender, contact and pricing details are withheld."""
    order = get_order_by_number(db, order_number)
    return PublicTrackingResponse.model_validate(order)

@router.post("/calculate-rate", response_model=RateQuote)
def calculate_rate(rate_request: RateRequest):
    """Quote a shipping rate and delivery window without creating an order."""
    quote = compute_rate(
        rate_request.from_region,
        rate_request.to_region,
        rate_request.weight,
        rate_request.service_type
    )
    logger.info(
        f"Rate quoted: {rate_request.from_region} -> {rate_request.to_region}, "
        f"{rate_request.weight}kg {rate_request.service_type} = {quote['rate']}"
    )
    return quote
