from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.connection import get_db
from routers.auth import get_current_user
from schemas.order import OrderStats
from schemas.user import UserResponse
from services.dashboard import get_order_stats

router = APIRouter()

@router.get("/stats", response_model=OrderStats)
def dashboard_stats(
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Order counts for the dashboard summary cards."""
    return get_order_stats(db)
