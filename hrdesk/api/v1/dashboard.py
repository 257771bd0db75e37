"""Dashboard metrics for any authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hrdesk.api.v1.auth import get_current_user
from hrdesk.core.database import get_db
from hrdesk.schemas.auth import CurrentUser
from hrdesk.schemas.dashboard import DashboardMetrics
from hrdesk.services.dashboard import get_dashboard_metrics

router = APIRouter()


@router.get("/metrics", response_model=DashboardMetrics)
def get_metrics(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> DashboardMetrics:
    """Headcount and hires in the current calendar month."""
    return get_dashboard_metrics(db)
