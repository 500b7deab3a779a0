import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from cost_manager.core.errors import CostManagerError
from cost_manager.db.base import DocumentStore
from cost_manager.db.store import get_store
from cost_manager.models.cost import CostCreate
from cost_manager.models.report import MonthlyReport
from cost_manager.services import costs as costs_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/add", status_code=status.HTTP_201_CREATED)
def add_cost(cost_in: CostCreate, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    """
    Add a cost item. ``date`` defaults to now.
    400 for missing fields or an unknown category, 500 on storage failure.
    """
    try:
        return costs_service.add_cost(store, cost_in)
    except CostManagerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Server error while adding cost: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=costs_service.INTERNAL_ERROR_MESSAGE)


@router.get("/report", response_model=MonthlyReport)
def get_monthly_report(
    user_id: Optional[str] = Query(None, alias="id"),
    year: Optional[str] = None,
    month: Optional[str] = None,
    store: DocumentStore = Depends(get_store),
) -> MonthlyReport:
    """
    Monthly report for a user, e.g. /report?id=u1&year=2025&month=5.
    """
    try:
        return costs_service.monthly_report(store, user_id, year, month)
    except CostManagerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Unexpected error generating report: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=costs_service.INTERNAL_ERROR_MESSAGE)
