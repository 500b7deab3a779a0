import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from cost_manager.core.errors import UserNotFoundError
from cost_manager.db.base import DocumentStore
from cost_manager.db.store import get_store
from cost_manager.models.user import Developer, UserSummary
from cost_manager.services import users as users_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/users/{user_id}", response_model=UserSummary)
def get_user(user_id: str, store: DocumentStore = Depends(get_store)) -> UserSummary:
    """
    User details with the total of all their costs.
    404 if the user does not exist; any other failure is a 400 carrying the error message.
    """
    try:
        return users_service.user_summary(store, user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except Exception as e:
        logger.warning(f"Failed to load user {user_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/about", response_model=List[Developer])
def about() -> List[Developer]:
    try:
        return users_service.list_developers()
    except Exception as e:
        logger.error(f"Failed to load team data: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to load team data.")
