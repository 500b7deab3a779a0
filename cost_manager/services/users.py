import logging
from typing import List

from cost_manager.core.errors import UserNotFoundError
from cost_manager.db.base import COSTS, USERS, DocumentStore
from cost_manager.models.user import Developer, UserSummary
from cost_manager.utils.aggregator import CostAggregator

logger = logging.getLogger(__name__)
aggregator = CostAggregator()

DEVELOPMENT_TEAM = [
    {"first_name": "Roy", "last_name": "Rizel"},
    {"first_name": "Stav", "last_name": "Sivilya"},
]


def user_summary(store: DocumentStore, user_id: str) -> UserSummary:
    """
    Name of the user plus the total of all their costs. The two reads are
    independent; a cost written in between may or may not be counted.
    """
    user = store.find_one(USERS, {"id": user_id})
    if user is None:
        raise UserNotFoundError("User not found")

    costs = store.find_many(COSTS, {"userid": user_id})
    return UserSummary(
        id=user["id"],
        first_name=user["first_name"],
        last_name=user["last_name"],
        total=aggregator.total(costs),
    )


def list_developers() -> List[Developer]:
    return [Developer(**member) for member in DEVELOPMENT_TEAM]
