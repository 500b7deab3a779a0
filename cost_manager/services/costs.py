"""
Cost operations
Creating cost items and building the monthly report for a user.
"""
import logging
from datetime import MAXYEAR, MINYEAR
from typing import Any, Dict, Optional, Union

from cost_manager.core.errors import (
    InvalidParametersError,
    MissingParametersError,
    ServerError,
    StorageError,
    ValidationError,
)
from cost_manager.db.base import COSTS, DocumentStore
from cost_manager.models.cost import CATEGORIES, CostCreate
from cost_manager.models.report import MonthlyReport
from cost_manager.utils.aggregator import CostAggregator

logger = logging.getLogger(__name__)
aggregator = CostAggregator()

MISSING_FIELDS_MESSAGE = "Missing required fields: description, category, userid, or sum."
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def add_cost(store: DocumentStore, cost_in: CostCreate) -> Dict[str, Any]:
    """
    Validate and store a new cost item. Only the presence of ``sum`` is
    checked here; its type is enforced by the store schema.
    """
    if not cost_in.description or not cost_in.category or not cost_in.userid or cost_in.sum is None:
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    if cost_in.category not in CATEGORIES:
        raise ValidationError(f"Invalid category. Allowed categories are: {', '.join(CATEGORIES)}")

    # date is left out when not given so the store default (now) applies
    document = cost_in.model_dump(exclude_none=True)
    try:
        created = store.insert_one(COSTS, document)
    except StorageError as e:
        logger.error(f"Server error while adding cost: {e.message}", exc_info=True)
        raise ServerError(INTERNAL_ERROR_MESSAGE) from e

    logger.info(f"Added cost {created['_id']} for user {created['userid']}")
    return created


def _is_missing(value: Optional[Union[str, int]]) -> bool:
    return value is None or value == ""


def _parse_int(value: Union[str, int], name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidParametersError(f"Invalid parameter: {name}") from None


def monthly_report(
    store: DocumentStore,
    user_id: Optional[str],
    year: Optional[Union[str, int]],
    month: Optional[Union[str, int]],
) -> MonthlyReport:
    """
    Costs of one user within [first day of month, first day of next month),
    grouped into the five category buckets.
    """
    if _is_missing(user_id) or _is_missing(year) or _is_missing(month):
        raise MissingParametersError("Missing required parameters")

    year_num = _parse_int(year, "year")
    month_num = _parse_int(month, "month")
    if not 1 <= month_num <= 12:
        raise InvalidParametersError("Invalid parameter: month")
    if not MINYEAR <= year_num <= MAXYEAR:
        raise InvalidParametersError("Invalid parameter: year")
    # December needs January of the following year
    if (year_num, month_num) == (MAXYEAR, 12):
        raise InvalidParametersError("Invalid parameter: year")

    start, end = aggregator.month_range(year_num, month_num)
    try:
        costs = store.find_many(COSTS, {"userid": user_id, "date": {"$gte": start, "$lt": end}})
    except StorageError as e:
        logger.error(f"Error generating monthly report: {e.message}", exc_info=True)
        raise ServerError(INTERNAL_ERROR_MESSAGE) from e

    logger.info(f"Found {len(costs)} costs for user {user_id} in {year_num}-{month_num:02d}")
    return MonthlyReport(
        userid=user_id,
        year=year_num,
        month=month_num,
        costs=aggregator.group_by_category(costs),
    )
