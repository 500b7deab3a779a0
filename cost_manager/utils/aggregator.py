from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

from cost_manager.models.cost import CATEGORIES
from cost_manager.models.report import ReportCosts, ReportEntry
from cost_manager.utils.timestamps import parse_timestamp

Number = Union[int, float]


class CostAggregator:
    """
    Aggregation rules for cost documents as they come out of the store:
    month ranges, category grouping for the monthly report and user totals.
    """

    def __init__(self, categories: Sequence[str] = CATEGORIES) -> None:
        self._categories = tuple(categories)

    @staticmethod
    def month_start(year: int, month: int) -> datetime:
        """
        First instant of a month in server local time, returned as UTC.
        ``month`` may be 13, meaning January of the following year.
        """
        year += (month - 1) // 12
        month = (month - 1) % 12 + 1
        # naive datetimes are interpreted as local time by astimezone()
        return datetime(year, month, 1).astimezone(timezone.utc)

    def month_range(self, year: int, month: int) -> Tuple[datetime, datetime]:
        """Half-open [start, end) range covering one calendar month."""
        return self.month_start(year, month), self.month_start(year, month + 1)

    def group_by_category(self, costs: Iterable[Dict[str, Any]]) -> ReportCosts:
        grouped: Dict[str, List[ReportEntry]] = {category: [] for category in self._categories}
        for cost in costs:
            category = cost.get("category")
            key = category.lower() if isinstance(category, str) else None
            if key not in grouped:
                # unknown categories are left out of the report
                continue
            grouped[key].append(
                ReportEntry(
                    sum=cost["sum"],
                    description=cost["description"],
                    day=parse_timestamp(cost["date"]).day,
                )
            )
        return ReportCosts(**grouped)

    def total(self, costs: Iterable[Dict[str, Any]]) -> Number:
        return sum((cost["sum"] for cost in costs), 0)
