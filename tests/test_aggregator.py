from datetime import datetime, timezone

from cost_manager.utils.aggregator import CostAggregator

sample_costs = [
    {"description": "Dinner", "category": "food", "userid": "u2", "sum": 20, "date": "2025-05-10T12:00:00.000000Z"},
    {"description": "Gym", "category": "sport", "userid": "u2", "sum": 40, "date": "2025-05-15T12:00:00.000000Z"},
    {"description": "Books", "category": "education", "userid": "u2", "sum": 30, "date": "2025-05-20T12:00:00.000000Z"},
    {"description": "Pharmacy", "category": "Health", "userid": "u2", "sum": 12.5, "date": "2025-05-21T08:00:00.000000Z"},
    {"description": "Flight", "category": "travel", "userid": "u2", "sum": 300, "date": "2025-05-22T08:00:00.000000Z"},
]


def test_month_range_is_half_open_month():
    aggregator = CostAggregator()
    start, end = aggregator.month_range(2025, 5)
    assert start == datetime(2025, 5, 1).astimezone(timezone.utc)
    assert end == datetime(2025, 6, 1).astimezone(timezone.utc)
    assert start.tzinfo == timezone.utc


def test_month_range_december_rolls_over():
    aggregator = CostAggregator()
    start, end = aggregator.month_range(2024, 12)
    assert start == datetime(2024, 12, 1).astimezone(timezone.utc)
    assert end == datetime(2025, 1, 1).astimezone(timezone.utc)


def test_group_by_category():
    aggregator = CostAggregator()
    grouped = aggregator.group_by_category(sample_costs).model_dump()

    assert set(grouped) == {"food", "health", "housing", "sport", "education"}
    assert grouped["food"] == [{"sum": 20, "description": "Dinner", "day": 10}]
    assert grouped["sport"] == [{"sum": 40, "description": "Gym", "day": 15}]
    assert grouped["education"] == [{"sum": 30, "description": "Books", "day": 20}]
    # category is matched case-insensitively
    assert grouped["health"] == [{"sum": 12.5, "description": "Pharmacy", "day": 21}]
    assert grouped["housing"] == []


def test_group_by_category_drops_unknown_categories():
    aggregator = CostAggregator()
    grouped = aggregator.group_by_category(sample_costs).model_dump()
    descriptions = [entry["description"] for bucket in grouped.values() for entry in bucket]
    assert "Flight" not in descriptions
    assert len(descriptions) == 4


def test_day_is_taken_in_utc():
    aggregator = CostAggregator()
    costs = [
        {"description": "Late rent", "category": "housing", "sum": 900, "date": "2025-05-11T01:00:00+02:00"},
    ]
    grouped = aggregator.group_by_category(costs)
    assert grouped.housing[0].day == 10


def test_group_keeps_storage_order():
    aggregator = CostAggregator()
    costs = [
        {"description": "Lunch", "category": "food", "sum": 15, "date": "2025-05-20T12:00:00.000000Z"},
        {"description": "Breakfast", "category": "food", "sum": 5, "date": "2025-05-02T08:00:00.000000Z"},
    ]
    grouped = aggregator.group_by_category(costs)
    assert [entry.description for entry in grouped.food] == ["Lunch", "Breakfast"]


def test_total():
    aggregator = CostAggregator()
    assert aggregator.total([]) == 0
    assert aggregator.total([{"sum": 50}, {"sum": 30}]) == 80
    assert aggregator.total(reversed(sample_costs)) == aggregator.total(sample_costs) == 402.5
