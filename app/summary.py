"""Aggregations behind the dashboard charts"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence


@dataclass(frozen=True)
class EvolutionPoint:
    timestamp: datetime
    index: float
    weight: float


@dataclass(frozen=True)
class CategorySummary:
    name: str
    count: int
    average_index: float
    share: float  # percent of all records


@dataclass(frozen=True)
class DashboardSummary:
    total_records: int = 0
    last_index: Optional[float] = None
    most_frequent_category: Optional[str] = None
    evolution: List[EvolutionPoint] = field(default_factory=list)
    categories: List[CategorySummary] = field(default_factory=list)


def _sort_instant(record) -> datetime:
    timestamp = record.timestamp
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def summarize(records: Sequence) -> DashboardSummary:
    """Line series, per-category distribution and headline numbers.

    Categories keep the order of their first appearance in time, and the
    earliest one wins a tie for most frequent.
    """
    ordered = sorted(records or [], key=_sort_instant)
    if not ordered:
        return DashboardSummary()

    counts: Dict[str, int] = {}
    index_sums: Dict[str, float] = {}
    for record in ordered:
        counts[record.category] = counts.get(record.category, 0) + 1
        index_sums[record.category] = index_sums.get(record.category, 0.0) + record.index

    categories = [
        CategorySummary(
            name=name,
            count=count,
            average_index=index_sums[name] / count,
            share=count / len(ordered) * 100,
        )
        for name, count in counts.items()
    ]

    most_frequent = categories[0]
    for category in categories[1:]:
        if category.count > most_frequent.count:
            most_frequent = category

    return DashboardSummary(
        total_records=len(ordered),
        last_index=ordered[-1].index,
        most_frequent_category=most_frequent.name,
        evolution=[
            EvolutionPoint(timestamp=record.timestamp, index=record.index, weight=record.weight)
            for record in ordered
        ],
        categories=categories,
    )
