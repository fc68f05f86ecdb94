"""Filter -> sort -> paginate projection of the calculation history table.

Works on any records exposing ``timestamp``, ``weight``, ``height`` and
``index`` attributes; nothing here mutates the input sequence.
"""
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from enum import Enum
from operator import attrgetter
from typing import List, Optional, Sequence, TypeVar


PAGE_SIZE = 10

Record = TypeVar("Record")


class SortKey(str, Enum):
    WEIGHT = "weight"
    HEIGHT = "height"
    INDEX = "index"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class FilterSpec:
    """Inclusive calendar-date range; a missing bound is unbounded"""
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self.date_from is None and self.date_to is None


@dataclass(frozen=True)
class SortSpec:
    key: Optional[SortKey] = None
    direction: SortDirection = SortDirection.DESC

    def toggled(self, selected: SortKey) -> "SortSpec":
        """Sort state after the user clicks the ``selected`` column header.

        Re-selecting the active column while descending flips to ascending;
        any other click sorts the selected column descending.
        """
        selected = SortKey(selected)
        if self.key == selected and self.direction == SortDirection.DESC:
            return SortSpec(key=selected, direction=SortDirection.ASC)
        return SortSpec(key=selected, direction=SortDirection.DESC)


@dataclass(frozen=True)
class PageWindow:
    current_page: int = 1
    page_size: int = PAGE_SIZE

    def __post_init__(self):
        if self.current_page < 1:
            raise ValueError(f"current_page must be >= 1, got {self.current_page}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.page_size


@dataclass(frozen=True)
class HistoryPage:
    visible: List = field(default_factory=list)
    total_pages: int = 0
    total_records: int = 0

    @property
    def display_total_pages(self) -> int:
        """Page count for "page X of Y"; an empty history still shows 1"""
        return self.total_pages or 1


def record_date(timestamp: datetime, reference_tz: tzinfo) -> date:
    """Calendar date of ``timestamp`` in ``reference_tz``; naive values are UTC"""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(reference_tz).date()


def filter_records(
    records: Sequence[Record],
    spec: FilterSpec,
    reference_tz: tzinfo = timezone.utc,
) -> List[Record]:
    if spec.is_empty:
        return list(records)

    kept = []
    for record in records:
        day = record_date(record.timestamp, reference_tz)
        if spec.date_from is not None and day < spec.date_from:
            continue
        if spec.date_to is not None and day > spec.date_to:
            continue
        kept.append(record)
    return kept


def sort_records(records: Sequence[Record], spec: SortSpec) -> List[Record]:
    if spec.key is None:
        return list(records)
    # sorted() stays stable with reverse=True, so ties keep their order
    return sorted(
        records,
        key=attrgetter(spec.key.value),
        reverse=spec.direction == SortDirection.DESC,
    )


def project(
    records: Sequence[Record],
    filter_spec: Optional[FilterSpec] = None,
    sort_spec: Optional[SortSpec] = None,
    page: Optional[PageWindow] = None,
    reference_tz: tzinfo = timezone.utc,
) -> HistoryPage:
    """Visible slice of ``records`` for the given filter, sort and page.

    Out-of-range pages give an empty slice; clamping is left to the caller.
    """
    filter_spec = filter_spec or FilterSpec()
    sort_spec = sort_spec or SortSpec()
    page = page or PageWindow()

    selected = sort_records(filter_records(records or [], filter_spec, reference_tz), sort_spec)
    total_pages = math.ceil(len(selected) / page.page_size)

    return HistoryPage(
        visible=selected[page.offset:page.offset + page.page_size],
        total_pages=total_pages,
        total_records=len(selected),
    )
