"""Read-side projections for the dashboard.

Every function here is pure and rescans the full order list it is given;
no running counters are kept anywhere. Calendar buckets are computed in
UTC, the timezone every persisted timestamp is normalized to.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from atelier.domain.model.fabric import Fabric
from atelier.domain.model.order import OrderSplit, OrderStatus, ProductionOrder, SplitStatus
from atelier.domain.model.seamstress import Seamstress

Window = tuple[datetime, datetime]


# ---------------------------------------------------------------------------
# Calendar windows, half-open [start, end)
# ---------------------------------------------------------------------------


def _midnight(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def day_window(day: date) -> Window:
    start = _midnight(day)
    return start, start + timedelta(days=1)


def week_window(day: date) -> Window:
    """Monday-to-Sunday week containing *day*."""
    start = _midnight(day - timedelta(days=day.weekday()))
    return start, start + timedelta(days=7)


def month_window(day: date) -> Window:
    first = day.replace(day=1)
    if first.month == 12:
        following = first.replace(year=first.year + 1, month=1)
    else:
        following = first.replace(month=first.month + 1)
    return _midnight(first), _midnight(following)


def _months_back(day: date, count: int) -> date:
    index = day.year * 12 + (day.month - 1) - count
    return date(index // 12, index % 12 + 1, 1)


# ---------------------------------------------------------------------------
# Production totals
# ---------------------------------------------------------------------------


def count_by_status(orders: Iterable[ProductionOrder]) -> dict[OrderStatus, int]:
    counts = {status: 0 for status in OrderStatus}
    for order in orders:
        counts[order.status] += 1
    return counts


def finished_splits(
    orders: Iterable[ProductionOrder],
    seamstress_id: str | None = None,
    fabric: str | None = None,
) -> Iterator[OrderSplit]:
    for order in orders:
        if fabric is not None and order.fabric.lower() != fabric.lower():
            continue
        for split in order.splits:
            if split.status != SplitStatus.FINISHED:
                continue
            if seamstress_id is not None and split.seamstress_id != seamstress_id:
                continue
            yield split


def pieces_produced(
    orders: Iterable[ProductionOrder],
    window: Window | None = None,
    seamstress_id: str | None = None,
    fabric: str | None = None,
) -> int:
    """Sum of pieces over finished splits, optionally within a window.

    A split without ``finished_at`` counts toward the overall total but
    never falls inside a window.
    """
    total = 0
    for split in finished_splits(orders, seamstress_id=seamstress_id, fabric=fabric):
        if window is not None:
            if split.finished_at is None:
                continue
            start, end = window
            if not start <= split.finished_at < end:
                continue
        total += split.actual_pieces
    return total


def daily_series(
    orders: list[ProductionOrder],
    today: date,
    days: int = 7,
) -> list[tuple[date, int]]:
    """Pieces finished per day, oldest first, ending with *today*."""
    series = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        series.append((day, pieces_produced(orders, day_window(day))))
    return series


def monthly_series(
    orders: list[ProductionOrder],
    today: date,
    months: int = 6,
) -> list[tuple[date, int]]:
    """Pieces finished per calendar month, oldest first, ending with this month."""
    series = []
    for offset in range(months - 1, -1, -1):
        first = _months_back(today, offset)
        series.append((first, pieces_produced(orders, month_window(first))))
    return series


# ---------------------------------------------------------------------------
# Seamstress workload
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SeamstressStats:
    seamstress_id: str
    name: str
    active: bool
    in_progress: int
    finished: int
    produced: int

    @property
    def is_idle(self) -> bool:
        return self.active and self.in_progress == 0


def seamstress_stats(
    orders: list[ProductionOrder],
    seamstresses: Iterable[Seamstress],
) -> list[SeamstressStats]:
    """Workload per seamstress, most productive first."""
    stats = []
    for seamstress in seamstresses:
        in_progress = finished = produced = 0
        for order in orders:
            for split in order.splits:
                if split.seamstress_id != seamstress.id:
                    continue
                if split.status == SplitStatus.FINISHED:
                    finished += 1
                    produced += split.actual_pieces
                else:
                    in_progress += 1
        stats.append(
            SeamstressStats(
                seamstress_id=seamstress.id or "",
                name=seamstress.name,
                active=seamstress.active,
                in_progress=in_progress,
                finished=finished,
                produced=produced,
            )
        )
    return sorted(stats, key=lambda s: s.produced, reverse=True)


def idle_seamstresses(
    orders: list[ProductionOrder],
    seamstresses: Iterable[Seamstress],
) -> list[SeamstressStats]:
    """Active seamstresses with nothing currently on their table."""
    return [s for s in seamstress_stats(orders, seamstresses) if s.is_idle]


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DashboardSummary:
    total_orders: int
    by_status: dict[OrderStatus, int]
    sewing_packets: int
    seamstresses_sewing: int
    total_pieces: int
    month_pieces: int
    cutting_stock_pieces: int
    seamstresses: list[SeamstressStats] = field(default_factory=list)

    @property
    def idle(self) -> list[SeamstressStats]:
        return [s for s in self.seamstresses if s.is_idle]


def dashboard_summary(
    orders: list[ProductionOrder],
    seamstresses: list[Seamstress],
    today: date,
) -> DashboardSummary:
    sewing = [
        split
        for order in orders
        for split in order.splits
        if split.status == SplitStatus.SEWING
    ]
    return DashboardSummary(
        total_orders=len(orders),
        by_status=count_by_status(orders),
        sewing_packets=len(sewing),
        seamstresses_sewing=len({split.seamstress_id for split in sewing}),
        total_pieces=pieces_produced(orders),
        month_pieces=pieces_produced(orders, month_window(today)),
        cutting_stock_pieces=sum(order.cutting_stock_pieces for order in orders),
        seamstresses=seamstress_stats(orders, seamstresses),
    )


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def search_orders(
    orders: Iterable[ProductionOrder],
    status: OrderStatus | None = None,
    term: str = "",
) -> list[ProductionOrder]:
    """Orders in *status* whose code, description or id match *term*."""
    needle = term.strip().lower()
    matches = []
    for order in orders:
        if status is not None and order.status != status:
            continue
        if needle and not (
            needle in order.reference_code.lower()
            or needle in order.description.lower()
            or needle in order.id.lower()
        ):
            continue
        matches.append(order)
    return matches


def filter_fabrics(
    fabrics: Iterable[Fabric],
    name: str = "",
    color: str = "",
    min_stock: Decimal | None = None,
) -> list[Fabric]:
    name, color = name.strip().lower(), color.strip().lower()
    return [
        f
        for f in fabrics
        if name in f.name.lower()
        and color in f.color.lower()
        and (min_stock is None or f.stock.amount >= min_stock)
    ]
