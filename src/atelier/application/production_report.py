"""Application service: dashboard and production queries."""

from __future__ import annotations

from datetime import date, datetime, timezone

from atelier.domain.exceptions import ValidationError
from atelier.domain.repository.order_repository import OrderRepository
from atelier.domain.repository.seamstress_repository import SeamstressRepository
from atelier.domain.service.production_report import (
    DashboardSummary,
    SeamstressStats,
    daily_series,
    dashboard_summary,
    day_window,
    month_window,
    monthly_series,
    pieces_produced,
    seamstress_stats,
    week_window,
)

_WINDOWS = {"day": day_window, "week": week_window, "month": month_window}


def _today() -> date:
    return datetime.now(timezone.utc).date()


class DashboardHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        seamstress_repo: SeamstressRepository,
    ) -> None:
        self._order_repo = order_repo
        self._seamstress_repo = seamstress_repo

    def handle(self, today: date | None = None) -> DashboardSummary:
        return dashboard_summary(
            self._order_repo.list_all(),
            self._seamstress_repo.list_all(),
            today or _today(),
        )

    def seamstresses(self) -> list[SeamstressStats]:
        return seamstress_stats(
            self._order_repo.list_all(), self._seamstress_repo.list_all()
        )


class ProductionReportHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def pieces(
        self,
        period: str | None = None,
        on: date | None = None,
        seamstress_id: str | None = None,
        fabric: str | None = None,
    ) -> int:
        """Pieces finished overall, or within the day/week/month containing *on*."""
        window = None
        if period is not None:
            try:
                window = _WINDOWS[period](on or _today())
            except KeyError:
                raise ValidationError(
                    f"Unknown period '{period}' (expected day, week or month)"
                ) from None
        return pieces_produced(
            self._order_repo.list_all(),
            window,
            seamstress_id=seamstress_id,
            fabric=fabric,
        )

    def daily(self, days: int = 7, today: date | None = None) -> list[tuple[date, int]]:
        return daily_series(self._order_repo.list_all(), today or _today(), days)

    def monthly(self, months: int = 6, today: date | None = None) -> list[tuple[date, int]]:
        return monthly_series(self._order_repo.list_all(), today or _today(), months)
