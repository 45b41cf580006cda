import math
from datetime import date, datetime, timezone, tzinfo
from typing import Iterable, Optional, Union

from nexgen.config import Settings, get_settings
from nexgen.core.constants import MONTH_ABBREVIATIONS
from nexgen.core.dates import parse_timestamp, resolve_timezone, utc_now
from nexgen.core.stock_rules import is_low_stock
from nexgen.repositories.inventory_repository import InventoryRepository
from nexgen.repositories.sales_order_repository import SalesOrderRepository
from nexgen.schemas.inventory import DashboardStats, InventoryRecord
from nexgen.schemas.reports import DateRange, PerformanceStats, Performer, Timeframe, TrendPoint
from nexgen.schemas.sales_order import SalesOrder, SalesOrderStatus
from nexgen.store.base import KeyValueStore


def approved_orders(orders: Iterable[SalesOrder], user_id: Optional[str] = None) -> list[SalesOrder]:
    return [
        order
        for order in orders
        if order.status == SalesOrderStatus.APPROVED and (not user_id or order.user_id == user_id)
    ]


def week_number(moment: datetime) -> int:
    """Sunday-based week of the year; the week holding January 1st is week 1."""
    day = moment.date()
    jan_first = date(day.year, 1, 1)
    day_of_year = (day - jan_first).days
    offset = jan_first.isoweekday() % 7  # Sunday is 0
    return math.ceil((offset + 1 + day_of_year) / 7)


def bucket_label(moment: datetime, timeframe: Timeframe, tz: tzinfo = timezone.utc) -> str:
    local = moment.astimezone(tz)
    if timeframe == Timeframe.DAILY:
        return "{} {}".format(local.day, MONTH_ABBREVIATIONS[local.month - 1])
    if timeframe == Timeframe.WEEKLY:
        return "Week {}".format(week_number(local))
    if timeframe == Timeframe.MONTHLY:
        return "{} {:02d}".format(MONTH_ABBREVIATIONS[local.month - 1], local.year % 100)
    return str(local.year)


def performance_stats(
    orders: Iterable[SalesOrder],
    user_id: Optional[str] = None,
    date_range: Optional[DateRange] = None,
) -> PerformanceStats:
    filtered = approved_orders(orders, user_id)
    if date_range is not None:
        in_range = []
        for order in filtered:
            created = parse_timestamp(order.created_at)
            if created is not None and date_range.contains(created):
                in_range.append(order)
        filtered = in_range

    total_sales = sum(order.total_amount for order in filtered)
    total_quantity = sum(order.total_quantity for order in filtered)

    per_user: dict[str, float] = {}
    for order in filtered:
        per_user[order.username] = per_user.get(order.username, 0) + order.total_amount
    ranked = sorted(per_user.items(), key=lambda entry: entry[1], reverse=True)

    top = low = None
    if ranked:
        top = Performer(name=ranked[0][0], amount=ranked[0][1])
        low = Performer(name=ranked[-1][0], amount=ranked[-1][1])

    order_count = len(filtered)
    return PerformanceStats(
        total_sales=total_sales,
        order_count=order_count,
        avg_order_value=total_sales / order_count if order_count else 0,
        total_quantity=total_quantity,
        top_performer=top,
        low_performer=low,
    )


def sales_trend(
    orders: Iterable[SalesOrder],
    timeframe: Union[Timeframe, str],
    user_id: Optional[str] = None,
    tz: tzinfo = timezone.utc,
) -> list[TrendPoint]:
    timeframe = Timeframe(timeframe)
    # Buckets keep first-seen order; orders are stored newest first.
    buckets: dict[str, TrendPoint] = {}
    for order in approved_orders(orders, user_id):
        created = parse_timestamp(order.created_at)
        if created is None:
            continue
        label = bucket_label(created, timeframe, tz)
        point = buckets.get(label)
        if point is None:
            point = buckets[label] = TrendPoint(name=label, amount=0, count=0)
        point.amount += order.total_amount
        point.count += 1
    return list(buckets.values())


def dashboard_stats(records: Iterable[InventoryRecord], today: Optional[date] = None) -> DashboardStats:
    records = list(records)
    today = today or utc_now().date()
    today_entries = 0
    for record in records:
        updated = parse_timestamp(record.last_updated)
        if updated is not None and updated.date() == today:
            today_entries += 1
    return DashboardStats(
        total_records=len(records),
        today_entries=today_entries,
        total_value=sum(record.quantity * record.unit_price for record in records),
        low_stock_items=sum(1 for record in records if is_low_stock(record.status)),
    )


class AnalyticsService:
    def __init__(self, store: KeyValueStore, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.orders = SalesOrderRepository(store)
        self.inventory = InventoryRepository(store)
        self.tz = resolve_timezone(settings.REPORT_TIMEZONE)

    def get_performance_stats(
        self,
        user_id: Optional[str] = None,
        date_range: Optional[DateRange] = None,
    ) -> PerformanceStats:
        return performance_stats(self.orders.list(), user_id=user_id, date_range=date_range)

    def get_sales_trend_data(
        self,
        timeframe: Union[Timeframe, str],
        user_id: Optional[str] = None,
    ) -> list[TrendPoint]:
        return sales_trend(self.orders.list(), timeframe, user_id=user_id, tz=self.tz)

    def get_dashboard_stats(self) -> DashboardStats:
        return dashboard_stats(self.inventory.list())


__all__ = [
    "AnalyticsService",
    "approved_orders",
    "bucket_label",
    "dashboard_stats",
    "performance_stats",
    "sales_trend",
    "week_number",
]
