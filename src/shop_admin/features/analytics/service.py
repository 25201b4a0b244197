"""
Analytics Service Module

The ReportEngine turns a date window into the admin reports: dashboard
KPIs, daily sales, user signups and product breakdowns. Each call runs
read-only queries against the order, user and product tables, reduces the
rows in memory, and returns a fresh pydantic payload. Nothing is cached
and nothing is shared between calls.

Cancelled orders never count towards revenue, order counts or the
dashboard top products. A filter that matches no rows yields zeros, not
None and not an error.
"""

import datetime
import logging
from typing import Iterable, Optional

from tortoise.expressions import Q
from tortoise.functions import Avg, Count, Min, Sum

from ..auth.models import User
from ..orders.models import CANCELLED, Order, OrderItem
from ..products.models import Product
from .clock import Clock, system_clock
from .ranges import DateRange, RangePolicy, as_utc, day_range, parse_iso_date, resolve_range
from .schemas import (
    CategoryBucket, DailySales, DashboardCharts, DashboardData, DashboardSummary,
    DateRangeOut, ProductAnalyticsData, ProductRankEntry, RoleCount,
    SalesReportData, SalesTotals, SignupCount, StatusBucket, TimeSeriesPoint,
    UserAnalyticsData,
)

logger = logging.getLogger(__name__)

DASHBOARD_TOP_PRODUCTS = 5
DEFAULT_TOP_SELLING = 10
DEFAULT_SIGNUP_DAYS = 30


def _date_range_out(date_range: DateRange) -> DateRangeOut:
    return DateRangeOut(start=date_range.start, end=date_range.end, label=date_range.label)


def _order_aggregate(amounts: list[float]) -> tuple[int, float, float]:
    """(count, sum, average) of order totals; all zero for an empty list."""
    if not amounts:
        return 0, 0.0, 0.0
    total = float(sum(amounts))
    return len(amounts), total, total / len(amounts)


def _rank_products(line_items: Iterable[dict], limit: int) -> list[ProductRankEntry]:
    """
    Groups line items by product and keeps the ``limit`` best sellers.

    Groups keep the order in which their product was first seen and the
    sort on quantity is stable, so equal quantities stay in that order.
    The name is the one on the first line item of each product.
    """
    grouped: dict[Optional[str], dict] = {}
    for item in line_items:
        key = item["product__public_id"]
        if key not in grouped:
            grouped[key] = {"name": item["name"], "quantity": 0, "revenue": 0.0}
        grouped[key]["quantity"] += item["quantity"]
        grouped[key]["revenue"] += item["quantity"] * item["price"]

    ranked = sorted(grouped.items(), key=lambda entry: entry[1]["quantity"], reverse=True)
    return [
        ProductRankEntry(
            product_id=product_id, name=data["name"],
            total_sold=data["quantity"], total_revenue=data["revenue"],
        )
        for product_id, data in ranked[:limit]
    ]


class ReportEngine:
    """
    Computes the admin analytics reports.

    Args:
        clock: Zero-argument callable returning the current aware UTC
            datetime. Every relative window ("today", "last 30 days", the
            sales report default) is derived from it.
    """

    def __init__(self, clock: Clock = system_clock):
        self.clock = clock

    def resolve_range(
        self,
        keyword: Optional[str],
        custom_start: Optional[str] = None,
        custom_end: Optional[str] = None,
        policy: RangePolicy = RangePolicy.PERMISSIVE,
    ) -> DateRange:
        return resolve_range(keyword, custom_start, custom_end, now=self.clock(), policy=policy)

    async def compute_dashboard(self, date_range: DateRange) -> DashboardData:
        """
        Builds the dashboard summary and chart series for a window.

        Users and products are counted twice: cumulatively up to
        ``date_range.end`` and strictly inside the window. Orders get the
        same split, excluding cancelled ones.

        Returns:
            DashboardData with ``summary`` (KPIs and the window itself) and
            ``charts`` (daily sales ascending, top 5 products by quantity).
        """
        start, end = date_range.start, date_range.end
        logger.info(f"Computing dashboard for {start.isoformat()} .. {end.isoformat()}")

        total_users = await User.filter(created_at__lte=end).count()
        new_users = await User.filter(created_at__gte=start, created_at__lte=end).count()
        total_products = await Product.filter(created_at__lte=end).count()
        new_products = await Product.filter(created_at__gte=start, created_at__lte=end).count()

        cumulative_amounts = await (
            Order.filter(created_at__lte=end)
            .exclude(status=CANCELLED)
            .order_by("id")
            .values_list("total_amount", flat=True)
        )
        total_orders, total_revenue, avg_order_value = _order_aggregate(cumulative_amounts)

        period_rows = await (
            Order.filter(created_at__gte=start, created_at__lte=end)
            .exclude(status=CANCELLED)
            .order_by("id")
            .values("created_at", "total_amount")
        )
        period_orders, period_revenue, avg_period_order_value = _order_aggregate(
            [row["total_amount"] for row in period_rows]
        )

        daily: dict[datetime.date, dict] = {}
        for row in period_rows:
            day = as_utc(row["created_at"]).date()
            bucket = daily.setdefault(day, {"sales": 0.0, "orders": 0})
            bucket["sales"] += row["total_amount"]
            bucket["orders"] += 1
        sales_data = [
            TimeSeriesPoint(date=day, sales=bucket["sales"], orders=bucket["orders"])
            for day, bucket in sorted(daily.items())
        ]

        line_items = await (
            OrderItem.filter(order__created_at__gte=start, order__created_at__lte=end)
            .exclude(order__status=CANCELLED)
            .order_by("id")
            .values("product__public_id", "name", "quantity", "price")
        )
        top_products = _rank_products(line_items, DASHBOARD_TOP_PRODUCTS)

        summary = DashboardSummary(
            total_users=total_users,
            new_users=new_users,
            total_products=total_products,
            new_products=new_products,
            total_orders=total_orders,
            total_revenue=total_revenue,
            avg_order_value=avg_order_value,
            period_orders=period_orders,
            period_revenue=period_revenue,
            avg_period_order_value=avg_period_order_value,
            date_range=_date_range_out(date_range),
        )
        return DashboardData(
            summary=summary,
            charts=DashboardCharts(sales_data=sales_data, top_products=top_products),
        )

    async def compute_sales_report(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> SalesReportData:
        """
        Daily sales buckets between two ISO dates, both inclusive.

        A missing bound defaults to today, so no arguments at all gives a
        single-day report. ``itemsSold`` counts line items per order, not
        the quantities on them.

        Raises:
            InvalidRange: a bound is not ISO 8601, or end is before start.
        """
        today = as_utc(self.clock()).date()
        first = parse_iso_date(start_date, "startDate") if start_date else today
        last = parse_iso_date(end_date, "endDate") if end_date else today
        date_range = day_range(first, last)
        logger.info(f"Computing sales report for {first} .. {last}")

        orders = await (
            Order.filter(created_at__gte=date_range.start, created_at__lte=date_range.end)
            .exclude(status=CANCELLED)
            .order_by("id")
            .values("id", "created_at", "total_amount")
        )
        order_ids = [order["id"] for order in orders]
        line_counts: dict[int, int] = {}
        if order_ids:
            for order_id in await OrderItem.filter(order_id__in=order_ids).values_list("order_id", flat=True):
                line_counts[order_id] = line_counts.get(order_id, 0) + 1

        buckets: dict[datetime.date, DailySales] = {}
        for order in orders:
            day = as_utc(order["created_at"]).date()
            bucket = buckets.setdefault(day, DailySales(date=day, orders=0, revenue=0.0, items_sold=0))
            bucket.orders += 1
            bucket.revenue += order["total_amount"]
            bucket.items_sold += line_counts.get(order["id"], 0)
        daily_data = [buckets[day] for day in sorted(buckets)]

        totals = SalesTotals()
        for bucket in daily_data:
            totals.total_orders += bucket.orders
            totals.total_revenue += bucket.revenue
            totals.total_items_sold += bucket.items_sold

        return SalesReportData(
            date_range=_date_range_out(date_range), totals=totals, daily_data=daily_data
        )

    async def compute_user_analytics(self, days: int = DEFAULT_SIGNUP_DAYS) -> UserAnalyticsData:
        """
        Signups per day over the last ``days`` days plus users per role.

        Days without signups are left out rather than zero-filled. The
        ``days`` bound (1..365) is checked by the route, not here.
        """
        today = as_utc(self.clock()).date()
        date_range = day_range(today - datetime.timedelta(days=days), today)
        logger.info(f"Computing user analytics for the last {days} days")

        created = await (
            User.filter(created_at__gte=date_range.start, created_at__lte=date_range.end)
            .values_list("created_at", flat=True)
        )
        per_day: dict[datetime.date, int] = {}
        for created_at in created:
            day = as_utc(created_at).date()
            per_day[day] = per_day.get(day, 0) + 1
        user_signups = [SignupCount(date=day, count=count) for day, count in sorted(per_day.items())]

        role_counts = await User.annotate(count=Count("id")).group_by("role").values("role", "count")
        users_by_role = [
            RoleCount(role=row["role"], count=row["count"])
            for row in sorted(role_counts, key=lambda row: row["role"])
        ]

        return UserAnalyticsData(
            date_range=_date_range_out(date_range),
            user_signups=user_signups,
            users_by_role=users_by_role,
        )

    async def compute_product_analytics(self, limit: int = DEFAULT_TOP_SELLING) -> ProductAnalyticsData:
        """
        All-time product breakdowns.

        ``topSelling`` ranks every order line ever placed (no window and no
        status filter) by quantity. The category and status breakdowns
        cover the whole catalog; categories are ordered by product count,
        descending.
        """
        logger.info(f"Computing product analytics (top {limit})")

        top_selling = await self._all_time_top_sellers(limit)

        category_rows = await self._product_groups("category")
        products_by_category = [
            CategoryBucket(
                category=row["category"], count=row["count"],
                avg_price=row["avg_price"] or 0.0, total_stock=row["total_stock"] or 0,
            )
            for row in sorted(category_rows, key=lambda row: row["count"], reverse=True)
        ]

        status_rows = await self._product_groups("status")
        products_by_status = [
            StatusBucket(
                status=row["status"], count=row["count"],
                avg_price=row["avg_price"] or 0.0, total_stock=row["total_stock"] or 0,
            )
            for row in status_rows
        ]

        return ProductAnalyticsData(
            top_selling=top_selling,
            products_by_category=products_by_category,
            products_by_status=products_by_status,
        )

    @staticmethod
    async def _all_time_top_sellers(limit: int) -> list[ProductRankEntry]:
        """
        Same ranking as ``_rank_products`` with the quantity grouping done in
        SQL. Only the lines of the ``limit`` winners are read back to price
        them. Lines whose product is gone form a single group.
        """
        groups = await (
            OrderItem.annotate(total_sold=Sum("quantity"), first_line=Min("id"))
            .group_by("product_id")
            .values("product_id", "total_sold", "first_line")
        )
        groups.sort(key=lambda row: row["first_line"])
        groups.sort(key=lambda row: row["total_sold"], reverse=True)
        top = groups[:limit]
        if not top:
            return []

        product_ids = [row["product_id"] for row in top if row["product_id"] is not None]
        conditions = []
        if product_ids:
            conditions.append(Q(product_id__in=product_ids))
        if len(product_ids) < len(top):
            conditions.append(Q(product_id__isnull=True))
        revenue: dict[Optional[int], float] = {}
        lines = await OrderItem.filter(Q(*conditions, join_type="OR")).values("product_id", "quantity", "price")
        for line in lines:
            revenue[line["product_id"]] = revenue.get(line["product_id"], 0.0) + line["quantity"] * line["price"]

        names = dict(await OrderItem.filter(id__in=[row["first_line"] for row in top]).values_list("id", "name"))
        public_ids = {}
        if product_ids:
            public_ids = dict(await Product.filter(id__in=product_ids).values_list("id", "public_id"))

        return [
            ProductRankEntry(
                product_id=public_ids.get(row["product_id"]),
                name=names[row["first_line"]],
                total_sold=row["total_sold"],
                total_revenue=revenue.get(row["product_id"], 0.0),
            )
            for row in top
        ]
    @staticmethod
    async def _product_groups(field: str) -> list[dict]:
        rows = await (
            Product.annotate(count=Count("id"), avg_price=Avg("price"), total_stock=Sum("stock"))
            .group_by(field)
            .values(field, "count", "avg_price", "total_stock")
        )
        # Fixed key order so identical data always serializes identically.
        return sorted(rows, key=lambda row: row[field])
