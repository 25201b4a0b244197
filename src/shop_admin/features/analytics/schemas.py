"""Admin Analytics API Schemas

Pydantic models for the four analytics reports:

1. Dashboard (summary KPIs + chart series)
2. Sales report (daily buckets + totals)
3. User analytics (signups per day, users per role)
4. Product analytics (top sellers, category and status breakdowns)

Attributes are snake_case; JSON keys are camelCase through CamelModel.
Every report is wrapped in a ``{"success": true, "data": {...}}`` envelope."""
from typing import List, Optional
import datetime

from ...common.schemas import CamelModel


class DateRangeOut(CamelModel):
    start: datetime.datetime
    end: datetime.datetime
    label: Optional[str] = None


# Shared chart rows
class TimeSeriesPoint(CamelModel):
    date: datetime.date
    sales: float
    orders: int


class ProductRankEntry(CamelModel):
    product_id: Optional[str] = None
    name: str
    total_sold: int
    total_revenue: float


# 1. Dashboard
class DashboardSummary(CamelModel):
    total_users: int
    new_users: int
    total_products: int
    new_products: int
    total_orders: int
    total_revenue: float
    avg_order_value: float
    period_orders: int
    period_revenue: float
    avg_period_order_value: float
    date_range: DateRangeOut


class DashboardCharts(CamelModel):
    sales_data: List[TimeSeriesPoint]
    top_products: List[ProductRankEntry]


class DashboardData(CamelModel):
    summary: DashboardSummary
    charts: DashboardCharts


class DashboardResponse(CamelModel):
    success: bool = True
    data: DashboardData


# 2. Sales report
class DailySales(CamelModel):
    date: datetime.date
    orders: int
    revenue: float
    items_sold: int


class SalesTotals(CamelModel):
    total_orders: int = 0
    total_revenue: float = 0.0
    total_items_sold: int = 0


class SalesReportData(CamelModel):
    date_range: DateRangeOut
    totals: SalesTotals
    daily_data: List[DailySales]


class SalesReportResponse(CamelModel):
    success: bool = True
    data: SalesReportData


# 3. Users
class SignupCount(CamelModel):
    date: datetime.date
    count: int


class RoleCount(CamelModel):
    role: str
    count: int


class UserAnalyticsData(CamelModel):
    date_range: DateRangeOut
    user_signups: List[SignupCount]
    users_by_role: List[RoleCount]


class UserAnalyticsResponse(CamelModel):
    success: bool = True
    data: UserAnalyticsData


# 4. Products
class CategoryBucket(CamelModel):
    category: str
    count: int
    avg_price: float
    total_stock: int


class StatusBucket(CamelModel):
    status: str
    count: int
    avg_price: float
    total_stock: int


class ProductAnalyticsData(CamelModel):
    top_selling: List[ProductRankEntry]
    products_by_category: List[CategoryBucket]
    products_by_status: List[StatusBucket]


class ProductAnalyticsResponse(CamelModel):
    success: bool = True
    data: ProductAnalyticsData
