import logging
from fastapi import APIRouter, Depends, Query
from typing import Annotated, Optional

from ...common.schemas import ErrorResponse
from ...core import config
from ..auth.security import get_current_active_admin_user
from .clock import Clock, get_clock
from .ranges import RangePolicy
from .schemas import (
    DashboardResponse, SalesReportResponse, UserAnalyticsResponse, ProductAnalyticsResponse
)
from .service import ReportEngine
from .validators import validate_dashboard_query, validate_sales_report_query

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
    # Every report is admin-only
    dependencies=[Depends(get_current_active_admin_user)],
    responses={400: {"model": ErrorResponse, "description": "Invalid date range"}},
)


def get_report_engine(clock: Annotated[Clock, Depends(get_clock)]) -> ReportEngine:
    return ReportEngine(clock=clock)


def get_range_policy() -> RangePolicy:
    return RangePolicy(config.ANALYTICS_RANGE_POLICY)


async def _dashboard(
    engine: ReportEngine, policy: RangePolicy,
    range_: Optional[str], start_date: Optional[str], end_date: Optional[str],
) -> DashboardResponse:
    if policy == RangePolicy.STRICT:
        validate_dashboard_query(range_, start_date, end_date)
    date_range = engine.resolve_range(range_, start_date, end_date, policy=policy)
    return DashboardResponse(data=await engine.compute_dashboard(date_range))


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard_analytics(
    engine: Annotated[ReportEngine, Depends(get_report_engine)],
    policy: Annotated[RangePolicy, Depends(get_range_policy)],
    range_: Optional[str] = Query("today", alias="range", description="today, yesterday, weekly, monthly or custom"),
    start_date: Optional[str] = Query(None, alias="startDate", description="ISO date, required for range=custom"),
    end_date: Optional[str] = Query(None, alias="endDate", description="ISO date, required for range=custom"),
):
    return await _dashboard(engine, policy, range_, start_date, end_date)


@router.get("/legacy/dashboard", response_model=DashboardResponse)
async def get_legacy_dashboard_analytics(
    engine: Annotated[ReportEngine, Depends(get_report_engine)],
    range_: Optional[str] = Query("today", alias="range"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
):
    # Older clients send free-form keywords; anything unknown means today.
    return await _dashboard(engine, RangePolicy.PERMISSIVE, range_, start_date, end_date)


@router.get("/sales-report", response_model=SalesReportResponse)
async def get_sales_report(
    engine: Annotated[ReportEngine, Depends(get_report_engine)],
    start_date: Optional[str] = Query(None, alias="startDate", description="ISO date, defaults to today"),
    end_date: Optional[str] = Query(None, alias="endDate", description="ISO date, defaults to today"),
):
    validate_sales_report_query(start_date, end_date)
    return SalesReportResponse(data=await engine.compute_sales_report(start_date, end_date))


@router.get("/users", response_model=UserAnalyticsResponse)
async def get_user_analytics(
    engine: Annotated[ReportEngine, Depends(get_report_engine)],
    days: int = Query(30, ge=1, le=365, description="Days to look back for signups"),
):
    return UserAnalyticsResponse(data=await engine.compute_user_analytics(days))


@router.get("/products", response_model=ProductAnalyticsResponse)
async def get_product_analytics(
    engine: Annotated[ReportEngine, Depends(get_report_engine)],
    limit: int = Query(10, ge=1, le=100, description="Number of top selling products"),
):
    return ProductAnalyticsResponse(data=await engine.compute_product_analytics(limit))
