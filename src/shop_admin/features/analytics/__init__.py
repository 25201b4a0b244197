"""Admin analytics endpoints for shop-admin

Dashboard KPIs, daily sales, user signups and product breakdowns computed
on demand from the order, user and product tables. All endpoints require an
authenticated administrator.

Route handlers only parse and validate query parameters; the reports
themselves are produced by ReportEngine in service.py, which takes its
notion of "now" from an injectable clock."""
