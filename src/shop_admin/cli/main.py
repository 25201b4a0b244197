import asyncio
import logging
from typing import Optional

import typer
from tortoise import Tortoise
from tortoise.exceptions import IntegrityError

from shop_admin.features.analytics.ranges import InvalidRange
from shop_admin.features.analytics.service import ReportEngine
from shop_admin.features.auth.models import ROLE_ADMIN, User as AuthUser
from shop_admin.features.auth.security import get_password_hash
from shop_admin.main import TORTOISE_ORM_CONFIG

logger = logging.getLogger(__name__)

app = typer.Typer(name="shop-admin", help="CLI for managing Shop Admin data and running reports.")


# Shared async context manager for database connection
class DBConnection:
    async def __aenter__(self):
        await Tortoise.init(config=TORTOISE_ORM_CONFIG)
        await Tortoise.generate_schemas(safe=True) # Generate schema if it doesn't exist
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()


# User management commands
user_app = typer.Typer(name="users", help="Manage user accounts.")
app.add_typer(user_app)

@user_app.command("create-admin")
def create_admin_user_command(
    full_name: str = typer.Option(..., prompt=True, help="Full name of the new admin."),
    mobile_number: str = typer.Option(..., prompt=True, help="10-digit mobile number, used to log in."),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password for the new admin.")
):
    """Creates a new admin user."""
    asyncio.run(_create_admin_user(full_name, mobile_number, password))

async def _create_admin_user(full_name: str, mobile_number: str, password: str):
    async with DBConnection():
        typer.echo(f"Attempting to create admin user: {full_name} ({mobile_number})...")
        if not (len(mobile_number) == 10 and mobile_number.isdigit()):
            typer.secho("Error: Mobile number must be exactly 10 digits.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        if await AuthUser.filter(mobile_number=mobile_number).exists():
            typer.secho(f"Error: User with mobile number '{mobile_number}' already exists.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        try:
            admin_user = await AuthUser.create(
                full_name=full_name,
                mobile_number=mobile_number,
                hashed_password=get_password_hash(password),
                role=ROLE_ADMIN,
                is_active=True
            )
        except IntegrityError as e:
            typer.secho(f"Error creating admin user: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        typer.secho(f"Admin user '{admin_user.full_name}' created successfully with ID: {admin_user.public_id}", fg=typer.colors.GREEN)

@user_app.command("promote-to-admin")
def promote_user_to_admin_command(
    mobile_number: str = typer.Argument(..., help="Mobile number of the user to promote to admin.")
):
    """Promotes an existing user to the admin role."""
    asyncio.run(_promote_user_to_admin(mobile_number))

async def _promote_user_to_admin(mobile_number: str):
    async with DBConnection():
        user = await AuthUser.get_or_none(mobile_number=mobile_number)
        if not user:
            typer.secho(f"Error: User with mobile number '{mobile_number}' not found.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        if user.role == ROLE_ADMIN:
            typer.secho(f"User '{mobile_number}' is already an admin.", fg=typer.colors.YELLOW)
            raise typer.Exit(code=0)
        if not user.is_active:
            typer.secho(f"Error: User '{mobile_number}' is inactive. Activate the user before promoting to admin.", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        user.role = ROLE_ADMIN
        await user.save(update_fields=["role"])
        typer.secho(f"User '{mobile_number}' has been successfully promoted to admin.", fg=typer.colors.GREEN)


# Reports, printed as the same camelCase JSON the API returns
analytics_app = typer.Typer(name="analytics", help="Print admin analytics reports as JSON.")
app.add_typer(analytics_app)

def _run_report(build) -> None:
    async def _run():
        async with DBConnection():
            return await build(ReportEngine())
    try:
        report = asyncio.run(_run())
    except InvalidRange as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(report.model_dump_json(by_alias=True, indent=2))

@analytics_app.command("dashboard")
def dashboard_command(
    range_: str = typer.Option("today", "--range", help="today, yesterday, weekly, monthly or custom"),
    start_date: Optional[str] = typer.Option(None, help="ISO date for --range custom"),
    end_date: Optional[str] = typer.Option(None, help="ISO date for --range custom"),
):
    """Dashboard KPIs for a date window."""
    async def build(engine: ReportEngine):
        return await engine.compute_dashboard(engine.resolve_range(range_, start_date, end_date))
    _run_report(build)

@analytics_app.command("sales-report")
def sales_report_command(
    start_date: Optional[str] = typer.Option(None, help="ISO date, defaults to today"),
    end_date: Optional[str] = typer.Option(None, help="ISO date, defaults to today"),
):
    """Daily sales between two dates."""
    async def build(engine: ReportEngine):
        return await engine.compute_sales_report(start_date, end_date)
    _run_report(build)

@analytics_app.command("users")
def users_command(days: int = typer.Option(30, min=1, max=365, help="Days to look back")):
    """Signups per day and users per role."""
    async def build(engine: ReportEngine):
        return await engine.compute_user_analytics(days)
    _run_report(build)

@analytics_app.command("products")
def products_command(limit: int = typer.Option(10, min=1, max=100, help="Number of top sellers")):
    """Top sellers plus category and status breakdowns."""
    async def build(engine: ReportEngine):
        return await engine.compute_product_analytics(limit)
    _run_report(build)


if __name__ == "__main__":
    app()
