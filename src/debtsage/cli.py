"""Command line interface for DebtSage."""

from __future__ import annotations

from pathlib import Path

import click

from .config import BaseConfig
from .errors import DebtSageError
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelDebtPaymentRepository, SQLModelDebtRepository
from .logging_config import setup_logging
from .models.debt import DEBT_CATEGORIES
from .services import amortization
from .services.debt_service import DebtService
from .services.export_csv import export_payments_csv, export_schedule_csv


def _money(value: float) -> str:
    return f"{value:,.2f}"


def _service(ctx: click.Context) -> DebtService:
    """Build the DB-backed service on first use and cache it on the context."""

    obj = ctx.ensure_object(dict)
    if "service" not in obj:
        config = obj.get("config") or BaseConfig()
        setup_logging(config)
        _, session_factory = bootstrap_database(config)
        obj["service"] = DebtService(
            SQLModelDebtRepository(session_factory),
            SQLModelDebtPaymentRepository(session_factory),
        )
    return obj["service"]


def _print_schedule(schedule: list[amortization.ScheduleEntry]) -> None:
    click.echo(f"{'Month':>5}  {'Payment':>14}  {'Interest':>14}  {'Principal':>14}  {'Balance':>14}")
    for entry in schedule:
        click.echo(
            f"{entry.month:>5}  {_money(entry.payment):>14}  {_money(entry.monthly_interest):>14}  "
            f"{_money(entry.principal):>14}  {_money(entry.balance):>14}"
        )
    total_interest, _, periods = amortization.schedule_totals(schedule)
    click.echo(f"Periods: {periods}  Total interest: {_money(total_interest)}")


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track debts and project their payoff schedules."""

    ctx.ensure_object(dict)


@cli.command("schedule")
@click.option("--balance", type=float, required=True, help="Outstanding balance")
@click.option("--payment", type=float, required=True, help="Fixed monthly payment incl. interest")
@click.option("--rate", type=float, default=0.0, show_default=True, help="Annual interest rate in percent")
@click.option("--months", type=int, required=True, help="Remaining months")
@click.option("--csv", "csv_path", type=click.Path(path_type=Path), default=None, help="Also write CSV here")
def schedule_cmd(balance: float, payment: float, rate: float, months: int, csv_path: Path | None) -> None:
    """Print a payoff schedule without touching the database."""

    record = amortization.DebtRecord(
        id=None,
        remaining_amount=balance,
        monthly_payment=payment,
        interest_rate=rate,
        remaining_months=months,
    )
    schedule = amortization.compute_schedule(record)
    _print_schedule(schedule)
    if not amortization.is_amortizing(record):
        click.echo("Warning: payment does not cover monthly interest.", err=True)
    if csv_path is not None:
        export_schedule_csv(schedule=schedule, output_path=csv_path)
        click.echo(f"Schedule written: {csv_path}")


@cli.command("add")
@click.argument("name")
@click.option("--payment", type=float, required=True, help="Fixed monthly payment incl. interest")
@click.option("--rate", type=float, default=0.0, show_default=True, help="Annual interest rate in percent")
@click.option("--months", type=int, required=True, help="Remaining months")
@click.option("--balance", type=float, default=None, help="Outstanding balance (default: payment x months)")
@click.option("--category", type=click.Choice(DEBT_CATEGORIES), default="other", show_default=True)
@click.option("--description", default=None)
@click.pass_context
def add_cmd(
    ctx: click.Context,
    name: str,
    payment: float,
    rate: float,
    months: int,
    balance: float | None,
    category: str,
    description: str | None,
) -> None:
    """Add a debt."""

    try:
        debt = _service(ctx).add_debt(
            name=name,
            monthly_payment=payment,
            interest_rate=rate,
            remaining_months=months,
            remaining_amount=balance,
            category=category,
            description=description,
        )
    except DebtSageError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Added debt {debt.id}: {debt.name} ({_money(debt.remaining_amount)})")


@cli.command("list")
@click.option("--active", is_flag=True, default=False, help="Only debts still being repaid")
@click.pass_context
def list_cmd(ctx: click.Context, active: bool) -> None:
    """List debts."""

    debts = _service(ctx).list_debts(active_only=active)
    if not debts:
        click.echo("No debts.")
        return
    for debt in debts:
        status = "active" if debt.is_active else "closed"
        click.echo(
            f"{debt.id:>4}  {debt.name:<24}  {_money(debt.remaining_amount):>14}  "
            f"{_money(debt.monthly_payment):>12}/mo  {debt.interest_rate:>6.2f}%  "
            f"{debt.remaining_months:>3} mo  {status}"
        )


@cli.command("show")
@click.argument("debt_id", type=int)
@click.option("--csv", "csv_path", type=click.Path(path_type=Path), default=None)
@click.pass_context
def show_cmd(ctx: click.Context, debt_id: int, csv_path: Path | None) -> None:
    """Show a stored debt's payoff schedule."""

    service = _service(ctx)
    try:
        debt = service.get_debt(debt_id)
        schedule = service.payoff_schedule(debt_id)
    except DebtSageError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"{debt.name} [{debt.category}]")
    _print_schedule(schedule)
    if csv_path is not None:
        export_schedule_csv(schedule=schedule, output_path=csv_path)
        click.echo(f"Schedule written: {csv_path}")


@cli.command("pay")
@click.argument("debt_id", type=int)
@click.pass_context
def pay_cmd(ctx: click.Context, debt_id: int) -> None:
    """Record this month's payment for a debt."""

    try:
        payment = _service(ctx).make_payment(debt_id)
    except DebtSageError as exc:
        raise click.ClickException(str(exc)) from exc
    if payment is None:
        click.echo(f"Debt {debt_id} is settled; nothing recorded.")
        return
    click.echo(
        f"Paid {_money(payment.amount)}: principal {_money(payment.principal_amount)}, "
        f"interest {_money(payment.interest_amount)}, "
        f"remaining {_money(payment.remaining_balance)}"
    )


@cli.command("history")
@click.argument("debt_id", type=int)
@click.option("--csv", "csv_path", type=click.Path(path_type=Path), default=None)
@click.pass_context
def history_cmd(ctx: click.Context, debt_id: int, csv_path: Path | None) -> None:
    """List recorded payments for a debt."""

    try:
        payments = _service(ctx).payment_history(debt_id)
    except DebtSageError as exc:
        raise click.ClickException(str(exc)) from exc
    for payment in payments:
        click.echo(
            f"{payment.payment_date:%Y-%m-%d}  {_money(payment.amount):>14}  "
            f"{_money(payment.principal_amount):>14}  {_money(payment.interest_amount):>14}  "
            f"{_money(payment.remaining_balance):>14}"
        )
    click.echo(f"Payments: {len(payments)}")
    if csv_path is not None:
        export_payments_csv(payments=payments, output_path=csv_path)
        click.echo(f"History written: {csv_path}")


@cli.command("summary")
@click.pass_context
def summary_cmd(ctx: click.Context) -> None:
    """Show totals across active debts and next month's payments."""

    overview = _service(ctx).get_overview()
    summary = overview.summary
    click.echo(f"Total debt:            {_money(summary.total_debt)}")
    click.echo(f"Monthly payments:      {_money(summary.total_monthly_payments)}")
    click.echo(f"Interest per month:    {_money(summary.total_interest_per_month)}")
    click.echo(f"Average payoff months: {summary.average_payoff_months:.1f}")
    for payment in overview.next_month_payments:
        click.echo(
            f"  {payment.payment_date:%Y-%m-%d}  debt {payment.debt_id}: "
            f"{_money(payment.amount)} (interest {_money(payment.interest_amount)})"
        )


@cli.command("delete")
@click.argument("debt_id", type=int)
@click.confirmation_option(prompt="Delete this debt and its payment history?")
@click.pass_context
def delete_cmd(ctx: click.Context, debt_id: int) -> None:
    """Delete a debt and its payments."""

    try:
        _service(ctx).delete_debt(debt_id)
    except DebtSageError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Deleted debt {debt_id}")


def main() -> None:  # pragma: no cover - console entry point
    cli(obj={})


if __name__ == "__main__":  # pragma: no cover
    main()
