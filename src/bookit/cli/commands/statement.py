"""Financial statement commands."""

import click
from bookit.cli.date_filters import date_range_options, resolve_cli_date_range
from bookit.cli.error_handling import format_money
from bookit.domain.entities import RETAINED_EARNINGS_LINE_NAME
from bookit.domain.statements import StatementService

WIDTH = 72


def _service(ctx) -> StatementService:
    return StatementService(ctx.obj["db"], classifier=ctx.obj["classifier"])


def _row(label: str, amount, indent: int = 4, marker: str = "") -> None:
    name = f"{' ' * indent}{label}{marker}"
    click.echo(f"{name:<{WIDTH - 20}}{format_money(amount):>20}")


def _warn_uncategorized(service: StatementService) -> None:
    count = service.uncategorized_count()
    if count:
        click.echo(
            f"Warning: {count} transaction(s) are uncategorized and reported as expenses.",
            err=True,
        )


@click.group()
def statement_group():
    """Build financial statements."""
    pass


@statement_group.command("pnl")
@date_range_options
@click.pass_context
def profit_and_loss(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """Show the profit and loss statement."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    service = _service(ctx)
    pnl = service.profit_and_loss(start, end)

    click.echo("\nProfit & Loss")
    click.echo("=" * WIDTH)
    click.echo("Income")
    for name, amount in pnl.income_by_category.items():
        _row(name, amount)
    _row("Total Income", pnl.total_income, indent=0)
    click.echo("-" * WIDTH)
    click.echo("Expenses")
    for name, amount in pnl.expense_by_category.items():
        _row(name, amount)
    _row("Total Expenses", pnl.total_expense, indent=0)
    click.echo("=" * WIDTH)
    _row("Net Profit", pnl.net_profit, indent=0)

    _warn_uncategorized(service)


def _section(title: str, lines, total_label: str, total) -> None:
    click.echo(title)
    for line in lines:
        marker = ""
        if line.is_adjustment:
            marker = f" [adjustment #{line.adjustment_id}]"
        elif line.has_override:
            marker = f" [override, computed {format_money(line.computed_amount)}]"
        _row(line.name, line.amount, marker=marker)
    _row(total_label, total, indent=0)
    click.echo("-" * WIDTH)


@statement_group.command("balance-sheet")
@date_range_options
@click.pass_context
def balance_sheet(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """Show the balance sheet.

    Lines with an override show the computed value next to them. An
    imbalance is reported, not corrected.
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    service = _service(ctx)
    sheet = service.balance_sheet(start, end)

    click.echo("\nBalance Sheet")
    click.echo("=" * WIDTH)
    click.echo("ASSETS")
    _section("Current Assets", sheet.current_assets, "Total Current Assets", sheet.total_current_assets)
    _section("Fixed & Other Assets", sheet.fixed_assets, "Total Fixed Assets", sheet.total_fixed_assets)
    _row("TOTAL ASSETS", sheet.total_assets, indent=0)
    click.echo("=" * WIDTH)

    click.echo("LIABILITIES")
    _section(
        "Current Liabilities",
        sheet.current_liabilities,
        "Total Current Liabilities",
        sheet.total_current_liabilities,
    )
    _section(
        "Long-term Liabilities",
        sheet.long_term_liabilities,
        "Total Long-term Liabilities",
        sheet.total_long_term_liabilities,
    )
    _row("TOTAL LIABILITIES", sheet.total_liabilities, indent=0)
    click.echo("=" * WIDTH)

    click.echo("EQUITY")
    _row(RETAINED_EARNINGS_LINE_NAME, sheet.retained_earnings)
    for line in sheet.equity_lines:
        marker = " [override]" if line.has_override else ""
        _row(line.name, line.amount, marker=marker)
    _row("TOTAL EQUITY", sheet.total_equity, indent=0)
    click.echo("=" * WIDTH)
    _row("TOTAL LIABILITIES & EQUITY", sheet.total_liabilities_and_equity, indent=0)

    if not sheet.is_balanced:
        click.echo(
            f"Warning: Balance sheet is out of balance by {format_money(sheet.imbalance)}. "
            "Check categorization.",
            err=True,
        )
    _warn_uncategorized(service)


@statement_group.command("summary")
@click.option("--top", default=3, show_default=True, type=click.IntRange(min=1), help="Number of top expense categories")
@click.pass_context
def financial_summary(ctx, top: int):
    """Summarize totals across all transactions."""
    service = _service(ctx)
    summary = service.financial_summary(top_n=top)

    click.echo("\nFinancial Summary")
    click.echo("=" * WIDTH)
    _row("Total Income", summary.total_income, indent=0)
    _row("Total Expenses", summary.total_expense, indent=0)
    _row("Net Profit", summary.net_profit, indent=0)
    if summary.top_expenses:
        click.echo("Top expense categories:")
        for position, name in enumerate(summary.top_expenses, start=1):
            click.echo(f"    {position}. {name}")


def register_commands(cli):
    """Register statement commands with main CLI."""
    cli.add_command(statement_group, name="statement")
