"""Categorization rule commands."""

import click
from bookit.cli.error_handling import handle_domain_error
from bookit.domain.entities import TransactionType
from bookit.domain.rules import RuleService, sort_rules


@click.group()
def rule_group():
    """Manage keyword categorization rules."""
    pass


@rule_group.command("list")
@click.pass_context
def list_rules(ctx):
    """List rules in the order they are evaluated (longest keyword first)."""
    service = RuleService(ctx.obj["db"])
    rules = sort_rules(service.list_rules())
    if not rules:
        click.echo("No rules defined. Add one with 'rule add KEYWORD CATEGORY'.")
        return

    click.echo(f"\n{'ID':<6} {'Keyword':<30} {'Category':<30} {'Type':<8}")
    click.echo("-" * 76)
    for rule in rules:
        rule_type = rule.target_type.value if rule.target_type else "any"
        click.echo(f"{rule.id:<6} {rule.keyword:<30} {rule.target_category:<30} {rule_type:<8}")


@rule_group.command("add")
@click.argument("keyword")
@click.argument("category")
@click.option(
    "--type",
    "target_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="Only match transactions of this type",
)
@click.pass_context
def add_rule(ctx, keyword: str, category: str, target_type: str | None):
    """Add a rule: descriptions containing KEYWORD go to CATEGORY.

    Examples:
        bookit rule add "AMAZON" "Office Supplies"
        bookit rule add "STRIPE" "Sales Revenue" --type income
    """
    service = RuleService(ctx.obj["db"])
    try:
        rule_id = service.create_rule(
            keyword=keyword,
            target_category=category,
            target_type=TransactionType(target_type.lower()) if target_type else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created rule {rule_id}: '{keyword}' -> '{category}'")


@rule_group.command("from-transaction")
@click.argument("transaction_id")
@click.argument("category")
@click.pass_context
def add_rule_from_transaction(ctx, transaction_id: str, category: str):
    """Create a rule from the first words of a transaction description."""
    service = RuleService(ctx.obj["db"])
    try:
        rule_id = service.create_rule_from_transaction(transaction_id, category)
    except ValueError as e:
        handle_domain_error(ctx, e)
    rule = service.get_rule(rule_id)
    click.echo(f"Created rule {rule.id}: '{rule.keyword}' -> '{rule.target_category}'")


@rule_group.command("remove")
@click.argument("rule_id", type=int)
@click.pass_context
def remove_rule(ctx, rule_id: int):
    """Remove a rule. Already categorized transactions keep their category."""
    service = RuleService(ctx.obj["db"])
    try:
        service.delete_rule(rule_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed rule {rule_id}")


@rule_group.command("apply")
@click.pass_context
def apply_rules(ctx):
    """Apply all rules to every stored transaction."""
    service = RuleService(ctx.obj["db"])
    result = service.apply_rules()
    click.echo(
        f"Evaluated {result.evaluated} transaction(s); recategorized {result.changed}."
    )


@rule_group.command("impact")
@click.pass_context
def rule_impact(ctx):
    """Show how many stored transactions each rule currently wins."""
    service = RuleService(ctx.obj["db"])
    rules = sort_rules(service.list_rules())
    if not rules:
        click.echo("No rules defined.")
        return

    counts = service.rule_impact()
    click.echo(f"\n{'ID':<6} {'Keyword':<30} {'Category':<30} {'Matches':>8}")
    click.echo("-" * 77)
    for rule in rules:
        click.echo(
            f"{rule.id:<6} {rule.keyword:<30} {rule.target_category:<30} {counts.get(rule.id, 0):>8}"
        )


def register_commands(cli):
    """Register rule commands with main CLI."""
    cli.add_command(rule_group, name="rule")
