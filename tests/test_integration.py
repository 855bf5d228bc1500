"""Integration tests for end-to-end workflows."""

from bookit.cli.main import cli


def test_full_workflow(cli_runner, temp_db, fixtures_dir):
    """Categories, rules, import, manual entries and statements."""
    base = ["--db-path", temp_db.database_path]

    # Step 1: Initialize categories
    result = cli_runner.invoke(cli, base + ["init-categories"])
    assert result.exit_code == 0

    # Step 2: Rules for the recurring counterparties
    for args in (
        ["AMAZON", "Office Supplies"],
        ["STRIPE", "Sales Revenue", "--type", "income"],
        ["LANDLORD", "Rent"],
    ):
        result = cli_runner.invoke(cli, base + ["rule", "add"] + args)
        assert result.exit_code == 0

    # Step 3: Import the extraction export
    result = cli_runner.invoke(cli, base + ["import", str(fixtures_dir / "extraction_export.csv")])
    assert result.exit_code == 0
    assert "Imported: 5 transactions" in result.output
    assert "uncategorized" not in result.output

    result = cli_runner.invoke(cli, base + ["transaction", "list", "--uncategorized"])
    assert "No transactions found." in result.output

    # Step 4: Profit and loss
    result = cli_runner.invoke(cli, base + ["statement", "pnl"])
    assert result.exit_code == 0
    assert "$1,500.00" in result.output
    assert "$1,357.48" in result.output
    assert "$142.52" in result.output

    # Step 5: Balance sheet activity entered by hand
    result = cli_runner.invoke(
        cli,
        base + ["add", "--date", "2024-01-20", "--amount", "5000", "--type", "income",
                "--description", "SBA LOAN FUNDING", "--category", "Business Loan"],
    )
    assert result.exit_code == 0
    result = cli_runner.invoke(
        cli,
        base + ["add", "--date", "2024-01-22", "--amount=-1800", "--description", "DELL LAPTOPS",
                "--category", "Computer Hardware"],
    )
    assert result.exit_code == 0

    # Step 6: Balance sheet balances with every transaction categorized
    result = cli_runner.invoke(cli, base + ["statement", "balance-sheet"])
    assert result.exit_code == 0
    assert "$3,342.52" in result.output
    assert "$1,800.00" in result.output
    assert "$5,000.00" in result.output
    assert "$5,142.52" in result.output
    assert "out of balance" not in result.output

    # Step 7: Summary
    result = cli_runner.invoke(cli, base + ["statement", "summary"])
    assert result.exit_code == 0
    assert "1. Computer Hardware" in result.output
    assert "2. Rent" in result.output


def test_similar_then_rule_workflow(cli_runner, temp_db, fixtures_dir):
    """Categorize a recurring counterparty by example, then keep it with a rule."""
    base = ["--db-path", temp_db.database_path]
    cli_runner.invoke(cli, base + ["import", str(fixtures_dir / "extraction_export.csv")])

    temp_db.disconnect()
    amazon = temp_db.list_transactions(search="amazon")
    assert len(amazon) == 2

    result = cli_runner.invoke(
        cli, base + ["similar", amazon[0].id, "--apply", "Office Supplies"]
    )
    assert result.exit_code == 0
    assert "Categorized 2 transaction(s) as 'Office Supplies'" in result.output

    result = cli_runner.invoke(cli, base + ["rule", "from-transaction", amazon[0].id, "Office Supplies"])
    assert "'AMAZON MKTPLACE' -> 'Office Supplies'" in result.output

    result = cli_runner.invoke(cli, base + ["rule", "apply"])
    assert "recategorized 0." in result.output


def test_override_and_adjustment_workflow(cli_runner, temp_db, seeded_transactions):
    """Overrides and adjustments show up on the balance sheet and can be undone."""
    base = ["--db-path", temp_db.database_path]

    cli_runner.invoke(cli, base + ["adjustment", "add", "Accounts Receivable", "300", "--type", "ASSET"])
    cli_runner.invoke(cli, base + ["adjustment", "add", "Tax Owed", "300", "--type", "LIABILITY"])
    cli_runner.invoke(cli, base + ["override", "set", "Computer Hardware", "200"])

    result = cli_runner.invoke(cli, base + ["statement", "balance-sheet"])
    assert "[adjustment #1]" in result.output
    assert "[adjustment #2]" in result.output
    assert "[override, computed $250.00]" in result.output
    assert "out of balance by ($50.00)" in result.output

    cli_runner.invoke(cli, base + ["override", "reset", "computer hardware"])

    result = cli_runner.invoke(cli, base + ["statement", "balance-sheet"])
    assert "[override" not in result.output
    assert "out of balance" not in result.output
