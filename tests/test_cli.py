"""CLI tests run against a temporary database."""

from datetime import date

from shopdesk.cli.main import cli
from shopdesk.settings import Config


def _run(cli_runner, temp_db, *args, input=None):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=input)


def test_init_with_default_shops(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "init", "--with-default-shops")

    assert result.exit_code == 0
    assert "Database initialized." in result.output
    assert "Created shop 'A'" in result.output

    # Running again skips shops that already exist
    result = _run(cli_runner, temp_db, "init", "--with-default-shops")
    assert "Created shop" not in result.output


def test_shop_commands(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "shops", "create", "Claremont")
    assert result.exit_code == 0
    assert "Created shop 'Claremont'" in result.output

    result = _run(cli_runner, temp_db, "shops", "create", "claremont")
    assert result.exit_code == 1
    assert "Error: A shop named 'claremont' already exists" in result.output

    result = _run(cli_runner, temp_db, "shops", "create", "All")
    assert result.exit_code == 1

    result = _run(cli_runner, temp_db, "shops", "list")
    assert "Claremont" in result.output

    result = _run(cli_runner, temp_db, "shops", "show", "Claremont")
    assert result.exit_code == 0
    assert "Supplies:          0" in result.output

    result = _run(cli_runner, temp_db, "shops", "delete", "Claremont", input="n\n")
    assert "Deletion cancelled." in result.output

    result = _run(cli_runner, temp_db, "shops", "delete", "Claremont", input="y\n")
    assert "Deleted shop 'Claremont'" in result.output

    result = _run(cli_runner, temp_db, "shops", "show", "Nowhere")
    assert result.exit_code == 1
    assert "Error: Shop 'Nowhere' not found" in result.output


def test_supply_commands(cli_runner, temp_db):
    result = _run(
        cli_runner, temp_db, "supplies", "add", "Bread flour",
        "--shop", "A", "--quantity", "12", "--phone", "0215550100",
    )
    assert result.exit_code == 0
    assert "Created supply 'Bread flour' (ID: 1)" in result.output

    result = _run(
        cli_runner, temp_db, "supplies", "add", "Milk", "--shop", "A", "--quantity", "-2", "--phone", "021"
    )
    assert result.exit_code == 1
    assert "Quantity cannot be negative" in result.output

    result = _run(cli_runner, temp_db, "supplies", "update", "1", "--quantity", "20")
    assert result.exit_code == 0

    result = _run(cli_runner, temp_db, "supplies", "list", "--shop", "A")
    assert "Bread flour" in result.output
    assert "20" in result.output

    result = _run(cli_runner, temp_db, "supplies", "delete", "1", input="y\n")
    assert "Deleted supply 'Bread flour'" in result.output

    result = _run(cli_runner, temp_db, "supplies", "list")
    assert "No supplies found." in result.output


def test_order_workflow(cli_runner, temp_db, sample_supply):
    result = _run(
        cli_runner, temp_db, "orders", "add", str(sample_supply.id),
        "--amount", "R80", "--ordered-by", "Thandi", "--date", "2024-01-16",
    )
    assert result.exit_code == 0
    assert "Created order 1 (Pending)" in result.output

    result = _run(cli_runner, temp_db, "orders", "deliver", "1", "--amount", "40", "--date", "2024-01-17")
    assert "Order 1 is now Partial" in result.output

    result = _run(cli_runner, temp_db, "budgets", "set", "A", "100", "--week", "2024-01-15")
    assert result.exit_code == 0
    assert "R100.00" in result.output

    result = _run(cli_runner, temp_db, "orders", "list", "--shop", "A", "--week", "2024-01-18")
    assert result.exit_code == 0
    assert "Week of 2024-01-15 to 2024-01-21 - A" in result.output
    assert "Ordered: R80.00" in result.output
    assert "Remaining: R20.00" in result.output

    result = _run(cli_runner, temp_db, "orders", "update", "1", "--amount", "150")
    assert result.exit_code == 0
    result = _run(cli_runner, temp_db, "orders", "list", "--shop", "A", "--week", "2024-01-18")
    assert "OVER BUDGET" in result.output


def test_orders_list_marks_last_week_deliveries(cli_runner, temp_db, sample_supply):
    _run(
        cli_runner, temp_db, "orders", "add", str(sample_supply.id), "--amount", "120",
        "--ordered-by", "Thandi", "--date", "2024-01-11",
        "--delivered", "120", "--delivery-date", "2024-01-16",
    )

    result = _run(cli_runner, temp_db, "orders", "list", "--week", "2024-01-16")

    assert "*ID:   1" in result.output
    assert "1 order(s) placed last week were delivered this week (R120.00)" in result.output


def test_orders_delete_and_purge(cli_runner, temp_db, order_service, sample_supply):
    for day in ("2023-12-01", "2024-01-15", "2024-01-16"):
        _run(
            cli_runner, temp_db, "orders", "add", str(sample_supply.id),
            "--amount", "10", "--ordered-by", "Thandi", "--date", day,
        )

    result = _run(cli_runner, temp_db, "orders", "delete", "3", input="y\n")
    assert "Deleted 1 order(s)" in result.output

    result = _run(cli_runner, temp_db, "orders", "purge", "--before", "2024-01-01", input="delete all\n")
    assert result.exit_code == 1
    assert "Type 'DELETE ALL' exactly" in result.output

    result = _run(cli_runner, temp_db, "orders", "purge", "--before", "2024-01-01", input="DELETE ALL\n")
    assert "Deleted 1 order(s)" in result.output
    assert [o.id for o in order_service.list_orders()] == [2]


def test_budget_commands(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "budgets", "set", "All", "100")
    assert result.exit_code == 1
    assert "Select a shop for the budget" in result.output

    _run(cli_runner, temp_db, "budgets", "set", "A", "500", "--week", "2024-01-17")
    result = _run(cli_runner, temp_db, "budgets", "list")
    assert "2024-01-15" in result.output
    assert "R500.00" in result.output

    result = _run(cli_runner, temp_db, "budgets", "status", "--week", "2024-01-17")
    assert result.exit_code == 0
    assert "spend basis: ordered" in result.output
    assert "Under Budget" in result.output

    result = _run(cli_runner, temp_db, "budgets", "delete", "1", input="y\n")
    assert "Deleted budget 1" in result.output
    result = _run(cli_runner, temp_db, "budgets", "delete", "1", input="y\n")
    assert result.exit_code == 1


def test_cash_up_commands(cli_runner, temp_db):
    result = _run(
        cli_runner, temp_db, "cash-ups", "add", "A", "--date", "2024-01-15",
        "--cash", "120.50", "--card", "80", "--expenses", "60.25",
    )
    assert result.exit_code == 0
    assert "Daily income: R200.50" in result.output
    assert "Net income:   R140.25" in result.output

    result = _run(cli_runner, temp_db, "cash-ups", "add", "A", "--date", "2024-01-15", "--cash", "1")
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = _run(cli_runner, temp_db, "cash-ups", "update", "1", "--expenses", "0")
    assert result.exit_code == 0

    result = _run(
        cli_runner, temp_db, "cash-ups", "list", "--start-date", "2024-01-01", "--end-date", "2024-01-31"
    )
    assert "Net: R200.50" in result.output

    result = _run(cli_runner, temp_db, "cash-ups", "list", "--this-week", "--start-date", "2024-01-01")
    assert result.exit_code == 1

    result = _run(
        cli_runner, temp_db, "cash-ups", "purge", "--start-date", "2024-01-01", "--end-date", "2024-01-31",
        input="DELETE ALL\n",
    )
    assert "Deleted 1 cash up record(s)" in result.output


def test_cash_ups_missing(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "cash-ups", "missing", "--shop", "A")

    assert result.exit_code == 0
    if date.today().weekday() == 0:
        assert "All cash ups for this week are recorded." in result.output
    else:
        assert "Shop A has missing cash up records for this week" in result.output


def test_report_commands_write_files(cli_runner, temp_db, tmp_path, sample_supply):
    for command in ("business", "budget", "deliveries"):
        target = tmp_path / f"{command}.html"
        result = _run(cli_runner, temp_db, "reports", command, "-o", str(target), "--no-open")

        assert result.exit_code == 0, result.output
        assert f"to {target}" in result.output
        assert target.exists()

    assert "FINAL AUTHORIZATION" in (tmp_path / "deliveries.html").read_text(encoding="utf-8")
    assert "Business Report" in (tmp_path / "business.html").read_text(encoding="utf-8")


def test_business_report_rejects_reversed_dates(cli_runner, temp_db):
    result = _run(
        cli_runner, temp_db, "reports", "business",
        "--start-date", "2024-02-01", "--end-date", "2024-01-01", "--no-open",
    )

    assert result.exit_code == 1
    assert "Error: Start date must be before end date" in result.output


def test_report_print_failure(cli_runner, temp_db, tmp_path, monkeypatch):
    monkeypatch.setattr("webbrowser.open", lambda url: False)
    target = tmp_path / "business.html"

    result = _run(cli_runner, temp_db, "reports", "business", "-o", str(target))

    assert result.exit_code == 1
    assert "Could not open the print window" in result.output
    assert not target.exists()


def test_non_finite_amounts_are_rejected(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "budgets", "set", "A", "nan")

    assert result.exit_code == 1
    assert "Error: Invalid budget amount" in result.output
    assert "not a finite number" in result.output

    result = _run(cli_runner, temp_db, "cash-ups", "add", "A", "--date", "2024-01-15", "--cash", "Infinity")
    assert result.exit_code == 1
    assert "not a finite number" in result.output


def test_invalid_spend_basis_is_reported(cli_runner, temp_db, monkeypatch):
    monkeypatch.setattr(Config, "BUDGET_SPEND_BASIS", "weekly")

    result = _run(cli_runner, temp_db, "budgets", "status")

    assert result.exit_code == 1
    assert "Invalid budget spend basis 'weekly'" in result.output
