"""End-to-end tests for the cashboard CLI views."""

from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cashboard.cli import app
from cashboard.dates import format_month_label
from cashboard.domain.models import CreateResult, NewTransaction
from cashboard.service import QueryError, TransactionQueryService
from cashboard.store.queries import get_all_categories

runner = CliRunner()


@pytest.fixture
def initialized(xdg_dirs: tuple[Path, Path]) -> dict[str, int]:
    """Run 'cashboard init' and return the default category ids by name."""
    _, data_home = xdg_dirs
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    return {row["name"]: row["id"] for row in get_all_categories(data_home / "cashboard" / "cashboard.db")}


def add(category_id: int, amount: str, txn_date: str, description: str = "") -> None:
    args = ["new", "--amount", amount, "--date", txn_date, "--category", str(category_id)]
    if description:
        args += ["--description", description]
    result = runner.invoke(app, args)
    assert result.exit_code == 0, result.output


class TestInit:
    """Tests for 'cashboard init'."""

    def test_creates_database_and_config(self, xdg_dirs: tuple[Path, Path]) -> None:
        """Should create the database, default categories and config."""
        config_home, data_home = xdg_dirs

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Initialization complete!" in result.output
        assert (data_home / "cashboard" / "cashboard.db").exists()
        assert (config_home / "cashboard" / "config.toml").exists()

    def test_refuses_to_overwrite(self, initialized: dict[str, int]) -> None:
        """Should fail without --force when already initialized."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "--force" in result.output

    def test_force_keeps_categories(self, initialized: dict[str, int]) -> None:
        """Should re-run setup without duplicating categories."""
        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0
        assert "default categories" not in result.output


class TestCategories:
    """Tests for 'cashboard categories'."""

    def test_lists_defaults(self, initialized: dict[str, int]) -> None:
        """Should show the seeded categories."""
        result = runner.invoke(app, ["categories"])

        assert result.exit_code == 0
        assert "Salary" in result.output
        assert "Housing" in result.output


class TestTransactionsView:
    """Tests for 'cashboard transactions'."""

    def test_requires_database(self, xdg_dirs: tuple[Path, Path]) -> None:
        """Should tell the user to run init first."""
        result = runner.invoke(app, ["transactions"])

        assert result.exit_code == 1
        assert "cashboard init" in result.output

    def test_malformed_period_falls_back_to_current_month(self, initialized: dict[str, int]) -> None:
        """Should show the current month for year=abc, month=13."""
        today = date.today()

        result = runner.invoke(app, ["transactions", "--year", "abc", "--month", "13"])

        assert result.exit_code == 0
        assert f"{format_month_label(today.year, today.month)} Transactions" in result.output

    def test_empty_month(self, initialized: dict[str, int]) -> None:
        """Should render the no-transactions state, not an error."""
        result = runner.invoke(app, ["transactions", "--year", "2024", "--month", "2"])

        assert result.exit_code == 0
        assert "Feb 2024 Transactions" in result.output
        assert "There are no transactions for this month" in result.output

    def test_lists_month(self, initialized: dict[str, int]) -> None:
        """Should list a month's transactions with ordinal dates and currency."""
        add(initialized["Salary"], "1234.50", "2024-03-01", "Pay")
        add(initialized["Housing"], "950", "2024-03-02", "Rent")
        add(initialized["Housing"], "10", "2024-04-02", "Later")

        result = runner.invoke(app, ["transactions", "--year", "2024", "--month", "3"])

        assert result.exit_code == 0
        assert "Mar 2024 Transactions" in result.output
        assert "1st Mar 2024" in result.output
        assert "2nd Mar 2024" in result.output
        assert "£1,234.50" in result.output
        assert "£950" in result.output
        assert "Later" not in result.output
        assert result.output.index("Rent") < result.output.index("Pay")

    def test_failure_state(self, initialized: dict[str, int], monkeypatch: pytest.MonkeyPatch) -> None:
        """Should render a generic failure and exit 1 when the fetch fails."""

        def broken(self: TransactionQueryService, period: object) -> list[object]:
            raise QueryError("database is locked")

        monkeypatch.setattr(TransactionQueryService, "fetch_transactions_for_month", broken)

        result = runner.invoke(app, ["transactions", "--year", "2024", "--month", "3"])

        assert result.exit_code == 1
        assert "Something went wrong loading transactions" in result.output
        assert "Mar 2024 Transactions" not in result.output


class TestNewTransaction:
    """Tests for 'cashboard new'."""

    def test_success_shows_transaction_month(self, initialized: dict[str, int]) -> None:
        """Should confirm and show the listing for month=7, year=2024."""
        result = runner.invoke(
            app,
            [
                "new",
                "--amount",
                "12.50",
                "--date",
                "2024-07-15",
                "--category",
                str(initialized["Entertainment"]),
                "--description",
                "Cinema",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Transaction created" in result.output
        assert "/dashboard/transactions?month=7&year=2024" in result.output
        assert "Jul 2024 Transactions" in result.output
        assert "15th Jul 2024" in result.output
        assert "Cinema" in result.output

    def test_validation_errors_exit(self, initialized: dict[str, int]) -> None:
        """Should list validation errors and exit 1 when all fields were given."""
        result = runner.invoke(app, ["new", "--amount", "0", "--date", "2024-07-15", "--category", "999"])

        assert result.exit_code == 1
        assert "Amount must not be zero" in result.output
        assert "Please select a valid category" in result.output
        assert "Transaction created" not in result.output

    def test_huge_amount_is_a_field_error(self, initialized: dict[str, int]) -> None:
        """Should report an oversized amount as a validation error, not crash."""
        result = runner.invoke(
            app,
            ["new", "--amount", "99999999999999999", "--date", "2024-07-15", "--category", str(initialized["Salary"])],
        )

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Amount must be at most 1,000,000,000" in result.output
        assert "Transaction created" not in result.output

    def test_error_response_stays_on_form(
        self, initialized: dict[str, int], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should show the error message from the create call and not navigate."""

        def reject(self: TransactionQueryService, payload: NewTransaction) -> CreateResult:
            return CreateResult(error=True, message="Invalid category")

        monkeypatch.setattr(TransactionQueryService, "create_transaction", reject)

        result = runner.invoke(
            app, ["new", "--amount", "5", "--date", "2024-07-15", "--category", str(initialized["Salary"])]
        )

        assert result.exit_code == 1
        assert "Invalid category" in result.output
        assert "Jul 2024 Transactions" not in result.output

    def test_interactive_form(self, initialized: dict[str, int]) -> None:
        """Should prompt for missing fields."""
        user_input = f"42\n2024-03-05\n{initialized['Salary']}\nBonus\n"

        result = runner.invoke(app, ["new"], input=user_input)

        assert result.exit_code == 0, result.output
        assert "Transaction created" in result.output
        assert "Mar 2024 Transactions" in result.output
        assert "£42" in result.output

    def test_interactive_form_returns_after_errors(self, initialized: dict[str, int]) -> None:
        """Should ask again after a validation error."""
        category = initialized["Transport"]
        user_input = f"abc\n2024-03-05\n{category}\n\n" + f"7.25\n2024-03-05\n{category}\n\n"

        result = runner.invoke(app, ["new"], input=user_input)

        assert result.exit_code == 0, result.output
        assert "Amount must be a number" in result.output
        assert "£7.25" in result.output

    def test_interactive_retry_after_failed_submit(
        self, initialized: dict[str, int], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should offer to edit and resubmit after a failed create call."""
        original = TransactionQueryService.create_transaction
        calls: list[NewTransaction] = []

        def flaky(self: TransactionQueryService, payload: NewTransaction) -> CreateResult:
            calls.append(payload)
            if len(calls) == 1:
                return CreateResult(error=True, message="Try again later")
            return original(self, payload)

        monkeypatch.setattr(TransactionQueryService, "create_transaction", flaky)
        category = initialized["Health"]
        user_input = f"20\n2024-05-01\n{category}\nDentist\n" + "y\n" + "\n\n\n\n"

        result = runner.invoke(app, ["new"], input=user_input)

        assert result.exit_code == 0, result.output
        assert "Try again later" in result.output
        assert "Transaction created" in result.output
        assert len(calls) == 2


class TestCashflowView:
    """Tests for 'cashboard cashflow'."""

    def test_shows_year(self, initialized: dict[str, int]) -> None:
        """Should show monthly totals and the annual summary."""
        add(initialized["Salary"], "100", "2024-03-05")
        add(initialized["Housing"], "40", "2024-03-20")

        result = runner.invoke(app, ["cashflow", "--year", "2024"])

        assert result.exit_code == 0, result.output
        assert "Cashflow 2024" in result.output
        assert "Mar 2024" in result.output
        assert "£100" in result.output
        assert "£40" in result.output
        assert "£60" in result.output  # balance
        assert "2024" in result.output

    def test_empty_year(self, initialized: dict[str, int]) -> None:
        """Should show zero months and a no-data note."""
        result = runner.invoke(app, ["cashflow", "--year", "2020"])

        assert result.exit_code == 0
        assert "There are no transactions for 2020" in result.output
        assert "Jan 2020" in result.output
        assert "Dec 2020" in result.output

    def test_malformed_year(self, initialized: dict[str, int]) -> None:
        """Should fall back to the current year."""
        result = runner.invoke(app, ["cashflow", "--year", "next"])

        assert result.exit_code == 0
        assert f"Cashflow {date.today().year}" in result.output

    def test_failure_state(self, initialized: dict[str, int], monkeypatch: pytest.MonkeyPatch) -> None:
        """Should render a generic failure when a fetch fails."""

        def broken(self: TransactionQueryService) -> object:
            raise QueryError("disk I/O error")

        monkeypatch.setattr(TransactionQueryService, "fetch_years_range", broken)

        result = runner.invoke(app, ["cashflow", "--year", "2024"])

        assert result.exit_code == 1
        assert "Something went wrong loading cashflow" in result.output
