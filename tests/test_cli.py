"""Tests for the command line interface."""

import json

from award_payroll.cli import PayrollCli


def run(capsys, *args: str) -> tuple[int, str, str]:
    code = PayrollCli().run(list(args))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


class TestPayPeriodCommands:
    """pay-period and next-period."""

    def test_pay_period(self, capsys):
        """Prints the fortnight containing the date."""
        code, out, _ = run(capsys, "pay-period", "--date", "2024-07-07")

        assert code == 0
        data = json.loads(out)
        assert data["start"] == "2024-07-01T00:00:00"
        assert data["end"] == "2024-07-14T23:59:59.999000"

    def test_next_period(self, capsys):
        """Prints the fortnight after the given end."""
        code, out, _ = run(capsys, "next-period", "--current-end", "2024-07-14T23:59:59")

        assert code == 0
        assert json.loads(out)["start"] == "2024-07-15T00:00:00"


class TestShiftCommand:
    """shift pricing."""

    def test_public_holiday_shift(self, capsys):
        """Prints base, allowances and total."""
        code, out, _ = run(
            capsys,
            "shift",
            "--start", "2024-07-03T09:00",
            "--end", "2024-07-03T17:00",
            "--rate", "35",
            "--public-holiday",
        )

        assert code == 0
        data = json.loads(out)
        assert data["base_payment"] == "280.00"
        assert data["allowances"][0]["type"] == "public_holiday"
        assert data["total_payment"] == "700.00"

    def test_invalid_shift(self, capsys):
        """Domain errors exit with status 2."""
        code, _, err = run(
            capsys,
            "shift",
            "--start", "2024-07-03T17:00",
            "--end", "2024-07-03T09:00",
            "--rate", "35",
        )

        assert code == 2
        assert "end_time" in err


class TestWithholdingCommand:
    """withholding estimate."""

    def test_withholding(self, capsys):
        """41,600 a year withholds 171.00 a fortnight."""
        code, out, _ = run(capsys, "withholding", "--annual-income", "41600")

        assert code == 0
        data = json.loads(out)
        assert data["annual_tax"] == "4446.00"
        assert data["per_period"] == "171.00"

    def test_tax_free(self, capsys):
        """Income under the threshold withholds nothing."""
        _, out, _ = run(capsys, "withholding", "--annual-income", "18000")
        assert json.loads(out)["per_period"] == "0.00"


def test_no_command(capsys):
    """Without a command the help is printed."""
    code, out, _ = run(capsys)
    assert code == 1
    assert "usage" in out
