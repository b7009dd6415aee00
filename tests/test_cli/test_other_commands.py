"""CLI tests for the shell, tokenize and eval commands."""

import pytest
import json
from click.testing import CliRunner

from linebasic.cli import main as cli_main


@pytest.fixture
def runner():
    """CLI runner."""
    return CliRunner()


class TestShellCommand:
    """Tests for the interactive shell."""

    def test_store_and_run(self, runner):
        session = '10 PRINT "HI"\nRUN\nQUIT\n'
        result = runner.invoke(cli_main, ["shell"], input=session)
        assert result.exit_code == 0
        assert "READY" in result.output
        assert "HI\n" in result.output

    def test_immediate_statement(self, runner):
        result = runner.invoke(cli_main, ["shell"], input="PRINT 6 * 7\nEXIT\n")
        assert "42\n" in result.output

    def test_list_and_delete(self, runner):
        session = "20 REM B\n10 REM A\n20\nLIST\nQUIT\n"
        result = runner.invoke(cli_main, ["shell"], input=session)
        assert "10 REM A" in result.output
        assert "20 REM B" not in result.output

    def test_vars(self, runner):
        session = 'A = 5\nB$ = "X"\nVARS\nQUIT\n'
        result = runner.invoke(cli_main, ["shell"], input=session)
        assert "A = 5" in result.output
        assert 'B$ = "X"' in result.output

    def test_new_clears(self, runner):
        session = "10 REM\nNEW\nLIST\nQUIT\n"
        result = runner.invoke(cli_main, ["shell"], input=session)
        assert "Program cleared" in result.output
        assert "No program loaded" in result.output

    def test_errors_do_not_end_session(self, runner):
        session = "PRINT 1 / 0\nPRINT 2\nQUIT\n"
        result = runner.invoke(cli_main, ["shell"], input=session)
        assert "Error: Division by zero" in result.output
        assert "2\n" in result.output

    def test_run_error_reports_line(self, runner):
        session = "10 PRINT X\nRUN\nQUIT\n"
        result = runner.invoke(cli_main, ["shell"], input=session)
        assert "Error at line 10: Undefined variable: X" in result.output

    def test_help(self, runner):
        result = runner.invoke(cli_main, ["shell"], input="HELP\nQUIT\n")
        assert "GOSUB line_number" in result.output

    def test_debug_tokens(self, runner):
        result = runner.invoke(cli_main, ["shell"], input="DEBUG PRINT 1\nQUIT\n")
        assert "[0] KEYWORD 'PRINT'" in result.output
        assert "[1] NUMBER '1'" in result.output

    def test_end_of_input_exits(self, runner):
        result = runner.invoke(cli_main, ["shell"], input="PRINT 1\n")
        assert result.exit_code == 0


class TestTokenizeCommand:
    """Tests for the tokenize command."""

    def test_text_output(self, runner):
        result = runner.invoke(cli_main, ["tokenize", 'PRINT "A"; X'])
        assert result.exit_code == 0
        assert "[0] KEYWORD (PRINT) 'PRINT'" in result.output
        assert "[1] STRING '\"A\"'" in result.output
        assert "[3] VARIABLE 'X'" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(cli_main, ["tokenize", "A = 1", "--json-output"])
        data = json.loads(result.output)
        assert [t["kind"] for t in data] == ["VARIABLE", "OPERATOR", "NUMBER"]
        assert data[2]["literal"] == {"kind": "NUMBER", "value": 1.0}


class TestEvalCommand:
    """Tests for the eval command."""

    def test_numeric(self, runner):
        result = runner.invoke(cli_main, ["eval", "2 + 3 * 4"])
        assert result.exit_code == 0
        assert result.output == "14\n"

    def test_text(self, runner):
        result = runner.invoke(cli_main, ["eval", 'CHR$(65) + "B"'])
        assert result.output == "AB\n"

    def test_let_assignments(self, runner):
        result = runner.invoke(cli_main, ["eval", "A * B", "--let", "A = 4", "--let", "B = 3"])
        assert result.exit_code == 0
        assert result.output == "12\n"

    def test_error(self, runner):
        result = runner.invoke(cli_main, ["eval", "1 / 0"])
        assert result.exit_code == 1
        assert "RangeError" in result.output

    def test_bad_assignment(self, runner):
        result = runner.invoke(cli_main, ["eval", "1", "--let", "= 3"])
        assert result.exit_code == 1
