"""Test statement execution and program control flow."""
import pytest
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from linebasic.runtime.executor import ExecutionConfig
from linebasic.runtime.interpreter import Interpreter
from linebasic.runtime.io import BufferedIO
from linebasic.runtime.state import RunStatus
from linebasic.loader import load_source


def value_of(interp, name):
    return dict(interp.get_variables())[name]


class TestPrint:
    """Tests for PRINT."""

    def test_semicolon_joins(self, run_source, io):
        run_source('10 PRINT "A"; "B"; 1 + 2')
        assert io.output == "AB3\n"

    def test_comma_inserts_tab(self, run_source, io):
        run_source("10 PRINT 1, 2")
        assert io.output == "1\t2\n"

    def test_trailing_separator_still_ends_line(self, run_source, io):
        run_source('10 PRINT "A";')
        assert io.output == "A\n"

    def test_bare_print(self, run_source, io):
        run_source("10 PRINT")
        assert io.output == "\n"

    def test_function_arguments_not_split(self, run_source, io):
        run_source('10 PRINT MID$("HELLO", 2, 3); LEFT$("XY", 1)')
        assert io.output == "ELLX\n"

    def test_output_written_before_error(self, run_source, io):
        result = run_source('10 PRINT "A"; 1 / 0')
        assert not result.success
        assert io.output == "A"


class TestAssignment:
    """Tests for LET and implicit assignment."""

    def test_let(self, run_source, interp):
        run_source("10 LET A = 2 * 3")
        assert value_of(interp, "A").number == 6

    def test_implicit_let(self, run_source, interp):
        run_source('10 N$ = "BOB"')
        assert value_of(interp, "N$").text == "BOB"

    def test_invalid_let(self, run_source):
        result = run_source("10 LET = 1")
        assert not result.success
        assert result.error_kind == "SyntaxError"
        assert result.error == "Invalid LET statement"

    def test_assignment_missing_expression(self, run_source):
        result = run_source("10 A =")
        assert result.error_kind == "SyntaxError"

    def test_keywords_case_insensitive(self, run_source, io):
        run_source('10 let a = 1\n20 print A')
        assert io.output == "1\n"


class TestInput:
    """Tests for INPUT."""

    def test_numeric_input(self, run_source, io):
        run_source("10 INPUT X\n20 PRINT X * 2", inputs=["21"])
        assert io.output == "42\n"

    def test_text_input_with_prompt(self, run_source, io, interp):
        run_source('10 INPUT "NAME"; N$\n20 PRINT "HI "; N$', inputs=["bob"])
        assert io.output == "NAMEHI bob\n"
        assert value_of(interp, "N$").is_text

    def test_partially_numeric_input_is_text(self, run_source, interp):
        run_source("10 INPUT X", inputs=["12abc"])
        assert value_of(interp, "X").text == "12abc"

    def test_end_of_input_leaves_variable(self, run_source, io):
        run_source("10 X = 5\n20 INPUT X\n30 PRINT X")
        assert io.output == "5\n"

    def test_input_requires_variable(self, run_source):
        result = run_source('10 INPUT "PROMPT"')
        assert result.error_kind == "SyntaxError"


class TestIf:
    """Tests for IF ... THEN."""

    def test_then_statement(self, run_source, io):
        run_source('10 A = 3\n20 IF A > 1 THEN PRINT "BIG"\n30 IF A > 5 THEN PRINT "HUGE"')
        assert io.output == "BIG\n"

    def test_then_assignment(self, run_source, interp):
        run_source("10 IF 1 THEN B = 2")
        assert value_of(interp, "B").number == 2

    def test_then_line_number(self, run_source, io):
        run_source('10 IF 1 THEN 30\n20 PRINT "NO"\n30 PRINT "YES"')
        assert io.output == "YES\n"

    def test_text_condition_is_false(self, run_source, io):
        run_source('10 IF "X" THEN PRINT "T"')
        assert io.output == ""

    def test_missing_then(self, run_source):
        result = run_source("10 IF 1 PRINT 2")
        assert result.error_kind == "SyntaxError"
        assert result.error == "IF without THEN"

    def test_else_unsupported(self, run_source):
        result = run_source("10 IF 1 THEN PRINT 1 ELSE PRINT 2")
        assert result.error_kind == "SyntaxError"
        assert result.error == "Unsupported statement: ELSE"


class TestGotoGosub:
    """Tests for GOTO, GOSUB and RETURN."""

    def test_goto_skips_lines(self, run_source, io):
        run_source('10 GOTO 30\n20 PRINT "SKIPPED"\n30 PRINT "DONE"')
        assert io.output == "DONE\n"

    def test_computed_goto(self, run_source, io):
        run_source('10 GOTO 10 + 20\n20 PRINT "SKIPPED"\n30 PRINT "DONE"')
        assert io.output == "DONE\n"

    def test_goto_missing_line(self, run_source):
        result = run_source("10 GOTO 99")
        assert result.error_kind == "NameError"
        assert result.error == "Line number not found: 99"
        assert result.line_number == 10

    @pytest.mark.parametrize("source", [
        "10 X = 10 ^ 200 * 10 ^ 200\n20 GOTO X",
        "10 X = 10 ^ 200 * 10 ^ 200\n20 GOSUB X",
        "10 X = 10 ^ 200 * 10 ^ 200\n20 GOTO X - X",
        "10 X = 1\n20 IF 1 THEN " + "9" * 400,
    ])
    def test_non_finite_target(self, run_source, interp, source):
        result = run_source(source)
        assert not result.success
        assert result.error_kind == "RangeError"
        assert result.error.startswith("Line number out of range")
        assert result.line_number == 20
        assert interp.stacks.gosub_depth == 0

    def test_goto_text_target(self, run_source):
        result = run_source('10 GOTO "A"')
        assert result.error_kind == "TypeError"

    def test_nested_gosub_returns(self, run_source, io):
        source = "\n".join([
            "10 GOSUB 100",
            '20 PRINT "BACK"',
            "30 END",
            '100 PRINT "IN1"',
            "110 GOSUB 200",
            "120 RETURN",
            '200 PRINT "IN2"',
            "210 RETURN",
        ])
        result = run_source(source)
        assert result.success
        assert io.output == "IN1\nIN2\nBACK\n"

    def test_return_without_gosub(self, run_source):
        result = run_source("10 RETURN")
        assert result.error_kind == "StackError"
        assert result.error == "RETURN without GOSUB"
        assert result.line_number == 10

    def test_gosub_overflow(self):
        interp = Interpreter(config=ExecutionConfig(max_gosub_depth=5), io=BufferedIO())
        interp.load_line(10, "GOSUB 10")
        result = interp.run_program()
        assert result.error_kind == "StackError"
        assert result.error == "GOSUB stack overflow"
        assert result.steps == 5


class TestForNext:
    """Tests for FOR ... NEXT."""

    def test_simple_loop(self, run_source, io, interp):
        run_source("10 FOR I = 1 TO 3\n20 PRINT I\n30 NEXT I")
        assert io.output == "1\n2\n3\n"
        assert value_of(interp, "I").number == 4

    def test_negative_step(self, run_source, io, interp):
        run_source("10 FOR I = 10 TO 1 STEP -3\n20 PRINT I\n30 NEXT")
        assert io.output == "10\n7\n4\n1\n"
        assert value_of(interp, "I").number == -2

    def test_fractional_step(self, run_source, io):
        run_source("10 FOR X = 0 TO 1 STEP 0.5\n20 PRINT X\n30 NEXT X")
        assert io.output == "0\n0.5\n1\n"

    def test_body_runs_once_when_start_past_limit(self, run_source, io):
        run_source("10 FOR I = 5 TO 1\n20 PRINT I\n30 NEXT I")
        assert io.output == "5\n"

    def test_nested_loops(self, run_source, io):
        source = "\n".join([
            "10 FOR I = 1 TO 2",
            "20 FOR J = 1 TO 2",
            "30 PRINT I * 10 + J",
            "40 NEXT J",
            "50 NEXT I",
        ])
        run_source(source)
        assert io.output == "11\n12\n21\n22\n"

    def test_next_without_for(self, run_source):
        result = run_source("10 NEXT")
        assert result.error_kind == "StackError"
        assert result.error == "NEXT without FOR"

    def test_next_variable_mismatch(self, run_source):
        result = run_source("10 FOR I = 1 TO 2\n20 NEXT J")
        assert result.error_kind == "StackError"
        assert result.line_number == 20

    def test_for_overflow(self, run_source):
        result = run_source("10 FOR I = 1 TO 2\n20 GOTO 10")
        assert result.error_kind == "StackError"
        assert result.error == "FOR stack overflow"

    def test_for_without_to(self, run_source):
        result = run_source("10 FOR I = 1 STEP 2 3")
        assert result.error_kind == "SyntaxError"
        assert result.error == "FOR without TO"

    def test_for_text_start(self, run_source):
        result = run_source('10 FOR I = "A" TO 3')
        assert result.error_kind == "TypeError"

    def test_limit_fixed_at_entry(self, run_source, io):
        run_source("10 N = 2\n20 FOR I = 1 TO N\n30 N = 10\n40 PRINT I\n50 NEXT I")
        assert io.output == "1\n2\n"


class TestEndAndErrors:
    """Tests for END/STOP and run-halting errors."""

    def test_end_halts(self, run_source, io):
        result = run_source('10 END\n20 PRINT "X"')
        assert result.success
        assert result.status == RunStatus.HALTED_NORMAL
        assert io.output == ""

    def test_stop_halts(self, run_source, io):
        run_source('10 STOP\n20 PRINT "X"')
        assert io.output == ""

    def test_falls_off_end(self, run_source):
        result = run_source("10 A = 1\n20 B = 2")
        assert result.success
        assert result.status == RunStatus.HALTED_NORMAL
        assert result.steps == 2

    def test_empty_program(self, interp):
        result = interp.run_program()
        assert result.success
        assert result.steps == 0

    def test_division_error_reports_line(self, run_source):
        result = run_source("10 A = 1\n20 PRINT 1 / 0")
        assert result.error_kind == "RangeError"
        assert result.line_number == 20
        assert result.status == RunStatus.HALTED_ERROR

    def test_mod_error_reports_line(self, run_source):
        result = run_source("10 PRINT 1 MOD 0")
        assert result.error_kind == "RangeError"
        assert result.line_number == 10

    def test_undefined_variable(self, run_source):
        result = run_source("10 PRINT X")
        assert result.error_kind == "NameError"
        assert result.error == "Undefined variable: X"

    def test_effects_before_error_stand(self, run_source, interp):
        run_source("10 X = 1\n20 Y = 1 / 0\n30 X = 2")
        variables = dict(interp.get_variables())
        assert variables["X"].number == 1
        assert "Y" not in variables

    @pytest.mark.parametrize("keyword", ["DIM", "DATA", "READ", "RESTORE", "DEF", "ON"])
    def test_unsupported_statements(self, run_source, keyword):
        result = run_source(f"10 {keyword} A")
        assert result.error_kind == "SyntaxError"
        assert result.error == f"Unsupported statement: {keyword}"

    def test_direct_command_in_program(self, run_source):
        result = run_source("10 RUN")
        assert result.error == "RUN is a direct command"

    def test_stray_keyword(self, run_source):
        result = run_source("10 THEN")
        assert result.error == "Unexpected keyword: THEN"

    def test_invalid_statement(self, run_source):
        result = run_source("10 5 + 5")
        assert result.error_kind == "SyntaxError"

    def test_unterminated_string_fails_at_run(self, run_source):
        result = run_source('10 PRINT "abc')
        assert result.error_kind == "LexError"
        assert result.error == "Unterminated string"
        assert result.line_number == 10

    def test_rem_ignores_rest_of_line(self, run_source, io):
        result = run_source('10 REM "unterminated and 1/0\n20 PRINT "OK"')
        assert result.success
        assert io.output == "OK\n"

    def test_empty_statement_is_noop(self, interp, io):
        interp.load_line(10, "")
        interp.load_line(20, 'PRINT "X"')
        assert interp.run_program().success
        assert io.output == "X\n"

    def test_variable_capacity(self):
        interp = Interpreter(config=ExecutionConfig(max_variables=2), io=BufferedIO())
        load_source(interp, "10 A = 1\n20 B = 2\n30 C = 3")
        result = interp.run_program()
        assert result.error_kind == "CapacityError"
        assert result.line_number == 30


class TestSampleProgram:
    """Tests for a complete program."""

    def test_sum_of_squares(self, run_source, io, sample_program):
        result = run_source(sample_program)
        assert result.success
        assert io.output == "TOTAL55\nOK\n"
