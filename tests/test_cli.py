from click.testing import CliRunner

from frothy import __version__
from frothy.cli import format_error, main
from frothy.errors import FrothyUnboundName
from frothy.reader.lexer import lex


def test_runs_file(tmp_path, area_program):
    path = tmp_path / "area.fy"
    path.write_text(area_program, encoding="utf-8")
    result = CliRunner().invoke(main, [str(path)])
    assert result.exit_code == 0
    assert result.output == "78.53981633974483\n"


def test_files_and_commands_share_bindings(tmp_path):
    path = tmp_path / "defs.fy"
    path.write_text("double { n 2 * } fn =\n", encoding="utf-8")
    result = CliRunner().invoke(main, [str(path), "-c", "n 21 =", "-c", "print_arg double call = print call"])
    assert result.exit_code == 0
    assert result.output == "42\n"


def test_error_exit_code_and_message():
    result = CliRunner().invoke(main, ["-c", "1 0 /"])
    assert result.exit_code == 1
    assert "error[ArithmeticError] at <command-1>:1:5: division by zero" in result.output


def test_lex_error_is_reported():
    result = CliRunner().invoke(main, ["-c", "1 $"])
    assert result.exit_code == 1
    assert "error[LexError] at <command-1>:1:3" in result.output


def test_strict_flag():
    result = CliRunner().invoke(main, ["--strict", "-c", "1 2"])
    assert result.exit_code == 1
    assert "error[StackNotEmpty]" in result.output


def test_max_depth_flag():
    result = CliRunner().invoke(main, ["--max-depth", "5", "-c", "f { f call } fn = f call"])
    assert result.exit_code == 1
    assert "error[RecursionLimit]" in result.output


def test_missing_file():
    result = CliRunner().invoke(main, ["does-not-exist.fy"])
    assert result.exit_code == 2


def test_repl_without_arguments():
    result = CliRunner().invoke(main, [], input="1 2 +\n")
    assert result.exit_code == 0
    assert "<1> 3" in result.output


def test_repl_continues_blocks_and_survives_errors():
    lines = "\n".join(["f {", "  1 }", "fn =", "f call", "1 0 /", "2", "exit", "99"]) + "\n"
    result = CliRunner().invoke(main, ["--repl"], input=lines)
    assert result.exit_code == 0
    assert "<2> f { 1 }" in result.output
    assert "<1> 1" in result.output
    assert "error[ArithmeticError]" in result.output
    assert "<2> 1 2" in result.output
    assert "99" not in result.output


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert __version__ in result.output


def test_format_error_without_position():
    assert format_error(FrothyUnboundName("x"), "prog.fy") == "error[UnboundName] in prog.fy: undefined variable 'x'"
    tok = next(lex("  x"))
    assert format_error(FrothyUnboundName("x", tok), "prog.fy") == "error[UnboundName] at prog.fy:1:3: undefined variable 'x'"
