import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from whilelang import while_cli

FACTORIAL = """\
n := 10;
f := 1;
while n > 1 do
   f := n * f;
   n := n - 1;
done
"""

SRC_DIR = Path(__file__).resolve().parent.parent / "src"


def test_run_while_string_input_prints_json(capsys: pytest.CaptureFixture[str]) -> None:
    while_cli.run_while(source="x := 1;", is_string=True)
    out = capsys.readouterr().out.strip()
    assert json.loads(out) == {
        "kind": "program",
        "statements": [
            {
                "kind": "assign",
                "variable": "x",
                "expr": {"kind": "constant", "value": 1},
            }
        ],
    }


def test_run_while_file_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "factorial.while"
    file_path.write_text(FACTORIAL)
    while_cli.run_while(source=str(file_path))
    data = json.loads(capsys.readouterr().out)
    assert [s["kind"] for s in data["statements"]] == ["assign", "assign", "while"]


def test_run_while_pretty_output(capsys: pytest.CaptureFixture[str]) -> None:
    while_cli.run_while(source="skip;", is_string=True, pretty=True)
    out = capsys.readouterr().out
    assert "Abstract Syntax Tree" in out
    assert '  "statements": [' in out


def test_run_while_tokens_only(capsys: pytest.CaptureFixture[str]) -> None:
    while_cli.run_while(source="x := 1 @", is_string=True, tokens_only=True)
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Token(IDENT, 'x')",
        "Token(ASSIGN)",
        "Token(NUMBER, 1)",
        "Token(UNKNOWN, '@')",
    ]


def test_run_while_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output_path = tmp_path / "out.json"
    while_cli.run_while(
        source="skip;", is_string=True, out=str(output_path), pretty=True
    )
    assert json.loads(output_path.read_text()) == {
        "kind": "program",
        "statements": [{"kind": "skip"}],
    }
    assert f"(wrote to {output_path})" in capsys.readouterr().out


def test_run_while_rejects_non_while_file() -> None:
    with pytest.raises(ValueError, match="Only .while files are supported"):
        while_cli.run_while(source="program.txt")


def test_run_while_propagates_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        while_cli.run_while(source="x := ;", is_string=True)


def test_main_string_source(capsys: pytest.CaptureFixture[str]) -> None:
    while_cli.main(["-s", "if x = 0 then skip; fi"])
    data = json.loads(capsys.readouterr().out)
    assert data["statements"][0]["else_branch"] is None


def test_main_tokens_flag(capsys: pytest.CaptureFixture[str]) -> None:
    while_cli.main(["-s", "--tokens", "whilex"])
    assert capsys.readouterr().out.strip() == "Token(IDENT, 'whilex')"


def test_main_syntax_error_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        while_cli.main(["-s", ""])
    assert excinfo.value.code == 1
    assert "Syntax error:" in capsys.readouterr().err


def test_main_missing_file_exits_1(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        while_cli.main([str(tmp_path / "missing.while")])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_main_wrong_extension_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        while_cli.main(["notes.txt"])
    assert excinfo.value.code == 1
    assert "Only .while files are supported" in capsys.readouterr().err


def test_main_deep_nesting_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    source = "x := " + "(" * 5000 + "1" + ")" * 5000 + ";"
    with pytest.raises(SystemExit) as excinfo:
        while_cli.main(["-s", source])
    assert excinfo.value.code == 1
    assert "Syntax error: Program nested too deeply" in capsys.readouterr().err


def test_main_requires_source() -> None:
    with pytest.raises(SystemExit) as excinfo:
        while_cli.main([])
    assert excinfo.value.code == 2


def test_cli_runs_as_module(tmp_path: Path) -> None:
    file_path = tmp_path / "factorial.while"
    file_path.write_text(FACTORIAL)
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
    )
    result = subprocess.run(
        [sys.executable, "-m", "whilelang.while_cli", str(file_path)],
        capture_output=True,
        text=True,
        env=env,
    )
    assert result.returncode == 0
    assert json.loads(result.stdout)["statements"][2]["kind"] == "while"


def test_cli_module_reports_syntax_error(tmp_path: Path) -> None:
    file_path = tmp_path / "broken.while"
    file_path.write_text("while true do skip;")
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
    )
    result = subprocess.run(
        [sys.executable, "-m", "whilelang.while_cli", str(file_path)],
        capture_output=True,
        text=True,
        env=env,
    )
    assert result.returncode == 1
    assert "Syntax error: Expected DONE" in result.stderr
