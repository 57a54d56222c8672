"""Unit tests for utility functions (scaffold_next_pro.utils).

Tests cover:
- run_command (success, failure, capture, cwd, missing program, timeout)
- CommandResult.check / CommandError
- write_text / load_json / dump_json
- Rich output helpers
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from scaffold_next_pro.utils import (
    CommandError,
    CommandResult,
    dump_json,
    load_json,
    print_error,
    print_step,
    print_success,
    print_warning,
    run_command,
    write_text,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    async def test_captures_stdout(self):
        result = await run_command([sys.executable, "-c", "print('hello')"], capture=True)
        assert result.ok
        assert result.stdout == "hello"

    @pytest.mark.unit
    async def test_failed_command(self):
        result = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"],
            capture=True,
        )
        assert result.returncode == 3
        assert not result.ok
        assert result.stderr == "boom"

    @pytest.mark.unit
    async def test_inherited_streams_capture_nothing(self):
        result = await run_command([sys.executable, "-c", "print('visible')"])
        assert result.ok
        assert result.stdout == ""

    @pytest.mark.unit
    async def test_command_with_cwd(self, tmp_path: Path):
        result = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"],
            cwd=tmp_path,
            capture=True,
        )
        assert Path(result.stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    async def test_missing_program_reports_127(self):
        result = await run_command(["definitely-not-a-real-binary-xyz"], capture=True)
        assert result.returncode == 127
        assert result.stderr

    @pytest.mark.unit
    async def test_timeout(self):
        result = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"],
            capture=True,
            timeout=0.5,
        )
        assert result.returncode == -1
        assert "timed out" in result.stderr

    @pytest.mark.unit
    async def test_records_command(self):
        result = await run_command([sys.executable, "-c", "pass"], capture=True)
        assert result.command == (sys.executable, "-c", "pass")


# ---------------------------------------------------------------------------
# CommandResult
# ---------------------------------------------------------------------------


class TestCommandResult:
    @pytest.mark.unit
    def test_check_returns_self_on_success(self):
        result = CommandResult(("yarn", "add", "zod"), 0)
        assert result.check() is result

    @pytest.mark.unit
    def test_check_raises_on_failure(self):
        result = CommandResult(("yarn", "add", "zod"), 1, stderr="network down")
        with pytest.raises(CommandError) as exc_info:
            result.check()
        assert exc_info.value.returncode == 1
        assert exc_info.value.command == "yarn add zod"
        assert "network down" in str(exc_info.value)

    @pytest.mark.unit
    def test_command_line(self):
        assert CommandResult(("git", "init"), 0).command_line == "git init"


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


class TestFileHelpers:
    @pytest.mark.unit
    def test_write_text_creates_parents(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c.txt"
        write_text(target, "content")
        assert target.read_text(encoding="utf-8") == "content"

    @pytest.mark.unit
    def test_load_json(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text('{"name": "my-app"}', encoding="utf-8")
        assert load_json(path) == {"name": "my-app"}

    @pytest.mark.unit
    def test_load_json_rejects_non_object(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_json(path)

    @pytest.mark.unit
    def test_load_json_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_dump_json_format(self):
        text = dump_json({"name": "my-app", "private": True})
        assert text.endswith("\n")
        assert text.startswith('{\n  "name"')
        assert json.loads(text) == {"name": "my-app", "private": True}


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_messages_reach_stdout(self, capsys):
        print_success("all good")
        print_warning("careful")
        print_error("broken [not markup]")
        out = capsys.readouterr().out
        assert "all good" in out
        assert "careful" in out
        assert "broken [not markup]" in out

    @pytest.mark.unit
    def test_print_step(self, capsys):
        print_step("install", "Installing dependencies")
        assert "Installing dependencies" in capsys.readouterr().out
