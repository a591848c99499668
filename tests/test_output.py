"""Tests for the output system."""

from __future__ import annotations

import json

import pytest

from natayark.models import Settings
from natayark.output import (
    OutputFormat,
    OutputManager,
    debug,
    flatten,
    get_output,
    reset_output,
    set_output,
)


class TestFlatten:
    def test_nested_keys_become_dot_paths(self) -> None:
        flat = flatten(Settings().model_dump(mode="json"))
        assert "endpoints.oauth2_url" in flat
        assert flat["request.timeout"] == 30
        assert not any(isinstance(v, dict) for v in flat.values())

    def test_flat_record_is_unchanged(self) -> None:
        assert flatten({"user": "alice", "session": "s1"}) == {"user": "alice", "session": "s1"}


class TestPrintRecord:
    def test_json_keeps_nesting(self, capsys: pytest.CaptureFixture[str]) -> None:
        record = {"request": {"timeout": 5.0, "verify_ssl": True}}
        OutputManager(format=OutputFormat.JSON, no_color=True).print_record(record)
        captured = capsys.readouterr()
        assert json.loads(captured.out) == record
        assert captured.err == ""

    def test_plain_is_tab_separated(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_record(
            {"user": "alice", "session": "s1"}
        )
        assert capsys.readouterr().out == "user\talice\nsession\ts1\n"

    def test_plain_flattens_settings(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_record(
            {"request": {"verify_ssl": False, "user_agent": None}}
        )
        assert capsys.readouterr().out == "request.verify_ssl\tfalse\nrequest.user_agent\t\n"

    def test_rich_renders_a_key_value_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.RICH, no_color=True).print_record(
            {"user": "alice", "request": {"timeout": 5.0}}
        )
        out = capsys.readouterr().out
        assert "Key" in out
        assert "alice" in out
        assert "request.timeout" in out

    def test_auto_resolves_to_plain_when_piped(self) -> None:
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN


class TestDiagnostics:
    def test_info_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(no_color=True).info("hello")
        captured = capsys.readouterr()
        assert captured.err == "hello\n"
        assert captured.out == ""

    def test_quiet_suppresses_info_but_not_errors(self, capsys: pytest.CaptureFixture[str]) -> None:
        manager = OutputManager(no_color=True, quiet=True)
        manager.info("hidden")
        manager.success("hidden")
        manager.suggest("hidden")
        manager.error("boom")
        assert capsys.readouterr().err == "Error: boom\n"

    def test_suggest_is_prefixed(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(no_color=True).suggest("natayark login")
        assert capsys.readouterr().err == "→ natayark login\n"

    def test_debug_only_when_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(no_color=True).debug("hidden")
        OutputManager(no_color=True, verbose=True).debug("shown")
        assert capsys.readouterr().err == "[debug] shown\n"

    def test_no_color_env_disables_markup(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        OutputManager().error("boom")
        assert capsys.readouterr().err == "Error: boom\n"


class TestGlobalInstance:
    def test_set_and_reset(self, capsys: pytest.CaptureFixture[str]) -> None:
        manager = OutputManager(no_color=True, verbose=True)
        set_output(manager)
        assert get_output() is manager
        debug("via helper")
        assert "[debug] via helper" in capsys.readouterr().err

        reset_output()
        assert get_output() is not manager
