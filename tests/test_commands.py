# tests/test_commands.py

from __future__ import annotations

from conftasks.cli.commands import CommandRegistry, describe_task, registry
from conftasks.core.state import BoardState
from conftasks.schedule.models import Task
from conftasks.schedule.refresher import refresh_once

from .fakes import local


def test_command_registry_routes_and_aliases(state: BoardState) -> None:
    reg = CommandRegistry()
    called = {"n": 0}

    def handler(state, args):
        called["n"] += 1
        return f"args={args}"

    reg.register("ping", handler, "ping", aliases=["p"])

    assert reg.handle(state, "/ping a b") == "args=['a', 'b']"
    assert reg.handle(state, "/P") == "args=[]"
    assert called["n"] == 2
    assert "/ping - ping" in reg.build_help()


def test_command_registry_unknown_and_non_command(state: BoardState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_now_command_renders_buckets(state: BoardState) -> None:
    out = registry.handle(state, "/now") or ""
    assert "NOW (1):" in out and "Setup week" in out
    assert "NEXT UP (1):" in out and "Workshop" in out
    assert "FUTURE (1):" in out and "Teardown" in out
    assert "PAST (1):" in out and "Kickoff" in out


def test_now_mine_needs_a_user(state: BoardState) -> None:
    assert "No user set" in (registry.handle(state, "/now mine") or "")
    registry.handle(state, "/whoami Bob")
    out = registry.handle(state, "/now mine") or ""
    # Bob: "Everyone" week task, his Staff team's teardown, his own kickoff.
    assert "Setup week" in out and "Teardown" in out and "Kickoff" in out
    assert "Workshop" not in out


def test_find_sets_filters_and_clear(state: BoardState) -> None:
    out = registry.handle(state, "/find day=Friday") or ""
    assert "Filtered tasks (1):" in out and "Teardown" in out
    assert state.filters.day == "Friday"

    out = registry.handle(state, "/find clear") or ""
    assert out == "Filters cleared."
    assert not state.filters.has_active_filters

    assert "Unknown filter" in (registry.handle(state, "/find colour=red") or "")


def test_mine_lists_sorted_by_start(state: BoardState) -> None:
    out = registry.handle(state, "/mine Alice Smith") or ""
    lines = out.splitlines()
    assert lines[0] == "Tasks for Alice Smith (2):"
    assert "Setup week" in lines[1]
    assert "Workshop" in lines[2]


def test_describe_task_levels(state: BoardState, workshop: Task) -> None:
    assert describe_task(workshop, state) == "[Wed, Nov 5 2:00 PM-3:30 PM] Workshop (Alice Smith)"
    assert describe_task(Task(week="CW45", title="Setup"), state) == "[Nov 3 – Nov 9] Setup"
    assert describe_task(Task(title="Loose end", location="Lobby"), state) == "[unscheduled] Loose end @ Lobby"


def test_people_command(state: BoardState) -> None:
    out = registry.handle(state, "/people badge") or ""
    assert "Bob - Staff, Badges" in out
    assert registry.handle(state, "/people zzz") == "No matching people."


def test_console_loop_handles_commands_and_plain_search(state: BoardState, monkeypatch, capsys) -> None:
    from conftasks.cli.console import run_console_loop

    lines = iter(["/whoami Ann", "", "kickoff", "/exit", "/now"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(lines))

    run_console_loop(state)

    out = capsys.readouterr().out
    assert state.user_name == "Ann"
    assert "Current user set to Ann." in out
    # Plain text goes through /find as a free-text search.
    assert "Filtered tasks (1):" in out and "Kickoff" in out
    assert state.filters.search == "kickoff"


def test_names_command(state: BoardState) -> None:
    assert registry.handle(state, "/names") == "Names (4): Alice Smith, Bob, Everyone, Staff"
    state.tasks = []
    assert registry.handle(state, "/names") == "No names on the board."


def test_status_reports_last_background_refresh(state: BoardState) -> None:
    assert registry.handle(state, "/status") == "No background refresh yet."

    state.last_refresh = local(2025, 11, 5, 13, 0)
    state.last_buckets = refresh_once(state, state.last_refresh, state.calendar)
    out = registry.handle(state, "/status") or ""
    assert out.startswith("Last refresh 2025-11-05T18:00:00+00:00:")
    assert "NOW=1, NEXT UP=1, LATER TODAY=0, FUTURE=1, PAST=1" in out


def test_console_loop_survives_failing_plain_text_search(state: BoardState, monkeypatch, capsys) -> None:
    from conftasks.cli.console import run_console_loop

    def boom(state, args):
        raise RuntimeError("search backend down")

    monkeypatch.setitem(registry._handlers, "find", boom)
    lines = iter(["kickoff", "/whoami Bob", "/exit"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(lines))

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Command failed; see the log for details." in out
    assert "Current user set to Bob." in out
