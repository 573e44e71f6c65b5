"""Tests for action policy: skip rules and installed-flag transitions."""

import pytest

from tkit.core.actions import run_action
from tkit.core.errors import CommandFailure, NotFound
from tkit.core.executor import CommandExecutor
from tkit.core.types import ActionKind
from tests.fakes.shell import FakeShell
from tests.test_utils.registry_helpers import make_store, make_tool


def test_successful_install_marks_tool_installed() -> None:
    store = make_store(make_tool("git", install=("apt install git",)))
    shell = FakeShell()

    outcome = run_action(store, CommandExecutor(shell), "git", ActionKind.INSTALL)

    assert outcome.skipped is False
    assert outcome.tool.installed is True
    assert store.get("git").installed is True
    assert shell.executed_commands == ["apt install git"]


def test_failed_install_leaves_installed_flag_unchanged() -> None:
    store = make_store(make_tool("git", install=("apt update", "apt install git")))
    shell = FakeShell(command_results={"apt install git": (100, [], ["E: locked"])})

    with pytest.raises(CommandFailure) as exc_info:
        run_action(store, CommandExecutor(shell), "git", ActionKind.INSTALL)

    assert exc_info.value.index == 1
    assert exc_info.value.exit_code == 100
    assert exc_info.value.command == "apt install git"
    assert store.get("git").installed is False


def test_successful_remove_clears_installed_flag() -> None:
    store = make_store(make_tool("git", installed=True, remove=("apt remove git",)))

    run_action(store, CommandExecutor(FakeShell()), "git", ActionKind.REMOVE)

    assert store.get("git").installed is False


@pytest.mark.parametrize("action", [ActionKind.UPDATE, ActionKind.RUN])
def test_update_and_run_never_change_installed_flag(action: ActionKind) -> None:
    store = make_store(make_tool("git", installed=True, update=("u",), run=("r",)))

    run_action(store, CommandExecutor(FakeShell()), "git", action)

    assert store.get("git").installed is True


@pytest.mark.parametrize(
    ("installed", "action"),
    [(True, ActionKind.INSTALL), (False, ActionKind.REMOVE), (False, ActionKind.UPDATE)],
)
def test_redundant_actions_are_skipped(installed: bool, action: ActionKind) -> None:
    store = make_store(
        make_tool("git", installed=installed, install=("i",), remove=("r",), update=("u",))
    )
    shell = FakeShell()

    outcome = run_action(store, CommandExecutor(shell), "git", action)

    assert outcome.skipped is True
    assert outcome.report is None
    assert shell.executed_commands == []


def test_force_runs_a_skipped_action() -> None:
    store = make_store(make_tool("git", installed=True, install=("reinstall",)))
    shell = FakeShell()

    outcome = run_action(store, CommandExecutor(shell), "git", ActionKind.INSTALL, force=True)

    assert outcome.skipped is False
    assert shell.executed_commands == ["reinstall"]


def test_unknown_tool_raises_not_found() -> None:
    with pytest.raises(NotFound):
        run_action(make_store(), CommandExecutor(FakeShell()), "ghost", ActionKind.RUN)
