# tests/test_registry.py
from __future__ import annotations

from ledger_shell.commands import command_list
from ledger_shell.registry import CommandRegistry


class NamedCommand:
    def __init__(self, *names: str) -> None:
        self.names = list(names)
        self.help_text = ""

    def execute(self, args, ledger, app):
        raise AssertionError("not dispatched in registry tests")


def test_every_alias_maps_to_the_same_instance() -> None:
    cmd = NamedCommand("account", "acc", "ac")
    reg = CommandRegistry([cmd])

    assert reg.get("account") is cmd
    assert reg.get("acc") is cmd
    assert reg.get("ac") is cmd
    assert len(reg) == 1


def test_missing_name_returns_none() -> None:
    reg = CommandRegistry([NamedCommand("load")])
    assert reg.get("store") is None
    assert "store" not in reg
    assert "load" in reg


def test_lookup_is_exact() -> None:
    reg = CommandRegistry([NamedCommand("load")])
    assert reg.get("Load") is None
    assert reg.get(" load") is None


def test_later_registration_wins_on_overlap() -> None:
    first = NamedCommand("exit", "x")
    second = NamedCommand("xtra", "x")
    reg = CommandRegistry([first, second])

    assert reg.get("x") is second
    assert reg.get("exit") is first


def test_iteration_keeps_registration_order_once_each() -> None:
    a = NamedCommand("a", "aa")
    b = NamedCommand("b")
    reg = CommandRegistry([a, b])

    assert list(reg) == [a, b]
    assert "aa" in reg


def test_builtin_command_names() -> None:
    reg = CommandRegistry(command_list())

    assert [c.names[0] for c in reg] == [
        "account",
        "category",
        "exit",
        "load",
        "store",
        "transaction",
    ]
    for alias, primary in [
        ("acc", "account"),
        ("ac", "account"),
        ("cat", "category"),
        ("ex", "exit"),
        ("quit", "exit"),
        ("save", "store"),
        ("tr", "transaction"),
    ]:
        assert reg.get(alias) is reg.get(primary)
