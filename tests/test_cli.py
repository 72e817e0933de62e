# tests/test_cli.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

import ledger_shell.cli as cli
from ledger_shell.commands import command_list
from ledger_shell.config import YAMLConfig
from ledger_shell.kernel import Kernel
from ledger_shell.ledger import Ledger
from ledger_shell.ui import ArrowUp, Interrupt, Text


@dataclass
class FakeTerminal:
    """
    Terminal abstraction used by the CLI:
      - get_event() -> InputEvent
      - set_input_buffer(text) -> None
      - write(text) / flush()
      - context manager (raw mode lifetime)
    """

    events: list = field(default_factory=list)
    written: list[str] = field(default_factory=list)
    buffers: list[str] = field(default_factory=list)
    prompt: str = ""
    closed: bool = False

    def get_event(self):
        if not self.events:
            return Interrupt()
        return self.events.pop(0)

    def set_input_buffer(self, text: str) -> None:
        self.buffers.append(text)

    def write(self, text: str) -> int:
        self.written.append(text)
        return len(text)

    def flush(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    @property
    def output(self) -> str:
        return "".join(self.written)


class FakeStore:
    def __init__(self, saved: Ledger | None = None):
        self.saved = saved

    def load_ledger(self) -> Ledger:
        return self.saved or Ledger()

    def store_ledger(self, ledger: Ledger) -> None:
        self.saved = ledger


def _cfg() -> YAMLConfig:
    return YAMLConfig(
        {
            "system": {
                "welcome": {"message": "Hello there\n"},
                "exit": {"message": "Exiting..."},
            }
        }
    )


# -------------------------------------------------------------------
# run_repl
# -------------------------------------------------------------------


def test_run_repl_prints_welcome_and_bye() -> None:
    term = FakeTerminal(events=[Interrupt()])
    kernel = Kernel(terminal=term, store=FakeStore(), commands=command_list(), config=_cfg())

    cli.run_repl(kernel)

    assert term.output == "Hello there\nBye!\n"


def test_run_repl_full_session() -> None:
    term = FakeTerminal(
        events=[
            Text("account --new checking"),
            Text("category --new food"),
            Text('tr checking -4.50 "big lunch" food'),
            Text("account --list"),
            Text("bogus"),
            Text("account"),
            ArrowUp(),
            Text("exit"),
            Text("account --new never"),
        ]
    )
    kernel = Kernel(terminal=term, store=FakeStore(), commands=command_list(), config=_cfg())

    cli.run_repl(kernel)

    out = term.output
    assert "Created account 'checking'" in out
    assert "-$4.50" in out
    assert "Could not find command named 'bogus'" in out
    assert "Syntax Error: account: Missing subcommand" in out
    assert out.endswith("Exiting...\nBye!\n")

    assert term.buffers == ["account"]
    assert kernel.ledger.get_account_by_name("never") is None
    assert kernel.history[0] == "exit"


def test_run_repl_autoload() -> None:
    saved = Ledger()
    saved.add_new_account("from_disk")
    term = FakeTerminal(events=[Text("account --list")])
    kernel = Kernel(terminal=term, store=FakeStore(saved), commands=command_list())

    cli.run_repl(kernel, autoload=True)

    assert "from_disk" in term.output


# -------------------------------------------------------------------
# main
# -------------------------------------------------------------------


@pytest.fixture
def ledger_data_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data = tmp_path / "ledger_data_home"
    monkeypatch.setenv("LEDGER_DATA_HOME", str(data))
    return data


def _install_terminal(monkeypatch: pytest.MonkeyPatch, term: FakeTerminal) -> None:
    def factory(prompt: str = "") -> FakeTerminal:
        term.prompt = prompt
        return term

    monkeypatch.setattr(cli, "TerminalInterface", factory)


def test_main_creates_ledger_file_and_saves(
    ledger_data_home: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    term = FakeTerminal(
        events=[Text("account --new checking"), Text("save"), Text("exit")]
    )
    _install_terminal(monkeypatch, term)

    cli.main()

    db_path = ledger_data_home / "ledger_shell" / "ledger.db"
    assert db_path.exists()
    assert "Saved!" in term.output
    assert term.closed
    assert ">" in term.prompt

    # Second session autoloads what the first one saved
    term2 = FakeTerminal(events=[Text("account --list")])
    _install_terminal(monkeypatch, term2)

    cli.main()

    assert "checking" in term2.output


def test_main_fatal_error_exits_with_status_1(
    ledger_data_home: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def broken(prompt: str = ""):
        raise OSError("not a terminal")

    monkeypatch.setattr(cli, "TerminalInterface", broken)

    with pytest.raises(SystemExit) as exc_info:
        cli.main()

    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert "Encountered fatal error: not a terminal" in err
    assert "Exiting..." in err

    crash_log = ledger_data_home / "ledger_shell" / "logs" / "crash.log"
    assert "error=OSError: not a terminal" in crash_log.read_text(encoding="utf-8")


def test_main_survives_damaged_ledger_file(
    ledger_data_home: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    db_path = ledger_data_home / "ledger_shell" / "ledger.db"
    db_path.parent.mkdir(parents=True)
    db_path.write_bytes(b"\x00\xffnot sqlite" * 36)

    term = FakeTerminal(events=[Text("load"), Text("save"), Text("exit")])
    _install_terminal(monkeypatch, term)

    cli.main()

    assert "Could not prepare ledger file" in capsys.readouterr().err
    out = term.output
    assert "Could not load saved data: Version mismatch" in out
    assert "load: Version mismatch, cannot load file" in out
    assert "Failed to save data!" in out
    assert out.endswith("Exiting...\nBye!\n")
    assert "[ERROR] Unhandled exception" not in out
