# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Raw terminal input driver.

Turns the keystroke stream into discrete input events:
  - Enter submits the edit buffer as a Text event
  - Up / Down are reported immediately (history paging is the kernel's job)
  - Ctrl+C, Ctrl+D on an empty line and end of input become Interrupt

Key decoding and raw mode come from prompt_toolkit's Input layer; screen
writes go through its Output layer so tests can capture them.
"""

from __future__ import annotations

import select
from collections import deque
from contextlib import ExitStack
from dataclasses import dataclass

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import Output, create_output

# How long a lone ESC may wait for the rest of an escape sequence (seconds)
ESCAPE_TIMEOUT = 0.05

DEFAULT_PROMPT = "> "

_SUBMIT_KEYS = (Keys.ControlM, Keys.ControlJ)


# ----------------------------
# Input events
# ----------------------------


class InputEvent:
    """Base class for events produced by TerminalInterface.get_event()."""

    __slots__ = ()


@dataclass(frozen=True)
class Text(InputEvent):
    content: str


@dataclass(frozen=True)
class ArrowUp(InputEvent):
    pass


@dataclass(frozen=True)
class ArrowDown(InputEvent):
    pass


@dataclass(frozen=True)
class Interrupt(InputEvent):
    pass


# ----------------------------
# Terminal driver
# ----------------------------


class TerminalInterface:
    """
    Single-line editor over a raw-mode terminal.

    The terminal stays in raw mode from construction until close(); use it
    as a context manager so the mode is restored on every exit path.
    """

    def __init__(
        self,
        input: Input | None = None,
        output: Output | None = None,
        prompt: str = DEFAULT_PROMPT,
    ) -> None:
        self._input = input if input is not None else create_input()
        self._output = output if output is not None else create_output()
        self.prompt = prompt
        self.input_buffer = ""

        # Keys already decoded but not consumed yet (pastes arrive in bulk)
        self._pending: deque[KeyPress] = deque()

        self._resources = ExitStack()
        self._resources.enter_context(self._input.raw_mode())
        self._closed = False

    # ---------- lifecycle ----------

    def close(self) -> None:
        """Restore the terminal mode. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._resources.close()

    def __enter__(self) -> TerminalInterface:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---------- public API ----------

    def get_event(self) -> InputEvent:
        """Wait for and return the next user input event.

        Blocks until a key press completes an event. Plain characters and
        backspace only edit the buffer and are never returned.
        """
        while True:
            self._redraw()

            key_press = self._next_key()
            if key_press is None:
                # Input stream is gone, most likely we're shutting down
                return Interrupt()

            key = key_press.key

            if key in _SUBMIT_KEYS:
                event = Text(self.input_buffer.strip())
                self.input_buffer = ""
                self._output.write_raw("\r\n")
                self._output.flush()
                return event

            if key == Keys.Up:
                return ArrowUp()

            if key == Keys.Down:
                return ArrowDown()

            if key == Keys.ControlC:
                return Interrupt()

            if key == Keys.ControlD:
                if not self.input_buffer:
                    return Interrupt()
                continue

            if key == Keys.Backspace:
                self.input_buffer = self.input_buffer[:-1]
                continue

            if key == Keys.BracketedPaste:
                self.input_buffer += "".join(
                    ch for ch in key_press.data if ch.isprintable()
                )
                continue

            if not isinstance(key, Keys) and key.isprintable():
                self.input_buffer += key

            # Anything else is ignored

    def set_input_buffer(self, text: str) -> None:
        """Replace the in-progress line and redraw it."""
        self.input_buffer = text
        self._redraw()

    def write(self, text: str) -> int:
        """Output sink used by commands while the terminal is raw.

        Raw mode does not translate newlines, so every ``\\n`` is sent as
        ``\\r\\n``.
        """
        self._output.write_raw(text.replace("\n", "\r\n"))
        self._output.flush()
        return len(text)

    def flush(self) -> None:
        self._output.flush()

    # ---------- internals ----------

    def _redraw(self) -> None:
        out = self._output
        out.write_raw("\r")
        out.erase_end_of_line()
        out.write_raw(self.prompt)
        out.write(self.input_buffer)
        out.flush()

    def _next_key(self) -> KeyPress | None:
        """Return the next decoded key, or None once input has ended."""
        while not self._pending:
            if self._input.closed:
                # Hand over anything the parser was still holding back
                self._pending.extend(self._input.flush_keys())
                if not self._pending:
                    return None
                break

            fd = self._input.fileno()
            select.select([fd], [], [])
            keys = self._input.read_keys()

            if not keys and not self._input.closed:
                # Possibly a lone ESC waiting for a sequence that never comes
                ready, _, _ = select.select([fd], [], [], ESCAPE_TIMEOUT)
                if not ready:
                    keys = self._input.flush_keys()

            self._pending.extend(keys)

        return self._pending.popleft()
