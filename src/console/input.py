"""
Input sources for the interactive session.

The session only depends on the InputSource protocol, so tests drive it
with ScriptedInput instead of a real terminal.
"""

from typing import Iterable, Optional, Protocol

import click


class InputSource(Protocol):
    def read(self, prompt: str) -> Optional[str]:
        """Return the next line of input, or None when input is exhausted."""
        ...


class ConsoleInput:
    """Reads from the terminal through click."""

    def read(self, prompt: str) -> Optional[str]:
        try:
            return click.prompt(
                prompt.rstrip(": "),
                default="",
                show_default=False,
                prompt_suffix=": ",
            )
        except click.Abort:
            # Ctrl-D / Ctrl-C
            return None


class ScriptedInput:
    """Feeds a fixed sequence of lines, then reports end of input."""

    def __init__(self, lines: Iterable[str]):
        self._lines = list(lines)
        self._position = 0
        self.prompts: list[str] = []

    def read(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        if self._position >= len(self._lines):
            return None
        line = self._lines[self._position]
        self._position += 1
        return line

    @property
    def remaining(self) -> int:
        return len(self._lines) - self._position
