"""Parser for replay scripts.

One command per line::

    # comment
    upsert <id> <serial>
    remove <id>
    apply
    rebuild
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

_ARITY: dict[str, int] = {
    "upsert": 2,
    "remove": 1,
    "apply": 0,
    "rebuild": 0,
}


class ScriptError(ValueError):
    """A replay script line could not be parsed."""

    def __init__(self, line_no: int, message: str) -> None:
        super().__init__(f"line {line_no}: {message}")
        self.line_no = line_no


@dataclass(frozen=True)
class ScriptCommand:
    """A single parsed script line."""

    line_no: int
    name: str
    args: tuple[str, ...] = ()


def parse_script(lines: Iterable[str]) -> list[ScriptCommand]:
    """Parse script lines, skipping blanks and ``#`` comments.

    Raises:
        ScriptError: On an unknown command or a wrong argument count.
    """
    commands: list[ScriptCommand] = []
    for line_no, raw in enumerate(lines, start=1):
        text = raw.split("#", 1)[0].strip()
        if not text:
            continue

        name, *args = text.split()
        name = name.lower()
        if name not in _ARITY:
            raise ScriptError(line_no, f"unknown command '{name}'")
        if len(args) != _ARITY[name]:
            raise ScriptError(
                line_no, f"'{name}' takes {_ARITY[name]} argument(s), got {len(args)}"
            )
        commands.append(ScriptCommand(line_no=line_no, name=name, args=tuple(args)))
    return commands
