"""Host collaborators: the only way the core reaches the outside world.

The machine calls a host for three things:
- read_line(): one line of input, without its newline; raises EndOfInput.
- write(text): output, written as-is (callers add newlines).
- load_source(designator): source text for `load`.

ConsoleHost talks to the terminal and the file system; BufferHost serves
scripted input and captures output, for tests and embedding.
"""

from __future__ import annotations

import logging
import sys
from io import StringIO
from pathlib import Path
from typing import Iterable, Optional, Protocol, TextIO

from tack.config import SOURCE_SUFFIX, get_source_roots
from tack.errors import EndOfInput, SourceLoadError

logger = logging.getLogger(__name__)

STDIN_DESIGNATOR = "-"


class Host(Protocol):
    def read_line(self) -> str: ...

    def write(self, text: str) -> None: ...

    def load_source(self, designator: str) -> str: ...


def resolve_source(designator: str) -> Optional[Path]:
    """Find a source file: as given, then under each TACK_PATH root, with or without .tk"""
    path = Path(designator)
    candidates = [path]
    if path.suffix != SOURCE_SUFFIX:
        candidates.append(path.with_name(path.name + SOURCE_SUFFIX))
    if path.is_absolute():
        roots = [Path()]
    else:
        roots = [Path()] + get_source_roots()
    for root in roots:
        for candidate in candidates:
            full = root / candidate
            if full.is_file():
                return full
    return None


class ConsoleHost:
    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        if self.stdin is sys.stdin and self.stdin.isatty():
            try:
                # Line editing and history for input()
                import readline  # noqa: F401
            except ImportError:
                pass

    def read_line(self) -> str:
        if self.stdin is sys.stdin and self.stdin.isatty():
            try:
                return input()
            except EOFError:
                raise EndOfInput() from None
        line = self.stdin.readline()
        if not line:
            raise EndOfInput()
        return line.rstrip("\r\n")

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def load_source(self, designator: str) -> str:
        if designator == STDIN_DESIGNATOR:
            return self.stdin.read()
        path = resolve_source(designator)
        if path is None:
            raise SourceLoadError(f"cannot find {designator}")
        logger.debug("loading %s", path)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as ex:
            raise SourceLoadError(f"cannot read {path}: {ex}") from ex


class BufferHost:
    """In-memory host: queued input lines, captured output, named sources."""

    def __init__(self, lines: Iterable[str] = (), sources: dict[str, str] | None = None):
        self.lines: list[str] = list(lines)
        self.sources: dict[str, str] = dict(sources or {})
        self.output = StringIO()

    def feed(self, *lines: str) -> None:
        self.lines.extend(lines)

    def read_line(self) -> str:
        if not self.lines:
            raise EndOfInput()
        return self.lines.pop(0)

    def write(self, text: str) -> None:
        self.output.write(text)

    def load_source(self, designator: str) -> str:
        try:
            return self.sources[designator]
        except KeyError:
            raise SourceLoadError(f"cannot find {designator}") from None

    def getvalue(self) -> str:
        return self.output.getvalue()
