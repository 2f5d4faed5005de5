"""File previews: ANSI-styled text model and a background-rendering previewer."""

from __future__ import annotations

import queue
import re
import threading
import unicodedata
from dataclasses import dataclass, field
from enum import Flag, auto
from pathlib import Path
from typing import Iterator, Union

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from frz.plugins.capabilities import PreviewSplit, PreviewSplitContext

# A colour is a name ("red", "light_blue", ...), an (r, g, b) tuple or a
# 256-colour palette index.
Color = Union[str, tuple[int, int, int], int]

_ESC = "\x1b"
_BEL = "\x07"
_SELECT_PROMPT = "Select a file to preview"

_STANDARD_COLORS = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "gray")
_BRIGHT_COLORS = (
    "dark_gray",
    "light_red",
    "light_green",
    "light_yellow",
    "light_blue",
    "light_magenta",
    "light_cyan",
    "white",
)
_INTEGER = re.compile(r"[+-]?[0-9]+")


class Modifier(Flag):
    """Text attributes applied to a span."""

    NONE = 0
    BOLD = auto()
    DIM = auto()
    ITALIC = auto()
    UNDERLINED = auto()
    REVERSED = auto()


@dataclass(frozen=True)
class Style:
    """Foreground, background and modifiers of a span."""

    fg: Color | None = None
    bg: Color | None = None
    modifiers: Modifier = Modifier.NONE


@dataclass(frozen=True)
class Span:
    """A run of text sharing one style."""

    content: str
    style: Style = field(default_factory=Style)


@dataclass
class Line:
    """A line made of styled spans."""

    spans: list[Span] = field(default_factory=list)


@dataclass
class Text:
    """Styled multi-line text."""

    lines: list[Line] = field(default_factory=list)

    def plain(self) -> str:
        """Return the text without styling, lines joined by newlines."""
        return "\n".join("".join(span.content for span in line.spans) for line in self.lines)


def _message(message: str) -> Text:
    return Text([Line([Span(message)])])


class _Cursor:
    """Character iterator with one character of look-ahead."""

    _EMPTY = object()

    def __init__(self, text: str) -> None:
        self._it = iter(text)
        self._peeked: object = self._EMPTY

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self._peeked is not self._EMPTY:
            value = self._peeked
            self._peeked = self._EMPTY
            return value  # type: ignore[return-value]
        return next(self._it)

    def peek(self) -> str | None:
        if self._peeked is self._EMPTY:
            self._peeked = next(self._it, None)
            if self._peeked is None:
                self._peeked = self._EMPTY
                return None
        return self._peeked  # type: ignore[return-value]


@dataclass
class _AnsiState:
    fg: Color | None = None
    bg: Color | None = None
    modifiers: Modifier = Modifier.NONE

    def reset(self) -> None:
        self.fg = None
        self.bg = None
        self.modifiers = Modifier.NONE

    def to_style(self) -> Style:
        return Style(self.fg, self.bg, self.modifiers)


class _TextBuilder:
    def __init__(self) -> None:
        self.state = _AnsiState()
        self.lines: list[Line] = []
        self._current: list[Span] = []
        self._buffer: list[str] = []

    def push(self, ch: str) -> None:
        self._buffer.append(ch)

    def flush(self) -> None:
        if self._buffer:
            self._current.append(Span("".join(self._buffer), self.state.to_style()))
            self._buffer = []

    def newline(self) -> None:
        self.flush()
        self.lines.append(Line(self._current))
        self._current = []

    def finish(self) -> Text:
        self.flush()
        if self._current:
            self.lines.append(Line(self._current))
        elif not self.lines:
            self.lines.append(Line())
        return Text(self.lines)


def _standard_color(index: int, bright: bool) -> Color | None:
    if not 0 <= index <= 7:
        return None
    return (_BRIGHT_COLORS if bright else _STANDARD_COLORS)[index]


def _clamp_to_u8(value: int) -> int:
    return max(0, min(255, value))


def _extended_color(params: list[int]) -> tuple[Color | None, int]:
    """Parse a 38/48 colour argument list; return (colour, values consumed)."""
    if not params:
        return None, 0
    if params[0] == 2 and len(params) >= 4:
        r, g, b = (_clamp_to_u8(value) for value in params[1:4])
        return (r, g, b), 4
    if params[0] == 5 and len(params) >= 2:
        return _clamp_to_u8(params[1]), 2
    return None, 0


def _parse_param(part: str) -> int:
    return int(part) if _INTEGER.fullmatch(part) else 0


def _apply_sgr(state: _AnsiState, params: str) -> None:
    values = [_parse_param(part) for part in params.split(";")] if params else [0]

    index = 0
    while index < len(values):
        value = values[index]
        if value == 0:
            state.reset()
        elif value == 1:
            state.modifiers |= Modifier.BOLD
        elif value == 2:
            state.modifiers |= Modifier.DIM
        elif value == 3:
            state.modifiers |= Modifier.ITALIC
        elif value == 4:
            state.modifiers |= Modifier.UNDERLINED
        elif value == 7:
            state.modifiers |= Modifier.REVERSED
        elif value in (21, 22):
            state.modifiers &= ~(Modifier.BOLD | Modifier.DIM)
        elif value == 23:
            state.modifiers &= ~Modifier.ITALIC
        elif value == 24:
            state.modifiers &= ~Modifier.UNDERLINED
        elif value == 27:
            state.modifiers &= ~Modifier.REVERSED
        elif 30 <= value <= 37:
            state.fg = _standard_color(value - 30, False)
        elif 90 <= value <= 97:
            state.fg = _standard_color(value - 90, True)
        elif 40 <= value <= 47:
            state.bg = _standard_color(value - 40, False)
        elif 100 <= value <= 107:
            state.bg = _standard_color(value - 100, True)
        elif value in (38, 48):
            color, consumed = _extended_color(values[index + 1 :])
            if color is not None:
                if value == 38:
                    state.fg = color
                else:
                    state.bg = color
            index += consumed
        elif value == 39:
            state.fg = None
        elif value == 49:
            state.bg = None
        index += 1


def _consume_osc(chars: _Cursor) -> None:
    for ch in chars:
        if ch == _BEL:
            return
        if ch == _ESC and chars.peek() == "\\":
            next(chars)
            return


def _consume_st_terminated(chars: _Cursor) -> None:
    for ch in chars:
        if ch == _ESC and chars.peek() == "\\":
            next(chars)
            return


def _handle_escape(chars: _Cursor, builder: _TextBuilder) -> None:
    indicator = chars.peek()
    if indicator is None:
        return
    next(chars)

    if indicator == "[":
        sequence: list[str] = []
        for ch in chars:
            sequence.append(ch)
            if "@" <= ch <= "~":
                break
        if sequence and sequence[-1] == "m":
            builder.flush()
            _apply_sgr(builder.state, "".join(sequence[:-1]))
    elif indicator == "]":
        _consume_osc(chars)
    elif indicator in "P^_X":
        _consume_st_terminated(chars)
    elif indicator in "()*+-./":
        # Character set selection has a single final byte.
        next(chars, None)


def ansi_to_text(input: str) -> Text:
    """Convert text with ANSI escape sequences into styled text.

    SGR sequences set styles; other escape sequences and control characters
    are dropped.
    """
    builder = _TextBuilder()
    chars = _Cursor(input)
    for ch in chars:
        if ch == _ESC:
            _handle_escape(chars, builder)
        elif ch == "\n":
            builder.newline()
        elif ch == "\r" or unicodedata.category(ch) == "Cc":
            continue
        else:
            builder.push(ch)
    return builder.finish()


def _style_name(theme: str | None) -> str:
    if theme:
        try:
            get_style_by_name(theme)
            return theme
        except ClassNotFound:
            pass
    return "default"


def render_file(path: str | Path, width: int, theme: str | None = None) -> str:
    """Render a file as syntax-highlighted ANSI text with line numbers.

    Returns an empty string for a zero width; raises OSError if the file
    cannot be read. Unknown themes fall back to the default style.
    """
    if width == 0:
        return ""

    file_path = Path(path)
    code = file_path.read_bytes().decode("utf-8", errors="replace")
    if not code:
        return ""

    try:
        lexer = get_lexer_for_filename(file_path.name, code, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    formatter = Terminal256Formatter(style=_style_name(theme))
    highlighted = highlight(code, lexer, formatter)

    return "".join(
        f"\x1b[2m{number:>4}\x1b[0m {line}\n"
        for number, line in enumerate(highlighted.splitlines(), start=1)
    )


@dataclass(frozen=True)
class _PreviewKey:
    path: Path
    width: int
    bat_theme: str | None


@dataclass(frozen=True)
class _Outcome:
    output: str | None = None
    error: str | None = None


@dataclass
class _Pending:
    key: _PreviewKey
    results: "queue.Queue[_Outcome]"
    worker: threading.Thread


def _render_worker(key: _PreviewKey, results: "queue.Queue[_Outcome]") -> None:
    try:
        results.put(_Outcome(output=render_file(key.path, key.width, key.bat_theme)))
    except Exception as exc:  # reported to the user as the preview error
        results.put(_Outcome(error=str(exc)))


class FilePreviewer(PreviewSplit):
    """Previews the selected file, rendering it on a background thread."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cached: tuple[_PreviewKey, _Outcome] | None = None
        self._pending: _Pending | None = None

    def _poll_pending(self) -> None:
        pending = self._pending
        if pending is None:
            return
        try:
            outcome = pending.results.get_nowait()
        except queue.Empty:
            if pending.worker.is_alive():
                return
            try:
                outcome = pending.results.get_nowait()
            except queue.Empty:
                self._pending = None
                return
        self._cached = (pending.key, outcome)
        self._pending = None

    def _cached_result(self, key: _PreviewKey) -> _Outcome | None:
        if self._cached is not None and self._cached[0] == key:
            return self._cached[1]
        return None

    def _cached_output(self) -> _Outcome | None:
        return self._cached[1] if self._cached is not None else None

    def _ensure_request(self, key: _PreviewKey) -> None:
        if self._pending is not None and self._pending.key == key:
            return
        results: queue.Queue[_Outcome] = queue.Queue(maxsize=1)
        worker = threading.Thread(target=_render_worker, args=(key, results), daemon=True)
        worker.start()
        self._pending = _Pending(key, results, worker)

    @staticmethod
    def _show(outcome: _Outcome, display_path: str) -> Text:
        if outcome.error is not None:
            return _message(f"Unable to preview {display_path}: {outcome.error}")
        return ansi_to_text(outcome.output or "")

    def render_preview(self, width: int, height: int, context: PreviewSplitContext) -> Text:
        """Return the preview of the selected file for an area of the given size."""
        if width == 0 or height == 0:
            return Text()

        selected = context.selected_row_index()
        files = context.data.files
        if selected is None or not 0 <= selected < len(files):
            return _message(_SELECT_PROMPT)

        path = context.data.resolve_file_path(files[selected])
        key = _PreviewKey(path, width, context.bat_theme)
        display_path = str(path)

        with self._lock:
            self._poll_pending()
            current = self._cached_result(key)
            if current is not None:
                return self._show(current, display_path)

            previous = self._cached_output()
            self._ensure_request(key)
            self._poll_pending()
            current = self._cached_result(key)
            if current is not None:
                return self._show(current, display_path)
            if previous is None:
                previous = self._cached_output()

        if previous is not None and previous.error is None:
            return ansi_to_text(previous.output or "")
        return _message(f"Loading preview for {display_path}")