from __future__ import annotations

import html
import re
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from io import StringIO
from typing import Deque, Iterator, List, Sequence, Tuple

from .errors import PatchMismatchError
from .models import DiffSpan, Op

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class LineKind(Enum):
    CONTEXT = " "
    DELETE = "-"
    INSERT = "+"


_LINE_KIND = {Op.EQUAL: LineKind.CONTEXT, Op.DELETE: LineKind.DELETE, Op.INSERT: LineKind.INSERT}


@dataclass(slots=True)
class Hunk:
    """A block of context and changed lines with its unified-diff header values."""

    start_a: int
    start_b: int
    lines: List[Tuple[LineKind, str]] = field(default_factory=list)

    @property
    def len_a(self) -> int:
        return max(1, sum(1 for kind, _ in self.lines if kind is not LineKind.INSERT))

    @property
    def len_b(self) -> int:
        return max(1, sum(1 for kind, _ in self.lines if kind is not LineKind.DELETE))

    def header(self) -> str:
        return f"@@ -{self.start_a},{self.len_a} +{self.start_b},{self.len_b} @@"


def split_lines(text: str) -> List[str]:
    """Split on CRLF, CR or LF; terminators are dropped and a final one adds no line."""
    if not text:
        return []
    lines = _LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def reconstruct(spans: Sequence[DiffSpan], side: Op) -> str:
    """Concatenate the spans seen on one side: DELETE for A, INSERT for B."""
    skipped = Op.INSERT if side is Op.DELETE else Op.DELETE
    return "".join(span.text for span in spans if span.op is not skipped)


def ensure_matches_source(source_a: str, spans: Sequence[DiffSpan]) -> None:
    if source_a != reconstruct(spans, Op.DELETE):
        raise PatchMismatchError("Patch set does not match source A (Equal+Delete != A).")


def iter_line_items(spans: Sequence[DiffSpan]) -> Iterator[Tuple[LineKind, str]]:
    for span in spans:
        kind = _LINE_KIND[span.op]
        for line in split_lines(span.text):
            yield kind, line


def build_hunks(items: Iterator[Tuple[LineKind, str]], context_lines: int) -> List[Hunk]:
    """
    Group line items into hunks.

    Up to ``context_lines`` context lines seen before the first change lead
    the hunk. Once a hunk is open, trailing context is buffered; overflowing
    context is flushed into the hunk so a later change can continue it, and
    whatever is still buffered when the input ends closes the hunk.
    """
    k = max(0, context_lines)
    hunks: List[Hunk] = []
    a_line = b_line = 1
    pre_context: Deque[Tuple[str, int, int]] = deque(maxlen=k)
    post_context: Deque[str] = deque()
    current: Hunk | None = None

    for kind, text in items:
        if kind is LineKind.CONTEXT:
            if current is not None:
                post_context.append(text)
                if len(post_context) > k:
                    current.lines.append((LineKind.CONTEXT, post_context.popleft()))
            elif k:
                pre_context.append((text, a_line, b_line))
            a_line += 1
            b_line += 1
            continue

        if current is None:
            if pre_context:
                _, start_a, start_b = pre_context[0]
            else:
                start_a, start_b = a_line, b_line
            current = Hunk(start_a=start_a, start_b=start_b)
            current.lines.extend((LineKind.CONTEXT, line) for line, _, _ in pre_context)
            pre_context.clear()

        post_context.clear()
        current.lines.append((kind, text))
        if kind is LineKind.DELETE:
            a_line += 1
        else:
            b_line += 1

    if current is not None:
        current.lines.extend((LineKind.CONTEXT, line) for line in post_context)
        hunks.append(current)
    return hunks


def render_unified_diff(
    a: str,
    b: str,
    spans: Sequence[DiffSpan],
    label_a: str = "a",
    label_b: str = "b",
    context_lines: int = 3,
) -> str:
    """Render spans as a unified diff using ``\\n`` line endings only."""
    if a is None or b is None:
        raise TypeError("Source texts must be strings, not None")
    ensure_matches_source(a, spans)

    out = StringIO()
    out.write(f"--- {label_a}\n")
    out.write(f"+++ {label_b}\n")
    for hunk in build_hunks(iter_line_items(spans), context_lines):
        out.write(hunk.header() + "\n")
        for kind, text in hunk.lines:
            out.write(f"{kind.value}{text}\n")
    return out.getvalue()


def render_inline_markup(
    spans: Sequence[DiffSpan],
    insert_tag: str = "ins",
    delete_tag: str = "del",
) -> str:
    """Render spans as escaped HTML with inserts and deletes wrapped in tags."""
    parts: List[str] = []
    for span in spans:
        escaped = html.escape(span.text)
        if span.op is Op.INSERT:
            parts.append(f"<{insert_tag}>{escaped}</{insert_tag}>")
        elif span.op is Op.DELETE:
            parts.append(f"<{delete_tag}>{escaped}</{delete_tag}>")
        else:
            parts.append(escaped)
    return "".join(parts)
