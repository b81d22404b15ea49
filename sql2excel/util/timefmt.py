"""Time format helpers.

Partition boundaries are rendered with the ``input.time-format`` setting.
Both ``strftime`` patterns (``%Y-%m-%d``) and Go reference layouts
(``2006-01-02``, ``2006-1-2``) are accepted; the latter keeps configuration
files written for the Go edition of the tool working unchanged.
"""

from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
from typing import Callable, Final, Tuple, Union

TimeValue = Union[date, datetime]


def _hour(value: TimeValue) -> int:
    return getattr(value, "hour", 0)


# Go tokens rendered without padding; strftime has no portable directive for these.
_UNPADDED: Final[dict[str, Callable[[TimeValue], str]]] = {
    "_2": lambda v: f"{v.day:>2}",
    "1": lambda v: str(v.month),
    "2": lambda v: str(v.day),
    "3": lambda v: str(_hour(v) % 12 or 12),
    "4": lambda v: str(getattr(v, "minute", 0)),
    "5": lambda v: str(getattr(v, "second", 0)),
}

# Longest tokens first so "2006" wins over "06"/"2" and "January" over "Jan".
_GO_LAYOUT_TOKENS: Final[Tuple[Tuple[str, str], ...]] = (
    ("January", "%B"),
    ("Monday", "%A"),
    ("-0700", "%z"),
    ("2006", "%Y"),
    ("Jan", "%b"),
    ("Mon", "%a"),
    ("MST", "%Z"),
    ("01", "%m"),
    ("02", "%d"),
    ("03", "%I"),
    ("04", "%M"),
    ("05", "%S"),
    ("06", "%y"),
    ("15", "%H"),
    ("PM", "%p"),
    ("_2", ""),
    ("1", ""),
    ("2", ""),
    ("3", ""),
    ("4", ""),
    ("5", ""),
)

# (token, directive): directive "" means an unpadded token, token "" a literal run.
Segment = Tuple[str, str]


def is_go_layout(fmt: str) -> bool:
    """Return True when *fmt* looks like a Go reference layout."""
    if not fmt or "%" in fmt:
        return False
    return any(token in fmt for token, _ in _GO_LAYOUT_TOKENS)


@lru_cache(maxsize=32)
def parse_go_layout(fmt: str) -> Tuple[Segment, ...]:
    """Split a Go layout into token and literal segments.

    ``parse_go_layout("2006-1-2")`` gives
    ``(("2006", "%Y"), ("", "-"), ("1", ""), ("", "-"), ("2", ""))``.
    """
    segments = []
    literal = []
    i = 0
    while i < len(fmt):
        for token, directive in _GO_LAYOUT_TOKENS:
            if fmt.startswith(token, i):
                if literal:
                    segments.append(("", "".join(literal)))
                    literal = []
                segments.append((token, directive))
                i += len(token)
                break
        else:
            literal.append(fmt[i])
            i += 1
    if literal:
        segments.append(("", "".join(literal)))
    return tuple(segments)


def format_time(value: TimeValue, fmt: str) -> str:
    if not is_go_layout(fmt):
        return value.strftime(fmt)
    out = []
    for token, directive in parse_go_layout(fmt):
        if not token:
            out.append(directive)
        elif directive:
            out.append(value.strftime(directive))
        else:
            out.append(_UNPADDED[token](value))
    return "".join(out)
