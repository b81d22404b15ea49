"""Placeholder substitution for queries, file names, variables and formulas.

Only a closed set of tokens is recognised: ``{part.beg}``, ``{part.end}``,
``{num}`` and ``{rows.last}``.  Any other brace text is kept verbatim, and a
known token is kept verbatim when the context has no value for it.

Substitution is a single pass over the template; inserted values are never
scanned again.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional

from sql2excel.tools.partition import Partition
from sql2excel.util.timefmt import format_time


class Token(Enum):
    PART_BEG = "part.beg"
    PART_END = "part.end"
    NUM = "num"
    ROWS_LAST = "rows.last"

    @property
    def placeholder(self) -> str:
        return "{" + self.value + "}"


_TOKENS_BY_PLACEHOLDER: Dict[str, Token] = {token.placeholder: token for token in Token}
_TOKEN_PATTERN = re.compile("|".join(re.escape(text) for text in _TOKENS_BY_PLACEHOLDER))


@dataclass(frozen=True)
class PlaceholderContext:
    """Values available to a template while one partition is processed."""

    part_beg: Optional[str] = None
    part_end: Optional[str] = None
    num: Optional[int] = None
    rows_last: Optional[int] = None

    @classmethod
    def for_partition(cls, partition: Partition, num: int, time_format: str) -> "PlaceholderContext":
        return cls(
            part_beg=format_time(partition.begin, time_format),
            part_end=format_time(partition.end, time_format),
            num=num,
        )

    def with_last_row(self, row: int) -> "PlaceholderContext":
        return replace(self, rows_last=row)

    def values(self) -> Dict[Token, str]:
        """Return the tokens that have a value, rendered as text."""
        raw = {
            Token.PART_BEG: self.part_beg,
            Token.PART_END: self.part_end,
            Token.NUM: self.num,
            Token.ROWS_LAST: self.rows_last,
        }
        return {token: str(value) for token, value in raw.items() if value is not None}


def resolve(template: str, context: PlaceholderContext) -> str:
    """Replace every known token of *template* with its value from *context*."""
    if not template:
        return template
    values = context.values()

    def _substitute(match: re.Match) -> str:
        text = match.group(0)
        return values.get(_TOKENS_BY_PLACEHOLDER[text], text)

    return _TOKEN_PATTERN.sub(_substitute, template)
