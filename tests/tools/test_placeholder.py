from datetime import date

from sql2excel.tools.partition import Partition
from sql2excel.tools.placeholder import PlaceholderContext, Token, resolve


def test_resolves_partition_bounds():
    context = PlaceholderContext(part_beg="2022-01-01", part_end="2022-01-31")
    assert resolve("{part.beg} to {part.end}", context) == "2022-01-01 to 2022-01-31"


def test_replaces_every_occurrence():
    context = PlaceholderContext(part_beg="A", num=7)
    assert resolve("{part.beg}{num}{part.beg}-{num}", context) == "A7A-7"


def test_unknown_tokens_are_left_untouched():
    context = PlaceholderContext(part_beg="2022-01-01")
    text = "{part.begin} {foo} {part.beg} {PART.BEG} { num }"
    assert resolve(text, context) == "{part.begin} {foo} 2022-01-01 {PART.BEG} { num }"


def test_tokens_without_value_are_left_untouched():
    context = PlaceholderContext(part_beg="x", part_end="y", num=1)
    assert resolve("=SUM(D10:D{rows.last})", context) == "=SUM(D10:D{rows.last})"
    assert resolve("=SUM(D10:D{rows.last})", context.with_last_row(12)) == "=SUM(D10:D12)"


def test_resolution_is_idempotent():
    context = PlaceholderContext(part_beg="2022-01-01", part_end="2022-01-31", num=3, rows_last=12)
    once = resolve("n{num} {part.beg}..{part.end} last={rows.last} {other}", context)
    assert resolve(once, context) == once


def test_inserted_values_are_not_rescanned():
    context = PlaceholderContext(part_beg="{part.end}", part_end="END")
    assert resolve("{part.beg}|{part.end}", context) == "{part.end}|END"


def test_for_partition_uses_time_format():
    partition = Partition(date(2022, 1, 1), date(2022, 1, 31))
    context = PlaceholderContext.for_partition(partition, 4, "%d/%m/%Y")
    assert (context.part_beg, context.part_end, context.num) == ("01/01/2022", "31/01/2022", 4)
    assert context.rows_last is None


def test_token_placeholder_text():
    assert Token.ROWS_LAST.placeholder == "{rows.last}"


def test_every_token_placeholder_is_resolved():
    context = PlaceholderContext(part_beg="b", part_end="e", num=2, rows_last=9)
    text = " ".join(token.placeholder for token in Token)
    assert resolve(text, context) == "b e 2 9"
