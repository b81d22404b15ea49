from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from sql2excel.tools.config_loader import ReportConfig, Source
from sql2excel.tools.db_tool import open_client
from sql2excel.tools.partition import Partition, generate_partitions, iter_partitions
from sql2excel.tools.placeholder import PlaceholderContext, resolve
from sql2excel.util.report.excel import clone_template, output_path, write_report

LOGGER = logging.getLogger(__name__)

# First value of the {num} placeholder.
FIRST_PARTITION_NUM = 1


@dataclass(frozen=True)
class SourceResult:
    """Outcome of one source: the next ``{num}`` value and the files written."""

    next_num: int
    outputs: List[Path] = field(default_factory=list)


def process_partition(
    config: ReportConfig,
    client: Any,
    partition: Partition,
    num: int,
    *,
    output_dir: Optional[Path] = None,
) -> Path:
    """Produce the report file of a single partition.

    The template is cloned first; a failing query or data write leaves the
    clone on disk.
    """
    context = PlaceholderContext.for_partition(partition, num, config.input.time_format)
    directory = output_dir if output_dir is not None else config.output.directory
    destination = output_path(resolve(config.output.name, context), directory)
    clone_template(config.template.path, destination)

    query = resolve(config.input.query, context)
    rows = client.query_rows(query)
    LOGGER.info(
        "Processing partition #%d: %s to %s (%d rows) -> %s",
        num,
        context.part_beg,
        context.part_end,
        len(rows),
        destination,
    )
    return write_report(
        destination,
        rows,
        sheet_name=config.template.sheet,
        start_row=config.template.row,
        start_col=config.template.col,
        variables=config.output.variables,
        totalizations=config.output.totalizations,
        context=context,
        strict=config.output.strict_cells,
    )


def process_source(
    config: ReportConfig,
    client: Any,
    boundaries: Sequence,
    start_num: int,
    *,
    output_dir: Optional[Path] = None,
) -> SourceResult:
    """Write one report per partition of *boundaries*, numbering from *start_num*."""
    num = start_num
    outputs: List[Path] = []
    for partition in iter_partitions(boundaries):
        outputs.append(process_partition(config, client, partition, num, output_dir=output_dir))
        num += 1
    return SourceResult(next_num=num, outputs=outputs)


def run_source(
    config: ReportConfig,
    source: Source,
    start_num: int,
    *,
    output_dir: Optional[Path] = None,
    client_factory: Callable[[str, str], Any] = open_client,
) -> SourceResult:
    boundaries = generate_partitions(source.partition)
    LOGGER.info("Opening %s source %s (%d partitions)", config.input.type, source.name, len(boundaries) - 1)
    with client_factory(config.input.type, source.name) as client:
        return process_source(config, client, boundaries, start_num, output_dir=output_dir)


def run_report(
    config: ReportConfig,
    *,
    output_dir: Optional[Path] = None,
    client_factory: Callable[[str, str], Any] = open_client,
) -> List[Path]:
    """Run every configured source in order and return the files written.

    ``{num}`` keeps counting across sources so output names stay unique.
    The first error aborts the run.
    """
    num = FIRST_PARTITION_NUM
    outputs: List[Path] = []
    for source in config.input.sources:
        result = run_source(config, source, num, output_dir=output_dir, client_factory=client_factory)
        num = result.next_num
        outputs.extend(result.outputs)
    LOGGER.info("Wrote %d report(s)", len(outputs))
    return outputs
