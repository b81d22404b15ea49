from __future__ import annotations

"""Report configuration loading.

The YAML file is read once by :func:`load_config` and turned into frozen
dataclasses.  Every required field is checked here, so the rest of the
program can treat :class:`ReportConfig` as pre-validated.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from sql2excel.tools.partition import PartitionSpec
from sql2excel.tools.yamlTool import yamlTool
from sql2excel.util.constants import DEFAULT_DB_TYPE, DEFAULT_TIME_FORMAT, MAX_EXCEL_COLUMN, MAX_EXCEL_ROW
from sql2excel.util.errors import ConfigError


@dataclass(frozen=True)
class Source:
    name: str
    partition: PartitionSpec


@dataclass(frozen=True)
class Variable:
    row: int
    col: int
    value: str


@dataclass(frozen=True)
class Totalization:
    col: int
    formula: str


@dataclass(frozen=True)
class InputSection:
    sources: Tuple[Source, ...]
    query: str
    type: str = DEFAULT_DB_TYPE
    time_format: str = DEFAULT_TIME_FORMAT


@dataclass(frozen=True)
class OutputSection:
    name: str
    directory: Path = Path(".")
    strict_cells: bool = False
    variables: Tuple[Variable, ...] = field(default_factory=tuple)
    totalizations: Tuple[Totalization, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TemplateSection:
    path: Path
    row: int
    col: int
    sheet: Optional[str] = None


@dataclass(frozen=True)
class ReportConfig:
    input: InputSection
    output: OutputSection
    template: TemplateSection


def _section(data: Mapping[str, Any], key: str, where: str = "") -> Mapping[str, Any]:
    value = data.get(key)
    if not isinstance(value, Mapping):
        raise ConfigError(f"missing or invalid section '{where}{key}'")
    return value


def _require_text(data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if value is None or not str(value).strip():
        raise ConfigError(f"missing required field '{where}{key}'")
    return str(value)


def _require_int(data: Mapping[str, Any], key: str, where: str, *, maximum: int) -> int:
    value = data.get(key)
    if isinstance(value, bool) or value is None:
        raise ConfigError(f"missing required field '{where}{key}'")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"field '{where}{key}' must be an integer, got {value!r}") from exc
    if number < 1 or number > maximum:
        raise ConfigError(f"field '{where}{key}' must be between 1 and {maximum}, got {number}")
    return number


def _coerce_truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _parse_sources(raw: Any) -> Tuple[Source, ...]:
    if not isinstance(raw, list) or not raw:
        raise ConfigError("'input.sources' must be a non-empty list")
    sources = []
    for index, item in enumerate(raw):
        where = f"input.sources[{index}]."
        if not isinstance(item, Mapping):
            raise ConfigError(f"'input.sources[{index}]' must be a mapping")
        name = _require_text(item, "name", where)
        part = _section(item, "partition", where)
        sources.append(
            Source(
                name=name,
                partition=PartitionSpec(
                    type=_require_text(part, "type", f"{where}partition."),
                    begin=part.get("begin"),
                    end=part.get("end"),
                ),
            )
        )
    return tuple(sources)


def _parse_variables(raw: Any) -> Tuple[Variable, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError("'output.variables' must be a list")
    variables = []
    for index, item in enumerate(raw):
        where = f"output.variables[{index}]."
        if not isinstance(item, Mapping):
            raise ConfigError(f"'output.variables[{index}]' must be a mapping")
        variables.append(
            Variable(
                row=_require_int(item, "row", where, maximum=MAX_EXCEL_ROW),
                col=_require_int(item, "col", where, maximum=MAX_EXCEL_COLUMN),
                value="" if item.get("value") is None else str(item.get("value")),
            )
        )
    return tuple(variables)


def _parse_totalizations(raw: Any) -> Tuple[Totalization, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError("'output.totalizations' must be a list")
    totals = []
    for index, item in enumerate(raw):
        where = f"output.totalizations[{index}]."
        if not isinstance(item, Mapping):
            raise ConfigError(f"'output.totalizations[{index}]' must be a mapping")
        totals.append(
            Totalization(
                col=_require_int(item, "col", where, maximum=MAX_EXCEL_COLUMN),
                formula=_require_text(item, "formula", where),
            )
        )
    return tuple(totals)


def parse_config(data: Mapping[str, Any]) -> ReportConfig:
    """Build a :class:`ReportConfig` from an already parsed YAML mapping."""
    input_cfg = _section(data, "input")
    output_cfg = _section(data, "output")
    template_cfg = _section(data, "template")

    input_section = InputSection(
        sources=_parse_sources(input_cfg.get("sources")),
        query=_require_text(input_cfg, "query", "input."),
        type=str(input_cfg.get("type") or DEFAULT_DB_TYPE).strip().lower(),
        time_format=str(input_cfg.get("time-format") or DEFAULT_TIME_FORMAT),
    )
    output_section = OutputSection(
        name=_require_text(output_cfg, "name", "output."),
        directory=Path(str(output_cfg.get("directory") or ".")),
        strict_cells=_coerce_truthy(output_cfg.get("strict-cells", False)),
        variables=_parse_variables(output_cfg.get("variables")),
        totalizations=_parse_totalizations(output_cfg.get("totalizations")),
    )
    sheet = template_cfg.get("sheet")
    template_section = TemplateSection(
        path=Path(_require_text(template_cfg, "path", "template.")),
        row=_require_int(template_cfg, "start-row", "template.", maximum=MAX_EXCEL_ROW),
        col=_require_int(template_cfg, "start-col", "template.", maximum=MAX_EXCEL_COLUMN),
        sheet=str(sheet) if sheet not in (None, "") else None,
    )
    return ReportConfig(input=input_section, output=output_section, template=template_section)


def load_config(path: str | Path) -> ReportConfig:
    """Read and validate the YAML report configuration at *path*."""
    data = yamlTool(path).parsed_yaml_file
    config = parse_config(data)
    logging.debug(
        "Loaded config %s: %d source(s), %d variable(s), %d totalization(s)",
        path,
        len(config.input.sources),
        len(config.output.variables),
        len(config.output.totalizations),
    )
    return config


__all__ = [
    "InputSection",
    "OutputSection",
    "ReportConfig",
    "Source",
    "TemplateSection",
    "Totalization",
    "Variable",
    "load_config",
    "parse_config",
]
