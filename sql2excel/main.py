from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sql2excel.tools.config_loader import load_config
from sql2excel.tools.reporting import run_report
from sql2excel.util.constants import APP_DESCRIPTION, APP_NAME, LOG_DATEFMT, LOG_FORMAT
from sql2excel.util.errors import ConfigError, Sql2ExcelError

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    """
    Build parser.

    Defines and configures command-line arguments for the CLI.

    Returns
    -------
    argparse.ArgumentParser
        The configured parser.
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=APP_DESCRIPTION,
    )
    parser.add_argument(
        "config",
        type=Path,
        help="YAML configuration file describing sources, query, template and output.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for the generated workbooks (overrides output.directory).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main.

    Loads the configuration, writes one workbook per partition and maps
    failures to exit codes: 2 for configuration errors, 1 for anything else.

    Parameters
    ----------
    argv : Optional[List[str]]
        Command-line arguments without the program name.

    Returns
    -------
    int
        Process exit status.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_level = getattr(logging, str(args.log_level).upper(), logging.INFO)
    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.info("%s - %s", APP_NAME, APP_DESCRIPTION)

    try:
        config = load_config(args.config)
        outputs = run_report(config, output_dir=args.output_dir)
    except ConfigError as exc:
        logging.error("Configuration error: %s", exc)
        return EXIT_CONFIG_ERROR
    except Sql2ExcelError as exc:
        logging.error("Error: %s", exc)
        return EXIT_FAILURE

    logging.info("Finished; %d workbook(s) written", len(outputs))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
