"""YAML file loading helper.

:class:`yamlTool` reads a YAML mapping trying several encodings, so
configuration files saved by Windows editors in GBK load as well as UTF-8.
"""
import logging
from pathlib import Path
from typing import Union

import yaml

from sql2excel.util.errors import ConfigError


class yamlTool:
    """Load a YAML mapping from disk into ``parsed_yaml_file``.

    Parameters:
        path (Union[str, Path]): The YAML file to load.  Relative paths are
            resolved against the current working directory.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.parsed_yaml_file = self._load_file()

    def _load_file(self) -> dict:
        """Parse the file with UTF-8, falling back to GBK.

        Returns:
            dict: The parsed YAML mapping (empty for an empty document).

        Raises:
            ConfigError: The file is missing, unreadable, not valid YAML or
                not a mapping at the top level.
        """
        if not self.path.is_file():
            raise ConfigError(f"config file not found: {self.path}")
        for encoding in ("utf-8", "gbk"):
            try:
                with self.path.open(encoding=encoding) as stream:
                    data = yaml.safe_load(stream)
            except UnicodeDecodeError:
                continue
            except yaml.YAMLError as exc:
                raise ConfigError(f"invalid yaml in {self.path}: {exc}") from exc
            except OSError as exc:
                raise ConfigError(f"cannot read {self.path}: {exc}") from exc
            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError(f"{self.path} must contain a mapping at the top level")
            logging.debug("Loaded yaml %s with %s encoding", self.path, encoding)
            return data
        raise ConfigError(f"cannot decode {self.path} as utf-8 or gbk")
