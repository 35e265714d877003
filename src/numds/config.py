"""Module containing the library configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import dacite
import yaml

CONFIG_ENV_VAR: Final[str] = "NUMDS_CONFIG"
"""Environment variable pointing to the default YAML config file."""

DEFAULT_TIMEOUT: Final[float] = 30.0
"""Default network timeout in seconds."""


@dataclass(frozen=True, kw_only=True)
class DatasetsConfig:
    """
    Configuration for loading datasets.

    Attributes:
        timeout: network timeout in seconds for each fetch.
        cache_dir: cache directory; None means $TMPDIR/haskds.
        progress: whether to show a progress bar while downloading.
    """

    timeout: float = DEFAULT_TIMEOUT
    cache_dir: str | None = None
    progress: bool = False

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got: {self.timeout}")


def load_config(config_path: str | Path | None = None) -> DatasetsConfig:
    """
    Load the configuration from a YAML file.

    When config_path is None, we use the file named by the NUMDS_CONFIG
    environment variable, if set. A missing file yields the default config.

    The file looks like:

        v: 0
        timeout: 60
        cache_dir: /var/cache/numds
        progress: true

    Raises:
        ValueError: if the file is not valid YAML or has invalid fields.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR)
    if config_path is None:
        return DatasetsConfig()

    path = Path(config_path)
    try:
        content = path.read_text()
    except FileNotFoundError:
        return DatasetsConfig()

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping: {path}")

    version = data.pop("v", 0)
    if version != 0:
        raise ValueError(f"Unsupported config version: {version} (only v=0 supported)")

    try:
        return dacite.from_dict(
            DatasetsConfig,
            data,
            config=dacite.Config(cast=[float], strict=True),
        )
    except (dacite.DaciteError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid config in {path}: {exc}") from exc
