"""
Type-safe YAML loader for the extractor configuration file.
Wraps a ruamel.yaml instance behind a small Protocol so callers get typed data.
"""

from pathlib import Path
from typing import Protocol, TextIO, Union, cast

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

# Recursive type for nested YAML structures
ConfigValue = Union[str, int, float, bool, None, 'ConfigDict', list['ConfigValue']]
ConfigDict = dict[str, ConfigValue]


class YAMLLoader(Protocol):
    """Protocol for the subset of the ruamel.yaml API we rely on."""
    preserve_quotes: bool

    def load(self, stream: TextIO) -> ConfigValue:
        """Load YAML from stream."""
        ...


class ConfigFileError(Exception):
    """Raised when a YAML file exists but cannot be parsed into a mapping."""


def _create_yaml_loader() -> YAMLLoader:
    """Create the shared YAML loader instance.

    Returns:
        Round-trip ruamel.yaml loader (safe: never constructs arbitrary objects)
    """
    yaml_obj = YAML()
    yaml_obj.preserve_quotes = True
    return cast(YAMLLoader, yaml_obj)


# Singleton loader instance
yaml: YAMLLoader = _create_yaml_loader()


def load_yaml_file(file_path: Path) -> ConfigDict:
    """Load a YAML mapping from disk.

    An empty document loads as an empty mapping.

    Args:
        file_path: Path to YAML file to load

    Returns:
        Configuration dictionary loaded from YAML

    Raises:
        FileNotFoundError: If file does not exist
        ConfigFileError: If the content is not valid YAML or not a mapping
    """
    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    with file_path.open(encoding='utf-8') as f:
        try:
            raw: ConfigValue = yaml.load(f)
        except YAMLError as exc:
            raise ConfigFileError(f"Invalid YAML in {file_path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigFileError(f"Expected a mapping at the top of {file_path}")
    return cast(ConfigDict, raw)
