"""Alias table mapping raw maintainer identifiers to canonical aliases.

The alias file is a flat JSON object, e.g. {"foo": "f.bar@example.org"}.
When no alias file is given the table is empty, which disables the
unknown-maintainer check entirely.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from orgwarden.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AliasTable:
    """Bidirectional identifier/alias mapping.

    Attributes:
        forward: Raw maintainer identifier -> alias
        reverse: Alias -> raw maintainer identifier (exact inverse of forward)

    When two identifiers share one alias the reverse table keeps the last one.
    """

    forward: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    reverse: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "AliasTable":
        """Build a table from an identifier -> alias mapping."""
        forward = dict(mapping)
        reverse = {alias: identifier for identifier, alias in forward.items()}
        return cls(forward=MappingProxyType(forward), reverse=MappingProxyType(reverse))

    @property
    def enabled(self) -> bool:
        """True when maintainer identities should be validated."""
        return bool(self.forward)

    def resolve(self, identifier: str) -> str:
        """Return the alias for `identifier`, or `identifier` itself."""
        return self.forward.get(identifier, identifier)

    def is_known(self, alias: str) -> bool:
        """Return True if `alias` is the target of some identifier."""
        return alias in self.reverse

    def __len__(self) -> int:
        return len(self.forward)


def load_alias_table(path: Path | None) -> AliasTable:
    """Load the optional alias file.

    Args:
        path: Path to the JSON alias file, or None

    Returns:
        AliasTable (empty when path is None)

    Raises:
        ConfigError: If the file is missing, empty, not valid JSON, or not a
            flat object of strings
    """
    if path is None:
        return AliasTable()

    if not path.exists():
        raise ConfigError(f"file does not exist: {path}")

    try:
        json_blob = path.read_text()
    except OSError as e:
        raise ConfigError(f"failed to read alias file {path}: {e}") from e

    if json_blob == "":
        raise ConfigError(f"file is empty: {path}")

    try:
        data = json.loads(json_blob)
    except json.JSONDecodeError as e:
        raise ConfigError(f"malformed alias file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"alias file must contain a JSON object: {path}")

    for identifier, alias in data.items():
        if not isinstance(alias, str):
            raise ConfigError(
                f"alias for '{identifier}' must be a string, got {type(alias).__name__}: {path}"
            )

    table = AliasTable.from_mapping(data)
    logger.debug("Loaded %d aliases from %s", len(table), path)
    return table
