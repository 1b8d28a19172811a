"""Permission catalog.

Maps a permission name (e.g. ``Mail.Read``) to its grant type and the risk
flags that drive the approval policy:

  - glr:     needs a governance/legal review
  - apiScan: the consuming API must pass a security scan
  - asa:     needs an application security assessment
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from ..errors import ConfigurationError, UnknownPermission


class PermissionType(str, Enum):
    """How a permission is granted."""

    DELEGATED = "Delegated"       # Acts on behalf of a signed-in user
    APPLICATION = "Application"   # Acts as the application itself


@dataclass(frozen=True)
class PermissionDefinition:
    """A single catalog entry."""

    name: str
    type: PermissionType
    description: str = ""
    glr: bool = False
    api_scan: bool = False
    asa: bool = False


class PermissionCatalog:
    """Read-only registry of permission definitions keyed by name."""

    def __init__(self, definitions: Iterable[PermissionDefinition]):
        entries = {}
        for definition in definitions:
            if definition.name in entries:
                raise ConfigurationError(
                    f"Duplicate permission in catalog: {definition.name}"
                )
            entries[definition.name] = definition
        self._entries: Mapping[str, PermissionDefinition] = MappingProxyType(entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str) -> PermissionDefinition:
        """Look up a permission.

        Raises:
            UnknownPermission: If the name is not in the catalog
        """
        try:
            return self._entries[name]
        except KeyError:
            raise UnknownPermission(name) from None

    def find(self, name: str) -> Optional[PermissionDefinition]:
        return self._entries.get(name)

    def search(self, query: str) -> List[PermissionDefinition]:
        """Case-insensitive substring search over name and description."""
        needle = query.lower()
        return [
            definition
            for definition in self._entries.values()
            if needle in definition.name.lower()
            or needle in definition.description.lower()
        ]
