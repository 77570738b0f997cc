from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class TileCatalog:
    """Opaque identifiers for each tile type.

    Tile type ``k`` (1-based) maps to ``identifiers[k - 1]``. The core only
    ever looks at ``count``; renderers use ``identifier_for``.
    """
    identifiers: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Preserve order while dropping duplicates.
        seen: set[str] = set()
        filtered: List[str] = []
        for name in self.identifiers:
            if name not in seen:
                filtered.append(name)
                seen.add(name)
        self.identifiers = filtered

    @property
    def count(self) -> int:
        return len(self.identifiers)

    def identifier_for(self, tile_type: int) -> str | None:
        if 1 <= tile_type <= len(self.identifiers):
            return self.identifiers[tile_type - 1]
        return None
