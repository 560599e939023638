"""Data models shared by the sync pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class RemotePicture:
    """A remote image declared by the user."""

    id: str
    url: str


@dataclass(frozen=True)
class Collection:
    """A named group of pictures that share one generated module."""

    id: str
    pictures: Tuple[RemotePicture, ...] = ()


@dataclass(frozen=True)
class AssetRecord:
    """Local location and binding name computed for a picture."""

    collection_id: str
    picture: RemotePicture
    file_path: Path
    binding: str

    @property
    def alias(self) -> Optional[str]:
        """Export name, or None when the binding already matches the picture id."""
        if self.binding == self.picture.id:
            return None
        return self.picture.id


@dataclass
class CollectionResult:
    """Outcome of syncing one collection."""

    collection_id: str
    module_path: Path
    types_path: Path
    downloaded: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
