"""
Business entities representing core domain concepts.

Exports:
- VideoSource: A configured video source (local folder, DLNA share, remote catalog)
- SourceType: Kind of configured source
- SourceKind: Origin of a catalog item (folder-local or network)
- VideoItem: A playable catalog item
- FolderNode: A navigable folder discovered by a scan
- FolderContents: Result of a folder scan
"""

from vidcatalog.core.entities.catalog import (
    FolderContents,
    FolderNode,
    SourceKind,
    SourceType,
    VideoItem,
    VideoSource,
)

__all__ = [
    "VideoSource",
    "SourceType",
    "SourceKind",
    "VideoItem",
    "FolderNode",
    "FolderContents",
]
