"""Script resources: filesystem discovery and placeholder-substituting views.

Modules
-------
filesystem      FileSystemResource, FileSystemResourceProvider
placeholders    PlaceholderReplacer, PlaceholderReplacingResource
"""

from schemaspine.resource.filesystem import FileSystemResource, FileSystemResourceProvider
from schemaspine.resource.placeholders import (
    FILENAME_PLACEHOLDER,
    PlaceholderReplacer,
    PlaceholderReplacingResource,
)

__all__ = [
    "FileSystemResource",
    "FileSystemResourceProvider",
    "FILENAME_PLACEHOLDER",
    "PlaceholderReplacer",
    "PlaceholderReplacingResource",
]
