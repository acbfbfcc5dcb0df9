"""
Interfaces for the services the mapping pipeline depends on.
Default implementations live in REGISTRY and SOURCE; tests pass fakes.
"""
from typing import List, Protocol


class ImageNameNormalizer(Protocol):
    """Turns a raw line from the image names file into a valid image name."""
    def __call__(self, raw: str) -> str: ...


class TagStripper(Protocol):
    """Removes any trailing tag from an image name."""
    def __call__(self, image_name: str) -> str: ...


class ImageNameQualifier(Protocol):
    """Registry connection that can prefix image names with its endpoint."""
    def qualify_image_name(self, image_name: str) -> str: ...


class SourceTagProvider(Protocol):
    """Supplies the tags attached to the commit being built."""
    def get_source_tags(self) -> List[str]: ...
