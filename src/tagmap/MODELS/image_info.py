"""
Models for the per-image working state and the resulting source/target mappings.
"""
from typing import List
from pydantic import BaseModel, ConfigDict


class ImageInfo(BaseModel):
    """
    Working state for one source image while its target images are computed.
    Only `tagged_images` changes after construction.
    """
    # The image name as listed in the image names file, after normalization
    source_image_name: str

    # The source image name, qualified with the registry endpoint if configured to do so
    qualified_image_name: str

    # The qualified image name with any tag removed
    base_image_name: str

    # Qualified and tagged target images, in the order they must be applied
    tagged_images: List[str] = []


class ImageMapping(BaseModel):
    """
    One tagging operation: apply `target_image_name` to `source_image_name`.
    """
    model_config = ConfigDict(frozen=True)

    source_image_name: str
    target_image_name: str

    def to_dict(self):
        """Serialized form using the camelCase keys downstream tooling expects."""
        return {
            "sourceImageName": self.source_image_name,
            "targetImageName": self.target_image_name,
        }
