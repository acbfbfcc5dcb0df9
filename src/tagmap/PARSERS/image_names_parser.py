"""
Parser for image names files: one image name per line.
"""
from typing import List, Optional

from ..exceptions import EmptyInputError
from ..MODELS.collaborators import ImageNameNormalizer
from ..REGISTRY.image_reference import generate_valid_image_name


class ImageNamesParser:
    """
    Parser for image names files.
    """
    def __init__(self, normalizer: Optional[ImageNameNormalizer] = None):
        """
        Initializes the parser.

        :param normalizer: Turns each line into a valid image name.
        """
        self.normalizer = normalizer or generate_valid_image_name

    def parse(self, image_names_path: str) -> List[str]:
        """
        Parses an image names file from a path.

        Args:
            image_names_path (str): Path to the file.

        Returns:
            List[str]: Normalized image names, in file order.
        """
        with open(image_names_path, 'r', encoding='utf-8') as f:
            content = f.read()
        return self.parse_from_string(content, image_names_path)

    def parse_from_string(self, content: str, image_names_path: str = "<string>") -> List[str]:
        """
        Parses image names from a string.
        Duplicate names are kept.

        :raises EmptyInputError: If the content holds no image names.
        """
        content = content.strip().replace("\r\n", "\n")
        if not content:
            raise EmptyInputError(image_names_path)

        return [self.normalizer(line) for line in content.split("\n")]
