# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Builds the source-to-target image mappings for a tagging run.
"""
from typing import List, Optional, Sequence

from ..MODELS.collaborators import (
    ImageNameNormalizer,
    ImageNameQualifier,
    SourceTagProvider,
    TagStripper,
)
from ..exceptions import ConfigurationError
from ..MODELS.image_info import ImageInfo, ImageMapping
from ..MODELS.tagging_config import TaggingConfig
from ..PARSERS.image_names_parser import ImageNamesParser
from ..REGISTRY.image_reference import image_name_without_tag
from ..SOURCE.source_tags import GitSourceTagProvider

LATEST_TAG = "latest"


def load_image_names(config: TaggingConfig,
                     normalizer: Optional[ImageNameNormalizer] = None) -> List[str]:
    """
    Reads the normalized source image names from the configured file.

    :raises EmptyInputError: If the file holds no image names.
    """
    return ImageNamesParser(normalizer).parse(config.image_names_path)


class ImageMapper:
    """
    Computes every (source image, target image) pair a tagging run must apply.
    """
    def __init__(self,
                 config: TaggingConfig,
                 source_tags: Optional[SourceTagProvider] = None,
                 strip_tag: TagStripper = image_name_without_tag):
        """
        Initializes the mapper.

        :param config: Tagging policy for this run.
        :param source_tags: Provider consulted when the policy includes source tags.
            Defaults to reading git tags of the build commit.
        :param strip_tag: Removes the tag from a qualified image name.
        """
        self.config = config
        self.source_tags = source_tags
        self.strip_tag = strip_tag

    def build_image_infos(self, connection: Optional[ImageNameQualifier],
                          image_names: Sequence[str]) -> List[ImageInfo]:
        """
        Creates one ImageInfo per source image name, in input order.

        :raises ConfigurationError: If names must be qualified but no connection is given.
        """
        if self.config.qualify_image_name and connection is None:
            raise ConfigurationError("Image names must be qualified but no registry connection was given")

        image_infos = []
        for image_name in image_names:
            if self.config.qualify_image_name:
                qualified_image_name = connection.qualify_image_name(image_name)
            else:
                qualified_image_name = image_name
            image_infos.append(ImageInfo(
                source_image_name=image_name,
                qualified_image_name=qualified_image_name,
                base_image_name=self.strip_tag(qualified_image_name),
            ))
        return image_infos

    def get_common_tags(self) -> List[str]:
        """
        Tags applied to every image: the additional tags, then the source tags.
        """
        common_tags = list(self.config.additional_image_tags)
        if self.config.include_source_tags:
            provider = self.source_tags if self.source_tags is not None else GitSourceTagProvider()
            common_tags.extend(provider.get_source_tags())
        return common_tags

    def compose_tags(self, image_info: ImageInfo, common_tags: Sequence[str]) -> None:
        """
        Appends the target images for one source image to its tagged_images.

        An untagged image always gets 'latest'. An explicitly tagged image
        keeps its own tag first, and gets 'latest' only when the policy asks
        for it. Common tags come before 'latest'. Duplicates are kept.
        """
        image_specific_tags = []
        if image_info.base_image_name == image_info.qualified_image_name:
            image_specific_tags.append(LATEST_TAG)
        else:
            image_info.tagged_images.append(image_info.qualified_image_name)
            if self.config.include_latest_tag:
                image_specific_tags.append(LATEST_TAG)

        for tag in list(common_tags) + image_specific_tags:
            image_info.tagged_images.append(f"{image_info.base_image_name}:{tag}")

    @staticmethod
    def flatten(image_infos: Sequence[ImageInfo]) -> List[ImageMapping]:
        """
        One mapping per tagged image, grouped by source image in input order.
        """
        return [
            ImageMapping(source_image_name=image_info.source_image_name, target_image_name=tagged_image)
            for image_info in image_infos
            for tagged_image in image_info.tagged_images
        ]

    def build_mappings(self, connection: Optional[ImageNameQualifier],
                       image_names: Sequence[str]) -> List[ImageMapping]:
        """
        Builds the mappings from source image names to tagged target images.

        Args:
            connection: Registry connection used to qualify names, if the policy says so.
            image_names: Normalized source image names.

        Returns:
            List[ImageMapping]: Ordered mappings. The same source image appears
            once per target image.
        """
        image_infos = self.build_image_infos(connection, image_names)

        # Fetched once for all images
        common_tags = self.get_common_tags()
        for image_info in image_infos:
            self.compose_tags(image_info, common_tags)

        return self.flatten(image_infos)


def build_mappings(connection: Optional[ImageNameQualifier],
                   image_names: Sequence[str],
                   config: TaggingConfig,
                   source_tags: Optional[SourceTagProvider] = None,
                   strip_tag: TagStripper = image_name_without_tag) -> List[ImageMapping]:
    """
    Builds the image mappings for `image_names` under `config`.
    See ImageMapper.build_mappings.
    """
    return ImageMapper(config, source_tags=source_tags, strip_tag=strip_tag).build_mappings(connection, image_names)
