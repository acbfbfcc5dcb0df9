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
Tagging policy for a single run.
"""
import os
from typing import Any, Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from ..exceptions import ConfigurationError
from ..CONFIG.task_inputs import TaskInputs

# Task input names, as they appear in the task definition and INPUT_* variables
INPUT_IMAGE_NAMES_PATH = "imageNamesPath"
INPUT_QUALIFY_IMAGE_NAME = "qualifyImageName"
INPUT_ADDITIONAL_IMAGE_TAGS = "additionalImageTags"
INPUT_INCLUDE_SOURCE_TAGS = "includeSourceTags"
INPUT_INCLUDE_LATEST_TAG = "includeLatestTag"

_YAML_KEYS = {
    INPUT_IMAGE_NAMES_PATH: "image_names_path",
    INPUT_QUALIFY_IMAGE_NAME: "qualify_image_name",
    INPUT_ADDITIONAL_IMAGE_TAGS: "additional_image_tags",
    INPUT_INCLUDE_SOURCE_TAGS: "include_source_tags",
    INPUT_INCLUDE_LATEST_TAG: "include_latest_tag",
    "sourceTags": "source_tags",
}


class TaggingConfig(BaseModel):
    """
    Immutable set of inputs that drive tag composition.

    Resolved once, before any image is processed, and passed through the
    whole pipeline.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    image_names_path: str
    qualify_image_name: bool = False
    additional_image_tags: Tuple[str, ...] = ()
    include_source_tags: bool = False
    include_latest_tag: bool = False
    # Fixed source tags; when set, source control is not consulted
    source_tags: Optional[Tuple[str, ...]] = None

    @field_validator("additional_image_tags", "source_tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any, info: ValidationInfo):
        # YAML may give a newline-delimited block instead of a list
        if isinstance(value, str):
            value = value.split("\n")
        if value is None:
            return None if info.field_name == "source_tags" else ()
        return tuple(str(tag).strip() for tag in value if str(tag).strip())

    @classmethod
    def from_inputs(cls, inputs: TaskInputs) -> "TaggingConfig":
        """
        Builds the configuration from task inputs.

        Args:
            inputs: Task input reader.

        Returns:
            TaggingConfig with every input resolved.

        Raises:
            ConfigurationError: If the image names path is missing or does not exist.
        """
        return cls(
            image_names_path=inputs.get_path_input(INPUT_IMAGE_NAMES_PATH, required=True, check_exists=True),
            qualify_image_name=inputs.get_bool_input(INPUT_QUALIFY_IMAGE_NAME),
            additional_image_tags=inputs.get_delimited_input(INPUT_ADDITIONAL_IMAGE_TAGS, "\n"),
            include_source_tags=inputs.get_bool_input(INPUT_INCLUDE_SOURCE_TAGS),
            include_latest_tag=inputs.get_bool_input(INPUT_INCLUDE_LATEST_TAG),
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "TaggingConfig":
        """
        Loads the configuration from a YAML file.

        Keys may use either the snake_case field names or the task input
        names (``imageNamesPath``, ``includeLatestTag``...). A relative
        ``image_names_path`` is resolved against the directory of the YAML file.
        ``source_tags`` pins the source tags instead of reading them from git.

        :param config_path: Path to the YAML file.
        :return: Parsed configuration.
        :raises ConfigurationError: If the file is not valid YAML or not a mapping,
            or a key is unknown or a value invalid.
        """
        with open(config_path, 'r') as f:
            try:
                data = yaml.safe_load(f)
            except (yaml.YAMLError, UnicodeDecodeError) as e:
                raise ConfigurationError(f"Malformed configuration file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")

        values: Dict[str, Any] = {}
        for key, value in data.items():
            values[_YAML_KEYS.get(key, str(key))] = value

        path = values.get("image_names_path")
        if isinstance(path, str) and not os.path.isabs(path):
            values["image_names_path"] = os.path.join(os.path.dirname(os.path.abspath(config_path)), path)

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e
