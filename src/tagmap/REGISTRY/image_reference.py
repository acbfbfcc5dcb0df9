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
Image name handling.
Normalizes names like 'MyImage:1.0' and strips tags from references like
'localhost:5000/team/app:v1' without mistaking the registry port for a tag.
"""

from typing import Optional, Tuple

from ..exceptions import InvalidImageNameError


def generate_valid_image_name(image_name: str) -> str:
    """
    Normalize an image name so it can be used as a reference.

    Image references are lower-case and may not contain spaces.

    Args:
        image_name: Raw image name, e.g. a line from the image names file.

    Returns:
        The normalized image name.

    Raises:
        InvalidImageNameError: If nothing is left after normalization.
    """
    normalized = image_name.lower().replace(" ", "")
    if not normalized:
        raise InvalidImageNameError(f"Invalid image name: {image_name!r}")
    return normalized


def has_registry_component(image_name: str) -> bool:
    """
    Check whether the first path segment of an image name is a registry host.

    A host is recognized by a '.' (domain) or ':' (port) before the first '/',
    e.g. 'myregistry.azurecr.io/app' or 'localhost:5000/app'.
    """
    slash_index = image_name.find("/")
    period_index = image_name.find(".")
    colon_index = image_name.find(":")
    return (0 < period_index < slash_index) or (0 < colon_index < slash_index)


def split_tag(image_name: str) -> Tuple[str, Optional[str]]:
    """
    Split an image name into its name and tag parts.

    Any digest ('@sha256:...') is dropped. The tag is searched after the
    registry host, so a port is never taken for a tag:

        'nginx:1.21'              -> ('nginx', '1.21')
        'localhost:5000/app'      -> ('localhost:5000/app', None)
        'localhost:5000/app:v1'   -> ('localhost:5000/app', 'v1')
    """
    name = image_name.split("@", 1)[0]

    start = name.find("/") if has_registry_component(name) else 0
    colon_index = name.find(":", start)
    if colon_index < 0:
        return name, None
    return name[:colon_index], name[colon_index + 1:]


def image_name_without_tag(image_name: str) -> str:
    """
    Get the image name with any tag or digest removed.

    :param image_name: Image name, possibly qualified with a registry.
    :return: The normalized base image name.
    """
    base_name, _ = split_tag(image_name)
    return generate_valid_image_name(base_name)
