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
Exceptions raised by tagmap.
"""


class TagMapError(Exception):
    """Base class for all tagmap errors."""


class EmptyInputError(TagMapError):
    """
    The image names file did not contain any image names.

    :param path: Path of the file that was read.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No images found in image names file: {path}")


class InvalidImageNameError(TagMapError, ValueError):
    """An image name that cannot form a valid image reference."""


class ConfigurationError(TagMapError):
    """A required input is missing or malformed."""


class SourceControlError(TagMapError):
    """Tags could not be read from source control."""
