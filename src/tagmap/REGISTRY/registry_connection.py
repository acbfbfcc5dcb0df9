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
Connection details for the registry images are tagged for.
"""

from typing import Optional
from dataclasses import dataclass
from urllib.parse import urlparse

from .image_reference import has_registry_component
from ..CONFIG.task_inputs import TaskInputs

INPUT_CONTAINER_REGISTRY = "containerRegistry"


@dataclass
class RegistryConnection:
    """
    The registry endpoint used to qualify unqualified image names.

    Examples:
        - registry 'https://myregistry.azurecr.io/' -> host 'myregistry.azurecr.io'
        - registry 'localhost:5000' -> host 'localhost:5000'
        - no registry -> image names are never qualified
    """

    registry: Optional[str] = None

    DOCKER_HUB_HOST = "index.docker.io"

    @classmethod
    def from_inputs(cls, inputs: TaskInputs) -> "RegistryConnection":
        """Create a connection from the containerRegistry task input."""
        return cls(registry=inputs.get_input(INPUT_CONTAINER_REGISTRY) or None)

    @property
    def hostname(self) -> Optional[str]:
        """Registry host (with port), without scheme or path."""
        if not self.registry:
            return None
        if "://" in self.registry:
            return urlparse(self.registry).netloc.lower()
        return self.registry.rstrip("/").lower()

    def qualify_image_name(self, image_name: str) -> str:
        """
        Prefix an image name with the registry host.

        Names that already carry a registry are left untouched, as are all
        names when the registry is Docker Hub or not configured.

        Args:
            image_name: Image name, e.g. 'team/app:v1'.

        Returns:
            Qualified image name, e.g. 'myregistry.azurecr.io/team/app:v1'.
        """
        hostname = self.hostname
        if not hostname or has_registry_component(image_name):
            return image_name
        if hostname == self.DOCKER_HUB_HOST:
            return image_name
        return f"{hostname}/{image_name}"

    def __str__(self) -> str:
        return self.hostname or "<no registry>"
