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
Converters for generating a docker tag/push shell script from image mappings.
"""
import os
import shlex
import stat
from typing import List
from jinja2 import Environment
from ..MODELS.image_info import ImageMapping

SCRIPT_TEMPLATE = """#!/bin/sh
# Generated by tagmap: {{ mappings | length }} tag operation(s)
set -e
{% for m in mappings %}
{{ docker }} tag {{ m.source_image_name | quote }} {{ m.target_image_name | quote }}
{%- endfor %}
{% if push %}
{% for m in mappings %}
{{ docker }} push {{ m.target_image_name | quote }}
{%- endfor %}
{% endif %}
"""


class TagScriptConverter:
    """
    Renders image mappings as a shell script of docker commands.
    Commands are written in mapping order.
    """

    def __init__(self, mappings: List[ImageMapping], push: bool = False, docker: str = "docker"):
        """
        Initializes the script converter.

        :param mappings: The mappings to apply, in order.
        :param push: Also push every target image after tagging.
        :param docker: Docker client executable.
        """
        self.mappings = mappings
        self.push = push
        self.docker = docker
        env = Environment()
        env.filters["quote"] = shlex.quote
        self.template = env.from_string(SCRIPT_TEMPLATE)

    def render(self) -> str:
        """
        Renders the script.

        :return: The script content.
        """
        return self.template.render(mappings=self.mappings, push=self.push, docker=self.docker)

    def convert(self, output_path: str = "tag_images.sh"):
        """
        Writes the script and makes it executable.

        :param output_path: Where the script is written.
        :return: The path to the script.
        """
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        with open(output_path, "w") as f:
            f.write(self.render())

        mode = os.stat(output_path).st_mode
        os.chmod(output_path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return output_path
