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
Source control tags for the commit being built.
"""

import subprocess
import sys
from typing import List, Optional, Sequence

from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from ..CONFIG.task_inputs import TaskInputs
from ..exceptions import SourceControlError

GIT_PROVIDERS = ("TfsGit", "GitHub", "Git", "GitHubEnterprise", "Bitbucket", "GitLab")
UNTAGGED_PROVIDERS = ("TfsVersionControl", "Svn")


class StaticSourceTagProvider:
    """
    Source tag provider returning a fixed list of tags.
    """
    def __init__(self, tags: Optional[Sequence[str]] = None):
        self.tags = list(tags or [])

    def get_source_tags(self) -> List[str]:
        return list(self.tags)


class GitSourceTagProvider:
    """
    Reads the git tags pointing at the commit being built.

    The repository provider and commit come from the build variables
    ``Build.Repository.Provider`` and ``Build.SourceVersion``.
    """

    GIT_TIMEOUT = 30

    def __init__(self, inputs: Optional[TaskInputs] = None, cwd: Optional[str] = None, git_path: str = "git"):
        """
        Initialize the provider.

        Args:
            inputs: Reader for build variables. Defaults to the process environment.
            cwd: Repository working directory. Defaults to the current directory.
            git_path: git executable to run.
        """
        self.inputs = inputs or TaskInputs()
        self.cwd = cwd
        self.git_path = git_path

    def get_source_tags(self) -> List[str]:
        """
        Get the tags on the source commit, in the order git lists them.

        Returns an empty list, with a warning where something is missing,
        when the repository type has no tags or the build variables are not set.

        Raises:
            SourceControlError: If git keeps failing.
        """
        provider = self.inputs.get_variable("Build.Repository.Provider")
        if not provider:
            print("Warning: Cannot retrieve source tags because Build.Repository.Provider is not set.",
                  file=sys.stderr)
            return []

        if provider in UNTAGGED_PROVIDERS:
            return []

        if provider not in GIT_PROVIDERS:
            print(f"Warning: Cannot retrieve source tags for repository provider {provider}.", file=sys.stderr)
            return []

        source_version = self.inputs.get_variable("Build.SourceVersion")
        if not source_version:
            print("Warning: Cannot retrieve source tags because Build.SourceVersion is not set.",
                  file=sys.stderr)
            return []

        try:
            return self.tags_at(source_version)
        except RetryError as e:
            error = e.last_attempt.exception()
            raise SourceControlError(f"Failed to read tags at {source_version}: {error}") from error

    @retry(
        retry=retry_if_exception_type(subprocess.CalledProcessError),
        stop=stop_after_attempt(3),
        wait=wait_fixed(1),
    )
    def tags_at(self, commit: str) -> List[str]:
        """
        List the tags pointing at a commit.

        :param commit: Commit id or ref.
        :return: Tag names.
        """
        result = subprocess.run(
            [self.git_path, "tag", "--points-at", commit],
            cwd=self.cwd,
            capture_output=True,
            text=True,
            check=True,
            timeout=self.GIT_TIMEOUT,
        )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]
