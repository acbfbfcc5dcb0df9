"""
Reads task inputs and build variables from the environment.

Inputs follow the pipeline agent convention: the input ``imageNamesPath``
is read from ``INPUT_IMAGENAMESPATH``, and the build variable
``Build.SourceVersion`` from ``BUILD_SOURCEVERSION``.
"""
import os
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values

from ..exceptions import ConfigurationError


class TaskInputs:
    """
    Typed access to task inputs stored in an environment mapping.
    """
    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initializes the reader.

        :param environ: Variables to read from. Defaults to the process environment.
        """
        self.environ: Dict[str, str] = dict(os.environ if environ is None else environ)

    @classmethod
    def from_env_file(cls, env_path: str, environ: Optional[Mapping[str, str]] = None) -> "TaskInputs":
        """
        Creates a reader from a .env file layered under the environment.
        Variables already present in the environment win over the file.
        """
        merged = {k: v for k, v in dotenv_values(env_path).items() if v is not None}
        merged.update(os.environ if environ is None else environ)
        return cls(merged)

    @staticmethod
    def _input_key(name: str) -> str:
        return "INPUT_" + name.replace(" ", "_").upper()

    @staticmethod
    def _variable_key(name: str) -> str:
        return name.replace(".", "_").replace(" ", "_").upper()

    def get_input(self, name: str, required: bool = False) -> Optional[str]:
        """
        Returns the raw value of an input, stripped of surrounding whitespace.

        :raises ConfigurationError: If the input is required and not set.
        """
        value = self.environ.get(self._input_key(name))
        if value is not None:
            value = value.strip()
        if required and not value:
            raise ConfigurationError(f"Input required: {name}")
        return value

    def get_bool_input(self, name: str, required: bool = False) -> bool:
        """True only when the input is the string 'true', in any case."""
        return (self.get_input(name, required) or "").upper() == "TRUE"

    def get_delimited_input(self, name: str, delimiter: str, required: bool = False) -> List[str]:
        """
        Splits an input on `delimiter`, dropping blank items.
        Item order is preserved.
        """
        value = self.get_input(name, required)
        if not value:
            return []
        return [item.strip() for item in value.split(delimiter) if item.strip()]

    def get_path_input(self, name: str, required: bool = False, check_exists: bool = False) -> Optional[str]:
        """
        Returns a path input.

        Args:
            name: Input name.
            required: Raise if the input is not set.
            check_exists: Raise if the path does not exist.

        Returns:
            The path, or None if not set and not required.
        """
        path = self.get_input(name, required)
        if path and check_exists and not os.path.exists(path):
            raise ConfigurationError(f"Not found {name}: {path}")
        return path

    def get_variable(self, name: str) -> Optional[str]:
        """Returns a build variable such as ``Build.Repository.Provider``."""
        return self.environ.get(self._variable_key(name))
