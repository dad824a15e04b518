import glob
import os
from pathlib import Path
from abc import abstractmethod
from beartype.typing import Iterable, List, Union

from augurkcli.cli import Environment
from augurkcli.constants import FAULT_MAPPING
from augurkcli.settings import FEATURE_FILE_PATTERN


class FileParser:
    """
    Each new parser should inherit from this class, to make file reading modular.
    """

    def __init__(self, environment: Environment, filepath: Union[str, Path]):
        self.filepath = self.check_file(filepath)
        self.filename = self.filepath.name
        self.env = environment

    @staticmethod
    def check_file(filepath: Union[str, Path]) -> Path:
        filepath = Path(filepath)
        if not filepath.is_file():
            raise FileNotFoundError("File not found.")
        return filepath

    @staticmethod
    def expand_file_specs(file_specs: Iterable[str], environment: Environment) -> List[Path]:
        """Expands file specifications into the list of files they refer to.

        - a directory expands to the feature files directly inside it
        - a specification containing ? or * is resolved as a wildcard within its directory
        - anything else is kept when it is an existing file
        Specifications that do not resolve to anything are logged and skipped.
        """
        expanded = []
        for file_spec in file_specs:
            if os.path.isdir(file_spec):
                expanded.extend(sorted(Path(file_spec).glob(FEATURE_FILE_PATTERN)))
                continue

            if "?" in file_spec or "*" in file_spec:
                directory, spec = os.path.split(file_spec)
                directory = directory or "."
                if os.path.isdir(directory):
                    if spec:
                        matches = glob.glob(os.path.join(glob.escape(directory), spec))
                        expanded.extend(Path(match) for match in sorted(matches) if os.path.isfile(match))
                else:
                    environment.log(FAULT_MAPPING["skipping_invalid_directory"].format(directory=directory))
                continue

            if os.path.isfile(file_spec):
                expanded.append(Path(file_spec))
            else:
                environment.log(FAULT_MAPPING["skipping_missing_file"].format(file=file_spec))

        return expanded

    @abstractmethod
    def parse_file(self):
        raise NotImplementedError
