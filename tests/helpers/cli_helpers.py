import itertools
from typing import List


class CLIParametersHelper:
    def __init__(self):
        self.required_arguments = {
            "url": ["--url", "https://fake-augurk.io"],
            "publish": ["publish"],
            "feature_files": ["--feature-files", "fake.feature"],
            "branch_name": ["--branch-name", "main"],
        }

    def get_all_required_parameters(self) -> List[str]:
        return list(itertools.chain(*[value for key, value in self.required_arguments.items()]))

    def get_all_required_parameters_without_specified(self, args_to_remove: List[str]) -> List[str]:
        return list(
            itertools.chain(
                *[value for key, value in self.required_arguments.items() if key not in args_to_remove]
            )
        )

    def get_all_required_parameters_plus_optional(self, args_to_add: List[str]) -> List[str]:
        return args_to_add + self.get_all_required_parameters()
