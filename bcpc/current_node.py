# SPDX-License-Identifier: Apache-2.0

"""The live record of the node running the helpers."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from bcpc.attributes import NOT_FOUND, get_attribute


class CurrentNode:
    """Live node record and its expanded run list.

    Args:
        record: Node attributes, must contain "hostname"
        run_list: Expanded run list as "cookbook::recipe" entries. Defaults
            to the "recipes" attribute of the record.
    """

    def __init__(self, record: Dict[str, Any], run_list: Optional[List[str]] = None):
        if not record.get("hostname"):
            raise ValueError("Current node record has no hostname")
        self.record = record
        self.run_list = list(run_list if run_list is not None else record.get("recipes", []))

    @classmethod
    def from_file(cls, path: Path) -> "CurrentNode":
        """Load the current node record from a YAML file.

        The file holds the node attributes; an optional "run_list" key
        holds the expanded run list.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        run_list = data.pop("run_list", None)
        return cls(data, run_list=run_list)

    @property
    def hostname(self) -> str:
        return self.record["hostname"]

    @property
    def chef_environment(self) -> Optional[str]:
        return self.record.get("chef_environment")

    def attribute(self, path: str, default: Any = None) -> Any:
        value = get_attribute(self.record, path)
        return default if value is NOT_FOUND else value

    @property
    def management_ip(self) -> Optional[str]:
        return self.attribute("bcpc.management.ip")

    @property
    def floating_ip(self) -> Optional[str]:
        return self.attribute("bcpc.floating.ip")

    def has_recipe(self, recipe: str) -> bool:
        """Check whether "cookbook::recipe" is part of the run list."""
        return recipe in self.run_list

    def __repr__(self) -> str:
        return f"CurrentNode({self.hostname})"
