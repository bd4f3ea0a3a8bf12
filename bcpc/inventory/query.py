# SPDX-License-Identifier: Apache-2.0

"""Node search predicates."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


def _escape(term: str) -> str:
    return term.replace(":", "\\:")


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


@dataclass(frozen=True)
class NodeQuery:
    """Search for nodes of an environment, optionally by role or recipe.

    Attributes:
        environment: Environment the nodes must belong to
        role: Role the nodes must carry
        recipe: Recipe (without cookbook) the nodes must run
        cookbook: Cookbook of the recipe
    """

    environment: str
    role: Optional[str] = None
    recipe: Optional[str] = None
    cookbook: str = "bcpc"

    @property
    def qualified_recipe(self) -> Optional[str]:
        if not self.recipe:
            return None
        return f"{self.cookbook}::{self.recipe}"

    def to_query_string(self) -> str:
        """Render the query in inventory search syntax.

        Example: recipes:bcpc\\:\\:ceph-work AND chef_environment:prod
        """
        terms = []
        if self.role:
            terms.append(f"role:{_escape(self.role)}")
        if self.recipe:
            terms.append(f"recipes:{_escape(self.qualified_recipe)}")
        terms.append(f"chef_environment:{_escape(self.environment)}")
        return " AND ".join(terms)

    def matches(self, record: Mapping[str, Any]) -> bool:
        """Check whether a node record satisfies the query."""
        if record.get("chef_environment") != self.environment:
            return False
        if self.role and self.role not in _as_list(record.get("roles")):
            return False
        if self.recipe and self.qualified_recipe not in _as_list(record.get("recipes")):
            return False
        return True

    def __str__(self) -> str:
        return self.to_query_string()
