# SPDX-License-Identifier: Apache-2.0

"""Base classes for inventory client implementations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .query import NodeQuery


class BaseInventoryClient(ABC):
    """Abstract base class for inventory search services."""

    @abstractmethod
    def search(self, query: NodeQuery) -> List[Dict[str, Any]]:
        """Search for node records.

        Args:
            query: Search predicate

        Returns:
            Node records matching the query
        """
        pass

    def close(self) -> None:
        """Release resources held by the client."""
        pass

    def __enter__(self) -> "BaseInventoryClient":
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and cleanup resources."""
        self.close()
