"""Pending-selection state for the two-click connect gesture."""

import logging
from typing import Optional

from graphmap.errors import SelectionError

logger = logging.getLogger(__name__)


class SelectionState:
    """
    Holds zero or one pending node id.

    The id is a reference into the GraphStore, not a copy of the node, so a
    label or deletion change is always seen through the store.
    """

    def __init__(self):
        self._pending: Optional[str] = None

    def current(self) -> Optional[str]:
        return self._pending

    def __bool__(self) -> bool:
        return self._pending is not None

    def begin(self, node_id: str) -> None:
        """Mark node_id as the first endpoint. Nothing may be pending yet."""
        if self._pending is not None:
            raise SelectionError(f"Selection already pending on {self._pending}")
        self._pending = node_id
        logger.debug(f"Selection pending on {node_id}")

    def resolve(self, node_id: str) -> str:
        """
        Complete the gesture with node_id as the second endpoint.

        Returns the previously pending id and clears the selection; the caller
        decides whether the pair forms a valid edge.
        """
        if self._pending is None:
            raise SelectionError(f"No pending selection to resolve with {node_id}")
        first, self._pending = self._pending, None
        logger.debug(f"Selection resolved: {first} -> {node_id}")
        return first

    def cancel(self) -> None:
        if self._pending is not None:
            logger.debug(f"Selection on {self._pending} cancelled")
        self._pending = None
