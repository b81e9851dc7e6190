"""Application layer - Circular dependency detection."""

import threading
from typing import List

from named_ioc.domain import CircularDependencyError


class CircularDependencyDetector:
    """Detects circular dependencies during resolution.

    Uses thread-local storage to track the names currently being constructed.
    When a name appears twice on the path, a circular dependency is detected.

    Attributes:
        _local: Thread-local storage for resolution paths.
    """

    def __init__(self) -> None:
        """Initialize the circular dependency detector with thread-local storage."""
        self._local = threading.local()

    def _get_stack(self) -> List[str]:
        """Get the current thread's resolution path.

        Returns:
            The resolution path for the current thread.
        """
        if not hasattr(self._local, "stack"):
            self._local.stack = []
        return self._local.stack

    def push(self, name: str) -> None:
        """Add a name to the active resolution path.

        Args:
            name: The registration being constructed.

        Raises:
            CircularDependencyError: If the name is already on the path.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push("UserService")
            >>> detector.push("UserRepository")
            >>> detector.push("UserService")  # Raises CircularDependencyError
        """
        stack = self._get_stack()

        if name in stack:
            cycle_start_index = stack.index(name)
            cycle = stack[cycle_start_index:] + [name]
            raise CircularDependencyError(cycle)

        stack.append(name)

    def pop(self) -> None:
        """Remove the last name from the resolution path."""
        stack = self._get_stack()
        if stack:
            stack.pop()

    def path(self) -> List[str]:
        """Return a copy of the current thread's resolution path."""
        return list(self._get_stack())

    def clear(self) -> None:
        """Clear the resolution path of the current thread."""
        if hasattr(self._local, "stack"):
            self._local.stack.clear()
