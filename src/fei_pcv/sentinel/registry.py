"""Insertion-ordered guard set."""

from typing import Dict, List


class GuardRegistry:
    def __init__(self):
        # dict keys preserve insertion order
        self._guards: Dict[str, None] = {}

    def add(self, guard: str) -> bool:
        """Register `guard`; False if it was already present."""
        if guard in self._guards:
            return False
        self._guards[guard] = None
        return True

    def remove(self, guard: str) -> bool:
        """Unregister `guard`; False if it was not present."""
        if guard not in self._guards:
            return False
        del self._guards[guard]
        return True

    def contains(self, guard: str) -> bool:
        return guard in self._guards

    def all(self) -> List[str]:
        return list(self._guards)

    def __contains__(self, guard: str) -> bool:
        return self.contains(guard)

    def __len__(self) -> int:
        return len(self._guards)
