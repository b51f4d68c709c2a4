"""Shared pytest fixtures for lazywire tests."""

from dataclasses import dataclass

import pytest


@dataclass
class CallCounter:
    """Count factory invocations and hand out increasing ids."""

    count: int = 0

    def __call__(self) -> int:
        self.count += 1
        return self.count


@pytest.fixture()
def counter() -> CallCounter:
    """Fresh invocation counter."""
    return CallCounter()
