from __future__ import annotations

from typing import Iterable


class ScriptedRng:
    """Deterministic stand-in for ``random.Random`` that replays piece kinds."""

    def __init__(self, kinds: Iterable[int]) -> None:
        self.kinds = list(kinds)
        self.calls = 0

    def randrange(self, n: int) -> int:
        kind = self.kinds[self.calls % len(self.kinds)]
        self.calls += 1
        assert 0 <= kind < n
        return kind
