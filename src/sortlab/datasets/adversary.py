"""
McIlroy's "killer adversary" for partition-exchange sorts.

The target algorithm sorts placeholder items whose comparisons are answered
by the adversary. Items start as "gas" (unknown, larger than everything
decided). Whenever two gas items meet, one of them is frozen to the next
small value, preferring the item most recently compared against a solid
value, which is how the pivot candidate ends up near the bottom of its range.
After the sort finishes, the remaining gas items are frozen in index order;
the frozen values form a permutation that reproduces the same comparison
outcomes when fed back to the same deterministic algorithm.

Reference: M. D. McIlroy, "A Killer Adversary for Quicksort" (1999).
"""

from __future__ import annotations

from typing import List

__all__ = ["mcilroy_permutation"]


class _Adversary:
    def __init__(self, n: int) -> None:
        self.gas = n
        self.val = [n] * n
        self.nsolid = 0
        self.candidate = -1

    def freeze(self, x: int) -> None:
        self.val[x] = self.nsolid
        self.nsolid += 1

    def cmp(self, x: int, y: int) -> int:
        if x == y:
            return 0
        val, gas = self.val, self.gas
        if val[x] == gas and val[y] == gas:
            if x == self.candidate:
                self.freeze(x)
            else:
                self.freeze(y)
        if val[x] == gas:
            self.candidate = x
        elif val[y] == gas:
            self.candidate = y
        return (val[x] > val[y]) - (val[x] < val[y])


class _Item:
    __slots__ = ("adv", "index")

    def __init__(self, adv: _Adversary, index: int) -> None:
        self.adv = adv
        self.index = index

    def __lt__(self, other: "_Item") -> bool:
        return self.adv.cmp(self.index, other.index) < 0


def mcilroy_permutation(n: int, target: str = "introsort") -> List[int]:
    """
    Build an adversarial permutation of [0..n-1] for the named algorithm.

    `target` is a key of `sortlab.algorithms.ALGORITHMS`.
    """
    from ..algorithms import ALGORITHMS

    if target not in ALGORITHMS:
        raise ValueError(f"Unknown target algorithm: {target!r}. Supported: {sorted(ALGORITHMS)}")
    if n <= 0:
        return []

    adv = _Adversary(n)
    items = [_Item(adv, i) for i in range(n)]
    ALGORITHMS[target](items)

    for i in range(n):
        if adv.val[i] == adv.gas:
            adv.freeze(i)
    return list(adv.val)
