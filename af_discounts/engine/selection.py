from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .context import Discount


@dataclass(frozen=True)
class Selection:
    discount: Optional[Discount]
    value: int

    @property
    def selected(self) -> bool:
        return self.discount is not None


NOTHING = Selection(discount=None, value=0)


def pick_best(candidates: Iterable[Discount], value_of: Callable[[Discount], int]) -> Selection:
    """
    Highest value wins. Strict '>' so on ties the first candidate (input
    order) stays; a 0-valued candidate is still selected if it is the only one.
    """
    best: Optional[Discount] = None
    best_value = -1
    for discount in candidates:
        value = value_of(discount)
        if value > best_value:
            best, best_value = discount, value

    if best is None:
        return NOTHING
    return Selection(discount=best, value=best_value)
