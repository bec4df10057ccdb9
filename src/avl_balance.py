"""Balance tags for AVL nodes and the tag updates that follow a rotation.

A tag's value is height(left) - height(right), so it can be compared with
real subtree heights directly.
"""

from enum import IntEnum
from typing import Tuple


class Balance(IntEnum):
    LEFT_HEAVY = 1
    BALANCED = 0
    RIGHT_HEAVY = -1

    def opposite(self) -> 'Balance':
        return Balance(-self.value)


def single_rotation_tags(heavy: Balance, child: Balance) -> Tuple[Balance, Balance]:
    """
    Tags after a single rotation fixing a node overweight on side `heavy`.

    Args:
        heavy: LEFT_HEAVY or RIGHT_HEAVY, the side that is two levels taller
        child: tag of the child on that side before the rotation

    Returns:
        (tag of the node rotated down, tag of the child rotated up)

    A BALANCED child only happens after a deletion; the subtree then keeps
    its height. A child leaning the other way needs a double rotation.
    """
    if heavy is Balance.BALANCED:
        raise ValueError("rotation needs a heavy side")
    if child is heavy:
        return Balance.BALANCED, Balance.BALANCED
    if child is Balance.BALANCED:
        return heavy, heavy.opposite()
    raise ValueError(f"{child.name} child under {heavy.name} node needs a double rotation")


def double_rotation_tags(pivot: Balance) -> Tuple[Balance, Balance]:
    """
    Tags after a double rotation that lifts `pivot` (the heavy child's inner
    child) to the subtree root.

    Returns (new left child tag, new right child tag). The pivot itself always
    ends up BALANCED.
    """
    if pivot is Balance.LEFT_HEAVY:
        return Balance.BALANCED, Balance.RIGHT_HEAVY
    if pivot is Balance.RIGHT_HEAVY:
        return Balance.LEFT_HEAVY, Balance.BALANCED
    return Balance.BALANCED, Balance.BALANCED
