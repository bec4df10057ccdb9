import logging
from collections import deque
from typing import TypeVar, Generic, Callable, Deque, List, Iterator, Optional, Tuple

from avl_balance import Balance, single_rotation_tags, double_rotation_tags

T = TypeVar('T')

logger = logging.getLogger(__name__)


class NotFoundError(KeyError):
    """Raised when a lookup names an element that is not in the tree."""


class AVLTree(Generic[T]):
    """
    Height-balanced binary search tree.

    Elements are ordered by their own `<` and `>`. Two elements that compare
    neither less nor greater share a key, so inserting one replaces the other.
    Each node keeps a balance tag instead of a height; insertions and
    deletions report whether a subtree grew or shrank so rebalancing only
    walks back up the search path.
    """

    class Node:
        def __init__(self, value: T) -> None:
            self.value: T = value
            self.left: Optional['AVLTree.Node'] = None
            self.right: Optional['AVLTree.Node'] = None
            self.balance: Balance = Balance.BALANCED

    def __init__(self) -> None:
        self._root: Optional[AVLTree.Node] = None
        self._size: int = 0

    def _right_rotate(self, node: Node) -> Node:
        pivot = node.left
        assert pivot is not None
        logger.debug("rotating right at %r", node.value)

        node.left = pivot.right
        pivot.right = node
        return pivot

    def _left_rotate(self, node: Node) -> Node:
        pivot = node.right
        assert pivot is not None
        logger.debug("rotating left at %r", node.value)

        node.right = pivot.left
        pivot.left = node
        return pivot

    def _left_balance(self, node: Node) -> Tuple[Node, bool]:
        """Fix a node whose left subtree is two levels taller than its right.

        Returns the new subtree root and whether the subtree height dropped.
        """
        child = node.left
        assert child is not None

        if child.balance is Balance.RIGHT_HEAVY:
            pivot = child.right
            assert pivot is not None
            child.balance, node.balance = double_rotation_tags(pivot.balance)
            pivot.balance = Balance.BALANCED
            node.left = self._left_rotate(child)
            return self._right_rotate(node), True

        node.balance, child.balance = single_rotation_tags(Balance.LEFT_HEAVY, child.balance)
        return self._right_rotate(node), child.balance is Balance.BALANCED

    def _right_balance(self, node: Node) -> Tuple[Node, bool]:
        """Mirror of `_left_balance` for a right subtree two levels too tall."""
        child = node.right
        assert child is not None

        if child.balance is Balance.LEFT_HEAVY:
            pivot = child.left
            assert pivot is not None
            node.balance, child.balance = double_rotation_tags(pivot.balance)
            pivot.balance = Balance.BALANCED
            node.right = self._right_rotate(child)
            return self._left_rotate(node), True

        node.balance, child.balance = single_rotation_tags(Balance.RIGHT_HEAVY, child.balance)
        return self._left_rotate(node), child.balance is Balance.BALANCED

    def _insert(self, node: Optional[Node], value: T) -> Tuple[Node, bool]:
        if node is None:
            self._size += 1
            return AVLTree.Node(value), True

        if value < node.value:
            node.left, taller = self._insert(node.left, value)
            if not taller:
                return node, False
            if node.balance is Balance.LEFT_HEAVY:
                node, _ = self._left_balance(node)
                return node, False
            if node.balance is Balance.RIGHT_HEAVY:
                node.balance = Balance.BALANCED
                return node, False
            node.balance = Balance.LEFT_HEAVY
            return node, True

        if value > node.value:
            node.right, taller = self._insert(node.right, value)
            if not taller:
                return node, False
            if node.balance is Balance.RIGHT_HEAVY:
                node, _ = self._right_balance(node)
                return node, False
            if node.balance is Balance.LEFT_HEAVY:
                node.balance = Balance.BALANCED
                return node, False
            node.balance = Balance.RIGHT_HEAVY
            return node, True

        node.value = value
        return node, False

    def insert(self, value: T) -> None:
        """Insert `value`, replacing the stored element if its key is present."""
        self._root, _ = self._insert(self._root, value)

    def _delete_right_balance(self, node: Node) -> Tuple[Node, bool]:
        """Rebalance after the left subtree got shorter.

        Returns the new subtree root and whether it is still shorter.
        """
        if node.balance is Balance.LEFT_HEAVY:
            node.balance = Balance.BALANCED
            return node, True
        if node.balance is Balance.BALANCED:
            node.balance = Balance.RIGHT_HEAVY
            return node, False
        logger.debug("rebalancing %r after removal on its left", node.value)
        return self._right_balance(node)

    def _delete_left_balance(self, node: Node) -> Tuple[Node, bool]:
        """Rebalance after the right subtree got shorter."""
        if node.balance is Balance.RIGHT_HEAVY:
            node.balance = Balance.BALANCED
            return node, True
        if node.balance is Balance.BALANCED:
            node.balance = Balance.LEFT_HEAVY
            return node, False
        logger.debug("rebalancing %r after removal on its right", node.value)
        return self._left_balance(node)

    def _find_max_node(self, node: Node) -> Node:
        while node.right is not None:
            node = node.right
        return node

    def _remove(self, node: Optional[Node], value: T) -> Tuple[Optional[Node], bool, bool]:
        if node is None:
            return None, False, False

        if value < node.value:
            node.left, shorter, found = self._remove(node.left, value)
            if shorter:
                node, shorter = self._delete_right_balance(node)
            return node, shorter, found

        if value > node.value:
            node.right, shorter, found = self._remove(node.right, value)
            if shorter:
                node, shorter = self._delete_left_balance(node)
            return node, shorter, found

        if node.left is None:
            self._size -= 1
            return node.right, True, True
        if node.right is None:
            self._size -= 1
            return node.left, True, True

        predecessor = self._find_max_node(node.left)
        node.value = predecessor.value
        node.left, shorter, _ = self._remove(node.left, predecessor.value)
        if shorter:
            node, shorter = self._delete_right_balance(node)
        return node, shorter, True

    def remove(self, value: T) -> None:
        """Remove the element with `value`'s key. Absent keys are ignored."""
        self._root, _, found = self._remove(self._root, value)
        if not found:
            logger.debug("remove: %r not in tree", value)

    def _find_node(self, value: T) -> Optional[Node]:
        node = self._root
        while node is not None:
            if value < node.value:
                node = node.left
            elif value > node.value:
                node = node.right
            else:
                return node
        return None

    def contains(self, value: T) -> bool:
        return self._find_node(value) is not None

    def retrieve(self, key: T) -> T:
        """Return the stored element whose key equals `key`.

        Raises:
            NotFoundError: no element with that key
        """
        node = self._find_node(key)
        if node is None:
            raise NotFoundError(key)
        return node.value

    def depth(self, value: T) -> int:
        """
        Number of edges from the root to `value`.

        For an absent value returns -1 - d, where d is the number of nodes
        compared before the search fell off the tree, i.e. the depth a new
        node for `value` would be inserted at.
        """
        depth = 0
        node = self._root
        while node is not None:
            if value < node.value:
                node = node.left
            elif value > node.value:
                node = node.right
            else:
                return depth
            depth += 1
        return -1 - depth

    def min(self) -> T:
        if self._root is None:
            raise NotFoundError("min from empty tree")
        node = self._root
        while node.left is not None:
            node = node.left
        return node.value

    def max(self) -> T:
        if self._root is None:
            raise NotFoundError("max from empty tree")
        return self._find_max_node(self._root).value

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def _destroy(self, node: Optional[Node]) -> None:
        if node is None:
            return
        self._destroy(node.left)
        self._destroy(node.right)
        node.left = None
        node.right = None

    def clear(self) -> None:
        self._destroy(self._root)
        self._root = None
        self._size = 0

    def height(self) -> int:
        """Height of the tree: -1 when empty, 0 for a single node."""
        height = -1
        node = self._root
        while node is not None:
            height += 1
            node = node.left if node.balance is Balance.LEFT_HEAVY else node.right
        return height

    def _traverse(self, node: Optional[Node], visit: Callable[[T], None]) -> None:
        if node is None:
            return
        self._traverse(node.left, visit)
        visit(node.value)
        self._traverse(node.right, visit)

    def traverse(self, visit: Callable[[T], None]) -> None:
        """Call `visit` on every element in ascending order.

        `visit` must not modify the tree.
        """
        self._traverse(self._root, visit)

    def level_traverse(self, visit: Callable[[T], None]) -> None:
        """Call `visit` on every element level by level, left to right."""
        if self._root is None:
            return
        pending: Deque[AVLTree.Node] = deque([self._root])
        while pending:
            node = pending.popleft()
            visit(node.value)
            if node.left is not None:
                pending.append(node.left)
            if node.right is not None:
                pending.append(node.right)

    def in_order(self) -> List[T]:
        result: List[T] = []
        self.traverse(result.append)
        return result

    def level_order(self) -> List[T]:
        result: List[T] = []
        self.level_traverse(result.append)
        return result

    def _clone(self, node: Optional[Node]) -> Optional[Node]:
        if node is None:
            return None
        clone = AVLTree.Node(node.value)
        clone.balance = node.balance
        clone.left = self._clone(node.left)
        clone.right = self._clone(node.right)
        return clone

    def copy(self) -> 'AVLTree[T]':
        clone: AVLTree[T] = AVLTree()
        clone._root = self._clone(self._root)
        clone._size = self._size
        return clone

    def _checked_height(self, node: Optional[Node]) -> Optional[int]:
        # None means some tag in this subtree disagrees with the real heights
        if node is None:
            return -1
        left = self._checked_height(node.left)
        right = self._checked_height(node.right)
        if left is None or right is None or left - right != node.balance:
            return None
        return 1 + max(left, right)

    def is_balanced(self) -> bool:
        return self._checked_height(self._root) is not None

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[T]:
        return iter(self.in_order())

    def __repr__(self) -> str:
        return f"AVLTree({self.in_order()})"

    def __str__(self) -> str:
        return f"AVLTree(size={self._size}, height={self.height()})"
