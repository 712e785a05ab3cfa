import copy as _copy
import sys
from collections import deque
from typing import Any, Iterable, Iterator, List, Optional, TextIO, Tuple

Pair = Tuple[Any, Any]


class EmptyTreeError(RuntimeError):
    """Raised when root/min/max is requested from a tree with no nodes."""


class KeyNotFoundError(KeyError):
    """Raised when a lookup names a key the tree does not hold."""


class OrderedTree:
    """Ordered key-value container backed by an unbalanced binary search tree.

    Keys are compared with ``<`` and ``>`` only and must be unique. Each node
    owns its two subtrees; nothing points back up the tree.
    """

    class _Node:
        """Single key-value pair plus its owned left and right subtrees."""
        __slots__ = '_key', '_value', '_left', '_right'

        def __init__(self, key, value, left=None, right=None):
            self._key = key
            self._value = value
            self._left = left
            self._right = right

        def get_key(self): return self._key
        def get_value(self): return self._value
        def get_left(self): return self._left
        def get_right(self): return self._right
        def set_value(self, value): self._value = value
        def set_left(self, left): self._left = left
        def set_right(self, right): self._right = right

        def set_pair(self, key, value):
            self._key = key
            self._value = value

        def is_leaf(self) -> bool:
            return self._left is None and self._right is None

        def has_both_children(self) -> bool:
            return self._left is not None and self._right is not None

    # marks the end of one depth in the level-by-level queue
    LEVEL_END = object()

    # ------------------ Construction / copy / move ------------------
    def __init__(self, pair: Optional[Pair] = None):
        """Create an empty tree, or a one-node tree holding ``pair``."""
        self._root: Optional[OrderedTree._Node] = None
        self._size = 0
        if pair is not None:
            key, value = pair
            self._root = self._make_node(key, value)
            self._size = 1

    @classmethod
    def copied_from(cls, other: 'OrderedTree') -> 'OrderedTree':
        """Return a new tree holding a node-for-node clone of ``other``."""
        tree = cls()
        tree._root = cls._clone(other._root)
        tree._size = other._size
        return tree

    @classmethod
    def moved_from(cls, other: 'OrderedTree') -> 'OrderedTree':
        """Return a new tree that takes over ``other``'s nodes, leaving it empty."""
        tree = cls()
        tree._root, tree._size = other._root, other._size
        other._root, other._size = None, 0
        return tree

    def copy(self) -> 'OrderedTree':
        return type(self).copied_from(self)

    __copy__ = copy

    def __deepcopy__(self, memo):
        tree = self.copy()
        stack = [tree._root] if tree._root is not None else []
        while stack:
            node = stack.pop()
            node.set_pair(_copy.deepcopy(node.get_key(), memo), _copy.deepcopy(node.get_value(), memo))
            stack.extend(child for child in (node.get_left(), node.get_right()) if child is not None)
        return tree

    def assign(self, other: 'OrderedTree') -> 'OrderedTree':
        """Replace this tree's contents with a clone of ``other``."""
        if other is self:
            return self
        self.clear()
        self._root = self._clone(other._root)
        self._size = other._size
        return self

    def move_from(self, other: 'OrderedTree') -> 'OrderedTree':
        """Replace this tree's contents with ``other``'s nodes; ``other`` becomes empty."""
        if other is self:
            return self
        self.clear()
        self._root, self._size = other._root, other._size
        other._root, other._size = None, 0
        return self

    # ------------------ Accessors ------------------
    def __len__(self) -> int: return self._size
    def size(self) -> int: return self._size
    def is_empty(self) -> bool: return self._size == 0

    def root(self) -> Pair:
        """Return the (key, value) pair stored at the root."""
        return self._pair(self._require_root())

    def min(self) -> Pair:
        """Return the pair with the smallest key."""
        return self._pair(self._subtree_min(self._require_root()))

    def max(self) -> Pair:
        """Return the pair with the largest key."""
        return self._pair(self._subtree_max(self._require_root()))

    def height(self) -> int:
        """Return the number of levels in the tree (0 when empty)."""
        return sum(1 for _ in self.levels())

    # ------------------ Lookup ------------------
    def contains(self, key: Any) -> bool:
        return self._find_node(key, self._root) is not None

    __contains__ = contains

    def find(self, key: Any) -> Any:
        """Return the value stored under ``key``."""
        node = self._find_node(key, self._root)
        if node is None:
            raise KeyNotFoundError(key)
        return node.get_value()

    __getitem__ = find

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``."""
        node = self._find_node(key, self._root)
        if node is None:
            return default
        return node.get_value()

    def replace(self, key: Any, value: Any) -> Any:
        """Overwrite the value of an existing key and return the old value."""
        node = self._find_node(key, self._root)
        if node is None:
            raise KeyNotFoundError(key)
        old = node.get_value()
        node.set_value(value)
        return old

    # ------------------ Mutations ------------------
    def insert(self, key: Any, value: Any, copy: bool = False) -> bool:
        """Insert ``key`` -> ``value`` unless ``key`` is already present.

        The key and value objects are stored as given; pass ``copy=True`` to
        store deep copies of both instead. An existing key keeps its value.
        Returns True if a node was added.
        """
        if copy:
            key, value = _copy.deepcopy((key, value))
        before = self._size
        self._root = self._insert(key, value, self._root)
        return self._size != before

    def insert_pair(self, pair: Pair, copy: bool = False) -> bool:
        key, value = pair
        return self.insert(key, value, copy=copy)

    def erase(self, key: Any) -> bool:
        """Remove the node holding ``key``. Returns False if it was absent."""
        before = self._size
        self._root = self._erase(key, self._root)
        return self._size != before

    def clear(self) -> None:
        """Release every node, children before parents, and reset the size."""
        stack = [self._root] if self._root is not None else []
        self._root = None
        while stack:
            node = stack[-1]
            left, right = node.get_left(), node.get_right()
            if left is not None:
                node.set_left(None)
                stack.append(left)
            elif right is not None:
                node.set_right(None)
                stack.append(right)
            else:
                stack.pop()
                node.set_pair(None, None)
        self._size = 0

    # ------------------ Traversal ------------------
    def inorder(self) -> Iterable[Pair]:
        """Generate (key, value) pairs in increasing key order."""
        stack = []
        walk = self._root
        while stack or walk is not None:
            while walk is not None:
                stack.append(walk)
                walk = walk.get_left()
            walk = stack.pop()
            yield self._pair(walk)
            walk = walk.get_right()

    def __iter__(self) -> Iterator[Any]:
        for key, _ in self.inorder():
            yield key

    def keys(self) -> Iterable[Any]:
        return iter(self)

    def values(self) -> Iterable[Any]:
        for _, value in self.inorder():
            yield value

    def items(self) -> Iterable[Pair]:
        return self.inorder()

    def levels(self) -> Iterable[List[Any]]:
        """Generate the stored values one depth at a time, shallow to deep.

        Breadth-first walk over a queue seeded with the root and a level
        delimiter; each time the delimiter comes off the queue the current
        depth is complete.
        """
        if self._root is None:
            return
        queue = deque([self._root, self.LEVEL_END])
        level: List[Any] = []
        while True:
            current = queue.popleft()
            if current is self.LEVEL_END:
                yield level
                if not queue:
                    break
                level = []
                queue.append(self.LEVEL_END)
            else:
                level.append(current.get_value())
                if current.get_left() is not None:
                    queue.append(current.get_left())
                if current.get_right() is not None:
                    queue.append(current.get_right())

    def level_by_level(self, out: Optional[TextIO] = None) -> None:
        """Write each depth's values on its own line, separated by spaces."""
        out = sys.stdout if out is None else out
        for level in self.levels():
            out.write(" ".join(str(value) for value in level))
            out.write("\n")

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.inorder())
        return f"{type(self).__name__}({{{body}}})"

    # ------------------ Internal helpers ------------------
    def _make_node(self, key, value, left=None, right=None):
        """Factory function to create a new node storing key and value."""
        return self._Node(key, value, left, right)

    @staticmethod
    def _pair(node) -> Pair:
        return node.get_key(), node.get_value()

    def _require_root(self):
        if self._root is None:
            raise EmptyTreeError("tree is empty")
        return self._root

    @staticmethod
    def _subtree_min(node):
        # the minimum is the furthest left child
        while node.get_left() is not None:
            node = node.get_left()
        return node

    @staticmethod
    def _subtree_max(node):
        while node.get_right() is not None:
            node = node.get_right()
        return node

    def _find_node(self, key, node):
        """Return the node holding key in the subtree rooted at node, or None."""
        if node is None:
            return None
        if key < node.get_key():
            return self._find_node(key, node.get_left())
        elif key > node.get_key():
            return self._find_node(key, node.get_right())
        return node

    @classmethod
    def _clone(cls, node):
        """Copy the subtree rooted at node, walking it with an explicit stack."""
        if node is None:
            return None
        root = cls._Node(node.get_key(), node.get_value())
        stack = [(node, root)]
        while stack:
            src, dst = stack.pop()
            if src.get_left() is not None:
                dst.set_left(cls._Node(src.get_left().get_key(), src.get_left().get_value()))
                stack.append((src.get_left(), dst.get_left()))
            if src.get_right() is not None:
                dst.set_right(cls._Node(src.get_right().get_key(), src.get_right().get_value()))
                stack.append((src.get_right(), dst.get_right()))
        return root

    def _insert(self, key, value, node):
        """Insert below node and return the subtree's (possibly new) root."""
        if node is None:
            node = self._make_node(key, value)
            self._size += 1
        # smaller keys go left, larger keys go right, equal keys are left alone
        elif key < node.get_key():
            node.set_left(self._insert(key, value, node.get_left()))
        elif key > node.get_key():
            node.set_right(self._insert(key, value, node.get_right()))
        return node

    def _erase(self, key, node):
        """Erase key below node and return whatever now roots that subtree."""
        if node is None:
            return None

        if key < node.get_key():
            node.set_left(self._erase(key, node.get_left()))
        elif key > node.get_key():
            node.set_right(self._erase(key, node.get_right()))

        # two children: take over the in-order successor's pair,
        # then erase the successor from the right subtree by its key
        elif node.has_both_children():
            successor = self._subtree_min(node.get_right())
            node.set_pair(successor.get_key(), successor.get_value())
            node.set_right(self._erase(successor.get_key(), node.get_right()))

        # zero or one child: splice the child (or nothing) into node's place
        else:
            old = node
            node = node.get_left() if node.get_left() is not None else node.get_right()
            old.set_left(None)
            old.set_right(None)
            self._size -= 1

        return node
