from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional


class Position(ABC):
    """Handle on a single location (node) inside a tree."""

    @abstractmethod
    def get_key(self):
        """Return the key stored at this position."""
        pass

    @abstractmethod
    def get_value(self):
        """Return the value stored at this position."""
        pass


class BinaryTree(ABC):
    """Abstract base class representing a binary tree structure."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the total number of nodes in the tree."""
        pass

    @abstractmethod
    def root(self) -> Optional[Position]:
        """Return the root Position of the tree (or None if tree is empty)."""
        pass

    @abstractmethod
    def parent(self, p: Position) -> Optional[Position]:
        """Return the Position of p's parent (or None if p is root)."""
        pass

    @abstractmethod
    def left(self, p: Position) -> Optional[Position]:
        """Return the Position of p's left child (or None if no child exists)."""
        pass

    @abstractmethod
    def right(self, p: Position) -> Optional[Position]:
        """Return the Position of p's right child (or None if no child exists)."""
        pass

    def is_empty(self) -> bool:
        """Return True if the tree is empty."""
        return len(self) == 0

    def is_root(self, p: Position) -> bool:
        """Return True if Position p represents the root of the tree."""
        return self.parent(p) is None

    def num_children(self, p: Position) -> int:
        """Return the number of children of Position p."""
        count = 0
        if self.left(p) is not None:
            count += 1
        if self.right(p) is not None:
            count += 1
        return count

    def is_leaf(self, p: Position) -> bool:
        """Return True if Position p has no children."""
        return self.num_children(p) == 0

    def depth(self, p: Position) -> int:
        """Return the number of levels separating Position p from the root."""
        if self.is_root(p):
            return 0
        else:
            return 1 + self.depth(self.parent(p))


class LinkedBinaryTree(BinaryTree):
    """Node-based binary tree where children are owned and parents are back-links."""

    class _Node(Position):
        __slots__ = '_key', '_value', '_parent', '_left', '_right', '_container'

        def __init__(self, key, value, container, parent=None):
            self._key = key
            self._value = value
            self._container = container
            self._parent = parent
            self._left = None
            self._right = None

        def get_key(self): return self._key
        def get_value(self): return self._value
        def get_parent(self): return self._parent
        def get_left(self): return self._left
        def get_right(self): return self._right
        def set_parent(self, parent): self._parent = parent
        def set_left(self, left): self._left = left
        def set_right(self, right): self._right = right

        def __repr__(self):
            parent_key = None if self._parent is None else self._parent._key
            return (f"Node(key={self._key!r}, value={self._value!r}, "
                    f"left={self._left!r}, right={self._right!r}, parent={parent_key!r})")

    def __init__(self):
        self._root = None
        self._size = 0

    def _validate(self, p):
        """Validates the position and returns it as a node."""
        if not isinstance(p, self._Node):
            raise TypeError("Not valid position type")
        if p._container is not self:
            raise ValueError("p does not belong to this tree")
        return p

    def _make_node(self, key, value, parent=None):
        """Factory function to create a new node owned by this tree."""
        return self._Node(key, value, self, parent)

    def __len__(self) -> int: return self._size
    def root(self) -> Optional[Position]: return self._root
    def parent(self, p: Position) -> Optional[Position]: return self._validate(p).get_parent()
    def left(self, p: Position) -> Optional[Position]: return self._validate(p).get_left()
    def right(self, p: Position) -> Optional[Position]: return self._validate(p).get_right()

    def __repr__(self):
        return f"{type(self).__name__}(size={self._size}, root={self._root!r})"

    # ------------------ Structural mutations ------------------
    def _add_root(self, key, value) -> Position:
        if self._root is not None: raise RuntimeError("Tree is not empty")
        self._root = self._make_node(key, value)
        self._size = 1
        return self._root

    def _add_left(self, p, key, value) -> Position:
        parent = self._validate(p)
        if parent.get_left() is not None: raise RuntimeError("p already has a left child")
        child = self._make_node(key, value, parent)
        parent.set_left(child)
        self._size += 1
        return child

    def _add_right(self, p, key, value) -> Position:
        parent = self._validate(p)
        if parent.get_right() is not None: raise RuntimeError("p already has a right child")
        child = self._make_node(key, value, parent)
        parent.set_right(child)
        self._size += 1
        return child

    def _cut(self, p) -> "LinkedBinaryTree":
        """
        Unlink the subtree rooted at p and return it as a new tree of the same type.

        The children of p stay attached to p. The back-link from p to its old
        parent is cleared and every node of the subtree is handed over to the
        returned tree, so positions inside it are no longer valid for this one.
        """
        node = self._validate(p)
        parent = node.get_parent()
        if parent is None:
            self._root = None
        elif parent.get_left() is node:
            parent.set_left(None)
        else:
            parent.set_right(None)
        node.set_parent(None)

        subtree = type(self)()
        subtree._root = node
        subtree._size = subtree._adopt(node)
        self._size -= subtree._size
        return subtree

    def _adopt(self, node) -> int:
        """Take ownership of node and its descendants; return how many were taken."""
        if node is None:
            return 0
        node._container = self
        return 1 + self._adopt(node.get_left()) + self._adopt(node.get_right())

    # ------------------ Snapshots ------------------
    def to_dict(self, p: Optional[Position] = None) -> Optional[Dict[str, Any]]:
        """Return a nested-dict snapshot of the subtree at p (whole tree by default)."""
        node = self._root if p is None else self._validate(p)
        if node is None:
            return None
        return {
            "key": node.get_key(),
            "value": node.get_value(),
            "left": self.to_dict(node.get_left()) if node.get_left() is not None else None,
            "right": self.to_dict(node.get_right()) if node.get_right() is not None else None,
        }


class SearchTree(LinkedBinaryTree):
    """
    Unbalanced binary search tree with unique keys.

    Keys strictly less than a node's key live in its left subtree, greater
    keys in its right subtree. Insertion never replaces an existing value
    and nothing is ever rebalanced, so the shape depends on insertion order.
    """

    def insert(self, key: Any, value: Any) -> bool:
        """Insert (key, value). Return False and change nothing if key is present."""
        if self._root is None:
            self._add_root(key, value)
            return True
        return self._insert_at(self._root, key, value)

    def _insert_at(self, node, key, value) -> bool:
        if key == node.get_key():
            return False
        if key < node.get_key():
            if node.get_left() is not None:
                return self._insert_at(node.get_left(), key, value)
            self._add_left(node, key, value)
            return True
        if node.get_right() is not None:
            return self._insert_at(node.get_right(), key, value)
        self._add_right(node, key, value)
        return True

    def find(self, key: Any) -> Optional[Position]:
        """Return the Position holding key, or None."""
        if self._root is None:
            return None
        return self._find_at(self._root, key)

    def _find_at(self, node, key) -> Optional[Position]:
        if node.get_key() == key:
            return node
        child = node.get_left() if key < node.get_key() else node.get_right()
        if child is None:
            return None
        return self._find_at(child, key)

    def detach(self, key: Any) -> Optional["SearchTree"]:
        """
        Remove the whole subtree rooted at key and return it as a new SearchTree.

        Descendants of the matched node go with it; nothing is re-inserted
        into this tree. Returns None if key is not present.
        """
        if self._root is None:
            return None
        if self._root.get_key() == key:
            return self._cut(self._root)
        return self._detach_at(self._root, key)

    def _detach_at(self, node, key) -> Optional["SearchTree"]:
        left, right = node.get_left(), node.get_right()
        if left is not None and left.get_key() == key:
            return self._cut(left)
        if right is not None and right.get_key() == key:
            return self._cut(right)

        child = left if key < node.get_key() else right
        if child is None:
            return None
        return self._detach_at(child, key)

    # ------------------ Accessors ------------------
    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        p = self.find(key)
        if p is None:
            return default
        return p.get_value()

    def __contains__(self, key: Any) -> bool:
        return self.find(key) is not None

    def path_to(self, key: Any) -> Iterable[Any]:
        """Yield the keys visited from the root down to key (stops early if absent)."""
        walk = self._root
        while walk is not None:
            yield walk.get_key()
            if walk.get_key() == key:
                return
            walk = walk.get_left() if key < walk.get_key() else walk.get_right()
