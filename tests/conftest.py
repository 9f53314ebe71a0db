import pytest
import sys
from pathlib import Path

# Add the repository root to sys.path so linkedbst and main import without install
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from linkedbst.tree import SearchTree


DEMO_KEYS = [5, 3, 65, 123, 6, 11, 3, 1, 5, 42]


# Common test fixtures
@pytest.fixture
def empty_tree():
    """Return a fresh empty tree."""
    return SearchTree()


@pytest.fixture
def demo_tree():
    """Tree built from the demonstration sequence (value = key)."""
    tree = SearchTree()
    for key in DEMO_KEYS:
        tree.insert(key, key)
    return tree


def collect_nodes(tree, p=None):
    """Return every position of the subtree at p (whole tree by default)."""
    node = tree.root() if p is None else p
    if node is None:
        return []
    out = [node]
    for child in (tree.left(node), tree.right(node)):
        if child is not None:
            out.extend(collect_nodes(tree, child))
    return out


def subtree_keys(tree, p):
    return {n.get_key() for n in collect_nodes(tree, p)}
