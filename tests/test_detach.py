"""Tests for whole-subtree detach."""

import random

import pytest

from conftest import collect_nodes, subtree_keys
from linkedbst.tree import SearchTree


class TestDetachDemo:
    """Detach against the demonstration tree."""

    def test_detach_six_takes_its_subtree(self, demo_tree):
        detached = demo_tree.detach(6)
        assert isinstance(detached, SearchTree)
        assert detached.root().get_key() == 6
        assert {n.get_key() for n in collect_nodes(detached)} == {6, 11, 42}
        assert len(detached) == 3
        assert len(demo_tree) == 5

    def test_detached_keys_gone_from_source(self, demo_tree):
        demo_tree.detach(6)
        assert demo_tree.find(6) is None
        assert demo_tree.find(11) is None
        assert demo_tree.find(42) is None
        assert demo_tree.left(demo_tree.find(65)) is None

    def test_remaining_keys_keep_values(self, demo_tree):
        demo_tree.detach(6)
        for k in (5, 3, 65, 123, 1):
            assert demo_tree.get(k) == k

    def test_detached_subtree_is_searchable(self, demo_tree):
        detached = demo_tree.detach(6)
        assert detached.get(11) == 11
        assert detached.find(42).get_value() == 42
        assert detached.find(65) is None

    def test_detached_root_has_no_parent(self, demo_tree):
        detached = demo_tree.detach(6)
        root = detached.root()
        assert detached.parent(root) is None
        assert detached.is_root(root)
        assert detached.depth(detached.find(42)) == 2

    def test_detach_leaf(self, demo_tree):
        detached = demo_tree.detach(1)
        assert len(detached) == 1
        assert demo_tree.is_leaf(demo_tree.find(3))
        assert len(demo_tree) == 7

    def test_detach_root_empties_tree(self, demo_tree):
        detached = demo_tree.detach(5)
        assert demo_tree.is_empty()
        assert demo_tree.root() is None
        assert demo_tree.find(5) is None
        assert len(detached) == 8

    def test_detach_missing_key(self, demo_tree):
        before = demo_tree.to_dict()
        assert demo_tree.detach(7) is None
        assert demo_tree.detach(1000) is None
        assert demo_tree.to_dict() == before
        assert len(demo_tree) == 8

    def test_detach_twice_returns_none(self, demo_tree):
        assert demo_tree.detach(6) is not None
        assert demo_tree.detach(6) is None


class TestDetachOwnership:
    """Positions from a detached subtree no longer belong to the source tree."""

    def test_position_held_before_detach_is_rejected(self, demo_tree):
        eleven = demo_tree.find(11)
        detached = demo_tree.detach(6)
        with pytest.raises(ValueError):
            demo_tree.parent(eleven)
        assert detached.parent(eleven).get_key() == 6

    def test_detached_root_position_rejected_by_source(self, demo_tree):
        six = demo_tree.find(6)
        demo_tree.detach(6)
        with pytest.raises(ValueError):
            demo_tree.depth(six)

    def test_remaining_positions_still_valid(self, demo_tree):
        sixty_five = demo_tree.find(65)
        demo_tree.detach(6)
        assert demo_tree.parent(sixty_five).get_key() == 5
        assert demo_tree.right(sixty_five).get_key() == 123

    def test_reinsert_after_detach(self, demo_tree):
        demo_tree.detach(6)
        assert demo_tree.insert(6, "fresh") is True
        assert demo_tree.get(6) == "fresh"
        assert demo_tree.parent(demo_tree.find(6)).get_key() == 65
        assert len(demo_tree) == 6

    def test_detached_subtree_accepts_inserts(self, demo_tree):
        detached = demo_tree.detach(6)
        assert detached.insert(8, 8) is True
        assert detached.insert(11, "dup") is False
        assert demo_tree.find(8) is None


class TestDetachProperties:
    """Randomised detach checks."""

    @pytest.mark.parametrize("seed", range(10))
    def test_detach_splits_keys(self, seed):
        rng = random.Random(seed)
        keys = rng.sample(range(500), 60)
        tree = SearchTree()
        for k in keys:
            tree.insert(k, k * 2)

        target = rng.choice(keys)
        expected_gone = subtree_keys(tree, tree.find(target))

        detached = tree.detach(target)
        assert detached is not None
        assert {n.get_key() for n in collect_nodes(detached)} == expected_gone
        assert len(detached) + len(tree) == len(keys)

        for k in keys:
            if k in expected_gone:
                assert tree.find(k) is None
                assert detached.get(k) == k * 2
            else:
                assert tree.get(k) == k * 2

    @pytest.mark.parametrize("seed", range(5))
    def test_detach_agrees_with_find(self, seed):
        rng = random.Random(seed)
        keys = rng.sample(range(300), 40)
        for target in keys:
            tree = SearchTree()
            for k in keys:
                tree.insert(k, k)
            node = tree.find(target)
            detached = tree.detach(target)
            assert detached.root() is node
