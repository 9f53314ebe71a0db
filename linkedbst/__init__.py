from linkedbst.tree import BinaryTree, LinkedBinaryTree, Position, SearchTree

__all__ = ["Position", "BinaryTree", "LinkedBinaryTree", "SearchTree"]
