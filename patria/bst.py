"""Binary search tree mapping string keys to integer values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


def compare_keys(first: str, second: str) -> int:
    """Return a negative, zero or positive number as first sorts before, equal to or after second."""
    return (first > second) - (first < second)


@dataclass
class BstNode:
    """A tree node holding one key and its value."""

    key: str
    value: int
    left: BstNode | None = None
    right: BstNode | None = None


class BinarySearchTree:
    """Unbalanced binary search tree with unique string keys."""

    def __init__(self) -> None:
        self.root: BstNode | None = None

    def insert(self, key: str, value: int) -> BstNode:
        """Insert key with value; an existing key is left untouched. Return the key's node."""
        if self.root is None:
            self.root = BstNode(key, value)
            return self.root
        node = self.root
        while True:
            order = compare_keys(key, node.key)
            if order == 0:
                return node
            side = "left" if order < 0 else "right"
            child = getattr(node, side)
            if child is None:
                child = BstNode(key, value)
                setattr(node, side, child)
                return child
            node = child

    def search(self, key: str) -> BstNode | None:
        """Return the node holding key, or None."""
        node = self.root
        while node is not None:
            order = compare_keys(key, node.key)
            if order == 0:
                return node
            node = node.left if order < 0 else node.right
        return None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.search(key) is not None

    def delete(self, key: str) -> None:
        """Remove key from the tree if present."""
        self.root = self._delete(self.root, key)

    @classmethod
    def _delete(cls, node: BstNode | None, key: str) -> BstNode | None:
        if node is None:
            return None
        order = compare_keys(key, node.key)
        if order < 0:
            node.left = cls._delete(node.left, key)
        elif order > 0:
            node.right = cls._delete(node.right, key)
        elif node.left is None:
            return node.right
        elif node.right is None:
            return node.left
        else:
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            node.key, node.value = successor.key, successor.value
            node.right = cls._delete(node.right, successor.key)
        return node

    def postorder(self) -> Iterator[tuple[str, int]]:
        """Yield (key, value) pairs in post-order."""
        yield from self._postorder(self.root)

    @classmethod
    def _postorder(cls, node: BstNode | None) -> Iterator[tuple[str, int]]:
        if node is None:
            return
        yield from cls._postorder(node.left)
        yield from cls._postorder(node.right)
        yield node.key, node.value

    def clear(self) -> None:
        """Remove every node."""
        self.root = None