from ordered_tree.indexing import EmptyTreeError, KeyNotFoundError, OrderedTree

__all__ = ["OrderedTree", "EmptyTreeError", "KeyNotFoundError"]
