from .tree_analyzer import parse, analyze_tree_text
from .tree_parser import TreeParser

__all__ = ["parse", "analyze_tree_text", "TreeParser"]
