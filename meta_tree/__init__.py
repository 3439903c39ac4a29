from meta_tree.typedef.meta_tree_data_types import Tree, Record, Section, Field, MAIN_SECTION_NAME
from meta_tree.typedef.verb_types import VerbKind
from meta_tree.typedef.exception_types import MetaTreeError, ValidationError, DuplicateNameError, FormatError
from meta_tree.libs.verb_funcs import classify_verb
from meta_tree.utils.tree_analyzer import parse, analyze_tree_text
from meta_tree.utils.issue_recorder import TreeIssueRecorder

__version__ = "1.0.6"

__all__ = [
    "Tree",
    "Record",
    "Section",
    "Field",
    "MAIN_SECTION_NAME",
    "VerbKind",
    "MetaTreeError",
    "ValidationError",
    "DuplicateNameError",
    "FormatError",
    "classify_verb",
    "parse",
    "analyze_tree_text",
    "TreeIssueRecorder",
]
