from .tree_issue_recorder import TreeIssueRecorder

__all__ = ["TreeIssueRecorder"]
