from typing import List, Dict, Any, Optional

from meta_tree.typedef.issue_recorder_types import TreeIssue
from meta_tree.typedef.cmd_data_types import Colors


class TreeIssueRecorder:
    """meta-tree 分析问题记录器

    用于收集文本分析过程中出现的错误信息，供上层代码进行后续操作使用。
    """

    def __init__(self):
        self._issues: List[TreeIssue] = []

    def record_issue(self, message: str, line_num: int, line_content: str, error_type: str = "") -> None:
        """记录一个问题

        Args:
            message: 错误消息
            line_num: 行号
            line_content: 行内容
            error_type: 异常类名
        """
        issue = TreeIssue(
            message=message,
            line_num=line_num,
            line_content=line_content,
            error_type=error_type
        )
        self._issues.append(issue)

    def get_issues(self) -> List[TreeIssue]:
        """获取所有记录的问题"""
        return self._issues.copy()

    def get_latest_issue(self) -> Optional[TreeIssue]:
        if not self._issues:
            return None
        return self._issues[-1]

    def has_issues(self) -> bool:
        """是否有记录的问题"""
        return len(self._issues) > 0

    def clear(self) -> None:
        """清空所有问题记录"""
        self._issues.clear()

    def get_issue_count(self) -> int:
        """获取问题数量"""
        return len(self._issues)

    def to_dict_list(self) -> List[Dict[str, Any]]:
        """将所有问题转换为字典列表"""
        return [issue.to_dict() for issue in self._issues]

    def print_issues(self) -> None:
        """打印所有问题"""
        for issue in self._issues:
            print(f"{Colors.FAIL}Line {issue.line_num}: {issue.message}{Colors.ENDC}")
            print(f"  {issue.line_content}")
