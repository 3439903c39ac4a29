from typing import Optional

from meta_tree.typedef.meta_tree_data_types import Tree
from meta_tree.typedef.exception_types import MetaTreeError
from meta_tree.lib.debug_print import DEBUG_PRINT, ERROR_T
from meta_tree.utils.tree_analyzer.tree_parser import TreeParser
from meta_tree.utils.issue_recorder import TreeIssueRecorder


def parse(text: str) -> Tree:
    """解析meta-tree文本，返回完整的树

    Raises:
        ValidationError: 名称为空或包含空白
        DuplicateNameError: record、section或字段重名
        FormatError: 方括号未闭合、字段行或record行无法提取名称
    """
    parser = TreeParser(text)
    return parser.parse()


def analyze_tree_text(
    text: str,
    issue_recorder: Optional[TreeIssueRecorder] = None
) -> Optional[Tree]:
    """分析meta-tree文本，出错时记录问题而不抛出

    Args:
        text: 待分析的文本
        issue_recorder: 可选的问题记录器，用于记录分析过程中的错误信息

    Returns:
        Optional[Tree]: 解析得到的树，文本存在错误时返回None

    Raises:
        MetaTreeError以外的异常将直接向上层抛出
    """
    try:
        return parse(text)

    except MetaTreeError as e:
        line_content = e.line_content
        if not line_content and e.line_num > 0:
            lines = text.split('\n')
            if 0 < e.line_num <= len(lines):
                line_content = lines[e.line_num - 1].rstrip()

        if issue_recorder is not None:
            issue_recorder.record_issue(
                message=e.message,
                line_num=e.line_num,
                line_content=line_content if line_content else "",
                error_type=type(e).__name__
            )

        DEBUG_PRINT(ERROR_T, f"meta-tree分析错误: {e.message}")
        if e.line_num > 0:
            DEBUG_PRINT(ERROR_T, f"  行号: {e.line_num}")
        if line_content:
            DEBUG_PRINT(ERROR_T, f"  内容: {line_content}")

        return None
