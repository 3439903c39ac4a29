import sys
import json
import argparse
from typing import List, Optional

from meta_tree.typedef.cmd_data_types import Colors, CmdProcStatus, OUTPUT_FORMATS
from meta_tree.run_time_cfg.meta_tree_cfg import get_instance as get_meta_tree_cfg
from meta_tree.lib.debug_print import DEBUG_T
from meta_tree.utils.tree_analyzer import analyze_tree_text
from meta_tree.utils.issue_recorder import TreeIssueRecorder


def _build_arg_parser() -> argparse.ArgumentParser:
    format_choices = []
    for format_info in OUTPUT_FORMATS:
        format_choices.append(format_info.name)
        format_choices.extend(format_info.aliases)

    parser = argparse.ArgumentParser(
        prog='meta-tree',
        description='解析meta-tree文本并输出JSON或重新序列化的文本'
    )
    parser.add_argument('input', type=str, help='输入文件路径，- 表示从标准输入读取')
    parser.add_argument('--format', type=str, default='json', choices=format_choices,
                        help='输出格式: ' + ', '.join(f"{f.name}({f.description})" for f in OUTPUT_FORMATS))
    parser.add_argument('--config', type=str, help='配置文件路径或所在目录')
    parser.add_argument('--verbose', action='store_true', help='打印解析过程的调试信息')
    return parser


def _read_input(input_path: str) -> str:
    if input_path == '-':
        return sys.stdin.read()
    with open(input_path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    meta_tree_cfg = get_meta_tree_cfg()
    if args.config:
        meta_tree_cfg.load_config_file(args.config)
    if args.verbose:
        meta_tree_cfg.set_print_level(DEBUG_T)

    try:
        text = _read_input(args.input)
    except OSError as e:
        print(f"{Colors.FAIL}错误: 读取输入失败: {e}{Colors.ENDC}", file=sys.stderr)
        return CmdProcStatus.FAILED

    issue_recorder = TreeIssueRecorder()
    tree = analyze_tree_text(text, issue_recorder)
    if tree is None:
        issue = issue_recorder.get_latest_issue()
        if issue is not None:
            print(f"{Colors.FAIL}错误: 第 {issue.line_num} 行: {issue.message}{Colors.ENDC}", file=sys.stderr)
        return CmdProcStatus.FAILED

    if args.format == 'json':
        print(json.dumps(tree.to_plain_object(), ensure_ascii=False, indent=2))
    else:
        print(tree.serialize())

    return CmdProcStatus.SUCCESS


if __name__ == "__main__":
    sys.exit(main())
