"""
行级语法解析

负责行分类，以及record声明行、section声明行、字段声明行各自的解析。
本模块只产出声明数据，不修改树结构。
"""
import re
from typing import Optional

from meta_tree.typedef.tree_token_types import LineKind, RecordDecl, FieldDecl
from meta_tree.typedef.exception_types import FormatError
from meta_tree.libs.tree_text_funcs import unescape_description
from meta_tree.lib.debug_print import DEBUG_PRINT, WARNING_T
from meta_tree.utils.tree_analyzer.tree_attr_scanner import TreeAttrScanner, COMMENT_MARKER


SECTION_MARKER = "@"
_SECTION_NAME_PATTERN = re.compile(r"^@([\w.]+)")
_FIELD_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.]+")
_QUOTE_CHARS = ('"', "'")


def classify_line(line: str) -> LineKind:
    """判断行类型

    行首无缩进且不以@开头的行为record声明；去除缩进后以@开头的行为section声明；
    其余非空行为字段声明。
    """
    striped_line = line.strip()
    if not striped_line:
        return LineKind.BLANK
    if not line[0].isspace() and not line.startswith(SECTION_MARKER):
        return LineKind.RECORD_DECL
    if striped_line.startswith(SECTION_MARKER):
        return LineKind.SECTION_DECL
    return LineKind.FIELD_DECL


def _split_comment(line: str):
    """按第一个 // 拆分为内容部分与描述部分"""
    idx = line.find(COMMENT_MARKER)
    if idx == -1:
        return line, None
    description = line[idx + len(COMMENT_MARKER):].strip()
    return line[:idx], (unescape_description(description) if description else None)


def parse_record_declaration(line: str) -> RecordDecl:
    """解析record声明行

    全名按 . 拆分：第一段为实体名；剩余段不少于一段时最后一段为动作名，
    中间各段以 . 重新拼接为属性路径。
    """
    content, description = _split_comment(line.strip())
    parts = content.split()
    if not parts:
        raise FormatError(f"Record declaration has no name: {line.strip()}")

    name_parts = parts[0].split(".")
    entity_name = name_parts.pop(0)

    action_name = None
    if name_parts:
        action_name = name_parts.pop()

    property_name = None
    if name_parts:
        property_name = ".".join(name_parts)

    return RecordDecl(
        entity_name=entity_name,
        property_name=property_name,
        action_name=action_name,
        description=description
    )


def parse_section_declaration(line: str) -> Optional[str]:
    """解析section声明行，返回section名；@ 之后没有合法名称时返回None"""
    m = _SECTION_NAME_PATTERN.match(line.strip())
    return m.group(1) if m else None


def find_closing_bracket(line: str, start: int = 0) -> int:
    """从 start 开始查找不在引号内的 ]，未找到返回-1

    与属性扫描器一致，只有紧跟在 = （允许中间有空白）之后的引号才开始一个引号值，
    普通值中间出现的引号（如 O'Brien）按普通字符处理。
    """
    quote = None
    expect_value = False
    i = start
    n = len(line)
    while i < n:
        char = line[i]
        if quote:
            if char == '\\':
                i += 2
                continue
            if char == quote:
                quote = None
        elif char == ']':
            return i
        elif char == '=':
            expect_value = True
        elif char.isspace():
            pass
        else:
            if expect_value and char in _QUOTE_CHARS:
                quote = char
            expect_value = False
        i += 1
    return -1


def parse_field_declaration(line: str) -> FieldDecl:
    """解析字段声明行

    两种形式：
    - [name="default"] tail：可选字段，方括号内的值为默认值
    - name[?] tail：普通字段，名称后紧跟 ? 表示可选字段（无默认值）
    tail 部分为属性列表及可选的 // 描述
    """
    line = line.strip()

    if line.startswith("["):
        end = find_closing_bracket(line, 1)
        if end == -1:
            raise FormatError(f"Unterminated bracket in field declaration: {line}")

        head = TreeAttrScanner(line[1:end]).scan()
        if not head.tokens:
            raise FormatError(f"Invalid field, missing name inside brackets: {line}")
        if len(head.tokens) > 1:
            DEBUG_PRINT(WARNING_T, f"Extra content inside brackets ignored: {line[1:end]}")

        decl = FieldDecl(
            name=head.tokens[0].name,
            is_optional=True,
            default_value=head.tokens[0].value
        )
        tail = line[end + 1:]
    else:
        m = _FIELD_NAME_PATTERN.match(line)
        if not m:
            raise FormatError(f"Invalid field: {line}")

        pos = m.end()
        is_optional = line[pos:pos + 1] == "?"
        if is_optional:
            pos += 1

        decl = FieldDecl(name=m.group(0), is_optional=is_optional)
        tail = line[pos:]

    result = TreeAttrScanner(tail).scan()
    decl.attributes = result.tokens
    if result.comment:
        decl.description = unescape_description(result.comment)
    return decl
