import re
from typing import Optional


_WHITESPACE_PATTERN = re.compile(r"\s")
_BACKSLASH_ESCAPE_PATTERN = re.compile(r"\\(.)", re.DOTALL)
_ENTITY_PATTERN = re.compile(r"&(quot|amp);")
_ENTITY_MAP = {"quot": '"', "amp": "&"}


def has_whitespace(text: str) -> bool:
    """检查文本中是否包含任意空白字符"""
    return _WHITESPACE_PATTERN.search(text) is not None


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def escape_attr_value(value: str) -> str:
    r"""转义属性值/默认值，用于双引号包裹输出

    反斜杠、双引号、单引号分别转义为 \\ \" \'，换行转义为字面量 \n
    """
    value = normalize_newlines(value)
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("'", "\\'")
        .replace("\n", "\\n")
    )


def unescape_attr_value(value: str) -> str:
    r"""escape_attr_value 的逆过程：\n 还原为换行，其余 \x 还原为 x"""
    def _replace(match: re.Match) -> str:
        char = match.group(1)
        return "\n" if char == "n" else char

    return _BACKSLASH_ESCAPE_PATTERN.sub(_replace, value)


def escape_description(description: str) -> str:
    r"""转义描述文本：& 与 " 转为HTML实体，反斜杠转为 \\，换行转为字面量 \n"""
    description = normalize_newlines(description)
    return (
        description.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("\\", "\\\\")
        .replace("\n", "\\n")
    )


def unescape_description(description: str) -> str:
    """escape_description 的逆过程"""
    description = unescape_attr_value(description)
    return _ENTITY_PATTERN.sub(lambda m: _ENTITY_MAP[m.group(1)], description)


def format_comment(description: Optional[str]) -> str:
    """将描述格式化为行尾注释，描述为空时返回空字符串"""
    if not description:
        return ""
    return ("// " + escape_description(description)).strip()


def strip_quotes(raw_value: str) -> Optional[str]:
    """去除成对的引号并还原转义；非引号包裹的值原样返回"""
    if len(raw_value) >= 2 and raw_value[0] == raw_value[-1] and raw_value[0] in ('"', "'"):
        return unescape_attr_value(raw_value[1:-1])
    return raw_value
