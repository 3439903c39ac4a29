from typing import Optional

from meta_tree.typedef.tree_token_types import AttrToken, AttrScanResult
from meta_tree.libs.tree_text_funcs import strip_quotes


COMMENT_MARKER = "//"
_QUOTE_CHARS = ('"', "'")


class TreeAttrScanner:
    """字段属性尾部扫描器

    识别以空白分隔的 name 或 name=value 形式的token，value 可以是双引号、单引号包裹的字符串
    （引号内允许 \\" \\' 转义），也可以是连续的非空白字符。遇到以 // 开头的token时停止扫描，
    其后的全部内容作为注释返回。
    """
    def __init__(self, text: str) -> None:
        self.text: str = text
        self.pos: int = 0
        self.n: int = len(text)
        self.result = AttrScanResult()

    def _skip_whitespace(self) -> None:
        while self.pos < self.n and self.text[self.pos].isspace():
            self.pos += 1

    def _read_name(self) -> str:
        start = self.pos
        while self.pos < self.n and not self.text[self.pos].isspace() and self.text[self.pos] != '=':
            self.pos += 1
        return self.text[start:self.pos]

    def _find_closing_quote(self, quote_pos: int) -> int:
        """查找与 quote_pos 处引号配对的结束引号，跳过反斜杠转义，未找到返回-1"""
        quote = self.text[quote_pos]
        i = quote_pos + 1
        while i < self.n:
            char = self.text[i]
            if char == '\\':
                i += 2
                continue
            if char == quote:
                return i
            i += 1
        return -1

    def _read_bare_value(self) -> str:
        start = self.pos
        while self.pos < self.n and not self.text[self.pos].isspace():
            self.pos += 1
        return self.text[start:self.pos]

    def _read_value(self) -> Optional[str]:
        """读取 = 之后的值，返回原始值文本；= 后没有内容时返回None"""
        self._skip_whitespace()
        if self.pos >= self.n:
            return None

        if self.text[self.pos] in _QUOTE_CHARS:
            end = self._find_closing_quote(self.pos)
            if end != -1:
                raw_value = self.text[self.pos:end + 1]
                self.pos = end + 1
                return raw_value
            # 引号未闭合时按普通值处理

        raw_value = self._read_bare_value()
        return raw_value if raw_value else None

    def _try_read_assignment(self) -> Optional[str]:
        """name 之后允许出现 [空白]=[空白]value，不存在 = 时回退位置"""
        saved_pos = self.pos
        self._skip_whitespace()
        if self.pos < self.n and self.text[self.pos] == '=':
            self.pos += 1
            return self._read_value()
        self.pos = saved_pos
        return None

    def scan(self) -> AttrScanResult:
        """执行扫描"""
        while True:
            self._skip_whitespace()
            if self.pos >= self.n:
                break

            if self.text.startswith(COMMENT_MARKER, self.pos):
                comment = self.text[self.pos + len(COMMENT_MARKER):].strip()
                self.result.comment = comment if comment else None
                break

            offset = self.pos
            name = self._read_name()
            if not name:
                # 孤立的 = 直接跳过
                self.pos += 1
                continue

            raw_value = self._try_read_assignment()
            value = strip_quotes(raw_value) if raw_value else None
            self.result.tokens.append(AttrToken(name=name, value=value, raw_value=raw_value, offset=offset))

        return self.result


def scan_attributes(text: str) -> AttrScanResult:
    return TreeAttrScanner(text).scan()
