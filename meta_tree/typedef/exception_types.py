class MetaTreeError(Exception):
    """meta-tree 基础异常类"""
    def __init__(self, message: str, line_num: int = 0, line_content: str = ""):
        self.message = message
        self.line_num = line_num
        self.line_content = line_content
        super().__init__(self._format_message())

    def _error_title(self) -> str:
        return "Meta Tree Error"

    def _format_message(self) -> str:
        """格式化错误信息"""
        if self.line_num > 0:
            if self.line_content:
                return (
                    f"{self._error_title()} at Line {self.line_num}\n"
                    f"Line Content: {self.line_content}\n"
                    f"Error: {self.message}\n"
                )
            else:
                return f"{self._error_title()} at Line {self.line_num}: {self.message}"
        return f"{self._error_title()}: {self.message}"

    def with_location(self, line_num: int, line_content: str = "") -> "MetaTreeError":
        """附加行号与行内容，已有位置信息时保持不变"""
        if self.line_num <= 0:
            self.line_num = line_num
            self.line_content = line_content
            self.args = (self._format_message(),)
        return self


class ValidationError(MetaTreeError):
    """名称校验异常：实体名、属性路径、动作名、section名、字段名为空或包含空白"""
    def _error_title(self) -> str:
        return "Validation Error"


class DuplicateNameError(MetaTreeError):
    """重名异常：record全名、record内section名、section内字段名重复"""
    def __init__(self, kind: str, name: str, line_num: int = 0, line_content: str = ""):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} already exists: {name}", line_num, line_content)

    def _error_title(self) -> str:
        return "Duplicate Name Error"


class FormatError(MetaTreeError):
    """文本格式异常：方括号未闭合、字段行或record行无法提取名称"""
    def _error_title(self) -> str:
        return "Format Error"
