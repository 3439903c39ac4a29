from typing import List, Optional

from meta_tree.typedef.tree_token_types import LineKind
from meta_tree.typedef.exception_types import MetaTreeError
from meta_tree.typedef.meta_tree_data_types import Tree, Record, Field, MAIN_SECTION_NAME
from meta_tree.libs.tree_text_funcs import normalize_newlines
from meta_tree.lib.debug_print import DEBUG_PRINT, DEBUG_T
from meta_tree.utils.tree_analyzer.tree_line_parsers import (
    classify_line, parse_record_declaration, parse_section_declaration, parse_field_declaration
)


class TreeParser:
    """meta-tree 文本解析器

    逐行单遍解析，不跨行回溯。状态仅包括当前record与当前section名：
    record声明行会把当前section重置为 main，section声明行切换当前section，
    字段声明行把字段加入当前section。任意一行出错即终止整个解析。
    """
    def __init__(self, text: str) -> None:
        self.text: str = text
        self.lines: List[str] = normalize_newlines(text).split('\n') if text else []
        self.line_num = 0
        self.tree = Tree()
        self.current_record: Optional[Record] = None
        self.current_section_name: str = MAIN_SECTION_NAME

    def parse(self) -> Tree:
        """执行解析"""
        for line in self.lines:
            self.line_num += 1
            line_kind = classify_line(line)
            try:
                self._execute_line_processing(line, line_kind)
            except MetaTreeError as e:
                raise e.with_location(self.line_num, line.rstrip())

        return self.tree

    def _execute_line_processing(self, line: str, line_kind: LineKind) -> None:
        """根据行类型分发处理"""
        if line_kind == LineKind.BLANK:
            return

        if line_kind == LineKind.RECORD_DECL:
            self._handle_record_decl(line)
            return

        # record之前出现的section行与字段行被忽略
        if self.current_record is None:
            DEBUG_PRINT(DEBUG_T, f"Line {self.line_num}: no record opened, line ignored")
            return

        if line_kind == LineKind.SECTION_DECL:
            self._handle_section_decl(line)
        elif line_kind == LineKind.FIELD_DECL:
            self._handle_field_decl(line)

    def _handle_record_decl(self, line: str) -> None:
        decl = parse_record_declaration(line)
        self.current_record = self.tree.add_record(
            decl.entity_name,
            decl.property_name,
            decl.action_name,
            decl.description
        )
        self.current_section_name = MAIN_SECTION_NAME
        DEBUG_PRINT(DEBUG_T, f"Line {self.line_num}: record '{self.current_record.full_name()}'")

    def _handle_section_decl(self, line: str) -> None:
        section_name = parse_section_declaration(line)
        if not section_name:
            DEBUG_PRINT(DEBUG_T, f"Line {self.line_num}: section declaration without name, line ignored")
            return

        # 总是新建section，重复声明同名section会抛出 DuplicateNameError
        self.current_record.add_section(section_name)
        self.current_section_name = section_name
        DEBUG_PRINT(DEBUG_T, f"Line {self.line_num}: section '@{section_name}'")

    def _handle_field_decl(self, line: str) -> None:
        decl = parse_field_declaration(line)
        field = Field(decl.name, decl.is_optional, decl.default_value, decl.description)
        for token in decl.attributes:
            field.set_attribute(token.name, token.value)

        self.current_record.add_field(field, self.current_section_name)
        DEBUG_PRINT(DEBUG_T, f"Line {self.line_num}: field '{field.name}' in '@{self.current_section_name}'")
