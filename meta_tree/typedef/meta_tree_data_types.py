import re
from typing import Any, Dict, List, Optional, Tuple, Union

from meta_tree.typedef.exception_types import ValidationError, DuplicateNameError
from meta_tree.typedef.verb_types import VerbKind
from meta_tree.typedef.tree_schema_types import FieldSchema, SectionSchema, RecordSchema, TreeSchema
from meta_tree.libs.tree_text_funcs import has_whitespace, escape_attr_value, format_comment
from meta_tree.libs.verb_funcs import classify_verb
from meta_tree.run_time_cfg.meta_tree_cfg import get_instance as get_meta_tree_cfg


MAIN_SECTION_NAME = "main"

AttrValue = Optional[str]

# 字段名只能由字母、数字、下划线和 . 组成，与字段行的名称语法一致
_FIELD_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.]+$")


def _validate_name(kind: str, name: Optional[str]) -> None:
    """名称不能为空且不能包含空白"""
    if not isinstance(name, str) or len(name) == 0:
        raise ValidationError(f"{kind} name cannot be empty")
    if has_whitespace(name):
        raise ValidationError(f"{kind} name cannot contain spaces: {name}")


def _validate_field_name(name: Optional[str]) -> None:
    _validate_name("Field", name)
    if not _FIELD_NAME_PATTERN.match(name):
        raise ValidationError(f"Field name contains invalid characters: {name}")


# ====== Field ======

class Field:
    """字段：树的叶子节点

    持有名称、可选标记、默认值、有序属性表以及描述。名称在创建后不可修改。
    """
    def __init__(
        self,
        name: str,
        is_optional: bool = False,
        default_value: Optional[str] = None,
        description: Optional[str] = None
    ) -> None:
        _validate_field_name(name)
        self._name: str = name
        self.is_optional: bool = is_optional
        # 必填字段上的默认值不被拒绝，但序列化时不会输出
        self.default_value: Optional[str] = default_value
        self.description: Optional[str] = description
        self.attributes: Dict[str, AttrValue] = {}

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Field(name={self._name}, is_optional={self.is_optional})"

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def get_attribute(self, name: str) -> AttrValue:
        """获取属性值，属性不存在或值为空时均返回None，需要区分时请使用 has_attribute"""
        return self.attributes.get(name) or None

    def set_attribute(self, name: str, value: Union[str, int, float, None] = None) -> None:
        """设置属性，value为None表示标记属性（序列化时只输出名称）"""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        self.attributes[name] = value

    def delete_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def list_attributes(self) -> List[Tuple[str, AttrValue]]:
        return list(self.attributes.items())

    def _name_to_string(self) -> str:
        if not self.is_optional:
            return self._name
        if self.default_value is None:
            return f"{self._name}?"
        return f'[{self._name}="{escape_attr_value(self.default_value)}"]'

    def _attrs_to_string(self) -> str:
        parts = []
        for attr_name, value in self.attributes.items():
            if value is None:
                parts.append(attr_name)
            else:
                parts.append(f'{attr_name}="{escape_attr_value(value)}"')
        return " ".join(parts)

    def serialize(self) -> str:
        padding = get_meta_tree_cfg().get_name_padding()
        return f"{self._name_to_string()}{padding}{self._attrs_to_string()} {format_comment(self.description)}".strip()

    def to_schema(self) -> FieldSchema:
        return FieldSchema(
            name=self._name,
            is_optional=self.is_optional,
            default_value=self.default_value,
            description=self.description,
            attributes=self.list_attributes()
        )

    def to_plain_object(self) -> Dict[str, Any]:
        return self.to_schema().model_dump(by_alias=True, mode="json")

    @classmethod
    def from_schema(cls, schema: FieldSchema) -> 'Field':
        field = cls(schema.name, schema.is_optional, schema.default_value, schema.description)
        for attr_name, value in schema.attributes:
            field.set_attribute(attr_name, value)
        return field


# ====== Section ======

class Section:
    """section：record内按名称分组的字段集合，字段按插入顺序保存"""
    def __init__(self, name: str) -> None:
        _validate_name("Section", name)
        self._name: str = name
        self.fields: Dict[str, Field] = {}

    @property
    def name(self) -> str:
        return self._name

    def is_main(self) -> bool:
        return self._name == MAIN_SECTION_NAME

    def __repr__(self) -> str:
        return f"Section(name={self._name}, fields={len(self.fields)})"

    def add_field(self, field: Field) -> None:
        """添加字段，同名字段已存在时抛出 DuplicateNameError"""
        if self.has_field(field.name):
            raise DuplicateNameError("Field", field.name)
        self.fields[field.name] = field

    def set_field(self, field: Field) -> None:
        """设置字段，同名字段存在时直接覆盖"""
        self.fields[field.name] = field

    def get_field(self, name: str) -> Optional[Field]:
        return self.fields.get(name)

    def has_field(self, name: str) -> bool:
        return name in self.fields

    def delete_field(self, name: str) -> None:
        self.fields.pop(name, None)

    def list_fields(self) -> List[Field]:
        return list(self.fields.values())

    def serialize(self, indent: Optional[str] = None) -> str:
        """每个字段单独一行并缩进；main section 不输出 @name 头部行"""
        if indent is None:
            indent = get_meta_tree_cfg().get_indent()

        lines = [indent + field.serialize() for field in self.fields.values()]
        if not self.is_main():
            lines.insert(0, f"{indent}@{self._name}")

        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def to_schema(self) -> SectionSchema:
        return SectionSchema(
            name=self._name,
            field_list=[field.to_schema() for field in self.fields.values()]
        )

    def to_plain_object(self) -> Dict[str, Any]:
        return self.to_schema().model_dump(by_alias=True, mode="json")


# ====== Record ======

class Record:
    """record：由实体名、属性路径、动作名标识，持有若干section

    实体名、属性路径、动作名在构造后不可修改，因此全名和动作类别始终与之一致。
    """
    def __init__(
        self,
        entity_name: str,
        property_name: Optional[str] = None,
        action_name: Optional[str] = None,
        description: Optional[str] = None
    ) -> None:
        _validate_name("Entity", entity_name)
        if property_name is not None:
            _validate_name("Property", property_name)
        if action_name is not None:
            _validate_name("Action", action_name)

        self._entity_name: str = entity_name
        self._property_name: Optional[str] = property_name
        self._action_name: Optional[str] = action_name
        self.description: Optional[str] = description

        self.sections: Dict[str, Section] = {}
        self.sections[MAIN_SECTION_NAME] = Section(MAIN_SECTION_NAME)

    @property
    def entity_name(self) -> str:
        return self._entity_name

    @property
    def property_name(self) -> Optional[str]:
        return self._property_name

    @property
    def action_name(self) -> Optional[str]:
        return self._action_name

    @property
    def verb(self) -> Optional[VerbKind]:
        return classify_verb(self._action_name)

    @property
    def main_section(self) -> Section:
        return self.sections[MAIN_SECTION_NAME]

    def __repr__(self) -> str:
        return f"Record(full_name={self.full_name()}, verb={self.verb})"

    def full_name(self) -> str:
        """拼接实体名、属性路径和动作名得到全名，每次调用重新计算"""
        name = self._entity_name
        if self._property_name:
            name += "." + self._property_name
        if self._action_name:
            name += "." + self._action_name
        return name

    # ------ section 操作 ------

    def add_section(self, name: str) -> Section:
        """新建section，同名section已存在时抛出 DuplicateNameError"""
        if name in self.sections:
            raise DuplicateNameError("Section", name)
        section = Section(name)
        self.sections[name] = section
        return section

    def get_section(self, name: str) -> Optional[Section]:
        return self.sections.get(name)

    def has_section(self, name: str) -> bool:
        return name in self.sections

    def delete_section(self, name: str) -> None:
        """删除section；main section始终存在，不允许删除"""
        if name == MAIN_SECTION_NAME:
            raise ValidationError("Main section cannot be deleted")
        self.sections.pop(name, None)

    def set_section(self, section: Section) -> None:
        self.sections[section.name] = section

    def list_sections(self) -> List[Section]:
        return list(self.sections.values())

    # ------ field 操作，section不存在时由 add_field/set_field 隐式创建 ------

    def _resolve_section(self, section_name: str) -> Section:
        section = self.sections.get(section_name)
        if section is None:
            section = self.add_section(section_name)
        return section

    def add_field(self, field: Field, section_name: str = MAIN_SECTION_NAME) -> None:
        self._resolve_section(section_name).add_field(field)

    def set_field(self, field: Field, section_name: str = MAIN_SECTION_NAME) -> None:
        self._resolve_section(section_name).set_field(field)

    def get_field(self, name: str, section_name: str = MAIN_SECTION_NAME) -> Optional[Field]:
        section = self.sections.get(section_name)
        if section is None:
            return None
        return section.get_field(name)

    def has_field(self, name: str, section_name: str = MAIN_SECTION_NAME) -> bool:
        section = self.sections.get(section_name)
        if section is None:
            return False
        return section.has_field(name)

    def delete_field(self, name: str, section_name: str = MAIN_SECTION_NAME) -> None:
        section = self.sections.get(section_name)
        if section is not None:
            section.delete_field(name)

    def list_fields(self, section_name: str = MAIN_SECTION_NAME) -> Optional[List[Field]]:
        """获取section内全部字段，section不存在时返回None"""
        section = self.sections.get(section_name)
        if section is None:
            return None
        return section.list_fields()

    # ------ 序列化 ------

    def serialize(self, indent: Optional[str] = None) -> str:
        padding = get_meta_tree_cfg().get_name_padding()
        lines = [f"{self.full_name()}{padding}{format_comment(self.description)}".strip()]
        for section in self.sections.values():
            section_str = section.serialize(indent)
            if section_str:
                lines.append(section_str.rstrip("\n"))
        return "\n".join(lines)

    def to_schema(self) -> RecordSchema:
        return RecordSchema(
            name=self.full_name(),
            entity_name=self._entity_name,
            property_name=self._property_name,
            action_name=self._action_name,
            verb=self.verb,
            description=self.description,
            sections=[section.to_schema() for section in self.sections.values()]
        )

    def to_plain_object(self) -> Dict[str, Any]:
        return self.to_schema().model_dump(by_alias=True, mode="json")

    @classmethod
    def from_schema(cls, schema: RecordSchema) -> 'Record':
        record = cls(schema.entity_name, schema.property_name, schema.action_name, schema.description)
        for section_schema in schema.sections:
            if not record.has_section(section_schema.name):
                record.add_section(section_schema.name)
            for field_schema in section_schema.field_list:
                record.add_field(Field.from_schema(field_schema), section_schema.name)
        return record


# ====== Tree ======

class Tree:
    """树：以record全名为键、按插入顺序保存的record集合，是解析与序列化的基本单位"""
    def __init__(self) -> None:
        self.records: Dict[str, Record] = {}

    def __repr__(self) -> str:
        return f"Tree(records={len(self.records)})"

    def add_record(
        self,
        entity_name: str,
        property_name: Optional[str] = None,
        action_name: Optional[str] = None,
        description: Optional[str] = None
    ) -> Record:
        """新建record并插入，全名已存在时抛出 DuplicateNameError"""
        record = Record(entity_name, property_name, action_name, description)
        full_name = record.full_name()
        if full_name in self.records:
            raise DuplicateNameError("Record", full_name)
        self.records[full_name] = record
        return record

    def get_record(self, full_name: str) -> Optional[Record]:
        return self.records.get(full_name)

    def has_record(self, full_name: str) -> bool:
        return full_name in self.records

    def delete_record(self, full_name: str) -> None:
        self.records.pop(full_name, None)

    def set_record(self, record: Record) -> None:
        """以record当前全名为键插入，已存在时覆盖"""
        self.records[record.full_name()] = record

    def list_records(self) -> List[Record]:
        return list(self.records.values())

    def list_record_names(self) -> List[str]:
        return list(self.records.keys())

    def serialize(self, indent: Optional[str] = None) -> str:
        """各record之间以一个空行分隔"""
        return "\n\n".join(record.serialize(indent) for record in self.records.values())

    def to_schema(self) -> TreeSchema:
        return TreeSchema(records=[record.to_schema() for record in self.records.values()])

    def to_plain_object(self) -> Dict[str, Any]:
        return self.to_schema().model_dump(by_alias=True, mode="json")

    @classmethod
    def from_plain_object(cls, data: Dict[str, Any]) -> 'Tree':
        """从 to_plain_object 的输出重建树

        Raises:
            pydantic.ValidationError: 输入结构不合法
            MetaTreeError: 名称不合法或重名
        """
        schema = TreeSchema.model_validate(data)
        tree = cls()
        for record_schema in schema.records:
            record = Record.from_schema(record_schema)
            if tree.has_record(record.full_name()):
                raise DuplicateNameError("Record", record.full_name())
            tree.set_record(record)
        return tree
