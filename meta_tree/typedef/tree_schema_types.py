"""
树结构的JSON表示（plain object）模型

to_plain_object 通过这些模型按别名（camelCase）导出，from_plain_object 通过它们校验输入。
"""
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from meta_tree.typedef.verb_types import VerbKind


class _SchemaBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FieldSchema(_SchemaBase):
    """字段的JSON表示"""
    name: str
    is_optional: bool = Field(default=False, alias="isOptional")
    default_value: Optional[str] = Field(default=None, alias="defaultValue")
    description: Optional[str] = None
    attributes: List[Tuple[str, Optional[str]]] = Field(default_factory=list)


class SectionSchema(_SchemaBase):
    """section的JSON表示"""
    name: str
    field_list: List[FieldSchema] = Field(default_factory=list, alias="fields")


class RecordSchema(_SchemaBase):
    """record的JSON表示，name 与 verb 为派生值，导入时忽略"""
    name: str = Field(default="", alias="fullName")
    entity_name: str = Field(alias="entityName")
    property_name: Optional[str] = Field(default=None, alias="propertyName")
    action_name: Optional[str] = Field(default=None, alias="actionName")
    verb: Optional[VerbKind] = None
    description: Optional[str] = None
    sections: List[SectionSchema] = Field(default_factory=list)


class TreeSchema(_SchemaBase):
    """整棵树的JSON表示"""
    records: List[RecordSchema] = Field(default_factory=list)
