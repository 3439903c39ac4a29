from enum import Enum
from typing import List, Optional
from dataclasses import dataclass, field


# ====== 行分类 数据类型定义 ======
class LineKind(Enum):
    """行类型枚举"""
    BLANK = "BLANK"  # 空行
    RECORD_DECL = "RECORD_DECL"  # record声明行，行首无缩进且不以@开头
    SECTION_DECL = "SECTION_DECL"  # section声明行，去除缩进后以@开头
    FIELD_DECL = "FIELD_DECL"  # 字段声明行


# ====== 属性扫描 数据类型定义 ======
@dataclass
class AttrToken:
    """属性token：name 或 name=value"""
    name: str
    value: Optional[str] = None  # 已去除引号并还原转义
    raw_value: Optional[str] = None  # 原始值文本
    offset: int = 0  # token在输入文本中的起始位置

    def __repr__(self) -> str:
        return f"AttrToken({self.name}, {self.value})"


@dataclass
class AttrScanResult:
    """属性尾部扫描结果"""
    tokens: List[AttrToken] = field(default_factory=list)
    comment: Optional[str] = None


# ====== 声明行 数据类型定义 ======
@dataclass
class RecordDecl:
    """record声明行解析结果"""
    entity_name: str
    property_name: Optional[str] = None
    action_name: Optional[str] = None
    description: Optional[str] = None


@dataclass
class FieldDecl:
    """字段声明行解析结果"""
    name: str
    is_optional: bool = False
    default_value: Optional[str] = None
    attributes: List[AttrToken] = field(default_factory=list)
    description: Optional[str] = None
