from enum import Enum


class VerbKind(Enum):
    """动作类别枚举，由record的动作名推导"""
    GET = "get"
    SET = "set"
    ADD = "add"
    DELETE = "delete"
    LIST = "list"
    CHECK = "check"
