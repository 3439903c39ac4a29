from typing import Optional

from meta_tree.typedef.verb_types import VerbKind


# 前缀匹配规则，按顺序检查，先匹配者优先
_PREFIX_RULES = (
    ("get", VerbKind.GET),
    ("set", VerbKind.SET),
    ("update", VerbKind.SET),  # updateList 等同样先命中此规则，归为 SET
    ("add", VerbKind.ADD),
    ("delete", VerbKind.DELETE),
)


def classify_verb(action_name: Optional[str]) -> Optional[VerbKind]:
    """根据动作名推导动作类别

    规则依次为：空值返回None；get/set/update/add/delete 前缀（update 归为 SET）；
    任意位置包含 list（不区分大小写）；check 前缀；其余一律归为 CHECK。

    Args:
        action_name: 动作名，即record声明的最后一段

    Returns:
        Optional[VerbKind]: 动作类别，动作名为空时返回None
    """
    if action_name is None:
        return None

    action_name = action_name.strip()
    if not action_name:
        return None

    for prefix, verb in _PREFIX_RULES:
        if action_name.startswith(prefix):
            return verb

    if "list" in action_name.lower():
        return VerbKind.LIST

    # 以 check 开头或无法识别的动作名都归为 CHECK
    return VerbKind.CHECK
