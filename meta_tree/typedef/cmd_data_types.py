from dataclasses import dataclass, field
from typing import List


class Colors:
    """颜色类"""
    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'


class CmdProcStatus:
    """命令行退出码"""
    SUCCESS = 0
    FAILED = 1


@dataclass
class OutputFormatInfo:
    """命令行输出格式信息"""
    name: str                                       # 格式名
    description: str                                # 格式描述
    aliases: List[str] = field(default_factory=list)  # 格式别名


OUTPUT_FORMATS: List[OutputFormatInfo] = [
    OutputFormatInfo(name="json", description="树结构的JSON表示（含fullName与verb）"),
    OutputFormatInfo(name="text", description="重新序列化后的文本", aliases=["tree"]),
]
