# 全局变量，控制打印级别，可通过 set_print_level 或配置文件修改
PRINT_LEVEL = 2

# 打印级别和对应的颜色
LEVELS = {
    0: {"name": "ERROR", "color": "\033[91m"},  # 红色
    1: {"name": "WARNING", "color": "\033[93m"},  # 黄色
    2: {"name": "INFO", "color": "\033[94m"},  # 蓝色
    3: {"name": "DEBUG", "color": "\033[92m"}  # 绿色
}

ERROR_T = 0
WARNING_T = 1
INFO_T = 2
DEBUG_T = 3


def set_print_level(level: int) -> None:
    """设置打印级别，超出范围的值会被截断到 [ERROR_T, DEBUG_T]"""
    global PRINT_LEVEL
    PRINT_LEVEL = max(ERROR_T, min(DEBUG_T, int(level)))


def get_print_level() -> int:
    return PRINT_LEVEL


# 条件打印函数
def DEBUG_PRINT(level, *args, **kwargs):
    # ANSI 转义序列，用于重置颜色
    RESET_COLOR = "\033[0m"
    if level <= PRINT_LEVEL:
        level_info = LEVELS.get(level, {"name": "UNKNOWN", "color": "\033[0m"})
        prefix = f"{level_info['color']}[{level_info['name']}] {RESET_COLOR}"
        print(prefix, *args, **kwargs)
