import os
import json
from typing import Any, Dict

from meta_tree.lib.debug_print import DEBUG_PRINT, WARNING_T, INFO_T, set_print_level

# 运行过程中序列化与输出相关的配置信息管理

DEFAULT_CONFIG_FILE_NAME = "meta_tree_config.json"

_DEFAULT_INDENT = "    "
_DEFAULT_NAME_PADDING = "    "


class MetaTreeCfg:
    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(MetaTreeCfg, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, '_initialized'):
            self._initialized = True
            self.reset()

    def reset(self) -> None:
        """恢复默认配置"""
        self.indent = _DEFAULT_INDENT
        self.name_padding = _DEFAULT_NAME_PADDING
        self.print_level = INFO_T
        set_print_level(self.print_level)

    def get_indent(self) -> str:
        return self.indent

    def set_indent(self, indent: str) -> None:
        if indent.strip():
            raise ValueError(f"Indent must be whitespace only: {indent!r}")
        self.indent = indent

    def get_name_padding(self) -> str:
        return self.name_padding

    def set_name_padding(self, padding: str) -> None:
        if not padding or padding.strip():
            raise ValueError(f"Name padding must be non-empty whitespace: {padding!r}")
        self.name_padding = padding

    def set_print_level(self, level: int) -> None:
        set_print_level(level)
        self.print_level = level

    def apply_config_dict(self, config: Dict[str, Any]) -> None:
        """应用配置字典，未知键打印警告后忽略"""
        for key, value in config.items():
            if key == "indent":
                self.set_indent(value)
            elif key == "name_padding":
                self.set_name_padding(value)
            elif key == "print_level":
                self.set_print_level(value)
            else:
                DEBUG_PRINT(WARNING_T, f"未知配置项 '{key}'，已忽略")

    def load_config_file(self, config_file_path: str) -> bool:
        """从JSON配置文件加载配置

        Args:
            config_file_path: 配置文件路径，或包含 meta_tree_config.json 的目录

        Returns:
            bool: 加载是否成功
        """
        if os.path.isdir(config_file_path):
            config_file_path = os.path.join(config_file_path, DEFAULT_CONFIG_FILE_NAME)

        if not os.path.exists(config_file_path):
            DEBUG_PRINT(WARNING_T, f"配置文件 '{config_file_path}' 不存在，使用默认配置")
            return False

        with open(config_file_path, 'r', encoding='utf-8') as f:
            config = json.load(f)

        if not isinstance(config, dict):
            raise ValueError(f"Config file must contain a JSON object: {config_file_path}")

        self.apply_config_dict(config)
        DEBUG_PRINT(INFO_T, f"已加载配置文件: {config_file_path}")
        return True


def get_instance() -> MetaTreeCfg:
    return MetaTreeCfg()
