"""配置管理模块，用于加载和读取 config.toml 中的插件配置，以及插件的持久化数据。"""

import logging
import os
import tomllib
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

import yaml

log = logging.getLogger("uvicorn")

_MISSING = object()

# 延迟加载，首次 get 时读取
_config_data: Optional[dict] = None


def config_path() -> Path:
    """配置文件路径，可通过环境变量 CODEFEATRUE_CONFIG 覆盖"""
    return Path(os.environ.get("CODEFEATRUE_CONFIG", "config.toml"))


def load(path: Optional[Path] = None) -> dict:
    """
    读取配置文件并替换当前配置。

    :param path: 配置文件路径，默认为 config_path()
    :return: 解析后的配置
    :raises FileNotFoundError: 配置文件不存在时
    """
    global _config_data
    path = Path(path) if path else config_path()
    try:
        with open(path, "rb") as f:
            _config_data = tomllib.load(f)
    except FileNotFoundError:
        log.error("配置文件未找到: %s", path)
        raise
    return _config_data


def get(plugin: str, path: str, default: Any = _MISSING) -> Any:
    """
    从配置文件中获取指定插件的配置项值。

    :param plugin: 插件名称（对应 TOML 中的表名）
    :param path: 配置项键名
    :param default: 配置项不存在时返回的值
    :return: 配置值
    :raises KeyError: 当 plugin 或 path 不存在且未给出 default 时
    """
    if _config_data is None:
        load()

    try:
        return _config_data[plugin][path]
    except KeyError as e:
        if default is not _MISSING:
            return default
        raise KeyError(f"配置项缺失: plugin='{plugin}', path='{path}'") from e


class PluginData:
    """
    插件的可变持久化数据，保存为 YAML 文件。

    像字典一样读写，修改后调用 save() 写回磁盘。
    """

    def __init__(self, path, defaults: Optional[dict] = None):
        self.path = Path(path)
        self._data = deepcopy(defaults) if defaults else {}
        if self.path.exists():
            with open(self.path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"插件数据格式错误: {self.path}")
            self._data.update(loaded)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def setdefault(self, key: str, value: Any) -> Any:
        return self._data.setdefault(key, value)

    def save(self) -> None:
        """写回 YAML 文件"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self._data, f, allow_unicode=True)
        log.debug("插件数据已保存: %s", self.path)
