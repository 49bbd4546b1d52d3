"""集中配置管理

组件目录、知识库文件、可识别的仓库前缀等统一从这里读取。
支持从 YAML 文件加载 + 编程式覆盖。

注意: 知识库实例本身不放在全局配置里，由 ServiceContainer 构造后显式传递。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from component_manager.core.exceptions import ConfigError
from component_manager.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_REPOSITORY_PREFIXES = ["https://github.com/"]


@dataclass
class Config:
    """组件管理器配置"""

    # 目录
    specifications_dir: str = "data/specifications"
    store_file: str = "data/components.yml"

    # 拉取
    repository_prefixes: list[str] = field(
        default_factory=lambda: list(DEFAULT_REPOSITORY_PREFIXES),
    )
    clone_timeout: int = 600  # 秒

    # 导入
    declarative_extension: str = ".scs"
    import_best_effort: bool = False

    # 执行
    max_workers: int = 1

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.repository_prefixes is None:
            self.repository_prefixes = []
        elif isinstance(self.repository_prefixes, str):
            self.repository_prefixes = [self.repository_prefixes]
        if not self.declarative_extension.startswith("."):
            self.declarative_extension = "." + self.declarative_extension
        if self.max_workers < 1:
            raise ConfigError(f"max_workers 必须 >= 1: {self.max_workers}")

    @classmethod
    def from_file(cls, path: str = "configs/default.yml") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = {k: v for k, v in data.items() if k not in known}
        try:
            cfg = cls(**matched)
        except TypeError as e:
            raise ConfigError(f"配置文件内容无效: {path} - {e}") from e
        cfg.extra = extra
        return cfg


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/default.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
