"""组件安装流水线

- registry.py: 知识库 -> 组件描述
- validator.py: 结构校验
- resolver.py: 依赖优先的递归解析
- fetcher.py: 制品仓库拉取
- importer.py: 声明式文件导入
"""

from component_manager.core.component.fetcher import ArtifactFetcher
from component_manager.core.component.importer import ScsImporter
from component_manager.core.component.registry import ComponentRegistry
from component_manager.core.component.resolver import DependencyResolver
from component_manager.core.component.validator import ComponentValidator

__all__ = [
    "ComponentRegistry",
    "ComponentValidator",
    "DependencyResolver",
    "ArtifactFetcher",
    "ScsImporter",
]
