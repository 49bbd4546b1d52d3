"""component-manager — 知识库可复用组件安装

按依赖优先顺序安装组件: 查询知识库中的组件描述、校验、
递归安装依赖、拉取组件仓库、导入声明式文件。

用法:
    from component_manager.core.config import Config
    from component_manager.services.container import ServiceContainer

    result = ServiceContainer(config=Config()).installer.install(["part_ui"])
    assert result.success
"""

__version__ = "0.1.0"
