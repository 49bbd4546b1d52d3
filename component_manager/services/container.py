"""服务容器 — 统一装配安装流水线

依赖关系图（→ 表示依赖）:
  installer → resolver → registry  → store
                       → validator
                       → fetcher   → executor
                       → importer  → store

知识库实例由容器的创建者持有（可通过 store 参数注入），
不存在全局知识库单例；同一容器内的组件共享同一个知识库。

用法:
    container = ServiceContainer(config=Config.from_file("configs/default.yml"))
    result = container.installer.install(["part_ui"])
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from component_manager.core.component import (
        ArtifactFetcher,
        ComponentRegistry,
        ComponentValidator,
        DependencyResolver,
        ScsImporter,
    )
    from component_manager.core.config import Config
    from component_manager.core.store import KnowledgeStore
    from component_manager.services.install_service import InstallService
    from component_manager.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(
        self,
        config: Config | None = None,
        store: KnowledgeStore | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from component_manager.core.config import get_config
            config = get_config()
        self._config = config
        if store is not None:
            self._instances["store"] = store
        self._executor = executor

    @property
    def config(self) -> Config:
        return self._config

    @property
    def store(self) -> KnowledgeStore:
        if "store" not in self._instances:
            from component_manager.core.store import YamlKnowledgeStore
            self._instances["store"] = YamlKnowledgeStore(self._config.store_file)
            logger.debug("知识库已加载: %s", self._config.store_file)
        return self._instances["store"]  # type: ignore[return-value]

    @property
    def registry(self) -> ComponentRegistry:
        if "registry" not in self._instances:
            from component_manager.core.component import ComponentRegistry
            self._instances["registry"] = ComponentRegistry(self.store)
        return self._instances["registry"]  # type: ignore[return-value]

    @property
    def validator(self) -> ComponentValidator:
        if "validator" not in self._instances:
            from component_manager.core.component import ComponentValidator
            self._instances["validator"] = ComponentValidator()
        return self._instances["validator"]  # type: ignore[return-value]

    @property
    def fetcher(self) -> ArtifactFetcher:
        if "fetcher" not in self._instances:
            from component_manager.core.component import ArtifactFetcher
            self._instances["fetcher"] = ArtifactFetcher(
                specifications_dir=Path(self._config.specifications_dir),
                prefixes=self._config.repository_prefixes,
                executor=self._executor,
                timeout=self._config.clone_timeout,
            )
        return self._instances["fetcher"]  # type: ignore[return-value]

    @property
    def importer(self) -> ScsImporter:
        if "importer" not in self._instances:
            from component_manager.core.component import ScsImporter
            self._instances["importer"] = ScsImporter(
                self.store,
                extension=self._config.declarative_extension,
                best_effort=self._config.import_best_effort,
            )
        return self._instances["importer"]  # type: ignore[return-value]

    @property
    def resolver(self) -> DependencyResolver:
        if "resolver" not in self._instances:
            from component_manager.core.component import DependencyResolver
            self._instances["resolver"] = DependencyResolver(
                registry=self.registry,
                validator=self.validator,
                fetcher=self.fetcher,
                importer=self.importer,
            )
        return self._instances["resolver"]  # type: ignore[return-value]

    @property
    def installer(self) -> InstallService:
        if "installer" not in self._instances:
            from component_manager.services.install_service import InstallService
            self._instances["installer"] = InstallService(
                self.resolver, max_workers=self._config.max_workers,
            )
        return self._instances["installer"]  # type: ignore[return-value]
