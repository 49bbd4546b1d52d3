"""依赖解析器 - 依赖优先的递归安装

resolve(identifier, task):
  1. 已在 task.visited 中 -> 空的成功结果（菱形依赖去重，环在此终止）
  2. 登记 visited，查询组件描述，不存在则失败
  3. 结构校验，不通过则失败
  4. 按声明顺序递归安装依赖；任一依赖失败立即中止，
     不再处理剩余兄弟依赖，也不拉取/导入当前组件
  5. 拉取制品 + 导入声明式文件，追加当前组件，返回成功

叶子层抛出的异常在这里统一转换为 InstallResult 中的失败记录。
"""

from __future__ import annotations

import logging

from component_manager.core.component.fetcher import ArtifactFetcher
from component_manager.core.component.importer import ScsImporter
from component_manager.core.component.registry import ComponentRegistry
from component_manager.core.component.validator import ComponentValidator
from component_manager.core.exceptions import (
    ArtifactImportError,
    ComponentNotFoundError,
    FetchError,
    ValidationError,
)
from component_manager.core.models import (
    STAGE_DEPENDENCY,
    STAGE_FETCH,
    STAGE_IMPORT,
    STAGE_LOOKUP,
    STAGE_VALIDATE,
    ComponentDescriptor,
    InstallationTask,
    InstallFailure,
    InstallResult,
)

logger = logging.getLogger(__name__)


class DependencyResolver:
    """依赖解析器"""

    def __init__(
        self,
        registry: ComponentRegistry,
        validator: ComponentValidator,
        fetcher: ArtifactFetcher,
        importer: ScsImporter,
    ) -> None:
        self.registry = registry
        self.validator = validator
        self.fetcher = fetcher
        self.importer = importer

    def resolve(self, identifier: str, task: InstallationTask) -> InstallResult:
        if not task.claim(identifier):
            logger.debug("已处理，跳过: %s (root=%s)", identifier, task.root)
            return InstallResult.ok()

        try:
            descriptor = self.registry.require(identifier)
        except ComponentNotFoundError as e:
            return self._fail(identifier, STAGE_LOOKUP, str(e))

        try:
            self.validator.check(descriptor)
        except ValidationError as e:
            return self._fail(identifier, STAGE_VALIDATE, e.reason)

        result = InstallResult.ok()
        for dependency in descriptor.dependencies:
            logger.info("安装依赖: %s -> %s", identifier, dependency)
            dep_result = self.resolve(dependency, task)
            result.extend(dep_result)
            if not dep_result.success:
                logger.error(
                    "依赖 '%s' 未安装，中止安装 '%s'", dependency, identifier,
                    extra={"component": identifier, "stage": STAGE_DEPENDENCY},
                )
                result.failures.append(
                    InstallFailure(identifier, STAGE_DEPENDENCY, f"依赖 '{dependency}' 未安装"),
                )
                return result

        own = self._install_artifact(descriptor)
        result.extend(own)
        if own.success:
            result.installed.append(identifier)
            logger.info("组件已安装: %s", identifier)
        return result

    def _install_artifact(self, descriptor: ComponentDescriptor) -> InstallResult:
        """拉取组件制品并导入声明式文件"""
        identifier = descriptor.identifier
        try:
            fetched = self.fetcher.fetch(descriptor.address)
        except FetchError as e:
            return self._fail(identifier, STAGE_FETCH, str(e))

        if fetched is None:
            return InstallResult.ok()

        try:
            count = self.importer.import_all(fetched.directory)
        except ArtifactImportError as e:
            return self._fail(identifier, STAGE_IMPORT, str(e))
        logger.debug("%s: 导入 %d 个文件 (新拉取=%s)", identifier, count, fetched.newly_created)
        return InstallResult.ok()

    @staticmethod
    def _fail(identifier: str, stage: str, reason: str) -> InstallResult:
        logger.warning(
            "无法安装组件 '%s' [%s]: %s", identifier, stage, reason,
            extra={"component": identifier, "stage": stage},
        )
        return InstallResult.failed(identifier, stage, reason)
