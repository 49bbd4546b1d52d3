"""组件安装服务 — 对外的 install 操作

每个顶层请求使用独立的 InstallationTask 解析，互不影响:
一个请求失败不会中止同一次调用里的其他请求；依赖链内部才是 fail-fast。

max_workers > 1 时各顶层请求并行执行，结果按请求顺序汇总。
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from component_manager.core.component.resolver import DependencyResolver
from component_manager.core.models import InstallationTask, InstallResult

logger = logging.getLogger(__name__)


class InstallService:
    """组件安装编排"""

    def __init__(self, resolver: DependencyResolver, max_workers: int = 1) -> None:
        self.resolver = resolver
        self.max_workers = max(1, max_workers)

    def install(self, identifiers: list[str] | None = None) -> InstallResult:
        if not identifiers:
            # TODO: 实现按知识库中全部待安装组件批量安装
            logger.info("未指定组件标识符，安装全部组件尚未实现")
            return InstallResult.ok()

        results = self._run_all(list(identifiers))

        summary = InstallResult.ok()
        for result in results:
            summary.extend(result)

        if summary.success:
            logger.info("安装完成: %s", ", ".join(summary.installed) or "(无)")
        else:
            logger.warning(
                "安装汇总: %d 个组件已安装, %d 条失败 (%s)",
                len(summary.installed),
                len(summary.failures),
                ", ".join(f.identifier for f in summary.failures),
            )
        return summary

    def install_one(self, identifier: str) -> InstallResult:
        """安装单个顶层组件（独立的 visited 集合）"""
        logger.info("开始安装: %s", identifier)
        result = self.resolver.resolve(identifier, InstallationTask(identifier))
        if not result.success:
            logger.warning(
                "无法安装组件 '%s'", identifier,
                extra={"component": identifier},
            )
        return result

    def _run_all(self, identifiers: list[str]) -> list[InstallResult]:
        if self.max_workers == 1 or len(identifiers) == 1:
            return [self.install_one(i) for i in identifiers]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self.install_one, i) for i in identifiers]
            results = []
            for identifier, future in zip(identifiers, futures):
                result = future.result()
                logger.info(
                    "完成: %s -> %s", identifier, "成功" if result.success else "失败",
                )
                results.append(result)
            return results
