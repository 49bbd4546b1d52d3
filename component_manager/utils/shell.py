"""Shell 命令执行工具 — 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，拉取器只依赖协议，
测试时注入假执行器即可，无需真实 git。
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol

from component_manager.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议"""

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        timeout: int | None = None,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


# =========================================================================
# 默认实现: 本地执行器
# =========================================================================

class LocalExecutor:
    """本地子进程执行器（默认实现）

    超时视为失败结果而不是异常，调用方只需要看 returncode。
    """

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        timeout: int | None = None,
    ) -> CommandResult:
        try:
            r = subprocess.run(
                cmd, capture_output=True, text=True,
                cwd=cwd, check=False, timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return CommandResult(returncode=-1, stdout="", stderr=f"超时（{timeout}秒）")
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
        )


_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取默认命令执行器"""
    return _default_executor


def run_cmd(
    cmd: list[str],
    *,
    cwd: str = ".",
    timeout: int | None = None,
    label: str = "cmd",
    executor: CommandExecutor | None = None,
) -> CommandResult:
    """执行命令，失败抛 ExecutionError

    Args:
        cmd: 参数列表（不经过 shell）
        cwd: 工作目录
        timeout: 超时秒数
        label: 日志标签
        executor: 指定执行器，默认本地子进程
    """
    logger.info("  %s: %s (cwd=%s)", label, " ".join(cmd), cwd)
    r = (executor or get_executor()).execute(cmd, cwd=cwd, timeout=timeout)
    if not r.success:
        raise ExecutionError(f"{label}失败 (rc={r.returncode}): {r.stderr[:500]}")
    return r
