"""component-manager 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from component_manager import __version__
from component_manager.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """component-manager - 知识库可复用组件管理"""
    setup_logging(
        level=os.getenv("COMPONENT_MANAGER_LOG_LEVEL", "INFO"),
        json_output=os.getenv("COMPONENT_MANAGER_LOG_JSON", "") == "1",
    )


# 注册各领域子命令
from component_manager.cli.cmd_install import register as _reg_install  # noqa: E402

_reg_install(main)
