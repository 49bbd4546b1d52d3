"""CLI — 组件安装命令"""

from __future__ import annotations

import json

import click

from component_manager.core.config import init_config
from component_manager.services.container import ServiceContainer


def register(group: click.Group) -> None:
    group.add_command(install)


@click.command()
@click.argument("names", nargs=-1)
@click.option("--config", "-c", default="configs/default.yml", help="配置文件路径")
@click.option("--store", default=None, help="知识库文件（覆盖配置）")
@click.option("--specifications-dir", default=None, help="组件仓库存放目录（覆盖配置）")
@click.option("--parallel", "-p", default=None, type=int, help="并行安装的顶层组件数")
@click.option("--format", "-f", "fmt", default="text", type=click.Choice(["text", "json"]))
def install(
    names: tuple[str, ...], config: str, store: str | None,
    specifications_dir: str | None, parallel: int | None, fmt: str,
) -> None:
    """安装组件及其依赖（不指定组件名则为安装全部，尚未实现）"""
    cfg = init_config(config)
    if store:
        cfg.store_file = store
    if specifications_dir:
        cfg.specifications_dir = specifications_dir
    if parallel is not None:
        cfg.max_workers = max(1, parallel)

    result = ServiceContainer(config=cfg).installer.install(list(names))

    if fmt == "json":
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        for identifier in result.installed:
            click.echo(f"已安装: {identifier}")
        for failure in result.failures:
            click.echo(f"失败: {failure}", err=True)
    if not result.success:
        raise SystemExit(1)
