"""网络工具 — 组件地址识别与 URL 安全校验"""

from __future__ import annotations

from urllib.parse import urlparse

from component_manager.core.exceptions import FetchError

_ALLOWED_SCHEMES = frozenset(("http", "https"))


def is_repository_address(address: str, prefixes: list[str]) -> bool:
    """地址是否以可识别的代码托管前缀开头（如 https://github.com/）"""
    return any(address.startswith(p) for p in prefixes if p)


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议被 git 拉取

    Raises:
        FetchError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise FetchError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


def repository_dir_name(address: str) -> str:
    """由仓库地址推导本地目录名: 最后一段路径，去掉 .git 后缀

    https://github.com/org/liby      -> liby
    https://github.com/org/liby.git/ -> liby
    """
    path = urlparse(address).path.rstrip("/")
    name = path.rsplit("/", 1)[-1].removesuffix(".git")
    if not name or name in (".", ".."):
        raise FetchError(f"无法从地址解析目录名: {address}")
    return name
