"""
格式化数据
"""

from .models import RepositoryInfo

ERROR_PREFIX = "Github: "


def format_error(message: str) -> str:
    """格式化查询失败的提示"""
    return ERROR_PREFIX + message


def format_repository(info: RepositoryInfo) -> str:
    """格式化仓库详细信息，单行"""
    msg = f"{info.full_name}: {info.description or ''}"
    if info.fork:
        msg += f" [Forked from {info.parent_full_name or 'unknown'}]"
    if info.language:
        msg += f" [Language: {info.language}]"
    msg += f" [Stars: {info.stars}]"
    msg += f" [Forks: {info.forks}]"
    msg += f" [Last commit: {info.last_commit_date}]"
    if info.has_issues:
        msg += f" [Issues: {info.open_issues}]"
    if info.homepage:
        msg += f" [Homepage: {info.homepage}]"
    return msg + f" {info.html_url}"
