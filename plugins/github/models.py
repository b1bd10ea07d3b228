"""GitHub 仓库数据结构"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RepositoryRef:
    """从消息中提取的仓库标识"""

    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


def _first(payload: dict, *keys, default=None):
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return default


@dataclass(frozen=True)
class RepositoryInfo:
    """GitHub API 返回的仓库信息，字段均已校验并填充默认值"""

    full_name: str
    description: Optional[str] = None
    fork: bool = False
    parent_full_name: Optional[str] = None
    language: Optional[str] = None
    stars: int = 0
    forks: int = 0
    pushed_at: Optional[str] = None
    has_issues: bool = False
    open_issues: int = 0
    homepage: Optional[str] = None
    html_url: str = ""

    @classmethod
    def from_api(cls, payload: dict) -> "RepositoryInfo":
        """
        由 /repos/{owner}/{repo} 的响应构造

        :param payload: 解析后的 JSON
        :type payload: dict
        """
        full_name = payload.get("full_name") or ""
        parent = payload.get("parent")
        if not isinstance(parent, dict):
            parent = {}
        pushed_at = payload.get("pushed_at")
        return cls(
            full_name=full_name,
            description=payload.get("description"),
            fork=bool(payload.get("fork")),
            parent_full_name=parent.get("full_name"),
            language=payload.get("language") or None,
            # watchers 与 stargazers_count 在 REST API 中等值
            stars=int(_first(payload, "watchers", "stargazers_count", default=0)),
            forks=int(_first(payload, "forks", "forks_count", default=0)),
            pushed_at=pushed_at if isinstance(pushed_at, str) else None,
            has_issues=bool(payload.get("has_issues")),
            open_issues=int(_first(payload, "open_issues", "open_issues_count", default=0)),
            homepage=payload.get("homepage") or None,
            html_url=payload.get("html_url") or f"https://github.com/{full_name}",
        )

    @property
    def last_commit_date(self) -> str:
        """pushed_at 的日期部分"""
        if not self.pushed_at:
            return ""
        return self.pushed_at.split("T", 1)[0]
