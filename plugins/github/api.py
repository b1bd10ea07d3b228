"""GitHub REST API 查询"""

import asyncio
import logging
from typing import Optional

import requests

from .models import RepositoryInfo

log = logging.getLogger("uvicorn")

DEFAULT_API_URL = "https://api.github.com"
USER_AGENT = "CodeFeatrue-GitHub-Plugin"


class GithubLookupError(Exception):
    """仓库查询失败，message 为 GitHub 返回的原因"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason or f"HTTP {resp.status_code}"


class GithubClient:
    """只读的仓库信息查询，单次请求，不重试，不缓存"""

    def __init__(self, api_url: str = DEFAULT_API_URL, token: Optional[str] = None,
                 timeout: float = 15):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def fetch_repository(self, owner: str, repo: str) -> RepositoryInfo:
        """
        同步查询仓库信息

        :param owner: 仓库所有者
        :param repo: 仓库名
        :raises GithubLookupError: 请求失败、返回错误状态或响应无法解析时
        """
        url = f"{self.api_url}/repos/{owner}/{repo}"
        try:
            resp = requests.get(url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise GithubLookupError(str(e)) from e

        if not resp.ok:
            raise GithubLookupError(_error_message(resp))

        try:
            payload = resp.json()
            if not isinstance(payload, dict):
                raise ValueError("not an object")
            return RepositoryInfo.from_api(payload)
        except (ValueError, TypeError, AttributeError) as e:
            raise GithubLookupError("Invalid response from GitHub") from e

    async def lookup(self, owner: str, repo: str) -> RepositoryInfo:
        """在线程中执行 fetch_repository，不阻塞事件循环"""
        log.debug("查询仓库 %s/%s", owner, repo)
        return await asyncio.to_thread(self.fetch_repository, owner, repo)
