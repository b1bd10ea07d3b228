"""监听群消息中的 GitHub 链接并回复仓库详情"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .api import GithubClient, GithubLookupError
from .format import format_error, format_repository
from .gate import ChannelGate
from .models import RepositoryRef
from .patterns import extract_repository

log = logging.getLogger("uvicorn")

Notice = Callable[[str, str], Awaitable[object]]


class LinkNotifier:
    """
    链接详情插件的核心：拦截消息、查询仓库、发送一行详情。

    :param gate: 群开关
    :param client: GitHub 查询客户端
    :param notice: 发送通知的协程函数 notice(channel, text)
    """

    def __init__(self, gate: ChannelGate, client: GithubClient, notice: Notice):
        self.gate = gate
        self.client = client
        self.notice = notice
        self._pending: set = set()

    def on_message(self, sender: str, target: str, text: str) -> Optional[asyncio.Task]:
        """
        处理一条群消息。匹配到仓库链接时在事件循环中调度查询并立即返回，
        不等待查询完成。

        :param sender: 发送者
        :param target: 消息所在群
        :param text: 消息内容
        :return: 调度的任务，未触发查询时为 None
        """
        if self.gate.is_suppressed(target):
            return None
        ref = extract_repository(text)
        if ref is None:
            return None

        log.debug("群 %s 中 %s 发送了仓库链接 %s", target, sender, ref.slug)
        task = asyncio.get_running_loop().create_task(self.show_details(target, ref))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def show_details(self, channel: str, ref: RepositoryRef) -> str:
        """查询仓库并向群发送一条通知，返回通知内容"""
        try:
            info = await self.client.lookup(ref.owner, ref.repo)
        except GithubLookupError as e:
            log.warning("查询仓库 %s 失败: %s", ref.slug, e.message)
            text = format_error(e.message)
        else:
            text = format_repository(info)
        await self.notice(channel, text)
        return text

    def enable(self, channel: str) -> str:
        """开启群的链接详情，返回回复内容"""
        if not self.gate.is_suppressed(channel):
            return f"GitHub URL details are already on for {channel}"
        self.gate.remove(channel)
        self.gate.persist()
        log.info("群 %s 已开启 GitHub 链接详情", channel)
        return f"GitHub URL details are now ON for {channel}"

    def disable(self, channel: str) -> str:
        """关闭群的链接详情，返回回复内容"""
        if self.gate.is_suppressed(channel):
            return f"GitHub URL details were already OFF for {channel}"
        self.gate.set(channel)
        self.gate.persist()
        log.info("群 %s 已关闭 GitHub 链接详情", channel)
        return f"GitHub URL details are now OFF for {channel}"
