"""Github 链接详情插件"""

import logging
from typing import Optional

import config
from plugins import send_group_msg
from .api import DEFAULT_API_URL, GithubClient
from .gate import BLOCKED_KEY, ChannelGate
from .notifier import LinkNotifier

log = logging.getLogger("uvicorn")

__plugin_meta__  = {
    "name": "Github 链接详情",
    "description": "检测群消息中的 GitHub 仓库链接并回复仓库信息，可按群开关",
    "author": "yeying-xingchen",
    "version": "0.1.0",
    "events": ["message"]  # 添加需要订阅的事件
}

HELP_MESSAGE = """Github 链接详情使用帮助
/githubon [群号] 开启本群（或指定群）的链接详情
/githuboff [群号] 关闭本群（或指定群）的链接详情
在群内使用且未指定群号时，作用于当前群"""
ADMIN_ROLES = {"owner", "admin"}

_notifier: Optional[LinkNotifier] = None
_superusers: set = set()


async def _group_notice(channel: str, text: str):
    await send_group_msg(int(channel), text)


def on_enable(_app):
    """
    插件启用时调用，读取配置并恢复群开关

    :param app: FastAPI应用实例
    """
    global _notifier, _superusers
    data = config.PluginData(
        config.get("github", "data_file", "data/github.yml"),
        {BLOCKED_KEY: {}},
    )
    client = GithubClient(
        api_url=config.get("github", "api_url", DEFAULT_API_URL),
        token=config.get("github", "token", None) or None,
        timeout=config.get("github", "timeout", 15),
    )
    _superusers = {str(u) for u in config.get("main", "superusers", [])}
    _notifier = LinkNotifier(ChannelGate(data), client, _group_notice)
    log.info("Github 链接详情已启用，关闭的群: %s", sorted(_notifier.gate.blocked))


def on_disable(_app):
    """插件卸载时调用，之后的事件不再处理"""
    global _notifier
    _notifier = None


def _has_permission(info: dict) -> bool:
    if str(info.get("user_id")) in _superusers:
        return True
    if info.get("message_type") == "group":
        return info.get("sender", {}).get("role") in ADMIN_ROLES
    return False


def _handle_switch(parts: list, info: dict):
    if not _has_permission(info):
        return {"reply": "Permission denied"}

    if len(parts) > 1:
        target = parts[1]
    elif info.get("message_type") == "group":
        target = str(info.get("group_id"))
    else:
        return {"reply": HELP_MESSAGE}
    if not target.isdigit():
        return {"reply": HELP_MESSAGE}

    if parts[0] == "/githubon":
        return {"reply": _notifier.enable(target)}
    return {"reply": _notifier.disable(target)}


def on_event(_event_type: str, info: dict):
    """
    处理接收到的消息

    :param event_type: 事件类型
    :type event_type: str
    :param info: 信息
    :type info: dict
    """
    if _notifier is None:
        return None

    raw_message = info.get("raw_message", "").strip()
    parts = raw_message.split()
    if parts and parts[0] in ("/githubon", "/githuboff"):
        return _handle_switch(parts, info)
    if parts and parts[0] == "/github" and parts[1:] in ([], ["help"]):
        return {"reply": HELP_MESSAGE}

    if info.get("message_type") == "group":
        _notifier.on_message(str(info.get("user_id")), str(info.get("group_id")), raw_message)
    return None
