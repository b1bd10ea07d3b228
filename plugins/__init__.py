"""插件包"""

import asyncio
import json
import logging
from typing import Optional
import websockets

log = logging.getLogger("uvicorn")

class OneBotV11Client:
    """
    OneBot v11 协议客户端，用于发送消息
    """

    def __init__(self, ws_url: str):
        """
        初始化OneBot客户端

        Args:
            ws_url: WebSocket连接地址
        """
        self.ws_url = ws_url
        self.websocket = None
        self.connected = False
        self._receiver: Optional[asyncio.Task] = None

    async def connect(self):
        """建立WebSocket连接"""
        try:
            self.websocket = await websockets.connect(self.ws_url)
            self.connected = True
            log.info("OneBot v11 客户端已连接到 %s", self.ws_url)

            # 启动消息接收循环
            self._receiver = asyncio.create_task(self._receive_messages())
        except (OSError, websockets.exceptions.WebSocketException) as e:
            log.error("连接 OneBot v11 服务失败: %s", e)
            self.connected = False

    async def disconnect(self):
        """断开WebSocket连接"""
        self.connected = False
        if self.websocket:
            await self.websocket.close()
            log.info("OneBot v11 客户端已断开连接")

    async def _receive_messages(self):
        """接收 OneBot 的动作响应，记录失败的动作"""
        try:
            async for message in self.websocket:
                try:
                    data = json.loads(message)
                    failed = data.get("status") == "failed"
                except (ValueError, AttributeError):
                    log.warning("无法解析的OneBot消息: %s", str(message)[:100])
                    continue
                if failed:
                    log.error("OneBot 动作执行失败: retcode=%s %s",
                              data.get("retcode"), data.get("message", ""))
                else:
                    log.debug("收到OneBot消息: %s", data)
        except websockets.exceptions.ConnectionClosed:
            log.warning("OneBot WebSocket 连接已关闭")
        finally:
            self.connected = False

    async def _send_action(self, action: str, params: dict) -> bool:
        if not self.connected or not self.websocket:
            log.error("OneBot客户端未连接，无法发送消息")
            return False

        try:
            await self.websocket.send(json.dumps({"action": action, "params": params}))
            return True
        except websockets.exceptions.WebSocketException as e:
            log.error("发送 %s 失败: %s", action, e)
            return False

    async def send_group_msg(self, group_id: int, message: str, auto_escape: bool = False):
        """
        发送群消息

        Args:
            group_id: 群号
            message: 消息内容
            auto_escape: 是否自动转义
        """
        sent = await self._send_action("send_group_msg", {
            "group_id": group_id,
            "message": message,
            "auto_escape": auto_escape
        })
        if sent:
            log.info("已发送群消息到群 %s: %s...", group_id, message[:50])
        return sent

    async def send_private_msg(self, user_id: int, message: str, auto_escape: bool = False):
        """
        发送私聊消息

        Args:
            user_id: 用户ID
            message: 消息内容
            auto_escape: 是否自动转义
        """
        sent = await self._send_action("send_private_msg", {
            "user_id": user_id,
            "message": message,
            "auto_escape": auto_escape
        })
        if sent:
            log.info("已发送私聊消息给用户 %s: %s...", user_id, message[:50])
        return sent


# 全局OneBot客户端实例
_bot_client: Optional[OneBotV11Client] = None


async def init_bot_client(ws_url: str):
    """
    初始化OneBot客户端并连接

    Args:
        ws_url: WebSocket连接地址
    """
    global _bot_client
    _bot_client = OneBotV11Client(ws_url)
    await _bot_client.connect()
    return _bot_client


async def close_bot_client():
    """断开并丢弃全局OneBot客户端"""
    global _bot_client
    if _bot_client:
        await _bot_client.disconnect()
    _bot_client = None


async def send_group_msg(group_id: int, message: str, auto_escape: bool = False):
    """
    发送群消息的便捷函数

    Args:
        group_id: 群号
        message: 消息内容
        auto_escape: 是否自动转义
    """
    if _bot_client and _bot_client.connected:
        return await _bot_client.send_group_msg(group_id, message, auto_escape)
    log.error("OneBot客户端未初始化或未连接")
    return False


async def send_private_msg(user_id: int, message: str, auto_escape: bool = False):
    """
    发送私聊消息的便捷函数

    Args:
        user_id: 用户ID
        message: 消息内容
        auto_escape: 是否自动转义
    """
    if _bot_client and _bot_client.connected:
        return await _bot_client.send_private_msg(user_id, message, auto_escape)
    log.error("OneBot客户端未初始化或未连接")
    return False
