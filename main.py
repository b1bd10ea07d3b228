"""程序总入口"""

from asyncio import CancelledError
from contextlib import asynccontextmanager
import importlib
import logging
from fastapi import FastAPI
import config
import plugins

log = logging.getLogger("uvicorn")

loaded_plugins = {}


def load_plugins(application: FastAPI) -> dict:
    """
    加载配置中的插件并收集事件订阅

    :param application: FastAPI应用实例
    :return: 事件名到插件名列表的映射
    """
    event_subscriptions = {}
    for plugin_name in config.get("main", "plugins", []):
        try:
            plugin = importlib.import_module("plugins." + plugin_name)
        except ImportError as ie:
            log.error("插件 %s 加载失败: %s", plugin_name, ie)
            continue
        loaded_plugins[plugin_name] = plugin
        plugin_meta = getattr(plugin, '__plugin_meta__', {})
        # 订阅事件
        for event in plugin_meta.get('events', []):
            event_subscriptions.setdefault(event, []).append(plugin_name)
        log.info("插件 %s 加载成功", plugin_name)
        # 调用插件启用函数
        if hasattr(plugin, 'on_enable'):
            plugin.on_enable(application)
    return event_subscriptions


def unload_plugins(application: FastAPI):
    """调用插件卸载函数并清空已加载插件"""
    for plugin_name, plugin in loaded_plugins.items():
        if hasattr(plugin, 'on_disable'):
            plugin.on_disable(application)
        log.info("插件 %s 已卸载", plugin_name)
    loaded_plugins.clear()


@asynccontextmanager
async def lifespan(application: FastAPI):
    """
    应用生命周期管理

    :param application: FastAPI应用实例
    :type application: FastAPI
    """
    try:
        log.info("CodeFeatrue-破晓之码 正在启动")
        ws_url = config.get("main", "onebot_ws_url", "")
        if ws_url:
            await plugins.init_bot_client(ws_url)
        application.state.event_subscriptions = load_plugins(application)
        log.info("事件订阅: %s", application.state.event_subscriptions)
        yield
        log.info("CodeFeatrue-破晓之码 正在退出")
        unload_plugins(application)
        await plugins.close_bot_client()
    except (CancelledError, KeyboardInterrupt) as e:
        log.error("CodeFeatrue-破晓之码 启动失败: 在启动过程中被用户手动关闭。%s", e)
        raise

app = FastAPI(lifespan=lifespan)

@app.post("/")
async def main(info: dict):
    """
    处理接收到的事件

    :param info: Onebot实现端传入的信息
    :type info: dict
    """
    post_type = info.get("post_type")
    # 通知订阅了该事件的所有插件
    event_subscriptions = getattr(app.state, "event_subscriptions", {})
    for plugin_name in event_subscriptions.get(post_type, []):
        plugin = loaded_plugins.get(plugin_name)
        if plugin and hasattr(plugin, 'on_event'):
            try:
                return_info = plugin.on_event(post_type, info)
            except Exception:  # pylint: disable=broad-exception-caught
                log.exception("插件 %s 处理事件 %s 时出错", plugin_name, post_type)
                continue
            if return_info:
                return return_info
            log.debug("插件 %s 未处理事件 %s", plugin_name, post_type)
    return {}
