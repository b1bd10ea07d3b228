"""按群开关 GitHub 链接详情"""

import logging

log = logging.getLogger("uvicorn")

BLOCKED_KEY = "blocked_chans"


class ChannelGate:
    """
    记录关闭了链接详情的群。

    没有记录的群默认开启。store 需要支持字典读写与 save()，
    通常是 config.PluginData。
    """

    def __init__(self, store):
        self._store = store
        # "blocked_chans:" 读出为 None；手动编辑时群号可能写成整数
        blocked = self._store.setdefault(BLOCKED_KEY, {}) or {}
        self._store[BLOCKED_KEY] = {str(k): v for k, v in blocked.items()}

    @property
    def blocked(self) -> dict:
        return self._store[BLOCKED_KEY]

    def get(self, channel: str) -> bool:
        return bool(self.blocked.get(channel))

    def is_suppressed(self, channel: str) -> bool:
        return self.get(channel)

    def set(self, channel: str) -> None:
        self.blocked[channel] = True

    def remove(self, channel: str) -> None:
        self.blocked.pop(channel, None)

    def persist(self) -> None:
        self._store.save()
        log.info("已保存关闭链接详情的群: %s", sorted(self.blocked))
