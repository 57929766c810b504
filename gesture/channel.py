# gesture/channel.py
import threading
from typing import Any, Optional


class LatestSlot:
    """
    容量为 1 的线程间交接：put 不阻塞，新的覆盖旧的（latest-wins）
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._item: Any = None
        self._has_item = False
        self._closed = False
        self.dropped = 0

    def put(self, item) -> bool:
        with self._cond:
            if self._closed:
                return False
            if self._has_item:
                self.dropped += 1
            self._item = item
            self._has_item = True
            self._cond.notify()
            return True

    def get(self, timeout: Optional[float] = None):
        """取走当前的 item；超时或已关闭返回 None"""
        with self._cond:
            if not self._has_item and not self._closed:
                self._cond.wait_for(lambda: self._has_item or self._closed, timeout)
            if not self._has_item:
                return None
            item = self._item
            self._item = None
            self._has_item = False
            return item

    def get_nowait(self):
        with self._cond:
            if not self._has_item:
                return None
            item = self._item
            self._item = None
            self._has_item = False
            return item

    def close(self):
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed
