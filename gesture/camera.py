# gesture/camera.py
import logging
import threading
import time
from typing import Optional, Tuple

import cv2

from config import CAM_INDEX_CANDIDATES, CAP_BACKENDS, CAM_W, CAM_H, MIRROR
from gesture.channel import LatestSlot

logger = logging.getLogger(__name__)


def try_open_camera(indices=None) -> Tuple[Optional[cv2.VideoCapture], str]:
    """
    依次尝试不同 index 与 backend，返回 cap 与描述信息
    """
    for idx in (indices if indices is not None else CAM_INDEX_CANDIDATES):
        for name in CAP_BACKENDS:
            backend = getattr(cv2, f"CAP_{name}", None)
            if name != "DEFAULT" and backend is None:
                continue
            if backend is None:
                cap = cv2.VideoCapture(idx)
            else:
                cap = cv2.VideoCapture(idx, backend)

            if cap is not None and cap.isOpened():
                cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAM_W)
                cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAM_H)
                return cap, f"CAM idx={idx}, backend={name}"

            if cap is not None:
                cap.release()

    return None, "CAMERA_OPEN_FAILED"


class CameraReader(threading.Thread):
    """读帧 -> LatestSlot；worker 忙时旧帧被覆盖"""

    def __init__(self, frames: LatestSlot, cap, mirror: bool = MIRROR):
        super().__init__(daemon=True, name="CameraReader")
        self.frames = frames
        self.cap = cap
        self.mirror = mirror
        self._stop_event = threading.Event()
        self.frame_count = 0

    def stop(self):
        self._stop_event.set()

    def run(self):
        try:
            while not self._stop_event.is_set():
                ok, frame = self.cap.read()
                if not ok:
                    logger.debug("[Camera] read failed, retrying")
                    time.sleep(0.01)
                    continue
                if self.mirror:
                    frame = cv2.flip(frame, 1)
                self.frame_count += 1
                self.frames.put((self.frame_count, frame))
        except Exception:
            logger.exception("[Camera] reader crashed")
        finally:
            self.cap.release()
            self.frames.close()
