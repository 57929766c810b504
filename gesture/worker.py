# gesture/worker.py
import logging
import threading
from typing import Optional

import cv2

from config import SHOW_CAMERA
from gesture.channel import LatestSlot
from gesture.classifier import classify
from gesture.estimator import PoseEstimator
from gesture.types import GestureResult
from gesture.utils import to_screen

logger = logging.getLogger(__name__)

WINDOW_NAME = "Camera (press Q to close this window)"


class GestureWorker(threading.Thread):
    """
    单线程串行处理：一次只处理一帧，结果通过 results 交给 UI，原始帧通过 previews 给 UI 做背景
    """

    def __init__(self, frames: LatestSlot, results: LatestSlot, estimator: PoseEstimator,
                 show_camera: bool = SHOW_CAMERA, poll_sec: float = 0.1,
                 previews: Optional[LatestSlot] = None):
        super().__init__(daemon=True, name="GestureWorker")
        self.frames = frames
        self.results = results
        self.previews = previews
        self.estimator = estimator
        self.show_camera = show_camera
        self.poll_sec = poll_sec
        self._stop_event = threading.Event()
        self.processed = 0
        self.failures = 0

    def stop(self):
        self._stop_event.set()
        self.frames.close()

    def process(self, frame_id: int, frame) -> GestureResult:
        try:
            rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            landmarks = self.estimator.infer_rgb(rgb)
        except Exception as e:
            # 单帧失败：当作什么都没检测到，继续下一帧
            self.failures += 1
            logger.warning("[GestureWorker] frame %d skipped: %s", frame_id, e)
            return GestureResult.empty(label="ESTIMATOR_ERROR", frame_id=frame_id)
        return classify(landmarks, frame_id=frame_id)

    def run(self):
        try:
            while not self._stop_event.is_set():
                item = self.frames.get(timeout=self.poll_sec)
                if item is None:
                    if self.frames.closed:
                        break
                    continue

                frame_id, frame = item
                result = self.process(frame_id, frame)
                self.processed += 1
                self.results.put(result)
                if self.previews is not None:
                    self.previews.put(frame)

                if self.show_camera:
                    self._show(frame.copy(), result)
        except Exception:
            logger.exception("[GestureWorker] crashed")
        finally:
            self.estimator.close()
            self.results.close()
            if self.previews is not None:
                self.previews.close()
            if self.show_camera:
                cv2.destroyAllWindows()
            logger.info("[GestureWorker] stopped after %d frames (%d failed, %d dropped)",
                        self.processed, self.failures, self.frames.dropped)

    def _show(self, frame, result: GestureResult):
        h, w = frame.shape[:2]
        for lm in list(result.hand_landmarks.values()) + list(result.body_landmarks.values()):
            cx, cy = (int(v) for v in to_screen(lm, w, h))
            cv2.circle(frame, (cx, cy), 6, (0, 255, 255), -1)
        cv2.putText(frame, result.label, (10, 28), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 255, 0), 2)
        cv2.imshow(WINDOW_NAME, frame)
        k = cv2.waitKey(1) & 0xFF
        if k in (ord('q'), ord('Q')):
            cv2.destroyWindow(WINDOW_NAME)
            self.show_camera = False
