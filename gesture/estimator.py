# gesture/estimator.py
import logging
from abc import ABC, abstractmethod

from config import (
    MP_MODEL_COMPLEXITY, MP_MIN_DETECTION_CONFIDENCE, MP_MIN_TRACKING_CONFIDENCE,
)
from gesture.types import (
    Landmark, LandmarkSet,
    THUMB_TIP, INDEX_TIP, RIGHT_ANKLE, RIGHT_KNEE, RIGHT_HIP,
)
from gesture.utils import from_image_xy

logger = logging.getLogger(__name__)


class PoseEstimator(ABC):
    """
    输入 RGB 图像 (H,W,3 uint8)，输出 LandmarkSet（左下角原点的归一化坐标）
    """

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def infer_rgb(self, rgb) -> LandmarkSet: ...

    def close(self) -> None:
        pass


class MediaPipeEstimator(PoseEstimator):
    def __init__(self,
                 model_complexity: int = MP_MODEL_COMPLEXITY,
                 min_detection_confidence: float = MP_MIN_DETECTION_CONFIDENCE,
                 min_tracking_confidence: float = MP_MIN_TRACKING_CONFIDENCE):
        try:
            import mediapipe as mp
        except ImportError as e:
            raise RuntimeError("MediaPipe is not installed: pip install mediapipe") from e

        self._mp = mp
        self._hands = mp.solutions.hands.Hands(
            static_image_mode=False,
            max_num_hands=1,
            model_complexity=int(model_complexity),
            min_detection_confidence=float(min_detection_confidence),
            min_tracking_confidence=float(min_tracking_confidence),
        )
        self._pose = mp.solutions.pose.Pose(
            static_image_mode=False,
            model_complexity=int(model_complexity),
            enable_segmentation=False,
            smooth_landmarks=True,
            min_detection_confidence=float(min_detection_confidence),
            min_tracking_confidence=float(min_tracking_confidence),
        )
        HL = mp.solutions.hands.HandLandmark
        PL = mp.solutions.pose.PoseLandmark
        self._hand_map = {THUMB_TIP: HL.THUMB_TIP, INDEX_TIP: HL.INDEX_FINGER_TIP}
        self._body_map = {RIGHT_ANKLE: PL.RIGHT_ANKLE, RIGHT_KNEE: PL.RIGHT_KNEE, RIGHT_HIP: PL.RIGHT_HIP}

    def name(self) -> str:
        return "mediapipe"

    def _hand(self, res):
        if not res or not res.multi_hand_landmarks:
            return {}, False
        lm = res.multi_hand_landmarks[0].landmark
        # hand landmark 没有单点置信度，用 handedness 分数代替
        score = 1.0
        if res.multi_handedness:
            score = float(res.multi_handedness[0].classification[0].score)
        out = {}
        for name, idx in self._hand_map.items():
            p = lm[int(idx)]
            x, y = from_image_xy(p.x, p.y)
            out[name] = Landmark(x, y, score)
        return out, True

    def _body(self, res):
        if not res or not getattr(res, "pose_landmarks", None):
            return {}, False
        lm = res.pose_landmarks.landmark
        out = {}
        for name, idx in self._body_map.items():
            p = lm[int(idx)]
            x, y = from_image_xy(p.x, p.y)
            out[name] = Landmark(x, y, float(getattr(p, "visibility", 0.0) or 0.0))
        return out, True

    def infer_rgb(self, rgb) -> LandmarkSet:
        hand, hand_seen = self._hand(self._hands.process(rgb))
        body, body_seen = self._body(self._pose.process(rgb))
        return LandmarkSet(hand=hand, body=body, hand_seen=hand_seen, body_seen=body_seen)

    def close(self) -> None:
        for model in (self._hands, self._pose):
            try:
                model.close()
            except Exception as e:
                logger.debug("[Estimator] close failed: %s", e)
