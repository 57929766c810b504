# gesture/classifier.py
from typing import Mapping

from config import CONFIDENCE_THRESHOLD, PICK_DIST_THRESHOLD, KICK_MARGIN
from gesture.types import (
    Landmark, LandmarkSet, GestureResult,
    THUMB_TIP, INDEX_TIP, RIGHT_ANKLE, RIGHT_KNEE, RIGHT_HIP,
)
from gesture.utils import confident, dist


def detect_pick(hand: Mapping[str, Landmark],
                confidence_threshold: float = CONFIDENCE_THRESHOLD,
                dist_threshold: float = PICK_DIST_THRESHOLD) -> bool:
    """
    捏合：拇指尖与食指尖足够近
    """
    thumb = hand.get(THUMB_TIP)
    index = hand.get(INDEX_TIP)
    if not (confident(thumb, confidence_threshold) and confident(index, confidence_threshold)):
        return False
    return dist(thumb, index) < dist_threshold


def detect_kick(body: Mapping[str, Landmark],
                confidence_threshold: float = CONFIDENCE_THRESHOLD,
                margin: float = KICK_MARGIN) -> bool:
    """
    踢腿：右脚踝的 y 比膝盖和髋部都小 margin 以上
    """
    ankle = body.get(RIGHT_ANKLE)
    knee = body.get(RIGHT_KNEE)
    hip = body.get(RIGHT_HIP)
    if not all(confident(p, confidence_threshold) for p in (ankle, knee, hip)):
        return False
    return ankle.y < knee.y - margin and ankle.y < hip.y - margin


def _snapshot(points: Mapping[str, Landmark], joints, confidence_threshold: float):
    if all(confident(points.get(j), confidence_threshold) for j in joints):
        return {j: points[j] for j in joints}
    return {}


def classify(landmarks: LandmarkSet, frame_id: int = -1,
             confidence_threshold: float = CONFIDENCE_THRESHOLD,
             dist_threshold: float = PICK_DIST_THRESHOLD,
             margin: float = KICK_MARGIN) -> GestureResult:
    """每帧独立判定，不做跨帧平滑"""
    pick = landmarks.hand_seen and detect_pick(landmarks.hand, confidence_threshold, dist_threshold)
    kick = landmarks.body_seen and detect_kick(landmarks.body, confidence_threshold, margin)

    hand_snap = _snapshot(landmarks.hand, (THUMB_TIP, INDEX_TIP), confidence_threshold) if landmarks.hand_seen else {}
    body_snap = _snapshot(landmarks.body, (RIGHT_ANKLE, RIGHT_KNEE, RIGHT_HIP), confidence_threshold) if landmarks.body_seen else {}

    parts = []
    parts.append("PICK" if pick else ("HAND" if landmarks.hand_seen else "NO_HAND"))
    parts.append("KICK" if kick else ("BODY" if landmarks.body_seen else "NO_BODY"))

    return GestureResult(
        pick_detected=bool(pick),
        kick_detected=bool(kick),
        hand_landmarks=hand_snap,
        body_landmarks=body_snap,
        label=" | ".join(parts),
        frame_id=frame_id,
    )
