# gesture/types.py
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

THUMB_TIP = "thumb_tip"
INDEX_TIP = "index_tip"
RIGHT_ANKLE = "right_ankle"
RIGHT_KNEE = "right_knee"
RIGHT_HIP = "right_hip"

HAND_JOINTS = (THUMB_TIP, INDEX_TIP)
BODY_JOINTS = (RIGHT_ANKLE, RIGHT_KNEE, RIGHT_HIP)


@dataclass(frozen=True)
class Landmark:
    """归一化坐标 (0~1)，原点在左下角；confidence 0~1"""
    x: float
    y: float
    confidence: float = 1.0


def _freeze(d) -> Mapping[str, Landmark]:
    return MappingProxyType(dict(d or {}))


@dataclass(frozen=True)
class LandmarkSet:
    hand: Mapping[str, Landmark] = field(default_factory=dict)
    body: Mapping[str, Landmark] = field(default_factory=dict)
    hand_seen: bool = False
    body_seen: bool = False

    def __post_init__(self):
        object.__setattr__(self, "hand", _freeze(self.hand))
        object.__setattr__(self, "body", _freeze(self.body))


@dataclass(frozen=True)
class GestureResult:
    pick_detected: bool = False
    kick_detected: bool = False
    hand_landmarks: Mapping[str, Landmark] = field(default_factory=dict)
    body_landmarks: Mapping[str, Landmark] = field(default_factory=dict)
    label: str = "INIT"
    frame_id: int = -1

    def __post_init__(self):
        object.__setattr__(self, "hand_landmarks", _freeze(self.hand_landmarks))
        object.__setattr__(self, "body_landmarks", _freeze(self.body_landmarks))

    @classmethod
    def empty(cls, label: str = "NOTHING", frame_id: int = -1) -> "GestureResult":
        return cls(label=label, frame_id=frame_id)

    def anchor(self, joint: str) -> Optional[Landmark]:
        if joint in self.hand_landmarks:
            return self.hand_landmarks[joint]
        return self.body_landmarks.get(joint)
