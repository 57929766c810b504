# gesture/utils.py
from typing import Tuple, Union

import numpy as np

from gesture.types import Landmark

PointLike = Union[Landmark, Tuple[float, float]]


def _xy(p: PointLike) -> Tuple[float, float]:
    if isinstance(p, Landmark):
        return p.x, p.y
    return float(p[0]), float(p[1])


def dist(a, b) -> float:
    a = np.asarray(_xy(a), dtype=np.float64)
    b = np.asarray(_xy(b), dtype=np.float64)
    return float(np.linalg.norm(a - b))


def to_screen(p: PointLike, width: float, height: float) -> Tuple[float, float]:
    """
    归一化坐标 -> 屏幕像素坐标
    landmark 原点在左下角，屏幕原点在左上角，所以 y 要翻转
    """
    x, y = _xy(p)
    return x * width, (1.0 - y) * height


def from_image_xy(x: float, y: float) -> Tuple[float, float]:
    # MediaPipe 原点在左上角
    return float(x), 1.0 - float(y)


def confident(lm, threshold: float) -> bool:
    return lm is not None and lm.confidence >= threshold
