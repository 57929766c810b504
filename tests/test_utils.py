import pytest

from gesture.types import Landmark
from gesture.utils import dist, from_image_xy, to_screen


@pytest.mark.parametrize("xy, expected", [
    ((0.5, 0.5), (500.0, 1000.0)),
    ((0.0, 1.0), (0.0, 0.0)),
    ((1.0, 0.0), (1000.0, 2000.0)),
])
def test_to_screen_flips_y(xy, expected):
    assert to_screen(xy, 1000, 2000) == pytest.approx(expected)


def test_to_screen_accepts_landmark():
    assert to_screen(Landmark(0.25, 0.75, 0.9), 400, 800) == pytest.approx((100.0, 200.0))


def test_from_image_xy():
    assert from_image_xy(0.2, 0.1) == pytest.approx((0.2, 0.9))


def test_dist():
    assert dist((0, 0), (3, 4)) == pytest.approx(5.0)
    assert dist(Landmark(0.1, 0.1), Landmark(0.1, 0.1)) == 0.0
