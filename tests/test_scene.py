import numpy as np

from game import scene


class FakeCap:
    def __init__(self):
        self.released = False

    def release(self):
        self.released = True


class ClosingEstimator:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


def test_estimator_init_failure_is_not_fatal(monkeypatch):
    caps = []

    def open_camera(indices=None):
        cap = FakeCap()
        caps.append(cap)
        return cap, "CAM idx=0, backend=FAKE"

    def broken_estimator():
        raise RuntimeError("MediaPipe is not installed")

    monkeypatch.setattr(scene, "try_open_camera", open_camera)
    monkeypatch.setattr(scene, "MediaPipeEstimator", broken_estimator)

    reader, worker, results, previews, info = scene.start_pipeline()

    assert reader is None and worker is None
    assert info == "ESTIMATOR_INIT_FAILED"
    assert all(cap.released for cap in caps)
    assert results.get_nowait() is None and previews.get_nowait() is None


def test_camera_failure_closes_estimator(monkeypatch):
    est = ClosingEstimator()
    monkeypatch.setattr(scene, "MediaPipeEstimator", lambda: est)
    monkeypatch.setattr(scene, "try_open_camera", lambda indices=None: (None, "CAMERA_OPEN_FAILED"))

    reader, worker, _, _, info = scene.start_pipeline()

    assert reader is None and worker is None
    assert info == "CAMERA_OPEN_FAILED"
    assert est.closed


def test_frame_to_surface_scales_and_swaps_channels():
    frame = np.zeros((48, 64, 3), dtype=np.uint8)
    frame[:, :] = (255, 0, 0)  # BGR blue
    surface = scene.frame_to_surface(frame, (32, 96))
    assert surface.get_size() == (32, 96)
    assert tuple(surface.get_at((5, 5)))[:3] == (0, 0, 255)
