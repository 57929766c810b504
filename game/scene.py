# game/scene.py
import logging
import time

import numpy as np
import pygame

from config import WIN_W, WIN_H, FPS, HIGHLIGHT_SCALE, SHOW_CAMERA
from game.targets import PickKickGame, PICK, KICK
from gesture.camera import try_open_camera, CameraReader
from gesture.channel import LatestSlot
from gesture.estimator import MediaPipeEstimator
from gesture.types import GestureResult
from gesture.utils import to_screen
from gesture.worker import GestureWorker

logger = logging.getLogger(__name__)

COLORS = {PICK: (60, 200, 90), KICK: (220, 60, 60)}


def draw_target(screen, font, target):
    r = int(target.radius * (HIGHLIGHT_SCALE if target.highlighted else 1.0))
    x, y = int(target.position[0]), int(target.position[1])
    pygame.draw.circle(screen, COLORS[target.kind], (x, y), r)
    if target.highlighted:
        pygame.draw.circle(screen, (255, 255, 255), (x, y), r, 2)
    text = font.render(target.caption, True, (255, 255, 255))
    screen.blit(text, text.get_rect(center=(x, y)))


def draw_score(screen, font, big, title, count, color, x):
    card = pygame.Rect(x, 10, 110, 64)
    pygame.draw.rect(screen, color, card, border_radius=10)
    t = font.render(title, True, (255, 255, 255))
    n = big.render(str(count), True, (255, 255, 255))
    screen.blit(t, t.get_rect(midtop=(card.centerx, card.top + 6)))
    screen.blit(n, n.get_rect(midtop=(card.centerx, card.top + 24)))


def draw_landmarks(screen, result: GestureResult):
    for lm in list(result.hand_landmarks.values()) + list(result.body_landmarks.values()):
        x, y = to_screen(lm, WIN_W, WIN_H)
        pygame.draw.circle(screen, (255, 230, 0), (int(x), int(y)), 5)


def start_pipeline(camera_index=None, show_camera: bool = SHOW_CAMERA):
    """相机线程 + 识别线程；失败时返回 (None, None, results, previews, info)"""
    results = LatestSlot()
    previews = LatestSlot()
    try:
        estimator = MediaPipeEstimator()
    except Exception:
        logger.exception("[Main] ESTIMATOR_INIT_FAILED")
        return None, None, results, previews, "ESTIMATOR_INIT_FAILED"

    cap, cam_info = try_open_camera([camera_index] if camera_index is not None else None)
    if cap is None:
        logger.error("[Main] CAMERA_OPEN_FAILED. Close apps using camera or try other index.")
        estimator.close()
        return None, None, results, previews, cam_info
    logger.info("[Main] Opened: %s", cam_info)

    frames = LatestSlot()
    reader = CameraReader(frames, cap)
    worker = GestureWorker(frames, results, estimator, show_camera=show_camera, previews=previews)
    worker.start()
    reader.start()
    return reader, worker, results, previews, cam_info


def frame_to_surface(frame, size=(WIN_W, WIN_H)):
    """BGR 帧 -> 拉伸到窗口大小的 pygame Surface（和 to_screen 的映射一致）"""
    h, w = frame.shape[:2]
    rgb = np.ascontiguousarray(frame[:, :, ::-1])
    surface = pygame.image.frombuffer(rgb.tobytes(), (w, h), "RGB")
    return pygame.transform.scale(surface, size)


def run_game(camera_index=None, show_camera: bool = SHOW_CAMERA):
    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("PickKick - MediaPipe Hands + Pose")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("Consolas", 16, bold=True)
    big = pygame.font.SysFont("Consolas", 30, bold=True)

    reader, worker, results, previews, cam_info = start_pipeline(camera_index, show_camera)

    def shutdown():
        for t in (reader, worker):
            if t is not None:
                t.stop()
        pygame.quit()

    game = PickKickGame(WIN_W, WIN_H)
    last = GestureResult.empty(label=cam_info if worker is None else "INIT")
    backdrop = None

    # Start screen
    start = True
    while start:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                shutdown()
                return
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_RETURN:
                    start = False
                if event.key == pygame.K_ESCAPE:
                    shutdown()
                    return

        screen.fill((15, 15, 18))
        lines = [
            "PickKick",
            "ENTER to start | ESC to quit",
            "Pinch thumb+index on the green ball",
            "Raise right foot on the red bomb",
        ]
        for i, s in enumerate(lines):
            screen.blit(font.render(s, True, (220, 220, 220)), (20, 40 + 30 * i))
        pygame.display.flip()
        clock.tick(30)

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                shutdown()
                return
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    shutdown()
                    return
                if event.key == pygame.K_r:
                    game.reset()

        now = time.time()
        result = results.get_nowait()
        if result is not None:
            last = result
            for hit in game.apply(result, now):
                logger.debug("[Main] %s hit at %s -> %s", hit.kind, hit.anchor_px, hit.new_position)

        frame = previews.get_nowait()
        if frame is not None:
            backdrop = frame_to_surface(frame)

        # Render：摄像头画面做背景
        if backdrop is not None:
            screen.blit(backdrop, (0, 0))
        else:
            screen.fill((12, 12, 14))
        for target in game.targets.values():
            draw_target(screen, font, target)
        draw_landmarks(screen, last)

        draw_score(screen, font, big, "Picks", game.pick_count, COLORS[PICK], 16)
        draw_score(screen, font, big, "Kicks", game.kick_count, COLORS[KICK], WIN_W - 126)

        if game.feedback.visible(now):
            msg = big.render(game.feedback.message, True, (255, 255, 255))
            box = msg.get_rect(center=(WIN_W // 2, 120)).inflate(24, 12)
            pygame.draw.rect(screen, (0, 0, 0), box, border_radius=10)
            screen.blit(msg, msg.get_rect(center=box.center))

        hud = font.render(f"{last.label}", True, (150, 150, 150))
        screen.blit(hud, (8, WIN_H - 24))

        pygame.display.flip()
        clock.tick(FPS)
