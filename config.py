# config.py

# 摄像头：会自动尝试这些索引
CAM_INDEX_CANDIDATES = [0, 1, 2]

# 摄像头后端：会按顺序尝试（名字对应 cv2.CAP_<NAME>）
CAP_BACKENDS = ["DSHOW", "MSMF", "AVFOUNDATION", "DEFAULT"]

CAM_W, CAM_H = 640, 480
MIRROR = True                 # 前置摄像头效果

SHOW_CAMERA = False           # True: 显示摄像头调试窗口（按 Q 关闭该窗口，不影响识别）

LOG_LEVEL = "INFO"

# Gesture thresholds (normalized landmark space)
CONFIDENCE_THRESHOLD = 0.3
PICK_DIST_THRESHOLD = 0.08    # thumb tip <-> index tip
KICK_MARGIN = 0.15            # ankle vs knee / hip

# MediaPipe
MP_MODEL_COMPLEXITY = 1
MP_MIN_DETECTION_CONFIDENCE = 0.5
MP_MIN_TRACKING_CONFIDENCE = 0.5

# Game
WIN_W, WIN_H = 480, 800
FPS = 60

INTERACTION_RADIUS = 60.0     # px
BOUNDS_MARGIN_X = 60
BOUNDS_MARGIN_Y = 100

PICK_START = (200.0, 300.0)
BOMB_START = (100.0, 500.0)
PICK_RADIUS = 30
BOMB_RADIUS = 25
HIGHLIGHT_SCALE = 1.2

FEEDBACK_SEC = 1.5
