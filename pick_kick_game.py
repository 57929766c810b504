import argparse
import logging

from config import LOG_LEVEL, SHOW_CAMERA


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="PickKick: pinch and kick with your webcam.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--camera", type=int, default=None, help="Camera index (default: auto).")
    parser.add_argument("--no-camera-window", action="store_true", help="Hide the OpenCV debug window.")
    parser.add_argument("--camera-window", action="store_true", help="Show the OpenCV debug window.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    show_camera = (SHOW_CAMERA or args.camera_window) and not args.no_camera_window

    from game.scene import run_game
    run_game(camera_index=args.camera, show_camera=show_camera)


if __name__ == "__main__":
    main()
