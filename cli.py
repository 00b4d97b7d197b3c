"""
Command-line entry point: estimate ground steering from a camera feed.

Example:
    python cli.py --cid=253 --name=recording.mp4 --width=640 --height=480 --verbose
"""
from __future__ import annotations

import argparse
import logging
import sys

from common import settings
from cv.overlay import DisplayRenderer
from orchestrator import (
    AdapterUnavailableError,
    ConfigurationError,
    FrameOrchestrator,
    SessionConfig,
)
from streaming.frame_source import VideoFrameSource, parse_source
from streaming.output import SteeringLineWriter
from vehicle import RedisVehicleStateListener, VehicleStateCache, VehicleStateFeed

logger = logging.getLogger(__name__)

USAGE_EPILOG = """
Attaches to a frame source and prints one steering line per blue/yellow cone pair.

  --cid:    CID of the session whose vehicle-state messages are consumed
  --name:   frame source (video file, stream URL or camera index)
  --width:  width of the frame
  --height: height of the frame

Example:
  %(prog)s --cid=253 --name=img.mp4 --width=640 --height=480 --verbose
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cone-based ground steering estimator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=USAGE_EPILOG,
    )
    # Values stay strings; SessionConfig parses them so bad input maps to ConfigurationError.
    parser.add_argument("--cid", default=None, help="Session identifier")
    parser.add_argument("--name", default=None, help="Frame source to attach")
    parser.add_argument("--width", default=None, help="Frame width in pixels")
    parser.add_argument("--height", default=None, help="Frame height in pixels")
    parser.add_argument("--verbose", action="store_true", help="Display annotated frames")
    parser.add_argument(
        "--no-vehicle-feed",
        action="store_true",
        help="Do not subscribe to vehicle-state messages (cache stays at zero)",
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level")
    return parser


def load_config(args: argparse.Namespace) -> SessionConfig:
    return SessionConfig.from_values(
        {
            "cid": args.cid,
            "name": args.name,
            "width": args.width,
            "height": args.height,
            "verbose": args.verbose,
        }
    )


def resolve_log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {name!r}")
    return level


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        logging.basicConfig(
            level=resolve_log_level(args.log_level),
            format=settings.LOG_FORMAT,
            stream=sys.stderr,
        )
        config = load_config(args)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        parser.print_help(sys.stderr)
        return 1

    source = VideoFrameSource(parse_source(config.name), config.width, config.height)
    try:
        source.open()
    except AdapterUnavailableError as exc:
        logger.error("%s", exc)
        return 1

    cache = VehicleStateCache()
    listener = None
    if settings.VEHICLE_FEED_ENABLED and not args.no_vehicle_feed:
        listener = RedisVehicleStateListener(VehicleStateFeed(cache), cid=config.cid)
        listener.start()

    renderer = DisplayRenderer(config.name) if config.verbose else None
    orchestrator = FrameOrchestrator(
        source=source,
        vehicle_state=cache,
        sink=SteeringLineWriter(),
        renderer=renderer,
    )

    try:
        orchestrator.run()
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        orchestrator.stop()
        source.close()
        if listener is not None:
            listener.stop()
        if renderer is not None:
            renderer.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
