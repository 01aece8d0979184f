# src/main.py
import os
import sys
import logging
import argparse

# Add repository root to path
sys.path.insert(0, os.path.abspath(os.path.dirname(os.path.dirname(__file__))))

from src.infrastructure.config.loaders.yaml_loader import YamlConfigLoader, ConfigError
from src.infrastructure.config.validators.schema_validator import SchemaValidator
from src.infrastructure.logging.log_manager import initialize_logging
from src.infrastructure.clock.strategies.manual_clock import ManualClock
from src.infrastructure.output.trace_writer import TraceWriter
from src.infrastructure.rng.rng_provider import RNGProvider

from src.domain.events.event_dispatcher import EventDispatcher
from src.domain.events.reel_events import ReelEventType
from src.domain.reel.exceptions import InvalidConfiguration
from src.domain.reel.factories.positioner_factory import PositionerFactory

from src.application.simulation.reel_runner import ReelRunner
from src.application.analysis.trace_analyzer import TraceAnalyzer


CONFIG_DIR = os.path.join(os.path.dirname(__file__), "application", "config")
DEFAULT_CONFIG = os.path.join(CONFIG_DIR, "reels", "default_reel.yaml")
SCHEMA_PATH = os.path.join(CONFIG_DIR, "schemas", "reel_config.schema.json")


def positive_int(value):
    """argparse type for intervals that must be at least 1 ms."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive number of milliseconds: {value}")
    return number


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Reel positioner trace runner")

    parser.add_argument(
        "-c", "--config",
        default=DEFAULT_CONFIG,
        help="Path to reel configuration file"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--policy",
        choices=["single_step", "catch_up"],
        default=None,
        help="Override the advance policy from the configuration"
    )

    parser.add_argument(
        "--poll-interval",
        type=positive_int,
        default=None,
        help="Override the polling interval in milliseconds"
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the trace to this .csv or .json file"
    )

    parser.add_argument(
        "--show-frames",
        action="store_true",
        help="Print every recorded frame"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the reel trace runner."""
    args = parse_arguments(argv)

    config_loader = YamlConfigLoader(SchemaValidator())
    try:
        config = config_loader.load_file(args.config, SCHEMA_PATH)
    except ConfigError as e:
        print(f"Error loading configuration: {str(e)}")
        return 1

    if args.policy:
        config["reel"]["advance_policy"] = args.policy
    if args.poll_interval is not None:
        config["trace"]["poll_interval_ms"] = args.poll_interval
    if args.output:
        config["trace"]["output"] = args.output
    if args.verbose:
        config.setdefault("logging", {})
        config["logging"]["level"] = "DEBUG"
        config["logging"]["console_level"] = "DEBUG"

    initialize_logging(config.get("logging", {}))
    logger = logging.getLogger("main")

    event_dispatcher = EventDispatcher()
    event_dispatcher.register(
        ReelEventType.ANOMALY_DETECTED,
        lambda event: logger.warning(f"Reel anomaly: {event.data.get('message')}")
    )

    trace_config = config["trace"]
    realtime = trace_config["realtime"]
    clock = None if realtime else ManualClock()

    factory = PositionerFactory(RNGProvider(), event_dispatcher=event_dispatcher)
    try:
        positioner = factory.create_positioner(config, clock=clock)
    except (InvalidConfiguration, ValueError) as e:
        logger.error(f"Cannot start reel: {str(e)}")
        return 1

    try:
        runner = ReelRunner(positioner, config["reel"]["visible_symbols"], realtime=realtime)
        frames = runner.run(trace_config["duration_ms"], trace_config["poll_interval_ms"])
    except ValueError as e:
        logger.error(f"Cannot run reel trace: {str(e)}")
        return 1

    summary = TraceAnalyzer().analyze(frames, positioner.speed_millis, len(positioner.reelset))

    if args.show_frames:
        for frame in frames:
            print(f"{frame.time_ms:>7} ms  index={frame.index:<3} offset={frame.offset:>5}  [{frame.symbols}]")

    print(f"Frames: {summary['frame_count']}, elapsed: {summary['elapsed_ms']} ms")
    print(f"Steps: {summary['observed_steps']} observed / {summary['expected_steps']} expected")
    print(f"Offset range: {summary['offset']['min']} .. {summary['offset']['max']}")

    if trace_config.get("output"):
        TraceWriter().write(trace_config["output"], frames, summary)

    logger.info("Reel trace finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())
