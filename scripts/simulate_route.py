#!/usr/bin/env python3
"""Simulate a visitor walking through a city and report address changes.

A mock geolocation provider emits position fixes; each fix is paired with
a generated reverse-geocoding payload and fed to the tracker. Street,
neighborhood and city changes are published as events to the chosen sink:
- console: pretty JSON on stdout
- json: JSON Lines files under --output-dir
- kafka: one topic per field under --topic-prefix
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from address_watch.config import AddressWatchConfig, TrackerConfig
from address_watch.generators import PositionFactory, RawPayloadFactory
from address_watch.logging import setup_logging
from address_watch.models.position import GeoPosition, PositionError
from address_watch.providers import MockGeolocationProvider
from address_watch.sinks import ChangeEventPublisher, ConsoleSink, JsonFileSink, KafkaSink
from address_watch.tracker import DETECTOR_KINDS, AddressTracker

logger = logging.getLogger(__name__)


def build_sink(args: argparse.Namespace, config: AddressWatchConfig):
    """Create the sink selected on the command line."""
    if args.sink == "json":
        return JsonFileSink(args.output_dir or config.output.json_output_dir, pretty=config.output.pretty_json)
    if args.sink == "kafka":
        config.kafka.bootstrap_servers = args.kafka_bootstrap or config.kafka.bootstrap_servers
        return KafkaSink(config.kafka)
    return ConsoleSink(pretty=True)


def run(args: argparse.Namespace) -> int:
    """Drive the simulation. Returns the number of published events."""
    config = AddressWatchConfig.from_env()
    seed = args.seed if args.seed is not None else config.seed
    if args.max_history is not None:
        config.tracker = TrackerConfig(
            max_history=args.max_history,
            auto_evaluate_on_insert=config.tracker.auto_evaluate_on_insert,
        )

    tracker = AddressTracker(config.tracker)
    sink = build_sink(args, config)
    publisher = ChangeEventPublisher(
        sink,
        topic_prefix=args.topic_prefix or config.topic_prefix,
        subject=args.visitor,
    )
    for kind in DETECTOR_KINDS:
        tracker.detector(kind).set_change_callback(publisher.callback_for(kind))

    payloads = RawPayloadFactory(seed=seed).route(
        steps=args.steps,
        street_every=args.street_every,
        bairro_every=args.bairro_every,
    )
    positions = PositionFactory(seed=seed).walk(steps=args.steps)
    provider = MockGeolocationProvider(delay=args.delay)

    def on_position(position: GeoPosition) -> None:
        payload = next(payloads, None)
        if payload is None:
            return
        address = tracker.get_brazilian_standard_address(payload)
        logger.info(
            "(%.5f, %.5f) -> %s",
            position.coords.latitude,
            position.coords.longitude,
            address,
        )

    def on_error(error: PositionError) -> None:
        logger.error("Position error %d: %s", error.code, error.message)

    watch_id = provider.watch_position(on_position, on_error)
    try:
        for position in positions:
            provider.trigger_watch_update(position)
    finally:
        provider.clear_watch(watch_id)
        sink.close()

    logger.info("Published %d change events for %d positions", publisher.published, args.steps)
    return publisher.published


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Simulate a route and publish address change events"
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=12,
        help="Number of position fixes to simulate (default: 12)",
    )
    parser.add_argument(
        "--street-every",
        type=int,
        default=2,
        help="Change street every N fixes (default: 2)",
    )
    parser.add_argument(
        "--bairro-every",
        type=int,
        default=4,
        help="Change neighborhood every N fixes (default: 4)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: SEED env or random)",
    )
    parser.add_argument(
        "--visitor",
        type=str,
        default="visitor-001",
        help="Visitor id used as event subject (default: visitor-001)",
    )
    parser.add_argument(
        "--max-history",
        type=int,
        default=None,
        help="Addresses kept in the cache (default: unbounded)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Simulated sensor latency in seconds (default: 0)",
    )
    parser.add_argument(
        "--sink",
        choices=["console", "json", "kafka"],
        default="console",
        help="Where change events go (default: console)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for --sink json (default: OUTPUT_DIR env or ./output)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=None,
        help="Kafka bootstrap servers for --sink kafka",
    )
    parser.add_argument(
        "--topic-prefix",
        type=str,
        default=None,
        help="Topic prefix (default: TOPIC_PREFIX env or dev.address)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default="standard",
        help="Log format (default: standard)",
    )
    args = parser.parse_args()

    setup_logging(level=args.log_level, format_type=args.log_format)
    run(args)


if __name__ == "__main__":
    main()
