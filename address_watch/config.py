"""Configuration management for address-watch."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from address_watch.exceptions import ConfigurationError


@dataclass
class TrackerConfig:
    """Address tracker configuration.

    Parameters
    ----------
    max_history : int | None
        Number of standardized addresses kept in the cache. ``None`` keeps
        the full history. Bounded caches need at least two entries so the
        detectors can compare the latest pair.
    auto_evaluate_on_insert : bool
        Evaluate detectors with a registered callback right after each
        insert, so callbacks fire during the insert call.
    """

    max_history: int | None = None
    auto_evaluate_on_insert: bool = True

    def __post_init__(self) -> None:
        if self.max_history is not None and self.max_history < 2:
            raise ConfigurationError(
                f"max_history must be None or >= 2, got {self.max_history}"
            )


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class AddressWatchConfig:
    """Main configuration for address-watch."""

    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    topic_prefix: str = "dev.address"
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AddressWatchConfig":
        """Create config from environment variables."""
        import os

        max_history_str = os.getenv("MAX_HISTORY")
        seed_str = os.getenv("SEED")
        try:
            max_history = int(max_history_str) if max_history_str else None
            seed = int(seed_str) if seed_str else None
        except ValueError as e:
            raise ConfigurationError(f"Invalid integer in environment: {e}") from e

        tracker = TrackerConfig(
            max_history=max_history,
            auto_evaluate_on_insert=os.getenv("AUTO_EVALUATE_ON_INSERT", "true").lower() == "true",
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            tracker=tracker,
            kafka=kafka,
            output=output,
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.address"),
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
