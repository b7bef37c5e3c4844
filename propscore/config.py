"""Configuration management for propscore."""

from dataclasses import dataclass, field
from pathlib import Path

from propscore.exceptions import ConfigurationError
from propscore.models.enums import AggregationMode


@dataclass
class ScoringConfig:
    """Rubric selection and insight list caps."""

    profile: str = "anchor-v1"
    aggregation_mode: AggregationMode | None = None  # None: the profile's default
    max_strengths: int = 6
    max_risks: int = 4


@dataclass
class KafkaConfig:
    """Kafka producer configuration for analysis events."""

    bootstrap_servers: str = "localhost:9092"
    topic: str = "propscore.analyses"
    acks: str = "all"
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration for the analysis store."""

    host: str = "localhost"
    port: int = 5432
    database: str = "propscore"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class PropScoreConfig:
    """Main configuration for propscore."""

    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "PropScoreConfig":
        """Create config from environment variables.

        Raises
        ------
        ConfigurationError
            If a variable holds a value of the wrong kind.
        """
        import os

        mode_str = os.getenv("AGGREGATION_MODE", "").strip().lower()
        try:
            mode = AggregationMode(mode_str) if mode_str else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid AGGREGATION_MODE: {mode_str!r}") from exc

        try:
            scoring = ScoringConfig(
                profile=os.getenv("SCORING_PROFILE", "anchor-v1"),
                aggregation_mode=mode,
                max_strengths=int(os.getenv("MAX_STRENGTHS", "6")),
                max_risks=int(os.getenv("MAX_RISKS", "4")),
            )
            postgres = PostgresConfig(
                host=os.getenv("POSTGRES_HOST", "localhost"),
                port=int(os.getenv("POSTGRES_PORT", "5432")),
                database=os.getenv("POSTGRES_DB", "propscore"),
                user=os.getenv("POSTGRES_USER", "postgres"),
                password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            )
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            topic=os.getenv("KAFKA_TOPIC", "propscore.analyses"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            scoring=scoring,
            kafka=kafka,
            postgres=postgres,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
