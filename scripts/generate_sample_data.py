#!/usr/bin/env python3
"""Generate synthetic properties and run them through the analysis service.

Each generated record is registered with a static data source under a
Faker address, an analysis is created and run, and the resulting events
are written to the configured sinks:

- JSON files in ``--output-dir`` (always)
- Kafka (``--kafka-bootstrap``, optional)
- PostgreSQL as the analysis store (``--postgres-url``, optional; in-memory otherwise)
"""

import argparse
import json
import logging
import sys
import time
from collections import Counter
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from propscore.config import PropScoreConfig
from propscore.generators import PropertyAttributesGenerator
from propscore.logging import setup_logging
from propscore.models.enums import AggregationMode
from propscore.service import AnalysisService
from propscore.sinks import JsonFileSink, KafkaSink, Sink
from propscore.sources import StaticDataSource
from propscore.store import AnalysisStore, InMemoryAnalysisStore, PostgresAnalysisStore

logger = logging.getLogger(__name__)


def build_store(postgres_url: str | None) -> AnalysisStore:
    """Create the analysis store, creating the table when using PostgreSQL."""
    if not postgres_url:
        return InMemoryAnalysisStore()
    store = PostgresAnalysisStore(postgres_url)
    store.create_table()
    return store


def main() -> None:
    """Main entry point."""
    config = PropScoreConfig.from_env()

    parser = argparse.ArgumentParser(description="Generate and analyse synthetic properties")
    parser.add_argument(
        "--count",
        type=int,
        default=50,
        help="Number of properties to generate (default: 50)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--completeness",
        type=float,
        default=0.85,
        help="Probability each attribute is populated (default: 0.85)",
    )
    parser.add_argument(
        "--profile",
        type=str,
        default=config.scoring.profile,
        help="Rubric profile for every analysis",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in AggregationMode],
        default=None,
        help="Override the profile's aggregation mode",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Directory for JSON output",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=None,
        help="Kafka bootstrap servers (events are published when set)",
    )
    parser.add_argument(
        "--postgres-url",
        type=str,
        default=None,
        help="PostgreSQL connection string (in-memory store when omitted)",
    )
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)

    if args.mode:
        config.scoring.aggregation_mode = AggregationMode(args.mode)
    config.scoring.profile = args.profile
    config.kafka.bootstrap_servers = args.kafka_bootstrap or config.kafka.bootstrap_servers

    generator = PropertyAttributesGenerator(seed=args.seed, completeness=args.completeness)
    source = StaticDataSource()
    sinks: list[Sink] = [JsonFileSink(args.output_dir, pretty=config.output.pretty_json)]
    if args.kafka_bootstrap:
        sinks.append(KafkaSink(config.kafka))

    service = AnalysisService(
        store=build_store(args.postgres_url),
        source=source,
        sinks=sinks,
        scoring=config.scoring,
        event_topic=config.kafka.topic,
    )

    logger.info("=" * 60)
    logger.info("Generating %d properties (seed=%d, profile=%s)", args.count, args.seed, args.profile)
    logger.info("=" * 60)
    start = time.perf_counter()

    tiers: Counter[str] = Counter()
    records = []
    for _ in range(args.count):
        address = generator.generate_address()
        source.add(address, generator.generate())
        record = service.create_analysis(address, args.profile)
        record = service.run_analysis(record.analysis_id)
        tiers[record.result.tier.value if record.result else record.status.value] += 1
        records.append(record.to_dict())

    summary_path = args.output_dir / "analyses.json"
    with open(summary_path, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=2, ensure_ascii=False)

    for sink in sinks:
        sink.close()

    elapsed = time.perf_counter() - start
    logger.info("Analysed %d properties in %.2fs", args.count, elapsed)
    for tier, count in tiers.most_common():
        logger.info("  %-15s %d", tier, count)
    logger.info("Records written to %s", summary_path)


if __name__ == "__main__":
    main()
