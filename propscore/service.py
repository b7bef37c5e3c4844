"""Analysis service: lifecycle of stored analysis requests."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Sequence

from propscore.config import ScoringConfig
from propscore.exceptions import ConfigurationError, InvalidAnalysisStateError, SinkError
from propscore.logging import AnalysisLoggerAdapter, get_logger
from propscore.models.analysis import AnalysisRecord
from propscore.models.base import Event
from propscore.models.enums import AnalysisStatus, SourceType
from propscore.models.result import AnalysisResult
from propscore.scoring.engine import ScoringEngine
from propscore.scoring.insights import InsightExtractor
from propscore.sinks import Sink
from propscore.sources import PropertyDataSource
from propscore.store import AnalysisStore

logger = logging.getLogger(__name__)

EVENT_SOURCE = "propscore.service"
DEFAULT_EVENT_TOPIC = "propscore.analyses"

SOURCE_PHRASES = {
    SourceType.ADDRESS: "web sources",
    SourceType.URL: "direct URL",
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisService:
    """Create, run and manage property analyses.

    Parameters
    ----------
    store : AnalysisStore
        Where analysis records live.
    source : PropertyDataSource
        Acquires attributes for an address or listing URL.
    sinks : Sequence[Sink]
        Receive an ``analysis.completed`` or ``analysis.failed`` event on
        every terminal transition.
    scoring : ScoringConfig | None
        Aggregation mode override and insight caps. The rubric itself is
        chosen per record by its ``rubric_type``.
    event_topic : str
        Topic events are written to.
    """

    def __init__(
        self,
        store: AnalysisStore,
        source: PropertyDataSource,
        sinks: Sequence[Sink] = (),
        scoring: ScoringConfig | None = None,
        event_topic: str = DEFAULT_EVENT_TOPIC,
    ) -> None:
        self.store = store
        self.source = source
        self.sinks = list(sinks)
        self.scoring = scoring or ScoringConfig()
        self.event_topic = event_topic
        self._insights = InsightExtractor(
            max_strengths=self.scoring.max_strengths,
            max_risks=self.scoring.max_risks,
        )
        self._engines: dict[str, ScoringEngine] = {}

    # CRUD

    def create_analysis(
        self,
        address: str,
        rubric_type: str | None = None,
        source_type: SourceType = SourceType.ADDRESS,
    ) -> AnalysisRecord:
        """Store a new Pending analysis request."""
        record = AnalysisRecord(
            analysis_id=str(uuid.uuid4()),
            address=address,
            rubric_type=rubric_type or self.scoring.profile,
            created_at=_now(),
            source_type=source_type,
        )
        self.store.add(record)
        logger.info("Created analysis %s for %s (%s)", record.analysis_id, address, record.rubric_type)
        return record

    def create_analysis_by_url(self, url: str, rubric_type: str | None = None) -> AnalysisRecord:
        """Store a request for a listing URL and run it immediately."""
        record = self.create_analysis(url, rubric_type, SourceType.URL)
        return self.run_analysis(record.analysis_id) or record

    def get_analysis(self, analysis_id: str) -> AnalysisRecord | None:
        return self.store.get(analysis_id)

    def list_analyses(self) -> list[AnalysisRecord]:
        return self.store.list_all()

    def list_analyses_by_type(self, rubric_type: str) -> list[AnalysisRecord]:
        return self.store.find_by_type(rubric_type)

    def update_analysis(
        self,
        analysis_id: str,
        address: str | None = None,
        rubric_type: str | None = None,
    ) -> AnalysisRecord | None:
        """Change the address and/or rubric of a record.

        Returns ``None`` when the record does not exist. Fields left as
        ``None`` are unchanged.
        """
        record = self.store.get(analysis_id)
        if record is None:
            return None
        if address is not None:
            record.address = address
        if rubric_type is not None:
            record.rubric_type = rubric_type
        record.updated_at = _now()
        return self.store.update(record)

    def delete_analysis(self, analysis_id: str) -> bool:
        return self.store.delete(analysis_id)

    # Execution

    def run_analysis(self, analysis_id: str) -> AnalysisRecord | None:
        """Acquire attributes for a record, score them and store the outcome.

        Parameters
        ----------
        analysis_id : str
            Record to run.

        Returns
        -------
        AnalysisRecord | None
            The record in its terminal state (Completed or Failed), or
            ``None`` when no record has this ID.

        Raises
        ------
        InvalidAnalysisStateError
            If the record is already being analysed.
        """
        record = self.store.get(analysis_id)
        if record is None:
            return None
        if record.status == AnalysisStatus.IN_PROGRESS:
            raise InvalidAnalysisStateError(f"Analysis {analysis_id} is already in progress")

        log = get_logger(__name__, analysis_id=analysis_id, rubric_type=record.rubric_type)

        try:
            engine = self._engine_for(record.rubric_type)
        except ConfigurationError:
            log.warning("No rubric profile named %s", record.rubric_type)
            return self._fail(record, f"No analyser found for type: {record.rubric_type}")

        record.status = AnalysisStatus.IN_PROGRESS
        record.updated_at = _now()
        self.store.update(record)

        try:
            attributes = self.source.fetch(record.address, record.source_type)
        except Exception as exc:  # any acquisition failure ends the run as Failed
            log.exception("Attribute acquisition failed for %s", record.address)
            return self._fail(record, f"Analysis failed: {exc}")

        result = engine.analyse(attributes)
        return self._complete(record, result, log)

    def _engine_for(self, rubric_type: str) -> ScoringEngine:
        key = rubric_type.lower()
        if key not in self._engines:
            self._engines[key] = ScoringEngine(
                rubric_type,
                mode=self.scoring.aggregation_mode,
                insights=self._insights,
            )
        return self._engines[key]

    def _complete(
        self,
        record: AnalysisRecord,
        result: AnalysisResult,
        log: logging.Logger | AnalysisLoggerAdapter,
    ) -> AnalysisRecord:
        engine = self._engine_for(record.rubric_type)
        attribute_count = len({
            name
            for item in result.breakdown
            if item.is_scored
            for name in engine.profile.criterion(item.name).fields
        })
        now = _now()
        record.status = AnalysisStatus.COMPLETED
        record.score = result.score
        record.result_text = result.verdict
        record.result = result
        record.completed_at = now
        record.updated_at = now
        record.remarks = (
            f"Analysis completed successfully using {result.profile} rubric with "
            f"{attribute_count} weighted attributes from {SOURCE_PHRASES[record.source_type]}"
        )
        self.store.update(record)
        log.info("Analysis completed: %s (%s)", result.score, result.tier.value, extra={"status": record.status.value})
        self._publish("analysis.completed", record)
        return record

    def _fail(self, record: AnalysisRecord, remarks: str) -> AnalysisRecord:
        record.status = AnalysisStatus.FAILED
        record.score = None
        record.result_text = None
        record.result = None
        record.completed_at = None
        record.remarks = remarks
        record.updated_at = _now()
        self.store.update(record)
        self._publish("analysis.failed", record)
        return record

    def _publish(self, event_type: str, record: AnalysisRecord) -> None:
        if not self.sinks:
            return
        data = record.to_dict()
        if record.result is not None:
            data["result"] = record.result.to_dict()
        event = Event(
            event_id=str(uuid.uuid4()),
            event_type=event_type,
            event_time=_now(),
            source=EVENT_SOURCE,
            subject=record.analysis_id,
            data=data,
            metadata={"rubricType": record.rubric_type},
        )
        for sink in self.sinks:
            try:
                sink.write_batch(self.event_topic, [event])
            except SinkError:
                # The stored record is authoritative; a lost event must not undo it
                logger.exception("Failed to publish %s for %s", event_type, record.analysis_id)
