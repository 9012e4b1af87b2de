"""
FastQScan workflow runner.

Drives one or more FASTQ streams through the record decoder and fans every
valid record out to the registered statistic accumulators:

    byte stream -> decode_record -> FastqRecord -> Statistic.process (x N)

Key features:
- Single pass per stream, all accumulators updated per record
- Malformed-record budget scoped to one ``process`` call
- Accumulator state compounds across every stream fed to the same runner
- ``finalize`` hands the accumulators back and retires the runner
"""

from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass
import logging

from ..io import DecodeStatus, FastqRecord, decode_record, open_fastq
from ..statistics import (
    LengthDistributionStatistic,
    Statistic,
    collect_reports,
    default_statistics,
)

logger = logging.getLogger(__name__)

MAX_MALFORMED_RECORDS = 5  # Halt a stream once this many malformed records are exceeded
DEFAULT_PROGRESS_INTERVAL = 100


class RunnerFinalizedError(RuntimeError):
    """Raised when a finalized WorkflowRunner is used again."""
    pass


@dataclass
class ProcessSummary:
    """Outcome of one ``WorkflowRunner.process`` call."""
    source: Optional[str]
    records_processed: int = 0
    malformed_records: int = 0
    halted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to a JSON-friendly dictionary."""
        return {
            "source": self.source,
            "records_processed": self.records_processed,
            "malformed_records": self.malformed_records,
            "halted": self.halted,
        }


class WorkflowRunner:
    """
    Single-threaded driver feeding decoded records to statistic accumulators.

    Usage
    -----
    >>> runner = WorkflowRunner()
    >>> with open_fastq("reads_R1.fq.gz") as handle:
    ...     runner.process(handle, source="reads_R1.fq.gz")
    >>> reports = collect_reports(runner.finalize())
    """

    def __init__(
        self,
        statistics: Optional[List[Statistic]] = None,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    ):
        """
        Args:
            statistics: Accumulators in registration order (None = all five)
            progress_interval: Log progress every N processed records
        """
        if progress_interval < 1:
            raise ValueError(f"progress_interval must be >= 1, got {progress_interval}")

        self._statistics = list(statistics) if statistics is not None else default_statistics()
        self.progress_interval = progress_interval
        self.summaries: List[ProcessSummary] = []
        self._finalized = False

    @property
    def statistics(self) -> Tuple[Statistic, ...]:
        """Registered accumulators, in registration order."""
        return tuple(self._statistics)

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_active(self):
        if self._finalized:
            raise RunnerFinalizedError("WorkflowRunner has already been finalized")

    def process(self, handle: BinaryIO, source: Optional[str] = None) -> ProcessSummary:
        """
        Scan one byte stream to completion (or until the malformed budget runs out).

        Args:
            handle: Binary stream supporting readline()
            source: Label used in log messages and the summary

        Returns:
            ProcessSummary for this stream

        Raises:
            RunnerFinalizedError: If the runner was already finalized
            OSError, EOFError: Stream read failures are propagated
        """
        self._check_active()

        label = source or "<stream>"
        summary = ProcessSummary(source=source)
        record = FastqRecord()
        error_count = 0

        logger.info(f"Processing FASTQ stream: {label}")

        while True:
            status = decode_record(handle, record)

            if status is DecodeStatus.END_OF_STREAM:
                break

            if status is DecodeStatus.INCOMPLETE:
                error_count += 1
                summary.malformed_records = error_count
                logger.warning(
                    f"{label}: empty sequence or quality line "
                    f"(malformed record {error_count})"
                )
                if error_count > MAX_MALFORMED_RECORDS:
                    logger.error(
                        f"{label}: more than {MAX_MALFORMED_RECORDS} malformed records, "
                        f"halting after {summary.records_processed:,} records"
                    )
                    summary.halted = True
                    break
                continue

            summary.records_processed += 1
            if summary.records_processed % self.progress_interval == 0:
                logger.info(f"{label}: processed {summary.records_processed:,} records")
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Record: seq={record.sequence!r} qual={record.quality!r}")

            for statistic in self._statistics:
                statistic.process(record)

        logger.info(
            f"Finished {label}: {summary.records_processed:,} records, "
            f"{summary.malformed_records} malformed"
        )
        self.summaries.append(summary)
        return summary

    def process_file(self, filepath: Union[str, Path]) -> ProcessSummary:
        """
        Open ``filepath`` (plain or gzip) and process it.

        The file handle is closed when the call returns or raises.
        """
        self._check_active()
        with open_fastq(filepath) as handle:
            return self.process(handle, source=str(filepath))

    def finalize(self) -> List[Statistic]:
        """
        Retire the runner and hand back its accumulators.

        Returns:
            Accumulators in registration order

        Raises:
            RunnerFinalizedError: If called twice
        """
        self._check_active()
        self._finalized = True
        statistics, self._statistics = self._statistics, []
        return statistics


def scan_files(
    filepaths: Sequence[Union[str, Path]],
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
) -> Tuple[List[Dict[str, Any]], List[ProcessSummary]]:
    """
    Run every file through one runner and render the final reports.

    Args:
        filepaths: FASTQ paths, processed in order
        progress_interval: Log progress every N processed records

    Returns:
        Tuple of (report list in canonical order, per-file summaries)

    Raises:
        FileNotFoundError: If any input is missing (checked before scanning)
        OSError, EOFError: Stream read failures are propagated
    """
    paths = [Path(p) for p in filepaths]
    for path in paths:
        if not path.exists():
            raise FileNotFoundError(f"FASTQ file not found: {path}")

    runner = WorkflowRunner(progress_interval=progress_interval)
    for path in paths:
        runner.process_file(path)

    summaries = list(runner.summaries)
    statistics = runner.finalize()
    for statistic in statistics:
        if isinstance(statistic, LengthDistributionStatistic):
            logger.info(f"Read length summary: {statistic.summary()}")
    reports = collect_reports(statistics)
    return reports, summaries
