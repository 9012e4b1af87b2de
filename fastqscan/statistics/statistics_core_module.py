#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastQScan v0.1.0

Statistic accumulators: per-read and per-position quality-control metrics
computed in a single pass over decoded FASTQ records.

Every accumulator implements the same two-method capability:
  * ``process(record)`` updates running state from one FastqRecord.
  * ``report()`` renders a self-describing, JSON-friendly dictionary.

The set of accumulators is closed (see ``StatisticKind``):
  1. base_quality_position: raw quality byte per position over read length,
     last record only
  2. read_quality: mean Phred score of the read, last record only
  3. base_compositions: A/C/G/T/N proportions per position, last record
     only (cumulative counts kept alongside)
  4. gc_content: per-read and per-position GC, last record only
  5. length_distribution: every processed read length, cumulative

Behavioural note: accumulators 1-4 overwrite their reported state on every
call, so after a scan they describe the most recently processed record, not
an average over the file. Only the length distribution (and the composition
count table) accumulate across records.

Author: FastQScan Development Team
License: MIT
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterable, List

import numpy as np

from ..io.io_core_module import FastqRecord
from ..utils.sequence_utils import BASES, base_index, calculate_gc_content, is_gc, phred_scores

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------

class Statistic(ABC):
    """
    Abstract base class for all FastQScan statistic accumulators.

    Subclasses must tolerate records whose sequence and quality lengths
    differ, and must skip updates for zero-length records instead of
    dividing by zero.
    """

    name: str = "statistic"

    @abstractmethod
    def process(self, record: FastqRecord):
        """
        Update running state from one decoded record.

        Args:
            record: Decoded FASTQ record
        """
        pass

    @abstractmethod
    def report(self) -> Dict[str, Any]:
        """
        Render the final report.

        Returns:
            JSON-serialisable dictionary
        """
        pass

    @abstractmethod
    def reset(self):
        """Discard all accumulated state."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"


# ---------------------------------------------------------------------------
# Quality accumulators
# ---------------------------------------------------------------------------

class BaseQualityPositionStatistic(Statistic):
    """
    Quality at each position of the most recently processed read.

    Each call replaces the stored values with ``q[i] / len(sequence)`` for
    every position covered by both the sequence and the quality string.

    Behavioural note: ``q[i]`` is the raw ASCII quality byte, not the Phred
    score (no -33 offset), and the value is divided by the read length. The
    result is last-record-wins, not a running mean across reads. Use
    ``ReadQualityStatistic`` for Phred-decoded quality.
    """

    name = "base_quality_position"

    def __init__(self):
        self.avg_per_position: List[float] = []

    def process(self, record: FastqRecord):
        seq_len = len(record.sequence)
        if seq_len == 0:
            return

        n = min(seq_len, len(record.quality))
        self.avg_per_position = [
            qual / seq_len for qual in record.quality[:n]
        ]

    def report(self) -> Dict[str, Any]:
        return {
            "base_quality_position": [
                {"position": pos + 1, "average_quality": avg_quality}
                for pos, avg_quality in enumerate(self.avg_per_position)
            ]
        }

    def reset(self):
        self.avg_per_position = []


class ReadQualityStatistic(Statistic):
    """Mean Phred score of the most recently processed read (last-record-wins)."""

    name = "read_quality"

    def __init__(self):
        self.avg_quality: float = 0.0

    def process(self, record: FastqRecord):
        seq_len = len(record.sequence)
        if seq_len == 0:
            return

        n = min(seq_len, len(record.quality))
        self.avg_quality = sum(phred_scores(record.quality[:n])) / seq_len

    def report(self) -> Dict[str, Any]:
        return {"read_quality": self.avg_quality}

    def reset(self):
        self.avg_quality = 0.0


# ---------------------------------------------------------------------------
# Sequence content accumulators
# ---------------------------------------------------------------------------

class BaseCompositionStatistic(Statistic):
    """
    Per-position nucleotide composition.

    The report carries the A/C/G/T/N proportions of the most recently
    processed read (last-record-wins). Characters outside ACGTN are ignored,
    so such positions report all-zero proportions.

    ``counts`` keeps the cumulative per-position count table over every
    processed read, one row per position in A, C, G, T, N column order.
    """

    name = "base_compositions"

    def __init__(self):
        self.proportions = np.zeros((0, len(BASES)), dtype=float)
        self.counts = np.zeros((0, len(BASES)), dtype=np.int64)

    def process(self, record: FastqRecord):
        if not record.sequence:
            return

        read_counts = np.zeros((len(record.sequence), len(BASES)), dtype=np.int64)
        for pos, base in enumerate(record.sequence):
            idx = base_index(base)
            if idx is not None:
                read_counts[pos, idx] += 1

        totals = read_counts.sum(axis=1, keepdims=True)
        self.proportions = np.divide(
            read_counts, totals,
            out=np.zeros(read_counts.shape, dtype=float),
            where=totals > 0,
        )
        self._add_counts(read_counts)

    def _add_counts(self, read_counts: np.ndarray):
        """Add one read's count rows into the cumulative table, growing it if needed."""
        extra = read_counts.shape[0] - self.counts.shape[0]
        if extra > 0:
            self.counts = np.vstack(
                [self.counts, np.zeros((extra, len(BASES)), dtype=np.int64)]
            )
        self.counts[:read_counts.shape[0]] += read_counts

    def report(self) -> Dict[str, Any]:
        return {
            "base_compositions": [
                {base: float(row[i]) for i, base in enumerate(BASES)}
                for row in self.proportions
            ]
        }

    def reset(self):
        self.proportions = np.zeros((0, len(BASES)), dtype=float)
        self.counts = np.zeros((0, len(BASES)), dtype=np.int64)


class GcContentStatistic(Statistic):
    """GC fraction and per-position G/C indicator of the most recent read."""

    name = "gc_content"

    def __init__(self):
        self.gc_per_position: List[float] = []
        self.gc_per_read: float = 0.0

    def process(self, record: FastqRecord):
        if not record.sequence:
            return

        self.gc_per_read = calculate_gc_content(record.sequence)
        self.gc_per_position = [
            1.0 if is_gc(base) else 0.0 for base in record.sequence
        ]

    def report(self) -> Dict[str, Any]:
        return {
            "gc_content_per_position": self.gc_per_position,
            "gc_content_per_read": self.gc_per_read,
        }

    def reset(self):
        self.gc_per_position = []
        self.gc_per_read = 0.0


class LengthDistributionStatistic(Statistic):
    """Sequence length of every processed read, in processing order."""

    name = "length_distribution"

    def __init__(self):
        self.lengths: List[int] = []

    def process(self, record: FastqRecord):
        self.lengths.append(len(record.sequence))

    def report(self) -> Dict[str, Any]:
        return {"length_distribution": list(self.lengths)}

    def summary(self) -> Dict[str, Any]:
        """
        Summarise the collected lengths.

        Returns:
            Dictionary with read_count, base_sum, min_length, max_length and
            mean_length (empty dictionary if nothing was processed)
        """
        if not self.lengths:
            return {}

        lengths = np.asarray(self.lengths, dtype=np.int64)
        return {
            'read_count': int(lengths.size),
            'base_sum': int(lengths.sum()),
            'min_length': int(lengths.min()),
            'max_length': int(lengths.max()),
            'mean_length': float(lengths.mean()),
        }

    def reset(self):
        self.lengths = []


# ---------------------------------------------------------------------------
# Closed variant set
# ---------------------------------------------------------------------------

class StatisticKind(Enum):
    """Every statistic FastQScan computes, in report order."""
    BASE_QUALITY_POSITION = "base_quality_position"
    READ_QUALITY = "read_quality"
    BASE_COMPOSITIONS = "base_compositions"
    GC_CONTENT = "gc_content"
    LENGTH_DISTRIBUTION = "length_distribution"


STATISTIC_CLASSES = {
    StatisticKind.BASE_QUALITY_POSITION: BaseQualityPositionStatistic,
    StatisticKind.READ_QUALITY: ReadQualityStatistic,
    StatisticKind.BASE_COMPOSITIONS: BaseCompositionStatistic,
    StatisticKind.GC_CONTENT: GcContentStatistic,
    StatisticKind.LENGTH_DISTRIBUTION: LengthDistributionStatistic,
}


def create_statistic(kind: StatisticKind) -> Statistic:
    """
    Instantiate a fresh accumulator for ``kind``.

    Args:
        kind: StatisticKind member or its string value

    Returns:
        New Statistic instance

    Raises:
        ValueError: If ``kind`` is not a known statistic
    """
    kind = StatisticKind(kind)
    return STATISTIC_CLASSES[kind]()


def default_statistics() -> List[Statistic]:
    """Fresh instances of all five accumulators in report order."""
    return [create_statistic(kind) for kind in StatisticKind]


def collect_reports(statistics: Iterable[Statistic]) -> List[Dict[str, Any]]:
    """Render every accumulator's report into one ordered list."""
    reports = []
    for statistic in statistics:
        logger.debug(f"Rendering report: {statistic.name}")
        reports.append(statistic.report())
    return reports
