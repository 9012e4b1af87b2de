#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Core I/O module for FastQScan.

Consolidated module containing:
- Core record data structure (FastqRecord) and decode status
- File handling with automatic gzip detection
- Streaming four-line FASTQ record decoder

The decoder deals in raw bytes only. Nucleotide letters and Phred+33
quality characters are interpreted by the statistic accumulators.
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import gzip
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Iterator, Tuple, Union

logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 2: CORE RECORD DATA STRUCTURES
# =============================================================================

class DecodeStatus(Enum):
    """Outcome of one four-line decode attempt."""
    DECODED = "decoded"
    INCOMPLETE = "incomplete"          # Empty sequence and/or quality line
    END_OF_STREAM = "end_of_stream"    # No bytes left when reading the identifier


@dataclass
class FastqRecord:
    """
    One sequence/quality pair decoded from a FASTQ block.

    The record is a mutable destination: the decoder overwrites both
    fields on every call so a single instance can be reused across a
    whole stream.

    Attributes:
        sequence: Raw nucleotide bytes (e.g. b"ACGT")
        quality: Raw Phred+33 quality bytes (e.g. b"IIII")
    """
    sequence: bytes = b""
    quality: bytes = b""

    @property
    def length(self) -> int:
        """Get sequence length."""
        return len(self.sequence)

    def is_empty(self) -> bool:
        """True if either the sequence or the quality is missing."""
        return not self.sequence or not self.quality

    def clear(self):
        """Reset both fields to empty."""
        self.sequence = b""
        self.quality = b""

    def __len__(self) -> int:
        return self.length


# =============================================================================
# SECTION 3: FILE UTILITIES
# =============================================================================
# Helper functions for file handling with automatic gzip detection

GZIP_MAGIC = b"\x1f\x8b"


def is_gzipped(filepath: Union[str, Path]) -> bool:
    """
    Check if file is gzip compressed.

    A ``.gz``/``.gzip`` suffix is enough; files with any other name are
    checked for the gzip magic bytes when they exist.

    Args:
        filepath: Path to file

    Returns:
        True if file is gzipped
    """
    filepath = Path(filepath)
    if filepath.suffix in ('.gz', '.gzip'):
        return True
    if not filepath.is_file():
        return False
    with open(filepath, 'rb') as f:
        return f.read(len(GZIP_MAGIC)) == GZIP_MAGIC


def open_fastq(filepath: Union[str, Path]) -> BinaryIO:
    """
    Open a FASTQ file as a binary, line-readable stream.

    Args:
        filepath: Path to FASTQ file (can be gzipped)

    Returns:
        Binary file handle supporting readline()

    Raises:
        FileNotFoundError: If the file does not exist
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"FASTQ file not found: {filepath}")

    if is_gzipped(filepath):
        logger.debug(f"Opening gzip-compressed FASTQ: {filepath}")
        return gzip.open(filepath, 'rb')
    logger.debug(f"Opening plain FASTQ: {filepath}")
    return open(filepath, 'rb')


# =============================================================================
# SECTION 4: FASTQ RECORD DECODING
# =============================================================================

def decode_record(handle: BinaryIO, record: FastqRecord) -> DecodeStatus:
    """
    Decode the next four-line block from a byte stream into ``record``.

    All four lines of the block are consumed even when the sequence or
    quality line is empty, so one malformed block does not shift the
    framing of the blocks that follow it. Blank lines before the identifier
    line are skipped, so trailing blank lines at the end of a file are not
    reported as malformed records.

    Args:
        handle: Binary stream supporting readline()
        record: Destination record, overwritten in place

    Returns:
        DecodeStatus.END_OF_STREAM if no identifier line remains,
        DecodeStatus.INCOMPLETE if the sequence or quality line is empty,
        DecodeStatus.DECODED otherwise.

    Raises:
        OSError, EOFError: Propagated unchanged from the underlying stream
    """
    header = handle.readline()
    while header and not header.strip():
        header = handle.readline()
    if not header:
        return DecodeStatus.END_OF_STREAM

    sequence = handle.readline().strip()
    handle.readline()  # separator
    quality = handle.readline().strip()

    record.sequence = bytes(sequence)
    record.quality = bytes(quality)

    if not sequence:
        logger.debug("Empty sequence line in FASTQ block")
        return DecodeStatus.INCOMPLETE
    if not quality:
        logger.debug("Empty quality line in FASTQ block")
        return DecodeStatus.INCOMPLETE

    return DecodeStatus.DECODED


def iter_records(handle: BinaryIO) -> Iterator[Tuple[DecodeStatus, FastqRecord]]:
    """
    Yield ``(status, record)`` pairs until the stream is exhausted.

    Each yielded record is a fresh instance, so callers may keep it.

    Examples:
        >>> with open_fastq("reads.fq.gz") as handle:
        ...     for status, record in iter_records(handle):
        ...         if status is DecodeStatus.DECODED:
        ...             print(record.length)
    """
    while True:
        record = FastqRecord()
        status = decode_record(handle, record)
        if status is DecodeStatus.END_OF_STREAM:
            return
        yield status, record
