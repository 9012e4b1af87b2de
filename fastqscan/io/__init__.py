"""
Read I/O module for FastQScan.

Handles opening FASTQ inputs (plain or gzip) and decoding them into
sequence/quality records.

CONSOLIDATED MODULES:
- io_core_module.py: FastqRecord, DecodeStatus, file opening, record decoding
"""

from .io_core_module import (
    FastqRecord,
    DecodeStatus,
    is_gzipped,
    open_fastq,
    decode_record,
    iter_records,
)

__all__ = [
    # Core data structures
    "FastqRecord",
    "DecodeStatus",

    # File handling
    "is_gzipped",
    "open_fastq",

    # Decoding
    "decode_record",
    "iter_records",
]
