"""
FastQScan v0.1.0

Sequence utility functions for FastQScan.

Provides byte-level nucleotide and Phred+33 quality helpers shared by the
statistic accumulators.
"""

from typing import List, Optional

PHRED_OFFSET = 33

BASES = ('A', 'C', 'G', 'T', 'N')
_BASE_TO_INDEX = {}
for _idx, _base in enumerate(BASES):
    _BASE_TO_INDEX[ord(_base)] = _idx
    _BASE_TO_INDEX[ord(_base.lower())] = _idx

_GC_BYTES = frozenset(b"GCgc")


def phred_scores(quality: bytes) -> List[int]:
    """
    Decode Phred+33 quality characters into numeric scores.

    Args:
        quality: Raw quality bytes

    Returns:
        List of integer quality scores

    Example:
        >>> phred_scores(b"!#I")
        [0, 2, 40]
    """
    return [q - PHRED_OFFSET for q in quality]


def base_index(base: int) -> Optional[int]:
    """
    Map a nucleotide byte to its column in A, C, G, T, N order.

    Case-insensitive; any other character (gaps, IUPAC codes) maps to None.

    Example:
        >>> base_index(ord('g'))
        2
    """
    return _BASE_TO_INDEX.get(base)


def is_gc(base: int) -> bool:
    """True if the byte is G or C (either case)."""
    return base in _GC_BYTES


def calculate_gc_content(sequence: bytes) -> float:
    """
    Calculate GC content of a DNA sequence.

    Args:
        sequence: DNA sequence bytes

    Returns:
        GC content as fraction (0.0 to 1.0)

    Example:
        >>> calculate_gc_content(b"ATGC")
        0.5
    """
    if not sequence:
        return 0.0

    gc_count = sum(1 for base in sequence if base in _GC_BYTES)

    return gc_count / len(sequence)


__all__ = [
    'PHRED_OFFSET',
    'BASES',
    'phred_scores',
    'base_index',
    'is_gc',
    'calculate_gc_content',
]
