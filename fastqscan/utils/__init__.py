"""
Utilities for FastQScan.

Byte-level sequence helpers. The workflow runner lives in
``fastqscan.utils.workflow_runner`` and is imported from there.
"""

from .sequence_utils import (
    PHRED_OFFSET,
    BASES,
    phred_scores,
    base_index,
    is_gc,
    calculate_gc_content,
)

__all__ = [
    'PHRED_OFFSET',
    'BASES',
    'phred_scores',
    'base_index',
    'is_gc',
    'calculate_gc_content',
]
