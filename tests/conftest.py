#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastQScan v0.1.0

Pytest configuration and shared fixtures.

Author: FastQScan Development Team
License: MIT
"""

import gzip
import logging
import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="fastqscan_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def simple_fastq():
    """Two well-formed reads: ACGT/!!!! (Q0) then TGCA/#### (Q2)."""
    return (
        b"@read1\n"
        b"ACGT\n"
        b"+\n"
        b"!!!!\n"
        b"@read2\n"
        b"TGCA\n"
        b"+\n"
        b"####\n"
    )


@pytest.fixture
def malformed_block():
    """One block with empty sequence and quality lines."""
    return b"@broken\n\n+\n\n"


@pytest.fixture
def write_fastq(temp_output_dir):
    """Write FASTQ bytes to a file in the temp dir, gzipping for .gz names."""
    def _write(name, content):
        path = temp_output_dir / name
        if name.endswith('.gz'):
            with gzip.open(path, 'wb') as f:
                f.write(content)
        else:
            path.write_bytes(content)
        return path
    return _write


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo root logger changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)

# FastQScan v0.1.0
# Any usage is subject to this software's license.
