#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastQScan v0.1.0

Tests for CLI command interface.

Author: FastQScan Development Team
License: MIT
"""

import gzip
import json

import pytest
from click.testing import CliRunner
from fastqscan.cli import main


SIMPLE_FASTQ = b"@read1\nACGT\n+\n!!!!\n@read2\nTGCA\n+\n####\n"
MALFORMED_BLOCK = b"@bad\n\n+\n\n"


def _write_gz(path, content):
    with gzip.open(path, 'wb') as f:
        f.write(content)


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        """Test that --help runs without error."""
        runner = CliRunner()
        result = runner.invoke(main, ['--help'])

        assert result.exit_code == 0
        assert 'FastQScan' in result.output

    def test_cli_version(self):
        """Test that --version displays version."""
        runner = CliRunner()
        result = runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_scan_help(self):
        """Test scan command help lists both read options."""
        runner = CliRunner()
        result = runner.invoke(main, ['scan', '--help'])

        assert result.exit_code == 0
        assert '--read1' in result.output
        assert '--read2' in result.output

    def test_invalid_command(self):
        """Test that invalid commands are handled gracefully."""
        runner = CliRunner()
        result = runner.invoke(main, ['nonexistent_command'])

        assert result.exit_code != 0


class TestScanCommand:
    """Test the scan command."""

    def test_scan_missing_read2(self):
        """Both reads are required."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_gz('r1.fq.gz', SIMPLE_FASTQ)
            result = runner.invoke(main, ['scan', '-1', 'r1.fq.gz'])

        assert result.exit_code != 0

    def test_scan_nonexistent_file(self):
        """A missing input fails before processing."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_gz('r1.fq.gz', SIMPLE_FASTQ)
            result = runner.invoke(main, ['scan', '-1', 'r1.fq.gz', '-2', 'missing.fq.gz'])

        assert result.exit_code != 0

    def test_scan_to_output_file(self):
        """Reports are written as a JSON array to --output."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_gz('r1.fq.gz', SIMPLE_FASTQ)
            _write_gz('r2.fq.gz', SIMPLE_FASTQ)
            result = runner.invoke(main, [
                '-q', 'scan', '-1', 'r1.fq.gz', '-2', 'r2.fq.gz', '-o', 'report.json'
            ])

            assert result.exit_code == 0
            with open('report.json') as f:
                reports = json.load(f)

        assert len(reports) == 5
        assert reports[0]['base_quality_position'][0] == {"position": 1, "average_quality": 8.75}
        assert reports[1] == {"read_quality": 2.0}
        assert reports[4] == {"length_distribution": [4, 4, 4, 4]}

    def test_scan_to_stdout(self):
        """Without --output the JSON goes to stdout."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_gz('r1.fq.gz', SIMPLE_FASTQ)
            _write_gz('r2.fq.gz', SIMPLE_FASTQ)
            result = runner.invoke(main, ['-q', 'scan', '--read1', 'r1.fq.gz', '--read2', 'r2.fq.gz'])

        assert result.exit_code == 0
        reports = json.loads(result.output)
        assert reports[3]["gc_content_per_read"] == 0.5

    def test_scan_halted_file_exits_zero(self):
        """Hitting the malformed-record budget still produces a report."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_gz('r1.fq.gz', SIMPLE_FASTQ + MALFORMED_BLOCK * 6 + SIMPLE_FASTQ)
            _write_gz('r2.fq.gz', SIMPLE_FASTQ)
            result = runner.invoke(main, [
                '-q', 'scan', '-1', 'r1.fq.gz', '-2', 'r2.fq.gz', '-o', 'report.json'
            ])

            assert result.exit_code == 0
            with open('report.json') as f:
                reports = json.load(f)

        assert reports[4] == {"length_distribution": [4, 4, 4, 4]}

    def test_scan_corrupt_gzip_exits_nonzero(self):
        """A read failure is not reported as success."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            with open('r1.fq.gz', 'wb') as f:
                f.write(SIMPLE_FASTQ)  # not gzip data
            _write_gz('r2.fq.gz', SIMPLE_FASTQ)
            result = runner.invoke(main, [
                '-q', 'scan', '-1', 'r1.fq.gz', '-2', 'r2.fq.gz', '-o', 'report.json'
            ])

        assert result.exit_code == 1

    def test_scan_with_config(self):
        """Config settings are applied to the JSON output."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_gz('r1.fq.gz', SIMPLE_FASTQ)
            _write_gz('r2.fq.gz', SIMPLE_FASTQ)
            with open('config.yaml', 'w') as f:
                f.write("output:\n  json_indent: null\n  logging:\n    level: ERROR\n")
            result = runner.invoke(main, [
                'scan', '-1', 'r1.fq.gz', '-2', 'r2.fq.gz', '-c', 'config.yaml', '-o', 'report.json'
            ])

            assert result.exit_code == 0
            with open('report.json') as f:
                content = f.read()

        assert content.count('\n') == 1
        assert json.loads(content)[4] == {"length_distribution": [4, 4, 4, 4]}

    def test_scan_with_invalid_config(self):
        """An invalid config stops the scan with exit status 1."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            _write_gz('r1.fq.gz', SIMPLE_FASTQ)
            _write_gz('r2.fq.gz', SIMPLE_FASTQ)
            with open('config.yaml', 'w') as f:
                f.write("processing:\n  progress_interval: -3\n")
            result = runner.invoke(main, [
                'scan', '-1', 'r1.fq.gz', '-2', 'r2.fq.gz', '-c', 'config.yaml'
            ])

        assert result.exit_code == 1


class TestConfigCommands:
    """Test configuration management commands."""

    def test_config_init_command(self):
        """Test config init command."""
        runner = CliRunner()

        with runner.isolated_filesystem():
            result = runner.invoke(main, ['config', 'init', '--output', 'test_config.yaml'])

            assert result.exit_code == 0
            with open('test_config.yaml') as f:
                assert 'progress_interval' in f.read()

    def test_config_validate(self):
        """A freshly generated template validates."""
        runner = CliRunner()

        with runner.isolated_filesystem():
            runner.invoke(main, ['config', 'init', '-o', 'cfg.yaml'])
            result = runner.invoke(main, ['config', 'validate', 'cfg.yaml'])

        assert result.exit_code == 0
        assert 'valid' in result.output

    def test_config_validate_invalid(self):
        """Validation failures exit with status 1."""
        runner = CliRunner()

        with runner.isolated_filesystem():
            with open('cfg.yaml', 'w') as f:
                f.write("output:\n  logging:\n    level: SHOUTING\n")
            result = runner.invoke(main, ['config', 'validate', 'cfg.yaml'])

        assert result.exit_code == 1

    @pytest.mark.parametrize("fmt", ["summary", "yaml"])
    def test_config_show(self, fmt):
        """config show renders both formats."""
        runner = CliRunner()

        with runner.isolated_filesystem():
            runner.invoke(main, ['config', 'init', '-o', 'cfg.yaml'])
            result = runner.invoke(main, ['config', 'show', 'cfg.yaml', '--format', fmt])

        assert result.exit_code == 0
        assert 'progress' in result.output.lower()

# FastQScan v0.1.0
# Any usage is subject to this software's license.
