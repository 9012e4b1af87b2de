"""
FastQScan v0.1.0

Statistic accumulators for FastQScan.

Author: FastQScan Development Team
License: MIT
"""

from .statistics_core_module import (
    Statistic,
    BaseQualityPositionStatistic,
    ReadQualityStatistic,
    BaseCompositionStatistic,
    GcContentStatistic,
    LengthDistributionStatistic,
    StatisticKind,
    STATISTIC_CLASSES,
    create_statistic,
    default_statistics,
    collect_reports,
)

__all__ = [
    # Base class
    "Statistic",

    # Accumulators
    "BaseQualityPositionStatistic",
    "ReadQualityStatistic",
    "BaseCompositionStatistic",
    "GcContentStatistic",
    "LengthDistributionStatistic",

    # Variant set
    "StatisticKind",
    "STATISTIC_CLASSES",
    "create_statistic",
    "default_statistics",
    "collect_reports",
]
