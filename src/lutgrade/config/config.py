"""Unified lutgrade configuration.

This module provides a top-level configuration dataclass that contains
the grading and correction configurations as sub-attributes.
"""

from __future__ import annotations

from dataclasses import dataclass

from lutgrade.config.grading import CorrectionConfig, GradingConfig
from lutgrade.config.operations import OperationSpec


@dataclass(frozen=True)
class LutgradeConfig:
    """Top-level configuration containing all operator configurations.

    Provides hierarchical access to all operation specifications:
        CONFIG.grading.exposure
        CONFIG.correction.tolerance

    Attributes:
        grading: Global grading operator specifications
        correction: Targeted color correction specifications
    """

    grading: GradingConfig = GradingConfig()
    correction: CorrectionConfig = CorrectionConfig()

    def get_all_specs(self) -> dict[str, dict[str, OperationSpec]]:
        """Get all operation specs organized by section.

        :return: Nested dictionary of all specifications
        """
        return {
            "grading": self.grading.get_all_specs(),
            "correction": self.correction.get_all_specs(),
        }


# Main singleton instance
CONFIG = LutgradeConfig()

GRADING_CONFIG = CONFIG.grading
CORRECTION_CONFIG = CONFIG.correction
