"""Configuration module for legisvote.

Available Configurations:
- ChamberConfig: Session listing, code generation and notification tunables
"""

from legisvote.config.chamber_config import (
    DEFAULT_CHAMBER_CONFIG,
    TEST_CHAMBER_CONFIG,
    ChamberConfig,
)

__all__ = [
    "ChamberConfig",
    "DEFAULT_CHAMBER_CONFIG",
    "TEST_CHAMBER_CONFIG",
]
