"""Test helpers for legisvote tests.

Helpers:
    ChamberHarness: Fully wired in-memory chamber (services + stubs)
    make_principal: Principal with a fresh id

Usage:
    from tests.helpers import ChamberHarness
"""

from tests.helpers.chamber import ChamberHarness, make_principal

__all__ = ["ChamberHarness", "make_principal"]
