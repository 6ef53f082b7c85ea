"""
legisvote - Legislative chamber session and roll-call voting core

Sessions hold an ordered agenda of initiatives. Each initiative is opened
by an operator, voted by the active legislators, and closed with a result
computed under its majority rule.

Core guarantees:
- At most one active session at any time
- At most one open initiative per session
- One vote per legislator per initiative (last writer wins until closure)
- Closure results are reproducible from the vote ledger
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
