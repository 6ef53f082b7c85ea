"""
Application layer - Use cases and orchestration for legisvote.

This layer contains:
- Lifecycle services (sessions, initiatives, ballots)
- Tally service
- Port definitions (abstract interfaces for infrastructure)
- DTOs for read models

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: api
"""
