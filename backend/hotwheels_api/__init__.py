"""
HotWheels API — Application Package
=====================================

Read-only HTTP API over a catalog of Hot Wheels model cars.

Layers:
    ┌─────────────────────────────────────┐
    │   Routes (catch-all dispatcher)     │  ← path classification, HTTP responses
    ├─────────────────────────────────────┤
    │   Services                          │  ← catalog queries, row transformation
    ├─────────────────────────────────────┤
    │   Database (async SQLAlchemy)       │  ← engine, per-request sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
