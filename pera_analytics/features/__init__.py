"""
Feature modules for Pera Analytics.

Each feature is a self-contained module with:
- models.py - Dataclass domain models (no I/O)
- schemas.py - Pydantic schemas (optional)
- service / scorer / aggregator - Business logic
"""
