"""Relational persistence (SQLAlchemy)."""

from pj_regime_analyzer.infrastructure.persistence.repository import (
    ReportRepository,
    create_session_factory,
)

__all__ = ["ReportRepository", "create_session_factory"]
