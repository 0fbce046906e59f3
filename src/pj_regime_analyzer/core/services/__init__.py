"""Domain services for PJ Regime Analyzer."""

from pj_regime_analyzer.core.services.regime_comparator import (
    CompanyLookup,
    RegimeComparator,
    ReportSink,
    compare_regimes,
    economia_entre,
)
from pj_regime_analyzer.core.services.cnae_search import CnaePage, CnaeSearchService

__all__ = [
    "CompanyLookup",
    "RegimeComparator",
    "ReportSink",
    "compare_regimes",
    "economia_entre",
    "CnaePage",
    "CnaeSearchService",
]
