"""Reference data loading."""

from pj_regime_analyzer.infrastructure.reference_data.loader import (
    DATA_DIR,
    load_reference_data,
    parse_cnaes,
    parse_faixas,
)

__all__ = ["DATA_DIR", "load_reference_data", "parse_cnaes", "parse_faixas"]
