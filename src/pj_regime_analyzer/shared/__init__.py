"""Shared utilities for PJ Regime Analyzer."""

from pj_regime_analyzer.shared.formatters import (
    format_currency,
    format_percentage,
    format_rate,
)
from pj_regime_analyzer.shared.text import normalize_text
from pj_regime_analyzer.shared.validators import (
    format_cnae,
    format_cnpj,
    validar_cnae,
    validar_cnpj,
)

__all__ = [
    # Formatters
    "format_currency",
    "format_percentage",
    "format_rate",
    # Text
    "normalize_text",
    # Validators
    "format_cnae",
    "format_cnpj",
    "validar_cnae",
    "validar_cnpj",
]
