"""Domain models for corporate tax-regime comparison."""

from pj_regime_analyzer.core.models.enums import (
    AnexoSimples,
    RegimeTributario,
    TipoAtividadeLucroReal,
    TipoEmpresa,
)
from pj_regime_analyzer.core.models.reference import (
    ActivityClassification,
    BracketRow,
    ReferenceData,
)
from pj_regime_analyzer.core.models.revenue import ReceitaBruta
from pj_regime_analyzer.core.models.input import TaxCalculationInput, parse_input
from pj_regime_analyzer.core.models.results import (
    LucroPresumidoResult,
    LucroRealDemonstracao,
    LucroRealResult,
    MonthlyEvolutionEntry,
    RegimeTotal,
    SimplesNacionalResult,
    TaxCalculationComparison,
)
from pj_regime_analyzer.core.models.report import Company, ReportPage, TaxCalculationReport

__all__ = [
    "AnexoSimples",
    "RegimeTributario",
    "TipoAtividadeLucroReal",
    "TipoEmpresa",
    "ActivityClassification",
    "BracketRow",
    "ReferenceData",
    "ReceitaBruta",
    "TaxCalculationInput",
    "parse_input",
    "LucroPresumidoResult",
    "LucroRealDemonstracao",
    "LucroRealResult",
    "MonthlyEvolutionEntry",
    "RegimeTotal",
    "SimplesNacionalResult",
    "TaxCalculationComparison",
    "Company",
    "ReportPage",
    "TaxCalculationReport",
]
