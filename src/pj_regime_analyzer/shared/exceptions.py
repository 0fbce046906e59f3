"""Custom exceptions for PJ Regime Analyzer."""

from typing import Any, Optional


class RegimeAnalyzerError(Exception):
    """Base exception for all PJ Regime Analyzer errors."""

    pass


class ReferenceDataError(RegimeAnalyzerError):
    """Reference tables are missing or malformed."""

    pass


class ValidationError(RegimeAnalyzerError):
    """Input rejected before any calculation runs."""

    def __init__(self, message: str, campo: Optional[str] = None, valor: Any = None):
        super().__init__(message)
        self.campo = campo
        self.valor = valor


class CalculationError(RegimeAnalyzerError):
    """Error during a regime calculation."""

    pass


class BracketNotFoundError(CalculationError):
    """Revenue above every bracket ceiling of a Simples Nacional annex."""

    def __init__(self, message: str, anexo: Any = None, rbt12: Any = None):
        super().__init__(message)
        self.anexo = anexo
        self.rbt12 = rbt12


class ZeroRevenueError(CalculationError):
    """Annual revenue is zero, so an effective rate cannot be computed."""

    pass


class NotFoundError(RegimeAnalyzerError):
    """Company or report does not exist."""

    pass


class PersistenceError(RegimeAnalyzerError):
    """Report could not be saved or loaded.

    When raised by the comparator, ``comparison`` holds the finished result.
    """

    def __init__(self, message: str, comparison: Any = None):
        super().__init__(message)
        self.comparison = comparison


class ReportGenerationError(RegimeAnalyzerError):
    """Error generating report."""

    pass
