"""Regime comparator: runs the three calculators and picks the cheapest regime."""

import logging
from decimal import Decimal
from typing import Optional, Protocol

from pj_regime_analyzer.core.calculators.lucro_presumido import LucroPresumidoCalculator
from pj_regime_analyzer.core.calculators.lucro_real import LucroRealCalculator
from pj_regime_analyzer.core.calculators.monthly_evolution import MonthlyEvolutionCalculator
from pj_regime_analyzer.core.calculators.simples_nacional import SimplesNacionalCalculator
from pj_regime_analyzer.core.models.enums import RegimeTributario
from pj_regime_analyzer.core.models.input import TaxCalculationInput
from pj_regime_analyzer.core.models.reference import ReferenceData
from pj_regime_analyzer.core.models.results import RegimeTotal, TaxCalculationComparison
from pj_regime_analyzer.shared.exceptions import NotFoundError, PersistenceError
from pj_regime_analyzer.shared.formatters import format_currency

logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    """Anything able to store a finished comparison and return its id."""

    def save_report(
        self,
        entrada: TaxCalculationInput,
        comparison: TaxCalculationComparison,
        actor_id: Optional[str],
    ) -> str: ...


class CompanyLookup(Protocol):
    """Anything able to tell whether a company is registered."""

    def company_exists(self, company_id: str) -> bool: ...


class RegimeComparator:
    """Compares Simples Nacional, Lucro Presumido and Lucro Real for one company.

    Persistence and company lookup are optional collaborators; without them
    the comparator is a pure calculation.
    """

    def __init__(
        self,
        referencia: ReferenceData,
        sink: Optional[ReportSink] = None,
        companies: Optional[CompanyLookup] = None,
    ):
        self.simples = SimplesNacionalCalculator(referencia)
        self.presumido = LucroPresumidoCalculator()
        self.real = LucroRealCalculator(referencia)
        self.evolucao = MonthlyEvolutionCalculator(referencia)
        self.sink = sink
        self.companies = companies

    def compare(
        self,
        entrada: TaxCalculationInput,
        actor_id: Optional[str] = None,
        incluir_evolucao: bool = True,
    ) -> TaxCalculationComparison:
        """Run all regimes, rank them and persist the report.

        Args:
            entrada: Validated calculation input
            actor_id: Who requested the calculation (stored with the report)
            incluir_evolucao: Attach the month-by-month Simples replay when the
                current year has revenue

        Returns:
            TaxCalculationComparison (with ``report_id`` when a sink is configured)

        Raises:
            NotFoundError: If a company lookup is configured and the company is unknown
            BracketNotFoundError: If RBT12 exceeds the Simples annex ceiling
            ZeroRevenueError: If the annual revenue is zero
            PersistenceError: If saving fails; ``comparison`` holds the result
        """
        if self.companies is not None and not self.companies.company_exists(entrada.company_id):
            raise NotFoundError(f"Empresa {entrada.company_id} não encontrada")

        logger.info(
            "Comparando regimes para empresa %s (CNAE %s, RBA %s)",
            entrada.company_id,
            entrada.cnae,
            format_currency(entrada.rba),
        )

        simples = self.simples.calcular(entrada)
        presumido = self.presumido.calcular(entrada)
        real = self.real.calcular(entrada)

        # sorted() is stable, so ties keep Simples, Presumido, Real order
        ranking = sorted(
            [
                RegimeTotal(
                    regime=RegimeTributario.SIMPLES_NACIONAL,
                    imposto_total=simples.imposto_total,
                    aliquota_efetiva=simples.aliquota_efetiva,
                ),
                RegimeTotal(
                    regime=RegimeTributario.LUCRO_PRESUMIDO,
                    imposto_total=presumido.imposto_total,
                    aliquota_efetiva=presumido.aliquota_efetiva,
                ),
                RegimeTotal(
                    regime=RegimeTributario.LUCRO_REAL,
                    imposto_total=real.imposto_total,
                    aliquota_efetiva=real.aliquota_efetiva,
                ),
            ],
            key=lambda r: r.imposto_total,
        )
        economia = ranking[1].imposto_total - ranking[0].imposto_total

        evolucao = None
        if incluir_evolucao and any(v > 0 for v in entrada.receitas_atual):
            evolucao = self.evolucao.calcular(entrada)

        comparison = TaxCalculationComparison(
            company_id=entrada.company_id,
            rba=entrada.rba,
            rbaa=entrada.rbaa,
            rbt12=entrada.rbt12,
            simples_nacional=simples,
            lucro_presumido=presumido,
            lucro_real=real,
            ranking=ranking,
            best_regime=ranking[0].regime,
            economia_melhor_regime=economia,
            evolucao_mensal=evolucao,
        )
        logger.info(
            "Melhor regime: %s (economia de %s)",
            comparison.best_regime.value,
            format_currency(economia),
        )

        if self.sink is None:
            return comparison

        try:
            report_id = self.sink.save_report(entrada, comparison, actor_id)
        except PersistenceError as e:
            logger.error("Falha ao salvar relatório da empresa %s: %s", entrada.company_id, e)
            raise PersistenceError(str(e), comparison=comparison) from e

        logger.info("Relatório %s salvo", report_id)
        return comparison.model_copy(update={"report_id": report_id})


def compare_regimes(
    entrada: TaxCalculationInput,
    referencia: ReferenceData,
    incluir_evolucao: bool = True,
) -> TaxCalculationComparison:
    """Convenience function for an unpersisted comparison."""
    return RegimeComparator(referencia).compare(entrada, incluir_evolucao=incluir_evolucao)


def economia_entre(
    comparison: TaxCalculationComparison, regime: RegimeTributario
) -> Decimal:
    """How much more ``regime`` costs than the best regime."""
    total = next(r.imposto_total for r in comparison.ranking if r.regime is regime)
    return total - comparison.ranking[0].imposto_total
