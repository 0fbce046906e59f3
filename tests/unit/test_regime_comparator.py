"""Tests for the regime comparator."""

from decimal import Decimal
from typing import Optional

import pytest

from pj_regime_analyzer.core.calculators.lucro_presumido import LucroPresumidoCalculator
from pj_regime_analyzer.core.models.enums import RegimeTributario
from pj_regime_analyzer.core.models.input import TaxCalculationInput
from pj_regime_analyzer.core.models.results import TaxCalculationComparison
from pj_regime_analyzer.core.services.regime_comparator import (
    RegimeComparator,
    compare_regimes,
    economia_entre,
)
from pj_regime_analyzer.shared.exceptions import (
    BracketNotFoundError,
    NotFoundError,
    PersistenceError,
    ZeroRevenueError,
)


class FakeSink:
    """Records saved reports in memory."""

    def __init__(self):
        self.saved: list[tuple[TaxCalculationInput, TaxCalculationComparison, Optional[str]]] = []

    def save_report(self, entrada, comparison, actor_id) -> str:
        self.saved.append((entrada, comparison, actor_id))
        return f"r-{len(self.saved)}"


class FailingSink:
    def save_report(self, entrada, comparison, actor_id) -> str:
        raise PersistenceError("banco indisponível")


class FakeCompanies:
    def __init__(self, *ids: str):
        self.ids = set(ids)

    def company_exists(self, company_id: str) -> bool:
        return company_id in self.ids


class TestRanking:
    """Tests for regime ranking and savings."""

    def test_services_simples_wins(self, entrada_servico, referencia):
        """Test high-payroll services: Simples < Presumido < Real."""
        comparison = compare_regimes(entrada_servico, referencia)

        assert [r.regime for r in comparison.ranking] == [
            RegimeTributario.SIMPLES_NACIONAL,
            RegimeTributario.LUCRO_PRESUMIDO,
            RegimeTributario.LUCRO_REAL,
        ]
        assert comparison.simples_nacional.imposto_total == Decimal("47160")
        assert comparison.lucro_presumido.imposto_total == Decimal("68784")
        assert comparison.lucro_real.imposto_total == Decimal("82800")
        assert comparison.best_regime == RegimeTributario.SIMPLES_NACIONAL
        assert comparison.economia_melhor_regime == Decimal("21624")

    def test_commerce_real_second(self, entrada_comercio, referencia):
        """Test commerce with ICMS: Lucro Real beats Presumido."""
        comparison = compare_regimes(entrada_comercio, referencia)

        assert [r.regime for r in comparison.ranking] == [
            RegimeTributario.SIMPLES_NACIONAL,
            RegimeTributario.LUCRO_REAL,
            RegimeTributario.LUCRO_PRESUMIDO,
        ]
        assert comparison.lucro_real.imposto_total == Decimal("11350")
        assert comparison.economia_melhor_regime == Decimal("7350")

    def test_best_is_minimum(self, entrada_servico, referencia):
        """Test the winner has the lowest total and savings are non-negative."""
        comparison = compare_regimes(entrada_servico, referencia)
        totais = [r.imposto_total for r in comparison.ranking]

        assert totais == sorted(totais)
        assert comparison.resultado(comparison.best_regime).imposto_total == min(totais)
        assert comparison.economia_melhor_regime >= 0

    def test_tie_keeps_regime_order(self, entrada_servico, referencia):
        """Test ties are broken by Simples, Presumido, Real order."""
        comparator = RegimeComparator(referencia)
        simples = comparator.simples.calcular(entrada_servico)

        class EmpatePresumido(LucroPresumidoCalculator):
            def calcular(self, entrada):
                resultado = super().calcular(entrada)
                return resultado.model_copy(update={"imposto_total": simples.imposto_total})

        comparator.presumido = EmpatePresumido()
        comparison = comparator.compare(entrada_servico)

        assert comparison.ranking[0].regime == RegimeTributario.SIMPLES_NACIONAL
        assert comparison.ranking[1].regime == RegimeTributario.LUCRO_PRESUMIDO
        assert comparison.economia_melhor_regime == 0

    def test_economia_entre(self, entrada_servico, referencia):
        """Test extra cost of each regime over the best one."""
        comparison = compare_regimes(entrada_servico, referencia)

        assert economia_entre(comparison, RegimeTributario.SIMPLES_NACIONAL) == 0
        assert economia_entre(comparison, RegimeTributario.LUCRO_REAL) == Decimal("35640")

    def test_resultado_by_regime(self, entrada_servico, referencia):
        """Test access to each regime's detailed result."""
        comparison = compare_regimes(entrada_servico, referencia)

        assert comparison.resultado(RegimeTributario.LUCRO_REAL) is comparison.lucro_real
        assert (
            comparison.resultado(RegimeTributario.LUCRO_PRESUMIDO) is comparison.lucro_presumido
        )

    def test_totals_carried_over(self, entrada_servico, referencia):
        """Test revenue aggregates are copied to the comparison."""
        comparison = compare_regimes(entrada_servico, referencia)

        assert comparison.company_id == "empresa-servico"
        assert comparison.rba == Decimal("480000")
        assert comparison.rbaa == Decimal("480000")
        assert comparison.rbt12 == Decimal("480000")


class TestEvolution:
    """Tests for the optional monthly evolution."""

    def test_included_by_default(self, entrada_servico, referencia):
        comparison = compare_regimes(entrada_servico, referencia)
        assert comparison.evolucao_mensal is not None
        assert len(comparison.evolucao_mensal) == 12

    def test_can_be_skipped(self, entrada_servico, referencia):
        comparison = compare_regimes(entrada_servico, referencia, incluir_evolucao=False)
        assert comparison.evolucao_mensal is None


class TestErrors:
    """Tests for error propagation."""

    def test_above_simples_ceiling(self, entrada_comercio, referencia):
        """Test the bracket error aborts the comparison."""
        entrada = entrada_comercio.model_copy(
            update={"receitas_atual": (Decimal("500000"),) * 12}
        )
        with pytest.raises(BracketNotFoundError):
            compare_regimes(entrada, referencia)

    def test_zero_revenue(self, entrada_comercio, referencia):
        """Test zero annual revenue aborts the comparison."""
        entrada = entrada_comercio.model_copy(
            update={"receitas_atual": (Decimal("0"),) * 12, "lucro_liquido_anual": Decimal("0")}
        )
        with pytest.raises(ZeroRevenueError):
            compare_regimes(entrada, referencia)


class TestPersistence:
    """Tests for report persistence and company lookup."""

    def test_report_saved(self, entrada_servico, referencia):
        """Test the sink receives the comparison and the actor."""
        sink = FakeSink()
        comparison = RegimeComparator(referencia, sink=sink).compare(
            entrada_servico, actor_id="analista"
        )

        assert comparison.report_id == "r-1"
        assert len(sink.saved) == 1
        entrada, salvo, actor_id = sink.saved[0]
        assert entrada is entrada_servico
        assert salvo.best_regime == comparison.best_regime
        assert actor_id == "analista"

    def test_without_sink_no_report_id(self, entrada_servico, referencia):
        comparison = RegimeComparator(referencia).compare(entrada_servico)
        assert comparison.report_id is None

    def test_persistence_error_carries_comparison(self, entrada_servico, referencia):
        """Test a failed save still hands back the computed result."""
        comparator = RegimeComparator(referencia, sink=FailingSink())

        with pytest.raises(PersistenceError) as exc_info:
            comparator.compare(entrada_servico)

        comparison = exc_info.value.comparison
        assert comparison is not None
        assert comparison.best_regime == RegimeTributario.SIMPLES_NACIONAL
        assert comparison.report_id is None
        assert "banco indisponível" in str(exc_info.value)

    def test_unknown_company(self, entrada_servico, referencia):
        """Test unknown companies are rejected before calculating."""
        sink = FakeSink()
        comparator = RegimeComparator(referencia, sink=sink, companies=FakeCompanies("outra"))

        with pytest.raises(NotFoundError, match="empresa-servico"):
            comparator.compare(entrada_servico)
        assert sink.saved == []

    def test_known_company(self, entrada_servico, referencia):
        comparator = RegimeComparator(
            referencia, sink=FakeSink(), companies=FakeCompanies("empresa-servico")
        )
        assert comparator.compare(entrada_servico).report_id == "r-1"
