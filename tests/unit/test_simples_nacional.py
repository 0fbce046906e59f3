"""Tests for the Simples Nacional calculator."""

from decimal import Decimal

import pytest

from pj_regime_analyzer.core.calculators.simples_nacional import (
    SimplesNacionalCalculator,
    calcular_fator_r,
    calcular_simples_nacional,
)
from pj_regime_analyzer.core.models.enums import AnexoSimples, TipoEmpresa
from pj_regime_analyzer.core.models.input import TaxCalculationInput
from pj_regime_analyzer.shared.exceptions import BracketNotFoundError


def _entrada(cnae: str, tipo: TipoEmpresa, mensal: str, folha: str = "0") -> TaxCalculationInput:
    return TaxCalculationInput(
        company_id="c1",
        tipo_empresa=tipo,
        cnae=cnae,
        receitas_atual=[Decimal(mensal)] * 12,
        receitas_anterior=[Decimal(mensal)] * 12,
        folha_pagamento_12m=Decimal(folha),
    )


class TestFatorR:
    """Tests for the payroll ratio."""

    def test_ratio(self):
        """Test payroll over revenue."""
        assert calcular_fator_r(Decimal("28000"), Decimal("100000")) == Decimal("0.28")

    def test_zero_revenue(self):
        """Test no revenue gives zero instead of dividing by zero."""
        assert calcular_fator_r(Decimal("50000"), Decimal("0")) == 0


class TestAnexoResolution:
    """Tests for annex selection."""

    def test_fator_r_exactly_28_percent_goes_to_anexo_iii(self, referencia):
        """Test the boundary is inclusive."""
        calc = SimplesNacionalCalculator(referencia)
        anexo, fator_r = calc.resolver_anexo(
            "7020400", TipoEmpresa.SERVICO, Decimal("28000"), Decimal("100000")
        )
        assert anexo == AnexoSimples.ANEXO_III
        assert fator_r == Decimal("0.28")

    def test_fator_r_below_28_percent_goes_to_anexo_v(self, referencia):
        """Test low payroll moves services to Anexo V."""
        calc = SimplesNacionalCalculator(referencia)
        anexo, fator_r = calc.resolver_anexo(
            "7020400", TipoEmpresa.SERVICO, Decimal("27999"), Decimal("100000")
        )
        assert anexo == AnexoSimples.ANEXO_V
        assert fator_r < Decimal("0.28")

    def test_commerce_ignores_payroll(self, referencia):
        """Test non-service companies keep their annex and have no Fator R."""
        calc = SimplesNacionalCalculator(referencia)
        anexo, fator_r = calc.resolver_anexo(
            "4711302", TipoEmpresa.COMERCIO, Decimal("0"), Decimal("100000")
        )
        assert anexo == AnexoSimples.ANEXO_I
        assert fator_r is None

    def test_known_cnae_type_wins_over_declared(self, referencia):
        """Test the registered CNAE type decides the Fator R routing."""
        calc = SimplesNacionalCalculator(referencia)
        anexo, fator_r = calc.resolver_anexo(
            "4711302", TipoEmpresa.SERVICO, Decimal("0"), Decimal("100000")
        )
        assert anexo == AnexoSimples.ANEXO_I
        assert fator_r is None

    @pytest.mark.parametrize(
        "tipo,esperado",
        [
            (TipoEmpresa.COMERCIO, AnexoSimples.ANEXO_I),
            (TipoEmpresa.INDUSTRIA, AnexoSimples.ANEXO_II),
        ],
    )
    def test_unknown_cnae_uses_declared_type(self, referencia, tipo, esperado):
        """Test fallback annex by company type."""
        calc = SimplesNacionalCalculator(referencia)
        anexo, _ = calc.resolver_anexo("9999999", tipo, Decimal("0"), Decimal("100000"))
        assert anexo == esperado

    def test_unknown_service_cnae_routed_by_fator_r(self, referencia):
        """Test unknown service CNAEs still go through Fator R."""
        calc = SimplesNacionalCalculator(referencia)
        anexo, _ = calc.resolver_anexo(
            "9999999", TipoEmpresa.SERVICO, Decimal("0"), Decimal("100000")
        )
        assert anexo == AnexoSimples.ANEXO_V


class TestSimplesCalculation:
    """Tests for the annual liability."""

    def test_commerce_first_bracket(self, entrada_comercio, referencia):
        """Test R$ 100 mil in Anexo I pays the nominal 4%."""
        resultado = calcular_simples_nacional(entrada_comercio, referencia)

        assert resultado.anexo == AnexoSimples.ANEXO_I
        assert resultado.faixa_faturamento == "1ª Faixa"
        assert resultado.aliquota_efetiva == Decimal("4")
        assert resultado.imposto_total == Decimal("4000")

    def test_services_third_bracket(self, entrada_servico, referencia):
        """Test effective rate with deduction in Anexo III."""
        resultado = calcular_simples_nacional(entrada_servico, referencia)

        assert resultado.anexo == AnexoSimples.ANEXO_III
        assert resultado.fator_r == Decimal("0.3125")
        assert resultado.faixa_faturamento == "3ª Faixa"
        assert resultado.aliquota_nominal == Decimal("13.5")
        assert resultado.parcela_deduzir == Decimal("17640")
        # (480000 x 13,5% - 17640) / 480000
        assert resultado.aliquota_efetiva == Decimal("9.825")
        assert resultado.imposto_total == Decimal("47160")

    def test_services_low_payroll_anexo_v(self, entrada_servico, referencia):
        """Test the same company without payroll pays Anexo V."""
        entrada = entrada_servico.model_copy(update={"folha_pagamento_12m": Decimal("0")})
        resultado = calcular_simples_nacional(entrada, referencia)

        assert resultado.anexo == AnexoSimples.ANEXO_V
        # (480000 x 19,5% - 9900) / 480000 = 17,4375%
        assert resultado.aliquota_efetiva == Decimal("17.4375")
        assert resultado.imposto_total == Decimal("83700")

    def test_industry_unknown_cnae(self, referencia):
        """Test an unregistered industry CNAE uses Anexo II."""
        entrada = _entrada("9999999", TipoEmpresa.INDUSTRIA, "10000")
        resultado = calcular_simples_nacional(entrada, referencia)
        assert resultado.anexo == AnexoSimples.ANEXO_II
        assert resultado.aliquota_nominal == Decimal("4.5")

    def test_zero_revenue_uses_nominal_rate(self, referencia):
        """Test RBT12 zero falls back to the nominal rate."""
        entrada = _entrada("4711302", TipoEmpresa.COMERCIO, "0")
        resultado = calcular_simples_nacional(entrada, referencia)
        assert resultado.aliquota_efetiva == Decimal("4")
        assert resultado.imposto_total == 0

    def test_above_ceiling_raises(self, referencia):
        """Test RBT12 above R$ 4,8 milhões."""
        entrada = _entrada("4711302", TipoEmpresa.COMERCIO, "500000")
        with pytest.raises(BracketNotFoundError) as exc_info:
            calcular_simples_nacional(entrada, referencia)
        assert exc_info.value.anexo == AnexoSimples.ANEXO_I
        assert exc_info.value.rbt12 == Decimal("6000000")

    def test_effective_rate_never_above_nominal(self, referencia):
        """Test the deduction only lowers the rate."""
        calc = SimplesNacionalCalculator(referencia)
        for anexo in AnexoSimples:
            for faixa in referencia.brackets_for(anexo):
                efetiva = calc.aliquota_efetiva(faixa, faixa.receita_ate)
                assert efetiva <= faixa.aliquota
