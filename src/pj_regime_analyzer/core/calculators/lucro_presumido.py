"""Lucro Presumido calculator."""

from decimal import Decimal

from pj_regime_analyzer.core.models.enums import TipoEmpresa
from pj_regime_analyzer.core.models.input import TaxCalculationInput
from pj_regime_analyzer.core.models.results import LucroPresumidoResult
from pj_regime_analyzer.core.rules.presumption import PRESUNCAO_LUCRO
from pj_regime_analyzer.core.rules.tax_constants import (
    ALIQUOTA_CSLL,
    ALIQUOTA_IRPJ,
    COFINS_CUMULATIVO,
    LIMITE_ADICIONAL_ANUAL,
    LIMITE_ADICIONAL_TRIMESTRAL,
    PIS_CUMULATIVO,
    calcular_adicional_irpj,
)
from pj_regime_analyzer.shared.exceptions import ZeroRevenueError

ZERO = Decimal("0")


class LucroPresumidoCalculator:
    """Computes taxes on a profit presumed from revenue by company type."""

    def calcular(self, entrada: TaxCalculationInput) -> LucroPresumidoResult:
        """Annual Lucro Presumido liability.

        Raises:
            ZeroRevenueError: If the annual revenue is zero
        """
        rba = entrada.rba
        if rba == 0:
            raise ZeroRevenueError("Receita bruta anual zerada: Lucro Presumido não pode ser calculado")

        tipo = entrada.tipo_empresa
        presuncao = PRESUNCAO_LUCRO[tipo]
        lucro_presumido = rba * presuncao

        irpj = lucro_presumido * ALIQUOTA_IRPJ
        adicional_irpj = calcular_adicional_irpj(lucro_presumido, LIMITE_ADICIONAL_ANUAL)
        csll = lucro_presumido * ALIQUOTA_CSLL

        pis = rba * PIS_CUMULATIVO
        cofins = rba * COFINS_CUMULATIVO

        # ISS for services, ICMS for goods; never both
        iss = rba * entrada.aliquota_iss if tipo is TipoEmpresa.SERVICO else ZERO
        icms = rba * entrada.aliquota_icms if tipo is not TipoEmpresa.SERVICO else ZERO

        total = irpj + adicional_irpj + csll + pis + cofins + iss + icms

        return LucroPresumidoResult(
            base_presuncao=rba,
            percentual_presuncao=presuncao * 100,
            lucro_presumido=lucro_presumido,
            irpj=irpj,
            adicional_irpj=adicional_irpj,
            csll=csll,
            pis=pis,
            cofins=cofins,
            iss=iss,
            icms=icms,
            imposto_total=total,
            aliquota_efetiva=total / rba * 100,
        )


def calcular_irpj_trimestral(faturamento_trimestral: Decimal, presuncao: Decimal) -> Decimal:
    """IRPJ for one quarter, surtax over R$ 60 mil of presumed profit.

    Args:
        faturamento_trimestral: Gross revenue of the quarter
        presuncao: Presumption percentage as a fraction (0.32 for services)

    Returns:
        IRPJ plus surtax for the quarter
    """
    lucro_trimestral = faturamento_trimestral * presuncao
    irpj = lucro_trimestral * ALIQUOTA_IRPJ
    return irpj + calcular_adicional_irpj(lucro_trimestral, LIMITE_ADICIONAL_TRIMESTRAL)


def calcular_lucro_presumido(entrada: TaxCalculationInput) -> LucroPresumidoResult:
    """Convenience function to compute Lucro Presumido."""
    return LucroPresumidoCalculator().calcular(entrada)
