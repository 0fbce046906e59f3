"""Lucro Real calculator.

The taxable profit is the declared net profit, capped per activity by the
statutory presumption percentages (IRPJ and CSLL caps are applied separately).
PIS/COFINS are non-cumulative and may be offset by input credits.
"""

import logging
from decimal import Decimal

from pj_regime_analyzer.core.models.enums import TipoAtividadeLucroReal, TipoEmpresa
from pj_regime_analyzer.core.models.input import TaxCalculationInput
from pj_regime_analyzer.core.models.reference import ReferenceData
from pj_regime_analyzer.core.models.results import LucroRealDemonstracao, LucroRealResult
from pj_regime_analyzer.core.rules.activity_rules import classificar_atividade
from pj_regime_analyzer.core.rules.presumption import PRESUNCAO_LUCRO_REAL
from pj_regime_analyzer.core.rules.tax_constants import (
    ALIQUOTA_CSLL,
    ALIQUOTA_IRPJ,
    COFINS_NAO_CUMULATIVO,
    LIMITE_ADICIONAL_ANUAL,
    LIMITE_LUCRO_REAL_OBRIGATORIO,
    PIS_NAO_CUMULATIVO,
    calcular_adicional_irpj,
)
from pj_regime_analyzer.shared.exceptions import ZeroRevenueError

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class LucroRealCalculator:
    """Computes the Lucro Real liability against injected reference data."""

    def __init__(self, referencia: ReferenceData):
        self.referencia = referencia

    def classificar(self, cnae: str, rba: Decimal) -> TipoAtividadeLucroReal:
        """Activity bucket for a CNAE, using its registered description if any."""
        classificacao = self.referencia.classification_for(cnae)
        descricao = classificacao.descricao if classificacao is not None else ""
        return classificar_atividade(cnae, descricao, rba)

    def calcular(self, entrada: TaxCalculationInput) -> LucroRealResult:
        """Annual Lucro Real liability.

        Raises:
            ZeroRevenueError: If the annual revenue is zero
        """
        rba = entrada.rba
        if rba == 0:
            raise ZeroRevenueError("Receita bruta anual zerada: Lucro Real não pode ser calculado")

        tipo_atividade = self.classificar(entrada.cnae, rba)
        presuncao_irpj, presuncao_csll = PRESUNCAO_LUCRO_REAL[tipo_atividade]
        logger.debug("Lucro Real: CNAE %s classificado como %s", entrada.cnae, tipo_atividade.value)

        base_irpj = min(entrada.lucro_liquido_anual, rba * presuncao_irpj)
        base_csll = min(entrada.lucro_liquido_anual, rba * presuncao_csll)

        irpj = base_irpj * ALIQUOTA_IRPJ
        adicional_irpj = calcular_adicional_irpj(base_irpj, LIMITE_ADICIONAL_ANUAL)
        csll = base_csll * ALIQUOTA_CSLL

        pis = rba * PIS_NAO_CUMULATIVO
        cofins = rba * COFINS_NAO_CUMULATIVO
        pis_cofins_liquido = max(ZERO, pis + cofins - entrada.creditos_pis_cofins)

        iss = rba * entrada.aliquota_iss if entrada.tipo_empresa is TipoEmpresa.SERVICO else ZERO

        total = irpj + adicional_irpj + csll + pis_cofins_liquido + iss

        return LucroRealResult(
            tipo_atividade=tipo_atividade,
            presuncao_irpj=presuncao_irpj * 100,
            presuncao_csll=presuncao_csll * 100,
            lucro_liquido=base_irpj,
            base_csll=base_csll,
            irpj=irpj,
            adicional_irpj=adicional_irpj,
            csll=csll,
            pis=pis,
            cofins=cofins,
            creditos_pis_cofins=entrada.creditos_pis_cofins,
            pis_cofins_liquido=pis_cofins_liquido,
            iss=iss,
            imposto_total=total,
            aliquota_efetiva=total / rba * 100,
        )

    def demonstrar_calculo(self, entrada: TaxCalculationInput) -> LucroRealDemonstracao:
        """Show which profit figure the IRPJ base ends up using."""
        rba = entrada.rba
        tipo_atividade = self.classificar(entrada.cnae, rba)
        presuncao_irpj, presuncao_csll = PRESUNCAO_LUCRO_REAL[tipo_atividade]
        lucro_presumido_irpj = rba * presuncao_irpj

        return LucroRealDemonstracao(
            tipo_atividade=tipo_atividade,
            presuncao_irpj=presuncao_irpj * 100,
            presuncao_csll=presuncao_csll * 100,
            lucro_presumido_irpj=lucro_presumido_irpj,
            lucro_presumido_csll=rba * presuncao_csll,
            lucro_declarado=entrada.lucro_liquido_anual,
            lucro_utilizado=min(entrada.lucro_liquido_anual, lucro_presumido_irpj),
        )


def obrigatorio_lucro_real(rba: Decimal) -> bool:
    """Whether annual revenue forces the company into Lucro Real."""
    return rba > LIMITE_LUCRO_REAL_OBRIGATORIO


def calcular_creditos_potenciais(despesas_dedutiveis: Decimal) -> Decimal:
    """Approximate PIS/COFINS credits (9,25%) on deductible expenses."""
    return despesas_dedutiveis * (PIS_NAO_CUMULATIVO + COFINS_NAO_CUMULATIVO)


def calcular_lucro_real(entrada: TaxCalculationInput, referencia: ReferenceData) -> LucroRealResult:
    """Convenience function to compute Lucro Real."""
    return LucroRealCalculator(referencia).calcular(entrada)
