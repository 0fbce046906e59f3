"""Month-by-month Simples Nacional replay for the current year."""

from decimal import Decimal
from typing import Sequence

from pj_regime_analyzer.core.calculators.simples_nacional import SimplesNacionalCalculator
from pj_regime_analyzer.core.models.input import TaxCalculationInput
from pj_regime_analyzer.core.models.reference import ReferenceData
from pj_regime_analyzer.core.models.results import MonthlyEvolutionEntry
from pj_regime_analyzer.core.models.revenue import ReceitaBruta
from pj_regime_analyzer.core.rules.tax_constants import MESES


class MonthlyEvolutionCalculator:
    """Recomputes RBT12 and the effective rate for each month of the year.

    Each month is taxed with the RBT12 of the twelve months before it and an
    RBA estimated as that month's revenue times twelve.
    """

    def __init__(self, referencia: ReferenceData):
        self.simples = SimplesNacionalCalculator(referencia)

    def calcular(self, entrada: TaxCalculationInput) -> list[MonthlyEvolutionEntry]:
        """Twelve entries, January to December.

        Raises:
            BracketNotFoundError: If any month's RBT12 is above the annex ceiling
        """
        receita = entrada.receita
        evolucao: list[MonthlyEvolutionEntry] = []

        for i, faturamento_mes in enumerate(receita.atual):
            rbt12 = receita.rbt12_no_mes(i)
            resultado = self.simples.calcular_para(
                cnae=entrada.cnae,
                tipo_empresa=entrada.tipo_empresa,
                folha_pagamento_12m=entrada.folha_pagamento_12m,
                rbt12=rbt12,
                rba=faturamento_mes * 12,
            )

            evolucao.append(
                MonthlyEvolutionEntry(
                    mes=MESES[i],
                    mes_numero=i + 1,
                    faturamento_mes=faturamento_mes,
                    rbt12=rbt12,
                    anexo=resultado.anexo,
                    fator_r=resultado.fator_r,
                    faixa_faturamento=resultado.faixa_faturamento,
                    aliquota_nominal=resultado.aliquota_nominal,
                    parcela_deduzir=resultado.parcela_deduzir,
                    aliquota_efetiva=resultado.aliquota_efetiva,
                    imposto_mes=faturamento_mes * resultado.aliquota_efetiva / 100,
                )
            )

        return evolucao


def rbt12_no_mes(
    indice: int, atual: Sequence[Decimal], anterior: Sequence[Decimal]
) -> Decimal:
    """RBT12 for month ``indice`` (0 = January, 12 = after December).

    Args:
        indice: Month index, 0..12
        atual: Current-year monthly revenue (up to 12 values)
        anterior: Prior-year monthly revenue (up to 12 values)

    Returns:
        Sum of the twelve months preceding the given month
    """
    zeros = (Decimal("0"),) * 12
    receita = ReceitaBruta(
        atual=(tuple(atual) + zeros)[:12],
        anterior=(tuple(anterior) + zeros)[:12],
    )
    return receita.rbt12_no_mes(indice)


def calcular_evolucao_mensal(
    entrada: TaxCalculationInput, referencia: ReferenceData
) -> list[MonthlyEvolutionEntry]:
    """Convenience function to compute the monthly evolution."""
    return MonthlyEvolutionCalculator(referencia).calcular(entrada)
