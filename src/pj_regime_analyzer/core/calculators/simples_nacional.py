"""Simples Nacional calculator.

Places the trailing twelve-month revenue (RBT12) in a bracket of the company's
annex and applies the resulting effective rate to the annual revenue (RBA).
"""

import logging
from decimal import Decimal
from typing import Optional

from pj_regime_analyzer.core.models.enums import AnexoSimples, TipoEmpresa
from pj_regime_analyzer.core.models.input import TaxCalculationInput
from pj_regime_analyzer.core.models.reference import BracketRow, ReferenceData
from pj_regime_analyzer.core.models.results import SimplesNacionalResult
from pj_regime_analyzer.core.rules.tax_constants import FATOR_R_LIMITE
from pj_regime_analyzer.shared.exceptions import BracketNotFoundError
from pj_regime_analyzer.shared.formatters import format_currency

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class SimplesNacionalCalculator:
    """Computes the Simples Nacional liability against injected reference data."""

    # Annex used when the CNAE is not in the reference data
    ANEXO_POR_TIPO: dict[TipoEmpresa, AnexoSimples] = {
        TipoEmpresa.COMERCIO: AnexoSimples.ANEXO_I,
        TipoEmpresa.INDUSTRIA: AnexoSimples.ANEXO_II,
        TipoEmpresa.SERVICO: AnexoSimples.ANEXO_III,
    }

    def __init__(self, referencia: ReferenceData):
        self.referencia = referencia

    def calcular(self, entrada: TaxCalculationInput) -> SimplesNacionalResult:
        """Annual Simples Nacional liability for a calculation input."""
        return self.calcular_para(
            cnae=entrada.cnae,
            tipo_empresa=entrada.tipo_empresa,
            folha_pagamento_12m=entrada.folha_pagamento_12m,
            rbt12=entrada.rbt12,
            rba=entrada.rba,
        )

    def calcular_para(
        self,
        cnae: str,
        tipo_empresa: TipoEmpresa,
        folha_pagamento_12m: Decimal,
        rbt12: Decimal,
        rba: Decimal,
    ) -> SimplesNacionalResult:
        """Liability for explicit RBT12/RBA figures.

        Used directly by the monthly evolution, which replays the calculation
        with a different RBT12 and an annualized monthly revenue.

        Raises:
            BracketNotFoundError: If RBT12 is above the annex ceiling
        """
        anexo, fator_r = self.resolver_anexo(cnae, tipo_empresa, folha_pagamento_12m, rbt12)

        faixa = self.referencia.lookup_bracket(rbt12, anexo)
        if faixa is None:
            raise BracketNotFoundError(
                f"Faturamento RBT12 de {format_currency(rbt12)} não se enquadra "
                f"em nenhuma faixa do {anexo.label} "
                f"(teto {format_currency(self.referencia.teto(anexo))})",
                anexo=anexo,
                rbt12=rbt12,
            )

        efetiva = self.aliquota_efetiva(faixa, rbt12)
        logger.debug("Simples: %s %s rbt12=%s efetiva=%s", anexo.label, faixa.faixa, rbt12, efetiva)

        return SimplesNacionalResult(
            anexo=anexo,
            fator_r=fator_r,
            rbt12=rbt12,
            rba=rba,
            faixa_faturamento=faixa.faixa,
            aliquota_nominal=faixa.aliquota_percentual,
            parcela_deduzir=faixa.valor_deduzir,
            aliquota_efetiva=efetiva * 100,
            imposto_total=rba * efetiva,
        )

    def resolver_anexo(
        self,
        cnae: str,
        tipo_empresa: TipoEmpresa,
        folha_pagamento_12m: Decimal,
        rbt12: Decimal,
    ) -> tuple[AnexoSimples, Optional[Decimal]]:
        """Annex for a company, plus the Fator R when it was computed.

        Known CNAEs use their own annex and type; unknown ones fall back to the
        declared company type. Service companies are then routed by Fator R.
        """
        classificacao = self.referencia.classification_for(cnae)
        if classificacao is not None:
            anexo = classificacao.anexo
            tipo = classificacao.tipo
        else:
            logger.debug("CNAE %s não encontrado, usando anexo padrão de %s", cnae, tipo_empresa.value)
            anexo = self.ANEXO_POR_TIPO[tipo_empresa]
            tipo = tipo_empresa

        if tipo is not TipoEmpresa.SERVICO:
            return anexo, None

        fator_r = calcular_fator_r(folha_pagamento_12m, rbt12)
        if fator_r >= FATOR_R_LIMITE:
            return AnexoSimples.ANEXO_III, fator_r
        return AnexoSimples.ANEXO_V, fator_r

    @staticmethod
    def aliquota_efetiva(faixa: BracketRow, rbt12: Decimal) -> Decimal:
        """((RBT12 x nominal) - deduction) / RBT12, as a fraction.

        With no revenue there is nothing to deduct from, so the nominal rate
        of the first bracket applies.
        """
        if rbt12 == 0:
            return faixa.aliquota
        return (rbt12 * faixa.aliquota - faixa.valor_deduzir) / rbt12


def calcular_fator_r(folha_pagamento_12m: Decimal, rbt12: Decimal) -> Decimal:
    """Payroll over trailing revenue; zero when there is no revenue."""
    if rbt12 <= 0:
        return ZERO
    return folha_pagamento_12m / rbt12


def calcular_simples_nacional(
    entrada: TaxCalculationInput, referencia: ReferenceData
) -> SimplesNacionalResult:
    """Convenience function to compute Simples Nacional.

    Args:
        entrada: Calculation input
        referencia: Loaded reference data

    Returns:
        SimplesNacionalResult
    """
    return SimplesNacionalCalculator(referencia).calcular(entrada)
