"""Statutory rates and classification rules."""

from pj_regime_analyzer.core.rules.activity_rules import (
    REGRAS_ATIVIDADE,
    ActivityRule,
    classificar_atividade,
)
from pj_regime_analyzer.core.rules.tax_constants import (
    ALIQUOTA_CSLL,
    ALIQUOTA_IRPJ,
    ALIQUOTA_IRPJ_ADICIONAL,
    COFINS_CUMULATIVO,
    COFINS_NAO_CUMULATIVO,
    FATOR_R_LIMITE,
    LIMITE_ADICIONAL_ANUAL,
    LIMITE_ADICIONAL_TRIMESTRAL,
    LIMITE_LUCRO_REAL_OBRIGATORIO,
    LIMITE_SERVICOS_GERAL,
    MESES,
    PIS_CUMULATIVO,
    PIS_NAO_CUMULATIVO,
    calcular_adicional_irpj,
)
from pj_regime_analyzer.core.rules.presumption import PRESUNCAO_LUCRO, PRESUNCAO_LUCRO_REAL

__all__ = [
    "ALIQUOTA_CSLL",
    "ALIQUOTA_IRPJ",
    "ALIQUOTA_IRPJ_ADICIONAL",
    "COFINS_CUMULATIVO",
    "COFINS_NAO_CUMULATIVO",
    "FATOR_R_LIMITE",
    "LIMITE_ADICIONAL_ANUAL",
    "LIMITE_ADICIONAL_TRIMESTRAL",
    "LIMITE_LUCRO_REAL_OBRIGATORIO",
    "LIMITE_SERVICOS_GERAL",
    "MESES",
    "PIS_CUMULATIVO",
    "PIS_NAO_CUMULATIVO",
    "PRESUNCAO_LUCRO",
    "PRESUNCAO_LUCRO_REAL",
    "REGRAS_ATIVIDADE",
    "ActivityRule",
    "classificar_atividade",
    "calcular_adicional_irpj",
]
