"""Statutory rates and limits for corporate tax-regime comparison.

Values follow Receita Federal rules for Simples Nacional (LC 123/2006, as amended
by LC 155/2016), Lucro Presumido and Lucro Real (Lei 9.249/1995, Lei 9.430/1996,
Leis 10.637/2002 e 10.833/2003).

Simples Nacional bracket tables and CNAE classifications are not kept here: they
are versioned reference data loaded from JSON (see infrastructure.reference_data).
"""

from decimal import Decimal

MESES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]

# === IRPJ ===
ALIQUOTA_IRPJ = Decimal("0.15")  # 15% sobre o lucro
ALIQUOTA_IRPJ_ADICIONAL = Decimal("0.10")  # 10% sobre o excedente
LIMITE_ADICIONAL_MENSAL = Decimal("20000")  # R$ 20 mil/mês
LIMITE_ADICIONAL_TRIMESTRAL = LIMITE_ADICIONAL_MENSAL * 3  # R$ 60 mil
LIMITE_ADICIONAL_ANUAL = LIMITE_ADICIONAL_MENSAL * 12  # R$ 240 mil

# === CSLL ===
ALIQUOTA_CSLL = Decimal("0.09")  # 9% sobre o lucro

# === PIS / COFINS ===
PIS_CUMULATIVO = Decimal("0.0065")  # 0,65% (Lucro Presumido)
COFINS_CUMULATIVO = Decimal("0.03")  # 3% (Lucro Presumido)
PIS_NAO_CUMULATIVO = Decimal("0.0165")  # 1,65% (Lucro Real)
COFINS_NAO_CUMULATIVO = Decimal("0.076")  # 7,6% (Lucro Real)

# === ISS / ICMS bounds accepted on input ===
ALIQUOTA_ISS_MIN = Decimal("0.02")
ALIQUOTA_ISS_MAX = Decimal("0.05")
ALIQUOTA_ICMS_MIN = Decimal("0.02")
ALIQUOTA_ICMS_MAX = Decimal("0.20")

# Upper bound accepted for declared PIS/COFINS credits
CREDITOS_PIS_COFINS_MAX = Decimal("1000000")

# === Simples Nacional ===
# Fator R at or above this routes service companies to Anexo III, below to Anexo V
FATOR_R_LIMITE = Decimal("0.28")

# === Lucro Real ===
# Above this annual revenue the company is required to opt for Lucro Real
LIMITE_LUCRO_REAL_OBRIGATORIO = Decimal("78000000")  # R$ 78 milhões
# General services: presumption depends on annual revenue being above this
LIMITE_SERVICOS_GERAL = Decimal("120000")


def calcular_adicional_irpj(base: Decimal, limite: Decimal) -> Decimal:
    """IRPJ surtax: 10% over the part of ``base`` above ``limite``.

    Args:
        base: Taxable profit for the period
        limite: Surtax-free threshold for the same period

    Returns:
        Surtax amount (never negative)
    """
    excedente = base - limite
    if excedente <= 0:
        return Decimal("0")
    return excedente * ALIQUOTA_IRPJ_ADICIONAL
