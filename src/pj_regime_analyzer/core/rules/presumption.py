"""Presumption percentages used by Lucro Presumido and Lucro Real."""

from decimal import Decimal

from pj_regime_analyzer.core.models.enums import TipoAtividadeLucroReal, TipoEmpresa

# === Lucro Presumido presumption by company type ===
PRESUNCAO_LUCRO: dict[TipoEmpresa, Decimal] = {
    TipoEmpresa.COMERCIO: Decimal("0.08"),  # 8%
    TipoEmpresa.INDUSTRIA: Decimal("0.08"),  # 8%
    TipoEmpresa.SERVICO: Decimal("0.32"),  # 32% (serviços em geral)
}

# === Lucro Real: presumption caps (IRPJ, CSLL) per activity bucket ===
PRESUNCAO_LUCRO_REAL: dict[TipoAtividadeLucroReal, tuple[Decimal, Decimal]] = {
    TipoAtividadeLucroReal.COMBUSTIVEIS: (Decimal("0.016"), Decimal("0.12")),
    TipoAtividadeLucroReal.COMERCIO_INDUSTRIA: (Decimal("0.08"), Decimal("0.12")),
    TipoAtividadeLucroReal.IMOBILIARIAS: (Decimal("0.08"), Decimal("0.12")),
    TipoAtividadeLucroReal.HOSPITALARES: (Decimal("0.08"), Decimal("0.12")),
    TipoAtividadeLucroReal.TRANSPORTE_CARGAS: (Decimal("0.08"), Decimal("0.12")),
    TipoAtividadeLucroReal.TRANSPORTE_PASSAGEIROS: (Decimal("0.16"), Decimal("0.12")),
    TipoAtividadeLucroReal.SERVICOS_PROFISSIONAIS: (Decimal("0.32"), Decimal("0.32")),
    TipoAtividadeLucroReal.INTERMEDIACAO: (Decimal("0.32"), Decimal("0.32")),
    TipoAtividadeLucroReal.ADMINISTRACAO_LOCACAO: (Decimal("0.32"), Decimal("0.32")),
    TipoAtividadeLucroReal.OPERACOES_CREDITO: (Decimal("0.384"), Decimal("0.384")),
    TipoAtividadeLucroReal.SERVICOS_GERAL_BAIXO: (Decimal("0.16"), Decimal("0.32")),
    TipoAtividadeLucroReal.SERVICOS_GERAL_ALTO: (Decimal("0.32"), Decimal("0.32")),
}
