"""Enumerations for the tax-regime domain."""

from enum import Enum


class TipoEmpresa(str, Enum):
    """Coarse company type."""

    COMERCIO = "comércio"
    SERVICO = "serviço"
    INDUSTRIA = "indústria"


class AnexoSimples(str, Enum):
    """Simples Nacional annex (bracket family)."""

    ANEXO_I = "I"
    ANEXO_II = "II"
    ANEXO_III = "III"
    ANEXO_IV = "IV"
    ANEXO_V = "V"

    @property
    def label(self) -> str:
        return f"Anexo {self.value}"


class RegimeTributario(str, Enum):
    """Tax regimes compared by the engine (order is the tie-break order)."""

    SIMPLES_NACIONAL = "Simples Nacional"
    LUCRO_PRESUMIDO = "Lucro Presumido"
    LUCRO_REAL = "Lucro Real"


class TipoAtividadeLucroReal(str, Enum):
    """Activity buckets with their own IRPJ/CSLL presumption percentages."""

    COMBUSTIVEIS = "combustiveis"
    COMERCIO_INDUSTRIA = "comercio_industria"
    IMOBILIARIAS = "imobiliarias"
    HOSPITALARES = "hospitalares"
    TRANSPORTE_CARGAS = "transporte_cargas"
    TRANSPORTE_PASSAGEIROS = "transporte_passageiros"
    SERVICOS_PROFISSIONAIS = "servicos_profissionais"
    INTERMEDIACAO = "intermediacao"
    ADMINISTRACAO_LOCACAO = "administracao_locacao"
    OPERACOES_CREDITO = "operacoes_credito"
    SERVICOS_GERAL_BAIXO = "servicos_geral_baixo"  # RBA <= R$ 120 mil
    SERVICOS_GERAL_ALTO = "servicos_geral_alto"  # RBA > R$ 120 mil
