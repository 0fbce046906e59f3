"""Activity classification rules for Lucro Real presumption caps.

Rules are evaluated in order and the first match wins. Each rule matches when
the CNAE class (first 4 digits of the code) falls in one of its ranges or a
keyword appears in the accent-insensitive activity description.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from pj_regime_analyzer.core.models.enums import TipoAtividadeLucroReal
from pj_regime_analyzer.core.rules.tax_constants import LIMITE_SERVICOS_GERAL
from pj_regime_analyzer.shared.text import normalize_text


@dataclass(frozen=True)
class ActivityRule:
    """One entry of the priority-ordered classification cascade."""

    tipo: TipoAtividadeLucroReal
    palavras_chave: tuple[str, ...] = field(default_factory=tuple)
    faixas_classe: tuple[tuple[int, int], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Keywords are compared against normalized descriptions
        object.__setattr__(
            self, "palavras_chave", tuple(normalize_text(p) for p in self.palavras_chave)
        )

    def aplica(self, classe: Optional[int], descricao_normalizada: str) -> bool:
        """Check whether the CNAE class or the description matches this rule."""
        if any(p in descricao_normalizada for p in self.palavras_chave):
            return True
        if classe is None:
            return False
        return any(inicio <= classe <= fim for inicio, fim in self.faixas_classe)


REGRAS_ATIVIDADE: tuple[ActivityRule, ...] = (
    ActivityRule(
        TipoAtividadeLucroReal.COMBUSTIVEIS,
        ("combustível", "combustíveis", "gás natural"),
        ((4731, 4732),),
    ),
    ActivityRule(
        TipoAtividadeLucroReal.COMERCIO_INDUSTRIA,
        ("comércio", "indústria"),
        ((1000, 3399), (4500, 4599), (4620, 4799)),
    ),
    ActivityRule(
        TipoAtividadeLucroReal.IMOBILIARIAS,
        ("imobiliária", "construção", "loteamento"),
        ((4100, 4399),),
    ),
    ActivityRule(
        TipoAtividadeLucroReal.HOSPITALARES,
        ("hospitalar", "saúde"),
        ((8601, 8699),),
    ),
    ActivityRule(
        TipoAtividadeLucroReal.TRANSPORTE_CARGAS,
        ("transporte de carga", "de carga", "frete"),
        ((4911, 4911), (4930, 4930), (5120, 5120)),
    ),
    ActivityRule(
        TipoAtividadeLucroReal.TRANSPORTE_PASSAGEIROS,
        ("transporte de passageiro", "passageiro"),
        ((4912, 4912), (4921, 4929), (5111, 5112)),
    ),
    ActivityRule(
        TipoAtividadeLucroReal.SERVICOS_PROFISSIONAIS,
        ("advogado", "advocacia", "contador", "contabilidade", "engenheiro", "consultor"),
        ((6201, 6299), (6911, 6920), (7111, 7120)),
    ),
    ActivityRule(
        TipoAtividadeLucroReal.INTERMEDIACAO,
        ("corretagem", "intermediação"),
        ((4611, 4619),),
    ),
    ActivityRule(
        TipoAtividadeLucroReal.ADMINISTRACAO_LOCACAO,
        ("locação", "administração"),
        ((6810, 6829), (7711, 7740)),
    ),
    ActivityRule(
        TipoAtividadeLucroReal.OPERACOES_CREDITO,
        ("crédito", "financeira"),
        ((6410, 6499),),
    ),
)


def classificar_atividade(
    cnae: str,
    descricao: str,
    rba: Decimal,
    regras: tuple[ActivityRule, ...] = REGRAS_ATIVIDADE,
) -> TipoAtividadeLucroReal:
    """Classify an activity for Lucro Real.

    Args:
        cnae: CNAE code (7 digits; its first 4 digits are the class number)
        descricao: Activity description ("" when the code is unknown)
        rba: Annual gross revenue, used only by the general-services fallback
        regras: Ordered rules (first match wins)

    Returns:
        Activity bucket
    """
    classe = int(cnae[:4]) if cnae[:4].isdigit() else None
    descricao_normalizada = normalize_text(descricao)

    for regra in regras:
        if regra.aplica(classe, descricao_normalizada):
            return regra.tipo

    if rba <= LIMITE_SERVICOS_GERAL:
        return TipoAtividadeLucroReal.SERVICOS_GERAL_BAIXO
    return TipoAtividadeLucroReal.SERVICOS_GERAL_ALTO
