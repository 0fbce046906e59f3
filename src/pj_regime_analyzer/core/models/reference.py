"""Reference data: Simples Nacional brackets and CNAE classifications."""

from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from pj_regime_analyzer.core.models.enums import AnexoSimples, TipoEmpresa
from pj_regime_analyzer.shared.exceptions import ReferenceDataError
from pj_regime_analyzer.shared.text import normalize_text

# Maximum gap accepted between one bracket's upper bound and the next lower bound
TOLERANCIA_FAIXA = Decimal("0.01")


class BracketRow(BaseModel):
    """One revenue bracket of a Simples Nacional annex."""

    anexo: AnexoSimples
    faixa: str = Field(..., description="Label, e.g. '1ª Faixa'")
    receita_de: Decimal = Field(..., ge=0, description="Lower bound (inclusive)")
    receita_ate: Decimal = Field(..., gt=0, description="Upper bound (inclusive)")
    aliquota: Decimal = Field(..., ge=0, le=1, description="Nominal rate as a fraction")
    valor_deduzir: Decimal = Field(..., ge=0, description="Deductible amount (R$)")

    model_config = {"frozen": True}

    @property
    def aliquota_percentual(self) -> Decimal:
        """Nominal rate in percent (0.04 -> 4)."""
        return self.aliquota * 100

    def contem(self, receita: Decimal) -> bool:
        return self.receita_de <= receita <= self.receita_ate


class ActivityClassification(BaseModel):
    """CNAE subclass as seen by the tax engine."""

    codigo: str = Field(..., description="7-digit CNAE code")
    descricao: str
    anexo: AnexoSimples
    fator_r: bool = Field(
        default=False,
        description=(
            "Published Fator R flag, shown in CNAE lookups; annex routing uses tipo"
        ),
    )
    tipo: TipoEmpresa

    model_config = {"frozen": True}

    @field_validator("codigo")
    @classmethod
    def validate_codigo(cls, v: str) -> str:
        """CNAE codes are exactly 7 digits."""
        if len(v) != 7 or not v.isdigit():
            raise ValueError("CNAE deve conter exatamente 7 dígitos numéricos")
        return v

    @property
    def classe(self) -> int:
        """CNAE class number (first 4 digits)."""
        return int(self.codigo[:4])


class ReferenceData:
    """Immutable in-memory reference tables.

    Built once from already-parsed rows; every table is validated on construction
    so a half-loaded store can never be observed.
    """

    __slots__ = ("_faixas", "_cnaes", "_busca")

    def __init__(
        self,
        faixas: Iterable[BracketRow],
        classificacoes: Iterable[ActivityClassification],
    ):
        por_anexo: dict[AnexoSimples, list[BracketRow]] = {anexo: [] for anexo in AnexoSimples}
        for row in faixas:
            por_anexo[row.anexo].append(row)

        tabelas: dict[AnexoSimples, tuple[BracketRow, ...]] = {}
        for anexo, rows in por_anexo.items():
            rows.sort(key=lambda r: r.receita_de)
            _validar_tabela(anexo, rows)
            tabelas[anexo] = tuple(rows)

        cnaes: dict[str, ActivityClassification] = {}
        for item in classificacoes:
            if item.codigo in cnaes:
                raise ReferenceDataError(f"CNAE {item.codigo} duplicado nos dados de referência")
            cnaes[item.codigo] = item
        if not cnaes:
            raise ReferenceDataError("Nenhuma classificação CNAE carregada")

        self._faixas: Mapping[AnexoSimples, tuple[BracketRow, ...]] = MappingProxyType(tabelas)
        self._cnaes: Mapping[str, ActivityClassification] = MappingProxyType(cnaes)
        # Precomputed normalized descriptions for substring search
        self._busca: tuple[tuple[str, ActivityClassification], ...] = tuple(
            (normalize_text(c.descricao), c) for c in cnaes.values()
        )

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, name):
            raise AttributeError("ReferenceData is immutable")
        object.__setattr__(self, name, value)

    @property
    def classificacoes(self) -> tuple[ActivityClassification, ...]:
        return tuple(self._cnaes.values())

    def brackets_for(self, anexo: AnexoSimples) -> tuple[BracketRow, ...]:
        """Ordered brackets of an annex."""
        return self._faixas[anexo]

    def teto(self, anexo: AnexoSimples) -> Decimal:
        """Highest revenue covered by an annex."""
        return self._faixas[anexo][-1].receita_ate

    def classification_for(self, codigo: str) -> Optional[ActivityClassification]:
        """Exact lookup by 7-digit code."""
        return self._cnaes.get(codigo)

    def lookup_bracket(self, receita: Decimal, anexo: AnexoSimples) -> Optional[BracketRow]:
        """Bracket whose range contains ``receita``, or None above the ceiling.

        Brackets partition [0, teto]: the first one whose upper bound is not below
        the revenue wins, which also covers the sub-centavo gaps between
        published bounds (180.000,00 / 180.000,01).
        """
        if receita < 0:
            return None
        for row in self._faixas[anexo]:
            if receita <= row.receita_ate:
                return row
        return None

    def search(self, termo: str) -> list[ActivityClassification]:
        """Substring search by code (digits) or description (accent-insensitive)."""
        termo_limpo = (termo or "").strip().lower()
        if not termo_limpo:
            return list(self._cnaes.values())

        if termo_limpo.isdigit():
            return [c for c in self._cnaes.values() if termo_limpo in c.codigo]

        termo_normalizado = normalize_text(termo_limpo)
        return [
            c
            for descricao, c in self._busca
            if termo_normalizado in descricao or termo_limpo in c.codigo
        ]


def _validar_tabela(anexo: AnexoSimples, rows: list[BracketRow]) -> None:
    """Check that an annex table is a contiguous partition starting at zero."""
    if not rows:
        raise ReferenceDataError(f"Tabela do {anexo.label} ausente nos dados de referência")

    if rows[0].receita_de != 0:
        raise ReferenceDataError(f"{anexo.label}: primeira faixa deve começar em zero")

    anterior: Optional[BracketRow] = None
    for row in rows:
        if row.receita_ate < row.receita_de:
            raise ReferenceDataError(
                f"{anexo.label} {row.faixa}: limite superior menor que o inferior"
            )
        if anterior is not None:
            gap = row.receita_de - anterior.receita_ate
            if gap <= 0 or gap > TOLERANCIA_FAIXA:
                raise ReferenceDataError(
                    f"{anexo.label}: faixas {anterior.faixa} e {row.faixa} "
                    "não são contíguas ou se sobrepõem"
                )
        anterior = row
