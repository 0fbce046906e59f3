"""Per-request calculation input."""

from decimal import Decimal
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from pj_regime_analyzer.core.models.enums import TipoEmpresa
from pj_regime_analyzer.core.models.revenue import ReceitaBruta
from pj_regime_analyzer.core.rules.tax_constants import (
    ALIQUOTA_ICMS_MAX,
    ALIQUOTA_ICMS_MIN,
    ALIQUOTA_ISS_MAX,
    ALIQUOTA_ISS_MIN,
    CREDITOS_PIS_COFINS_MAX,
    MESES,
)
from pj_regime_analyzer.shared.exceptions import ValidationError

ZERO = Decimal("0")


class TaxCalculationInput(BaseModel):
    """Company data for one regime comparison.

    Monthly series are ordered January..December; missing months count as zero.
    """

    company_id: str = Field(..., min_length=1, description="Company identifier")
    tipo_empresa: TipoEmpresa = Field(..., description="Declared company type")
    cnae: str = Field(..., description="7-digit CNAE code")

    receitas_atual: tuple[Decimal, ...] = Field(
        default=(), validate_default=True, description="Current-year monthly revenue (Jan..Dez)"
    )
    receitas_anterior: tuple[Decimal, ...] = Field(
        default=(), validate_default=True, description="Prior-year monthly revenue (Jan..Dez)"
    )

    folha_pagamento_12m: Decimal = Field(
        default=ZERO, ge=0, description="Payroll over the trailing 12 months"
    )
    lucro_liquido_anual: Decimal = Field(default=ZERO, ge=0, description="Declared net profit")
    aliquota_iss: Decimal = Field(default=ZERO, description="Municipal service tax (fraction)")
    aliquota_icms: Decimal = Field(default=ZERO, description="State goods tax (fraction)")
    creditos_pis_cofins: Decimal = Field(
        default=ZERO, ge=0, le=CREDITOS_PIS_COFINS_MAX, description="Non-cumulative input credits"
    )
    tipo_atividade: Optional[str] = Field(default=None, description="Free-text activity label")

    model_config = {"frozen": True}

    @field_validator("cnae")
    @classmethod
    def validate_cnae(cls, v: str) -> str:
        """CNAE must be exactly 7 digits."""
        if len(v) != 7 or not v.isdigit():
            raise ValueError("CNAE deve conter exatamente 7 dígitos numéricos")
        return v

    @field_validator("receitas_atual", "receitas_anterior")
    @classmethod
    def validate_meses(cls, v: tuple[Decimal, ...]) -> tuple[Decimal, ...]:
        """At most 12 non-negative figures, padded with zeros to 12."""
        if len(v) > 12:
            raise ValueError("Informe no máximo 12 meses")
        for i, valor in enumerate(v):
            if valor < 0:
                raise ValueError(f"{MESES[i]} não pode ser negativo")
        return tuple(v) + (ZERO,) * (12 - len(v))

    @field_validator("aliquota_iss")
    @classmethod
    def validate_iss(cls, v: Decimal) -> Decimal:
        """ISS must be between 2% and 5% when informed."""
        if v != 0 and not ALIQUOTA_ISS_MIN <= v <= ALIQUOTA_ISS_MAX:
            raise ValueError("Alíquota de ISS deve estar entre 2% e 5%")
        return v

    @field_validator("aliquota_icms")
    @classmethod
    def validate_icms(cls, v: Decimal) -> Decimal:
        """ICMS must be between 2% and 20% when informed."""
        if v != 0 and not ALIQUOTA_ICMS_MIN <= v <= ALIQUOTA_ICMS_MAX:
            raise ValueError("Alíquota de ICMS deve estar entre 2% e 20%")
        return v

    @model_validator(mode="after")
    def validate_lucro(self) -> "TaxCalculationInput":
        """Declared net profit cannot exceed annual revenue."""
        if self.lucro_liquido_anual > self.rba:
            raise ValueError("Lucro líquido não pode ser maior que a receita bruta anual")
        return self

    @property
    def receita(self) -> ReceitaBruta:
        """Aggregated view of the 24 monthly figures."""
        return ReceitaBruta(atual=self.receitas_atual, anterior=self.receitas_anterior)

    @computed_field
    @property
    def rba(self) -> Decimal:
        """Current-year gross revenue."""
        return self.receita.rba

    @computed_field
    @property
    def rbaa(self) -> Decimal:
        """Prior-year gross revenue."""
        return self.receita.rbaa

    @computed_field
    @property
    def rbt12(self) -> Decimal:
        """Trailing twelve-month revenue."""
        return self.receita.rbt12


def parse_input(data: Mapping[str, Any]) -> TaxCalculationInput:
    """Build a TaxCalculationInput, reporting the first invalid field.

    Raises:
        ValidationError: With ``campo`` set to the offending field (None for
            cross-field rules such as profit above revenue)
    """
    try:
        return TaxCalculationInput.model_validate(data)
    except PydanticValidationError as e:
        erro = e.errors()[0]
        campo = ".".join(str(p) for p in erro["loc"]) or None
        mensagem = erro["msg"].removeprefix("Value error, ")
        raise ValidationError(
            f"{campo}: {mensagem}" if campo else mensagem,
            campo=campo,
            valor=erro.get("input"),
        ) from e
