"""Persisted companies and comparison reports."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from pj_regime_analyzer.core.models.enums import RegimeTributario, TipoEmpresa


class Company(BaseModel):
    """Company registered for comparisons."""

    id: str
    cnpj: str = Field(..., description="14 digits, no punctuation")
    razao_social: str = Field(..., min_length=1)
    tipo_empresa: TipoEmpresa
    cnae: str
    created_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @field_validator("cnpj")
    @classmethod
    def validate_cnpj(cls, v: str) -> str:
        """Keep only digits; must end up with 14."""
        digits = "".join(c for c in v if c.isdigit())
        if len(digits) != 14:
            raise ValueError("CNPJ deve conter 14 dígitos")
        return digits


class TaxCalculationReport(BaseModel):
    """Stored snapshot of one comparison: inputs plus the winner."""

    id: str
    company_id: str
    receitas_anterior: tuple[Decimal, ...] = Field(..., min_length=12, max_length=12)
    receitas_atual: tuple[Decimal, ...] = Field(..., min_length=12, max_length=12)
    tipo_atividade: Optional[str] = None
    folha_pagamento_12m: Decimal
    lucro_liquido_anual: Decimal
    aliquota_iss: Decimal
    aliquota_icms: Decimal
    creditos_pis_cofins: Decimal
    rba: Decimal
    rbaa: Decimal
    rbt12: Decimal
    total_simples_nacional: Decimal
    total_lucro_presumido: Decimal
    total_lucro_real: Decimal
    best_regime: RegimeTributario
    economia_melhor_regime: Decimal
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"frozen": True}


class ReportPage(BaseModel):
    """One page of a report listing."""

    items: list[TaxCalculationReport]
    total: int
    page: int
    limit: int

    model_config = {"frozen": True}
