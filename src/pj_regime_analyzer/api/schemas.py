"""Request/response bodies that are not domain models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from pj_regime_analyzer.core.models.enums import AnexoSimples, TipoEmpresa
from pj_regime_analyzer.core.models.reference import BracketRow


class CompanyCreateRequest(BaseModel):
    cnpj: str
    razao_social: str = Field(..., min_length=1)
    tipo_empresa: TipoEmpresa
    cnae: str


class FaixasResponse(BaseModel):
    anexo: AnexoSimples
    teto: Decimal
    faixas: list[BracketRow]

