"""Regime calculation results."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from pj_regime_analyzer.core.models.enums import (
    AnexoSimples,
    RegimeTributario,
    TipoAtividadeLucroReal,
)


class SimplesNacionalResult(BaseModel):
    """Simples Nacional liability for one revenue scenario."""

    anexo: AnexoSimples
    fator_r: Optional[Decimal] = Field(
        default=None, description="Payroll / RBT12, only for service companies"
    )
    rbt12: Decimal = Field(..., description="Revenue used for bracket placement")
    rba: Decimal = Field(..., description="Revenue the effective rate applies to")
    faixa_faturamento: str = Field(..., description="Bracket label")
    aliquota_nominal: Decimal = Field(..., description="Nominal rate (%)")
    parcela_deduzir: Decimal = Field(..., description="Deductible amount (R$)")
    aliquota_efetiva: Decimal = Field(..., description="Effective rate (%)")
    imposto_total: Decimal

    model_config = {"frozen": True}


class LucroPresumidoResult(BaseModel):
    """Lucro Presumido liability."""

    base_presuncao: Decimal = Field(..., description="Revenue the presumption applies to")
    percentual_presuncao: Decimal = Field(..., description="Presumption (%)")
    lucro_presumido: Decimal
    irpj: Decimal
    adicional_irpj: Decimal
    csll: Decimal
    pis: Decimal
    cofins: Decimal
    iss: Decimal
    icms: Decimal
    imposto_total: Decimal
    aliquota_efetiva: Decimal = Field(..., description="Total / RBA (%)")

    model_config = {"frozen": True}


class LucroRealResult(BaseModel):
    """Lucro Real liability."""

    tipo_atividade: TipoAtividadeLucroReal
    presuncao_irpj: Decimal = Field(..., description="IRPJ presumption cap (%)")
    presuncao_csll: Decimal = Field(..., description="CSLL presumption cap (%)")
    lucro_liquido: Decimal = Field(..., description="IRPJ base: min(declared, cap)")
    base_csll: Decimal = Field(..., description="CSLL base: min(declared, cap)")
    irpj: Decimal
    adicional_irpj: Decimal
    csll: Decimal
    pis: Decimal
    cofins: Decimal
    creditos_pis_cofins: Decimal
    pis_cofins_liquido: Decimal
    iss: Decimal
    imposto_total: Decimal
    aliquota_efetiva: Decimal = Field(..., description="Total / RBA (%)")

    model_config = {"frozen": True}


class LucroRealDemonstracao(BaseModel):
    """Step-by-step view of how the Lucro Real base was chosen."""

    tipo_atividade: TipoAtividadeLucroReal
    presuncao_irpj: Decimal
    presuncao_csll: Decimal
    lucro_presumido_irpj: Decimal
    lucro_presumido_csll: Decimal
    lucro_declarado: Decimal
    lucro_utilizado: Decimal

    model_config = {"frozen": True}

    @property
    def detalhes(self) -> str:
        """Human-readable summary."""
        return (
            f"Tipo de Atividade: {self.tipo_atividade.value}\n"
            f"Presunção IRPJ: {self.presuncao_irpj:.1f}%\n"
            f"Presunção CSLL: {self.presuncao_csll:.1f}%\n"
            f"Lucro Presumido IRPJ: R$ {self.lucro_presumido_irpj:,.2f}\n"
            f"Lucro Presumido CSLL: R$ {self.lucro_presumido_csll:,.2f}\n"
            f"Lucro Real: R$ {self.lucro_declarado:,.2f}\n"
            f"Lucro Utilizado: R$ {self.lucro_utilizado:,.2f}"
        )


class MonthlyEvolutionEntry(BaseModel):
    """Simples Nacional replayed for one month of the current year."""

    mes: str
    mes_numero: int = Field(..., ge=1, le=12)
    faturamento_mes: Decimal
    rbt12: Decimal
    anexo: AnexoSimples
    fator_r: Optional[Decimal] = None
    faixa_faturamento: str
    aliquota_nominal: Decimal
    parcela_deduzir: Decimal
    aliquota_efetiva: Decimal
    imposto_mes: Decimal

    model_config = {"frozen": True}


class RegimeTotal(BaseModel):
    """One line of the regime ranking."""

    regime: RegimeTributario
    imposto_total: Decimal
    aliquota_efetiva: Decimal

    model_config = {"frozen": True}


class TaxCalculationComparison(BaseModel):
    """All three regimes side by side, with the cheapest one highlighted."""

    company_id: str
    rba: Decimal
    rbaa: Decimal
    rbt12: Decimal
    simples_nacional: SimplesNacionalResult
    lucro_presumido: LucroPresumidoResult
    lucro_real: LucroRealResult
    ranking: list[RegimeTotal] = Field(..., description="Ascending by total tax")
    best_regime: RegimeTributario
    economia_melhor_regime: Decimal = Field(
        ..., ge=0, description="Second-lowest total minus lowest total"
    )
    report_id: Optional[str] = Field(default=None, description="Persisted report id")
    evolucao_mensal: Optional[list[MonthlyEvolutionEntry]] = None

    model_config = {"frozen": True}

    def resultado(self, regime: RegimeTributario) -> BaseModel:
        """Result of one regime."""
        if regime is RegimeTributario.SIMPLES_NACIONAL:
            return self.simples_nacional
        if regime is RegimeTributario.LUCRO_PRESUMIDO:
            return self.lucro_presumido
        return self.lucro_real
