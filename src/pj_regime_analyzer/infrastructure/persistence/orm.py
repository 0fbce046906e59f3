"""SQLAlchemy tables for companies and comparison reports."""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Money is stored with centavo precision, rates with six decimal places
Money = Numeric(18, 2)
Rate = Numeric(10, 6)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class CompanyORM(Base):
    """Registered company."""

    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    cnpj: Mapped[str] = mapped_column(String(14), unique=True, nullable=False)
    razao_social: Mapped[str] = mapped_column(String(255), nullable=False)
    tipo_empresa: Mapped[str] = mapped_column(String(20), nullable=False)
    cnae: Mapped[str] = mapped_column(String(7), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    reports: Mapped[list["TaxCalculationReportORM"]] = relationship(
        back_populates="company", cascade="all, delete-orphan"
    )


class TaxCalculationReportORM(Base):
    """One comparison request: the 24 monthly inputs, totals and the winner.

    Monthly figures are kept as JSON lists of decimal strings (Janeiro..Dezembro).
    Rows are never updated after insert.
    """

    __tablename__ = "tax_calculation_reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    company_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("companies.id"), nullable=False, index=True
    )
    receitas_atual: Mapped[list] = mapped_column(JSON, nullable=False)
    receitas_anterior: Mapped[list] = mapped_column(JSON, nullable=False)
    tipo_atividade: Mapped[Optional[str]] = mapped_column(String(255))

    folha_pagamento_12m: Mapped[Decimal] = mapped_column(Money, nullable=False)
    lucro_liquido_anual: Mapped[Decimal] = mapped_column(Money, nullable=False)
    aliquota_iss: Mapped[Decimal] = mapped_column(Rate, nullable=False)
    aliquota_icms: Mapped[Decimal] = mapped_column(Rate, nullable=False)
    creditos_pis_cofins: Mapped[Decimal] = mapped_column(Money, nullable=False)

    rba: Mapped[Decimal] = mapped_column(Money, nullable=False)
    rbaa: Mapped[Decimal] = mapped_column(Money, nullable=False)
    rbt12: Mapped[Decimal] = mapped_column(Money, nullable=False)
    total_simples_nacional: Mapped[Decimal] = mapped_column(Money, nullable=False)
    total_lucro_presumido: Mapped[Decimal] = mapped_column(Money, nullable=False)
    total_lucro_real: Mapped[Decimal] = mapped_column(Money, nullable=False)
    best_regime: Mapped[str] = mapped_column(String(30), nullable=False)
    economia_melhor_regime: Mapped[Decimal] = mapped_column(Money, nullable=False)

    created_by: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, index=True
    )

    company: Mapped[CompanyORM] = relationship(back_populates="reports")
