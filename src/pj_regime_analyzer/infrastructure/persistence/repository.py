"""Repository for companies and comparison reports."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from sqlalchemy import create_engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pj_regime_analyzer.core.models.enums import RegimeTributario, TipoEmpresa
from pj_regime_analyzer.core.models.input import TaxCalculationInput
from pj_regime_analyzer.core.models.report import Company, ReportPage, TaxCalculationReport
from pj_regime_analyzer.core.models.results import TaxCalculationComparison
from pj_regime_analyzer.infrastructure.persistence.orm import (
    Base,
    CompanyORM,
    TaxCalculationReportORM,
)
from pj_regime_analyzer.shared.exceptions import (
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from pj_regime_analyzer.shared.validators import validar_cnae, validar_cnpj

logger = logging.getLogger(__name__)

CENTAVO = Decimal("0.01")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Engine + session factory, creating the tables if needed.

    In-memory SQLite shares one connection so every session sees the same data.
    """
    kwargs: dict = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    try:
        engine = create_engine(database_url, **kwargs)
        Base.metadata.create_all(engine)
    except SQLAlchemyError as e:
        raise PersistenceError(f"Não foi possível abrir o banco {database_url}: {e}") from e

    return sessionmaker(bind=engine, expire_on_commit=False)


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENTAVO, rounding=ROUND_HALF_UP)


class ReportRepository:
    """Stores companies and comparison reports.

    Implements the comparator's report sink and company lookup. Every database
    failure surfaces as PersistenceError.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    # === Companies ===

    def create_company(
        self, cnpj: str, razao_social: str, tipo_empresa: TipoEmpresa, cnae: str
    ) -> Company:
        """Register a company.

        Raises:
            ValidationError: Invalid or already registered CNPJ, or invalid CNAE
        """
        valido, motivo = validar_cnpj(cnpj)
        if not valido:
            raise ValidationError(motivo, campo="cnpj", valor=cnpj)
        valido, motivo = validar_cnae(cnae)
        if not valido:
            raise ValidationError(motivo, campo="cnae", valor=cnae)

        digitos = "".join(c for c in cnpj if c.isdigit())
        try:
            with self.session_factory() as session, session.begin():
                existente = session.scalar(select(CompanyORM).where(CompanyORM.cnpj == digitos))
                if existente is not None:
                    raise ValidationError("CNPJ já cadastrado", campo="cnpj", valor=cnpj)
                row = CompanyORM(
                    cnpj=digitos,
                    razao_social=razao_social,
                    tipo_empresa=tipo_empresa.value,
                    cnae=cnae,
                )
                session.add(row)
                session.flush()
                company = _company_from_row(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Erro ao cadastrar empresa: {e}") from e

        logger.info("Empresa %s cadastrada (%s)", company.id, company.razao_social)
        return company

    def get_company(self, company_id: str) -> Company:
        """Raises NotFoundError if the company does not exist."""
        try:
            with self.session_factory() as session:
                row = session.get(CompanyORM, company_id)
                if row is None:
                    raise NotFoundError(f"Empresa {company_id} não encontrada")
                return _company_from_row(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Erro ao consultar empresa: {e}") from e

    def company_exists(self, company_id: str) -> bool:
        try:
            with self.session_factory() as session:
                return session.get(CompanyORM, company_id) is not None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Erro ao consultar empresa: {e}") from e

    # === Reports ===

    def save_report(
        self,
        entrada: TaxCalculationInput,
        comparison: TaxCalculationComparison,
        actor_id: Optional[str],
    ) -> str:
        """Insert one report row and return its id."""
        row = TaxCalculationReportORM(
            company_id=entrada.company_id,
            receitas_atual=[str(v) for v in entrada.receitas_atual],
            receitas_anterior=[str(v) for v in entrada.receitas_anterior],
            tipo_atividade=entrada.tipo_atividade,
            folha_pagamento_12m=_money(entrada.folha_pagamento_12m),
            lucro_liquido_anual=_money(entrada.lucro_liquido_anual),
            aliquota_iss=entrada.aliquota_iss,
            aliquota_icms=entrada.aliquota_icms,
            creditos_pis_cofins=_money(entrada.creditos_pis_cofins),
            rba=_money(comparison.rba),
            rbaa=_money(comparison.rbaa),
            rbt12=_money(comparison.rbt12),
            total_simples_nacional=_money(comparison.simples_nacional.imposto_total),
            total_lucro_presumido=_money(comparison.lucro_presumido.imposto_total),
            total_lucro_real=_money(comparison.lucro_real.imposto_total),
            best_regime=comparison.best_regime.value,
            economia_melhor_regime=_money(comparison.economia_melhor_regime),
            created_by=actor_id,
        )
        try:
            with self.session_factory() as session, session.begin():
                session.add(row)
                session.flush()
                return row.id
        except SQLAlchemyError as e:
            raise PersistenceError(f"Erro ao salvar relatório: {e}") from e

    def list_reports(
        self, company_id: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> ReportPage:
        """Reports, newest first, optionally filtered by company."""
        if page < 1:
            raise ValidationError("page deve ser maior ou igual a 1", campo="page", valor=page)
        if not 1 <= limit <= 100:
            raise ValidationError("limit deve estar entre 1 e 100", campo="limit", valor=limit)

        query = select(TaxCalculationReportORM)
        count = select(func.count()).select_from(TaxCalculationReportORM)
        if company_id is not None:
            query = query.where(TaxCalculationReportORM.company_id == company_id)
            count = count.where(TaxCalculationReportORM.company_id == company_id)

        query = (
            query.order_by(TaxCalculationReportORM.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        try:
            with self.session_factory() as session:
                total = session.scalar(count) or 0
                items = [_report_from_row(r) for r in session.scalars(query)]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Erro ao listar relatórios: {e}") from e

        return ReportPage(items=items, total=total, page=page, limit=limit)

    def get_report(self, report_id: str) -> TaxCalculationReport:
        """Raises NotFoundError if the report does not exist."""
        try:
            with self.session_factory() as session:
                row = session.get(TaxCalculationReportORM, report_id)
                if row is None:
                    raise NotFoundError(f"Relatório {report_id} não encontrado")
                return _report_from_row(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Erro ao consultar relatório: {e}") from e

    def delete_report(self, report_id: str) -> None:
        """Raises NotFoundError if the report does not exist."""
        try:
            with self.session_factory() as session, session.begin():
                row = session.get(TaxCalculationReportORM, report_id)
                if row is None:
                    raise NotFoundError(f"Relatório {report_id} não encontrado")
                session.delete(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Erro ao excluir relatório: {e}") from e

        logger.info("Relatório %s excluído", report_id)


def _company_from_row(row: CompanyORM) -> Company:
    return Company(
        id=row.id,
        cnpj=row.cnpj,
        razao_social=row.razao_social,
        tipo_empresa=TipoEmpresa(row.tipo_empresa),
        cnae=row.cnae,
        created_at=row.created_at,
    )


def _report_from_row(row: TaxCalculationReportORM) -> TaxCalculationReport:
    return TaxCalculationReport(
        id=row.id,
        company_id=row.company_id,
        receitas_atual=tuple(Decimal(v) for v in row.receitas_atual),
        receitas_anterior=tuple(Decimal(v) for v in row.receitas_anterior),
        tipo_atividade=row.tipo_atividade,
        folha_pagamento_12m=row.folha_pagamento_12m,
        lucro_liquido_anual=row.lucro_liquido_anual,
        aliquota_iss=row.aliquota_iss,
        aliquota_icms=row.aliquota_icms,
        creditos_pis_cofins=row.creditos_pis_cofins,
        rba=row.rba,
        rbaa=row.rbaa,
        rbt12=row.rbt12,
        total_simples_nacional=row.total_simples_nacional,
        total_lucro_presumido=row.total_lucro_presumido,
        total_lucro_real=row.total_lucro_real,
        best_regime=RegimeTributario(row.best_regime),
        economia_melhor_regime=row.economia_melhor_regime,
        created_by=row.created_by,
        created_at=row.created_at,
    )
