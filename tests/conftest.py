"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest

from pj_regime_analyzer.core.models.enums import TipoEmpresa
from pj_regime_analyzer.core.models.input import TaxCalculationInput
from pj_regime_analyzer.core.models.reference import ReferenceData
from pj_regime_analyzer.infrastructure.persistence.repository import (
    ReportRepository,
    create_session_factory,
)
from pj_regime_analyzer.infrastructure.reference_data.loader import load_reference_data


@pytest.fixture(scope="session")
def referencia() -> ReferenceData:
    """Packaged reference data (immutable, shared by every test)."""
    return load_reference_data()


@pytest.fixture
def entrada_servico() -> TaxCalculationInput:
    """Software house: R$ 480 mil/year, ISS 3%, high payroll."""
    return TaxCalculationInput(
        company_id="empresa-servico",
        tipo_empresa=TipoEmpresa.SERVICO,
        cnae="6201501",
        receitas_atual=[Decimal("40000")] * 12,
        receitas_anterior=[Decimal("40000")] * 12,
        folha_pagamento_12m=Decimal("150000"),
        lucro_liquido_anual=Decimal("100000"),
        aliquota_iss=Decimal("0.03"),
    )


@pytest.fixture
def entrada_comercio() -> TaxCalculationInput:
    """Supermarket: R$ 100 mil/year in both years (Jan..Out), ICMS 18%."""
    return TaxCalculationInput(
        company_id="empresa-comercio",
        tipo_empresa=TipoEmpresa.COMERCIO,
        cnae="4711302",
        receitas_atual=[Decimal("10000")] * 10,
        receitas_anterior=[Decimal("10000")] * 10,
        lucro_liquido_anual=Decimal("10000"),
        aliquota_icms=Decimal("0.18"),
    )


@pytest.fixture
def session_factory():
    """In-memory SQLite session factory."""
    return create_session_factory("sqlite://")


@pytest.fixture
def repository(session_factory) -> ReportRepository:
    """Repository over a fresh in-memory database."""
    return ReportRepository(session_factory)
