"""HTTP API for regime comparisons, companies, reports and CNAE lookup.

Run with ``uvicorn pj_regime_analyzer.api.app:create_app --factory``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Header, Query, Request, Response
from fastapi.responses import JSONResponse

from pj_regime_analyzer import __version__
from pj_regime_analyzer.api.schemas import CompanyCreateRequest, FaixasResponse
from pj_regime_analyzer.core.models.input import TaxCalculationInput
from pj_regime_analyzer.core.models.reference import ActivityClassification, ReferenceData
from pj_regime_analyzer.core.models.report import Company, ReportPage, TaxCalculationReport
from pj_regime_analyzer.core.models.results import TaxCalculationComparison
from pj_regime_analyzer.core.services.cnae_search import CnaePage, CnaeSearchService
from pj_regime_analyzer.core.services.regime_comparator import RegimeComparator
from pj_regime_analyzer.infrastructure.persistence.repository import (
    ReportRepository,
    create_session_factory,
)
from pj_regime_analyzer.infrastructure.reference_data.loader import load_reference_data
from pj_regime_analyzer.shared.config import Settings
from pj_regime_analyzer.shared.exceptions import (
    CalculationError,
    NotFoundError,
    PersistenceError,
    RegimeAnalyzerError,
    ValidationError,
)
from pj_regime_analyzer.shared.log import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    referencia: Optional[ReferenceData] = None,
) -> FastAPI:
    """Build the application and its collaborators from settings.

    Reference data is loaded here, so a broken data directory fails at startup.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    referencia = referencia or load_reference_data(settings.reference_data_dir)
    repository = ReportRepository(create_session_factory(settings.database_url))
    comparator = RegimeComparator(referencia, sink=repository, companies=repository)
    cnae_service = CnaeSearchService(referencia, ttl=settings.cnae_cache_ttl)

    app = FastAPI(title="PJ Regime Analyzer", version=__version__)
    app.state.settings = settings
    app.state.repository = repository
    app.state.cnae_service = cnae_service

    _register_error_handlers(app)

    @app.post("/tax-calculations", response_model=TaxCalculationComparison)
    def create_tax_calculation(
        payload: TaxCalculationInput,
        incluir_evolucao: bool = True,
        x_actor_id: Optional[str] = Header(default=None),
    ) -> TaxCalculationComparison:
        return comparator.compare(payload, actor_id=x_actor_id, incluir_evolucao=incluir_evolucao)

    @app.get("/tax-calculations/reports", response_model=ReportPage)
    def list_reports(
        company_id: Optional[str] = None,
        page: int = Query(default=1, ge=1),
        limit: int = Query(default=20, ge=1, le=100),
    ) -> ReportPage:
        return repository.list_reports(company_id=company_id, page=page, limit=limit)

    @app.get("/tax-calculations/reports/{report_id}", response_model=TaxCalculationReport)
    def get_report(report_id: str) -> TaxCalculationReport:
        return repository.get_report(report_id)

    @app.delete("/tax-calculations/reports/{report_id}", status_code=204)
    def delete_report(report_id: str) -> Response:
        repository.delete_report(report_id)
        return Response(status_code=204)

    @app.post("/companies", response_model=Company, status_code=201)
    def create_company(payload: CompanyCreateRequest) -> Company:
        return repository.create_company(
            cnpj=payload.cnpj,
            razao_social=payload.razao_social,
            tipo_empresa=payload.tipo_empresa,
            cnae=payload.cnae,
        )

    @app.get("/companies/{company_id}", response_model=Company)
    def get_company(company_id: str) -> Company:
        return repository.get_company(company_id)

    @app.get("/cnae", response_model=CnaePage)
    def search_cnae(
        q: str = "",
        page: int = Query(default=1, ge=1),
        limit: int = Query(default=20, ge=1, le=100),
    ) -> CnaePage:
        return cnae_service.search(q, page=page, limit=limit)

    @app.get("/cnae/faixas/{anexo}", response_model=FaixasResponse)
    def get_faixas(anexo: str) -> FaixasResponse:
        faixas = cnae_service.faixas_por_anexo(anexo)
        return FaixasResponse(anexo=faixas[0].anexo, teto=faixas[-1].receita_ate, faixas=list(faixas))

    @app.get("/cnae/cache/stats")
    def get_cnae_cache_stats() -> dict[str, float]:
        return cnae_service.cache_stats()

    @app.delete("/cnae/cache", status_code=204)
    def clear_cnae_cache() -> Response:
        cnae_service.clear_cache()
        return Response(status_code=204)

    @app.get("/cnae/{codigo}", response_model=ActivityClassification)
    def get_cnae(codigo: str) -> ActivityClassification:
        return cnae_service.find_by_code(codigo)

    @app.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


def _register_error_handlers(app: FastAPI) -> None:
    """Map domain exceptions to HTTP status codes."""

    @app.exception_handler(ValidationError)
    def handle_validation(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc), "campo": exc.campo})

    @app.exception_handler(NotFoundError)
    def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(CalculationError)
    def handle_calculation(request: Request, exc: CalculationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(PersistenceError)
    def handle_persistence(request: Request, exc: PersistenceError) -> JSONResponse:
        content: dict = {"detail": str(exc)}
        # The calculation itself succeeded; hand it back with the error
        if exc.comparison is not None:
            content["comparison"] = exc.comparison.model_dump(mode="json")
        logger.error("Erro de persistência em %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content=content)

    @app.exception_handler(RegimeAnalyzerError)
    def handle_generic(request: Request, exc: RegimeAnalyzerError) -> JSONResponse:
        logger.error("Erro em %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})
