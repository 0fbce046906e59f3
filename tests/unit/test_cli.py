"""Tests for the command-line interface."""

import json
from decimal import Decimal
from pathlib import Path

import pytest
from typer.testing import CliRunner

from pj_regime_analyzer import __version__
from pj_regime_analyzer.cli.app import app
from pj_regime_analyzer.cli.console import console, print_error, print_success
from pj_regime_analyzer.core.models.enums import TipoEmpresa
from pj_regime_analyzer.infrastructure.persistence.repository import (
    ReportRepository,
    create_session_factory,
)

runner = CliRunner()

ENTRADA = {
    "company_id": "empresa-servico",
    "tipo_empresa": "serviço",
    "cnae": "6201501",
    "receitas_atual": [40000] * 12,
    "receitas_anterior": [40000] * 12,
    "folha_pagamento_12m": 150000,
    "lucro_liquido_anual": 100000,
    "aliquota_iss": 0.03,
}


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Avoid wrapping table cells in captured output."""
    monkeypatch.setattr(console, "width", 200)


@pytest.fixture
def env(tmp_path) -> dict[str, str]:
    return {
        "PJ_DATABASE_URL": f"sqlite:///{tmp_path / 'cli.db'}",
        "PJ_LOG_LEVEL": "WARNING",
    }


@pytest.fixture
def arquivo(tmp_path) -> Path:
    path = tmp_path / "entrada.json"
    path.write_text(json.dumps(ENTRADA), encoding="utf-8")
    return path


def _json_output(output: str):
    inicio = min(i for i in (output.find("{"), output.find("[")) if i >= 0)
    return json.loads(output[inicio:])


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestCompare:
    """Tests for the compare command."""

    def test_table_output(self, arquivo, env):
        result = runner.invoke(app, ["compare", str(arquivo), "--no-save"], env=env)

        assert result.exit_code == 0, result.output
        assert "Ranking de Regimes" in result.output
        assert "Melhor regime" in result.output
        assert "Simples Nacional" in result.output
        assert "Relatório salvo" not in result.output

    def test_json_output(self, arquivo, env):
        """Test JSON output keeps Decimal precision as strings."""
        result = runner.invoke(
            app, ["compare", str(arquivo), "--no-save", "-o", "json"], env=env
        )

        assert result.exit_code == 0, result.output
        body = _json_output(result.output)
        assert body["best_regime"] == "Simples Nacional"
        assert Decimal(body["economia_melhor_regime"]) == Decimal("21624")
        assert len(body["evolucao_mensal"]) == 12

    def test_without_evolution(self, arquivo, env):
        result = runner.invoke(
            app, ["compare", str(arquivo), "--no-save", "--sem-evolucao", "-o", "json"], env=env
        )
        assert result.exit_code == 0, result.output
        assert _json_output(result.output)["evolucao_mensal"] is None

    def test_saves_report(self, tmp_path, env):
        """Test the report is stored for a registered company."""
        repository = ReportRepository(create_session_factory(env["PJ_DATABASE_URL"]))
        company = repository.create_company(
            "11.222.333/0001-81", "Software House Ltda", TipoEmpresa.SERVICO, "6201501"
        )
        path = tmp_path / "registrada.json"
        path.write_text(json.dumps({**ENTRADA, "company_id": company.id}), encoding="utf-8")

        result = runner.invoke(app, ["compare", str(path)], env=env)

        assert result.exit_code == 0, result.output
        assert "Relatório salvo" in result.output
        assert repository.list_reports(company_id=company.id).total == 1

    def test_unknown_company_not_saved(self, arquivo, env):
        """Test saving requires the company to be registered first."""
        result = runner.invoke(app, ["compare", str(arquivo), "-o", "json"], env=env)

        assert result.exit_code == 1
        assert "não encontrada" in result.output
        repository = ReportRepository(create_session_factory(env["PJ_DATABASE_URL"]))
        assert repository.list_reports(company_id="empresa-servico").total == 0

    def test_invalid_json(self, tmp_path, env):
        path = tmp_path / "ruim.json"
        path.write_text("{nao e json", encoding="utf-8")

        result = runner.invoke(app, ["compare", str(path), "--no-save"], env=env)
        assert result.exit_code == 1
        assert "JSON inválido" in result.output

    def test_invalid_field(self, tmp_path, env):
        path = tmp_path / "cnae.json"
        path.write_text(json.dumps({**ENTRADA, "cnae": "123"}), encoding="utf-8")

        result = runner.invoke(app, ["compare", str(path), "--no-save"], env=env)
        assert result.exit_code == 1
        assert "cnae" in result.output

    def test_above_ceiling(self, tmp_path, env):
        """Test calculation errors exit with status 1."""
        dados = {**ENTRADA, "receitas_atual": [500000] * 12, "receitas_anterior": [500000] * 12}
        path = tmp_path / "grande.json"
        path.write_text(json.dumps(dados), encoding="utf-8")

        result = runner.invoke(app, ["compare", str(path), "--no-save"], env=env)
        assert result.exit_code == 1
        assert "Erro" in result.output

    def test_missing_file(self, tmp_path, env):
        result = runner.invoke(app, ["compare", str(tmp_path / "nao.json")], env=env)
        assert result.exit_code != 0

    def test_pdf(self, arquivo, env, tmp_path):
        """Test PDF generation from the CLI."""
        pytest.importorskip("reportlab")
        pdf = tmp_path / "relatorio.pdf"

        result = runner.invoke(
            app, ["compare", str(arquivo), "--no-save", "--pdf", str(pdf)], env=env
        )
        assert result.exit_code == 0, result.output
        assert pdf.exists()
        assert pdf.read_bytes().startswith(b"%PDF")


class TestOtherCommands:
    """Tests for evolucao, demonstrar, cnae and faixas."""

    def test_evolucao(self, arquivo, env):
        result = runner.invoke(app, ["evolucao", str(arquivo)], env=env)
        assert result.exit_code == 0, result.output
        assert "Evolução Mensal" in result.output

    def test_evolucao_json(self, arquivo, env):
        result = runner.invoke(app, ["evolucao", str(arquivo), "-o", "json"], env=env)
        assert result.exit_code == 0, result.output
        entries = _json_output(result.output)
        assert [e["mes_numero"] for e in entries] == list(range(1, 13))
        assert entries[0]["mes"] == "Janeiro"

    def test_demonstrar(self, arquivo, env):
        result = runner.invoke(app, ["demonstrar", str(arquivo)], env=env)
        assert result.exit_code == 0, result.output
        assert "Lucro Utilizado" in result.output

    def test_cnae_search(self, env):
        result = runner.invoke(app, ["cnae", "6201"], env=env)
        assert result.exit_code == 0, result.output
        assert "6201-5/01" in result.output

    def test_cnae_no_results(self, env):
        result = runner.invoke(app, ["cnae", "xyzxyz"], env=env)
        assert result.exit_code == 0
        assert "Nenhum CNAE" in result.output

    def test_faixas(self, env):
        result = runner.invoke(app, ["faixas", "III"], env=env)
        assert result.exit_code == 0, result.output
        assert "Anexo III" in result.output
        assert "6ª Faixa" in result.output

    def test_faixas_invalid(self, env):
        result = runner.invoke(app, ["faixas", "VI"], env=env)
        assert result.exit_code == 1
        assert "Anexo inválido" in result.output

    def test_empresa(self, env):
        """Test registering a company prints its id."""
        result = runner.invoke(
            app,
            ["empresa", "11.222.333/0001-81", "Software House Ltda", "-t", "serviço", "-c", "6201501"],
            env=env,
        )
        assert result.exit_code == 0, result.output
        assert "Empresa cadastrada" in result.output

        company_id = result.output.split("Empresa cadastrada:")[1].strip()
        repository = ReportRepository(create_session_factory(env["PJ_DATABASE_URL"]))
        assert repository.company_exists(company_id) is True

    def test_empresa_invalid_cnpj(self, env):
        result = runner.invoke(
            app, ["empresa", "11222333000182", "X", "-t", "comércio", "-c", "4711302"], env=env
        )
        assert result.exit_code == 1
        assert "Erro" in result.output


class TestConsole:
    """Tests for the console print helpers."""

    def test_brackets_printed_literally(self):
        """Test messages with square brackets are not read as markup."""
        with console.capture() as capture:
            print_error("valor inválido: [1, 2] [bold]")
        assert "Erro: valor inválido: [1, 2] [bold]" in capture.get()

    def test_success_has_no_label(self):
        with console.capture() as capture:
            print_success("Relatório gerado")
        assert capture.get().strip() == "Relatório gerado"
