"""Main Typer application for PJ Regime Analyzer."""

import json
from decimal import Decimal
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from pj_regime_analyzer import __version__
from pj_regime_analyzer.cli.console import (
    console,
    log_console,
    print_error,
    print_success,
    print_warning,
)
from pj_regime_analyzer.core.calculators.lucro_real import (
    LucroRealCalculator,
    obrigatorio_lucro_real,
)
from pj_regime_analyzer.core.calculators.monthly_evolution import MonthlyEvolutionCalculator
from pj_regime_analyzer.core.models.enums import TipoEmpresa
from pj_regime_analyzer.core.models.input import TaxCalculationInput, parse_input
from pj_regime_analyzer.core.models.reference import ReferenceData
from pj_regime_analyzer.core.models.results import (
    MonthlyEvolutionEntry,
    TaxCalculationComparison,
)
from pj_regime_analyzer.core.services.cnae_search import CnaeSearchService
from pj_regime_analyzer.core.services.regime_comparator import RegimeComparator, economia_entre
from pj_regime_analyzer.infrastructure.reference_data.loader import load_reference_data
from pj_regime_analyzer.shared.config import Settings
from pj_regime_analyzer.shared.exceptions import (
    PersistenceError,
    RegimeAnalyzerError,
    ValidationError,
)
from pj_regime_analyzer.shared.formatters import format_currency, format_percentage, format_rate
from pj_regime_analyzer.shared.log import configure_logging
from pj_regime_analyzer.shared.validators import format_cnae

app = typer.Typer(
    name="pj-regime-analyzer",
    help="Comparador de regimes tributários (Simples Nacional, Lucro Presumido, Lucro Real)",
    add_completion=True,
    no_args_is_help=True,
)

ArquivoEntrada = Annotated[
    Path,
    typer.Argument(
        help="Arquivo JSON com os dados da empresa",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"PJ Regime Analyzer v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Mostra a versão e sai",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """PJ Regime Analyzer - qual regime tributário custa menos para a sua empresa."""
    pass


def _load_settings() -> Settings:
    settings = Settings.from_env()
    configure_logging(settings.log_level, console=log_console)
    return settings


def _load_referencia(settings: Settings) -> ReferenceData:
    return load_reference_data(settings.reference_data_dir)


def _read_input(arquivo: Path) -> TaxCalculationInput:
    """Parse a calculation input from a JSON file."""
    try:
        with open(arquivo, encoding="utf-8") as f:
            data = json.load(f, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise ValidationError(f"JSON inválido em {arquivo.name}: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError(f"{arquivo.name} deve conter um objeto JSON")
    return parse_input(data)


@app.command()
def compare(
    arquivo: ArquivoEntrada,
    pdf: Annotated[
        Optional[Path],
        typer.Option("--pdf", help="Gera relatório PDF neste caminho"),
    ] = None,
    no_save: Annotated[
        bool,
        typer.Option("--no-save", help="Não grava o relatório no banco de dados"),
    ] = False,
    sem_evolucao: Annotated[
        bool,
        typer.Option("--sem-evolucao", help="Omite a evolução mensal do Simples"),
    ] = False,
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Formato de saída: table, json",
        ),
    ] = "table",
) -> None:
    """Compara os três regimes e indica o mais econômico."""
    try:
        settings = _load_settings()
        referencia = _load_referencia(settings)
        entrada = _read_input(arquivo)

        sink = None
        if not no_save:
            from pj_regime_analyzer.infrastructure.persistence import (
                ReportRepository,
                create_session_factory,
            )

            sink = ReportRepository(create_session_factory(settings.database_url))

        # Reports are only stored for registered companies
        comparator = RegimeComparator(referencia, sink=sink, companies=sink)
        try:
            comparison = comparator.compare(entrada, incluir_evolucao=not sem_evolucao)
        except PersistenceError as e:
            if e.comparison is None:
                raise
            print_warning(f"Relatório não foi salvo: {e}")
            comparison = e.comparison

        if output == "json":
            print(comparison.model_dump_json(indent=2))
        else:
            _print_comparison(comparison)
            if obrigatorio_lucro_real(entrada.rba):
                print_warning("Receita acima de R$ 78 milhões: Lucro Real é obrigatório.")

        if pdf is not None:
            from pj_regime_analyzer.infrastructure.reports import generate_pdf_report

            generate_pdf_report(comparison, pdf)
            print_success(f"Relatório gerado: {pdf}")

    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def evolucao(
    arquivo: ArquivoEntrada,
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Formato de saída: table, json",
        ),
    ] = "table",
) -> None:
    """Mostra RBT12, faixa e alíquota efetiva do Simples mês a mês."""
    try:
        settings = _load_settings()
        entrada = _read_input(arquivo)
        entries = MonthlyEvolutionCalculator(_load_referencia(settings)).calcular(entrada)
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if output == "json":
        print(json.dumps([entry.model_dump(mode="json") for entry in entries], indent=2))
        return
    _print_evolution(entries)


@app.command()
def demonstrar(arquivo: ArquivoEntrada) -> None:
    """Demonstra a base de cálculo usada no Lucro Real."""
    try:
        settings = _load_settings()
        entrada = _read_input(arquivo)
        demo = LucroRealCalculator(_load_referencia(settings)).demonstrar_calculo(entrada)
        console.print(Panel(demo.detalhes, title="Lucro Real", border_style="blue"))
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def empresa(
    cnpj: Annotated[str, typer.Argument(help="CNPJ (com ou sem formatação)")],
    razao_social: Annotated[str, typer.Argument(help="Razão social")],
    tipo: Annotated[
        TipoEmpresa,
        typer.Option("--tipo", "-t", help="Tipo de empresa"),
    ],
    cnae_codigo: Annotated[
        str,
        typer.Option("--cnae", "-c", help="CNAE principal (7 dígitos)"),
    ],
) -> None:
    """Cadastra uma empresa e mostra o id usado em company_id."""
    try:
        settings = _load_settings()
        from pj_regime_analyzer.infrastructure.persistence import (
            ReportRepository,
            create_session_factory,
        )

        repository = ReportRepository(create_session_factory(settings.database_url))
        company = repository.create_company(cnpj, razao_social, tipo, cnae_codigo)
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Empresa cadastrada: {company.id}")


@app.command()
def cnae(
    termo: Annotated[
        str,
        typer.Argument(help="Código ou parte da descrição (vazio lista todos)"),
    ] = "",
    page: Annotated[int, typer.Option("--page", "-p", min=1, help="Página")] = 1,
    limit: Annotated[int, typer.Option("--limit", "-l", min=1, max=100, help="Itens por página")] = 20,
) -> None:
    """Busca CNAEs por código ou descrição."""
    try:
        settings = _load_settings()
        service = CnaeSearchService(_load_referencia(settings), ttl=settings.cnae_cache_ttl)
        resultado = service.search(termo, page=page, limit=limit)
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not resultado.items:
        console.print("[muted]Nenhum CNAE encontrado.[/muted]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("CNAE", style="highlight", no_wrap=True)
    table.add_column("Descrição", overflow="fold")
    table.add_column("Anexo", justify="center")
    table.add_column("Fator R", justify="center")
    table.add_column("Tipo")

    for item in resultado.items:
        table.add_row(
            format_cnae(item.codigo),
            item.descricao,
            item.anexo.value,
            "Sim" if item.fator_r else "Não",
            item.tipo.value,
        )

    console.print(table)
    console.print(
        f"[muted]Página {resultado.page} de {resultado.total_pages} "
        f"({resultado.total} resultados)[/muted]"
    )


@app.command()
def faixas(
    anexo: Annotated[str, typer.Argument(help="Anexo do Simples (I a V)")],
) -> None:
    """Mostra a tabela de faixas de um anexo do Simples Nacional."""
    try:
        settings = _load_settings()
        service = CnaeSearchService(_load_referencia(settings), ttl=settings.cnae_cache_ttl)
        linhas = service.faixas_por_anexo(anexo)
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    table = Table(title=linhas[0].anexo.label, show_header=True, header_style="bold")
    table.add_column("Faixa")
    table.add_column("Receita de", justify="right")
    table.add_column("Receita até", justify="right")
    table.add_column("Alíquota", justify="right")
    table.add_column("Valor a deduzir", justify="right")

    for linha in linhas:
        table.add_row(
            linha.faixa,
            format_currency(linha.receita_de),
            format_currency(linha.receita_ate),
            format_percentage(linha.aliquota_percentual),
            format_currency(linha.valor_deduzir),
        )

    console.print(table)


def _print_comparison(comparison: TaxCalculationComparison) -> None:
    """Render the comparison as Rich panels and tables."""
    console.print()
    console.print(
        Panel.fit(
            f"[header]Empresa:[/header] {comparison.company_id}\n"
            f"[header]RBA:[/header] {format_currency(comparison.rba)}\n"
            f"[header]RBAA:[/header] {format_currency(comparison.rbaa)}\n"
            f"[header]RBT12:[/header] {format_currency(comparison.rbt12)}",
            title="Dados do Cálculo",
            border_style="blue",
        )
    )

    table = Table(title="Ranking de Regimes", show_header=True, header_style="bold")
    table.add_column("#", justify="center")
    table.add_column("Regime")
    table.add_column("Imposto Total", justify="right")
    table.add_column("Alíquota Efetiva", justify="right")
    table.add_column("Diferença", justify="right")

    for posicao, linha in enumerate(comparison.ranking, start=1):
        diferenca = economia_entre(comparison, linha.regime)
        style = "best" if posicao == 1 else None
        table.add_row(
            f"{posicao}º",
            linha.regime.value,
            format_currency(linha.imposto_total),
            format_percentage(linha.aliquota_efetiva),
            "-" if posicao == 1 else f"+{format_currency(diferenca)}",
            style=style,
        )
    console.print(table)

    s = comparison.simples_nacional
    fator_r = f" | Fator R {format_rate(s.fator_r)}" if s.fator_r is not None else ""
    console.print(
        f"[muted]Simples: {s.anexo.label}, {s.faixa_faturamento}, "
        f"nominal {format_percentage(s.aliquota_nominal)}{fator_r}[/muted]"
    )
    r = comparison.lucro_real
    console.print(
        f"[muted]Lucro Real: atividade {r.tipo_atividade.value}, "
        f"base IRPJ {format_currency(r.lucro_liquido)}[/muted]"
    )

    console.print()
    console.print(
        f"[best]Melhor regime: {comparison.best_regime.value}[/best] "
        f"(economia de {format_currency(comparison.economia_melhor_regime)} sobre a segunda opção)"
    )
    if comparison.report_id:
        console.print(f"[muted]Relatório salvo: {comparison.report_id}[/muted]")

    if comparison.evolucao_mensal:
        console.print()
        _print_evolution(comparison.evolucao_mensal)


def _print_evolution(entries: list[MonthlyEvolutionEntry]) -> None:
    table = Table(title="Evolução Mensal - Simples Nacional", show_header=True, header_style="bold")
    table.add_column("Mês")
    table.add_column("Faturamento", justify="right")
    table.add_column("RBT12", justify="right")
    table.add_column("Anexo", justify="center")
    table.add_column("Faixa")
    table.add_column("Alíq. Efetiva", justify="right")
    table.add_column("Imposto", justify="right", style="currency")

    for e in entries:
        table.add_row(
            e.mes,
            format_currency(e.faturamento_mes),
            format_currency(e.rbt12),
            e.anexo.value,
            e.faixa_faturamento,
            format_percentage(e.aliquota_efetiva),
            format_currency(e.imposto_mes),
        )
    console.print(table)


if __name__ == "__main__":
    app()
