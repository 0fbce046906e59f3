"""PDF report generator for regime comparisons."""

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

try:
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.lib.units import cm
    from reportlab.platypus import (
        Paragraph,
        SimpleDocTemplate,
        Spacer,
        Table,
        TableStyle,
    )

    REPORTLAB_AVAILABLE = True
except ImportError:
    REPORTLAB_AVAILABLE = False

from pj_regime_analyzer import __version__
from pj_regime_analyzer.core.models.enums import RegimeTributario
from pj_regime_analyzer.shared.exceptions import ReportGenerationError
from pj_regime_analyzer.shared.formatters import format_currency, format_percentage, format_rate

if TYPE_CHECKING:
    from pj_regime_analyzer.core.models.results import TaxCalculationComparison

logger = logging.getLogger(__name__)

HEADER_BG = "#2c5282"
BEST_BG = "#c6f6d5"
ROW_ALT_BG = "#f7fafc"
BORDER = "#e2e8f0"


def check_reportlab_available() -> None:
    """Check if reportlab is available, raise if not."""
    if not REPORTLAB_AVAILABLE:
        raise ReportGenerationError(
            "ReportLab não está instalado. "
            "Instale com: pip install 'pj-regime-analyzer[pdf]'"
        )


class PDFReportGenerator:
    """Generates a PDF with the three regimes, the winner and the monthly evolution."""

    def __init__(self, comparison: "TaxCalculationComparison"):
        check_reportlab_available()
        self.comparison = comparison
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self) -> None:
        """Setup custom paragraph styles."""
        self.styles.add(
            ParagraphStyle(
                name="ReportTitle",
                parent=self.styles["Heading1"],
                fontSize=20,
                spaceAfter=20,
                textColor=colors.HexColor("#1a365d"),
                alignment=1,  # Center
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="SectionHeader",
                parent=self.styles["Heading2"],
                fontSize=13,
                spaceBefore=20,
                spaceAfter=10,
                textColor=colors.HexColor(HEADER_BG),
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="TableCell",
                parent=self.styles["Normal"],
                fontSize=8,
                leading=11,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="TableHeader",
                parent=self.styles["Normal"],
                fontSize=8,
                leading=11,
                fontName="Helvetica-Bold",
                textColor=colors.white,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="SmallText",
                parent=self.styles["Normal"],
                fontSize=8,
                textColor=colors.gray,
                alignment=1,
            )
        )

    def generate(self, output_path: Path) -> Path:
        """Generate PDF report and save to output_path."""
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=A4,
            rightMargin=1.5 * cm,
            leftMargin=1.5 * cm,
            topMargin=1.5 * cm,
            bottomMargin=1.5 * cm,
        )

        elements = []
        elements.extend(self._build_header())
        elements.extend(self._build_summary())
        elements.extend(self._build_ranking())
        elements.extend(self._build_simples())
        elements.extend(self._build_presumido())
        elements.extend(self._build_real())
        if self.comparison.evolucao_mensal:
            elements.extend(self._build_evolution())
        elements.extend(self._build_footer())

        try:
            doc.build(elements)
        except (OSError, ValueError) as e:
            raise ReportGenerationError(f"Erro ao gerar PDF em {output_path}: {e}") from e

        logger.info("Relatório PDF gerado em %s", output_path)
        return output_path

    def _cell(self, text: str, header: bool = False) -> "Paragraph":
        return Paragraph(text, self.styles["TableHeader" if header else "TableCell"])

    def _table(self, rows: list[list[str]], col_widths: list[float]) -> "Table":
        """Table with a colored header row and zebra striping."""
        data = [[self._cell(c, header=True) for c in rows[0]]]
        data.extend([self._cell(c) for c in row] for row in rows[1:])

        style = [
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(HEADER_BG)),
            ("BOX", (0, 0), (-1, -1), 1, colors.HexColor(BORDER)),
            ("LINEBELOW", (0, 0), (-1, -2), 0.5, colors.HexColor(BORDER)),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]
        for i in range(2, len(data), 2):
            style.append(("BACKGROUND", (0, i), (-1, i), colors.HexColor(ROW_ALT_BG)))

        table = Table(data, colWidths=col_widths)
        table.setStyle(TableStyle(style))
        return table

    def _build_header(self) -> list:
        return [
            Paragraph("PJ Regime Analyzer", self.styles["ReportTitle"]),
            Paragraph(
                "Comparativo de Regimes Tributários",
                ParagraphStyle(
                    "Subtitle",
                    parent=self.styles["Normal"],
                    fontSize=12,
                    textColor=colors.HexColor("#4a5568"),
                    alignment=1,
                    spaceAfter=15,
                ),
            ),
        ]

    def _build_summary(self) -> list:
        c = self.comparison
        rows = [
            ["Empresa", "RBA", "RBAA", "RBT12"],
            [
                c.company_id,
                format_currency(c.rba),
                format_currency(c.rbaa),
                format_currency(c.rbt12),
            ],
        ]
        return [
            Paragraph("Dados do Cálculo", self.styles["SectionHeader"]),
            self._table(rows, [6 * cm, 4 * cm, 4 * cm, 4 * cm]),
        ]

    def _build_ranking(self) -> list:
        """Regimes ordered by total tax, best highlighted."""
        c = self.comparison
        rows = [["Posição", "Regime", "Imposto Total", "Alíquota Efetiva"]]
        for posicao, linha in enumerate(c.ranking, start=1):
            rows.append(
                [
                    f"{posicao}º",
                    linha.regime.value,
                    format_currency(linha.imposto_total),
                    format_percentage(linha.aliquota_efetiva),
                ]
            )

        table = self._table(rows, [2 * cm, 6 * cm, 5 * cm, 5 * cm])
        table.setStyle(TableStyle([("BACKGROUND", (0, 1), (-1, 1), colors.HexColor(BEST_BG))]))

        return [
            Paragraph("Ranking de Regimes", self.styles["SectionHeader"]),
            table,
            Spacer(1, 0.3 * cm),
            Paragraph(
                f"<b>Melhor regime:</b> {c.best_regime.value} "
                f"(economia de {format_currency(c.economia_melhor_regime)} "
                "em relação à segunda opção)",
                self.styles["Normal"],
            ),
        ]

    def _build_simples(self) -> list:
        s = self.comparison.simples_nacional
        rows = [
            ["Item", "Valor"],
            ["Anexo", s.anexo.label],
            ["Fator R", format_rate(s.fator_r) if s.fator_r is not None else "-"],
            ["Faixa", s.faixa_faturamento],
            ["Alíquota nominal", format_percentage(s.aliquota_nominal)],
            ["Parcela a deduzir", format_currency(s.parcela_deduzir)],
            ["Alíquota efetiva", format_percentage(s.aliquota_efetiva)],
            ["Imposto total", format_currency(s.imposto_total)],
        ]
        return [
            Paragraph(RegimeTributario.SIMPLES_NACIONAL.value, self.styles["SectionHeader"]),
            self._table(rows, [8 * cm, 10 * cm]),
        ]

    def _build_presumido(self) -> list:
        p = self.comparison.lucro_presumido
        rows = [
            ["Item", "Valor"],
            ["Presunção", format_percentage(p.percentual_presuncao)],
            ["Lucro presumido", format_currency(p.lucro_presumido)],
            ["IRPJ", format_currency(p.irpj)],
            ["Adicional IRPJ", format_currency(p.adicional_irpj)],
            ["CSLL", format_currency(p.csll)],
            ["PIS", format_currency(p.pis)],
            ["COFINS", format_currency(p.cofins)],
            ["ISS", format_currency(p.iss)],
            ["ICMS", format_currency(p.icms)],
            ["Imposto total", format_currency(p.imposto_total)],
        ]
        return [
            Paragraph(RegimeTributario.LUCRO_PRESUMIDO.value, self.styles["SectionHeader"]),
            self._table(rows, [8 * cm, 10 * cm]),
        ]

    def _build_real(self) -> list:
        r = self.comparison.lucro_real
        rows = [
            ["Item", "Valor"],
            ["Atividade", r.tipo_atividade.value],
            ["Base IRPJ", format_currency(r.lucro_liquido)],
            ["Base CSLL", format_currency(r.base_csll)],
            ["IRPJ", format_currency(r.irpj)],
            ["Adicional IRPJ", format_currency(r.adicional_irpj)],
            ["CSLL", format_currency(r.csll)],
            ["PIS + COFINS (líquido de créditos)", format_currency(r.pis_cofins_liquido)],
            ["ISS", format_currency(r.iss)],
            ["Imposto total", format_currency(r.imposto_total)],
        ]
        return [
            Paragraph(RegimeTributario.LUCRO_REAL.value, self.styles["SectionHeader"]),
            self._table(rows, [8 * cm, 10 * cm]),
        ]

    def _build_evolution(self) -> list:
        rows = [["Mês", "Faturamento", "RBT12", "Anexo", "Faixa", "Alíq. Efetiva", "Imposto"]]
        for e in self.comparison.evolucao_mensal or []:
            rows.append(
                [
                    e.mes,
                    format_currency(e.faturamento_mes),
                    format_currency(e.rbt12),
                    e.anexo.value,
                    e.faixa_faturamento,
                    format_percentage(e.aliquota_efetiva),
                    format_currency(e.imposto_mes),
                ]
            )
        return [
            Paragraph("Evolução Mensal (Simples Nacional)", self.styles["SectionHeader"]),
            self._table(
                rows, [2.4 * cm, 3 * cm, 3.2 * cm, 1.4 * cm, 2 * cm, 2.4 * cm, 3.2 * cm]
            ),
        ]

    def _build_footer(self) -> list:
        return [
            Spacer(1, 1 * cm),
            Paragraph(
                f"Relatório gerado em {datetime.now().strftime('%d/%m/%Y às %H:%M')} "
                f"pelo PJ Regime Analyzer v{__version__}",
                self.styles["SmallText"],
            ),
            Spacer(1, 0.1 * cm),
            Paragraph(
                "Este relatório é uma simulação. "
                "Consulte um contador antes de optar por um regime tributário.",
                self.styles["SmallText"],
            ),
        ]


def generate_pdf_report(comparison: "TaxCalculationComparison", output_path: Path) -> Path:
    """Generate a PDF report from a regime comparison."""
    generator = PDFReportGenerator(comparison)
    return generator.generate(Path(output_path))
