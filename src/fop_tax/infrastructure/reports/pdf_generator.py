"""PDF summary of a quarterly tax calculation."""

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional
from xml.sax.saxutils import escape

try:
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.lib.units import cm
    from reportlab.pdfbase import pdfmetrics
    from reportlab.pdfbase.ttfonts import TTFont
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

from fop_tax.core.calculators.quarters import quarter_display_name
from fop_tax.shared.exceptions import ReportGenerationError
from fop_tax.shared.formatters import format_currency, format_rate
from fop_tax.shared.validators import mask_tin

if TYPE_CHECKING:
    from fop_tax.core.models.profile import FOPProfile
    from fop_tax.core.models.report import LimitCheck, QuarterlyCalculation

# Registered name of a user-supplied Unicode font
CUSTOM_FONT = "FopTaxSans"


def check_reportlab_available() -> None:
    """Check if reportlab is available, raise if not."""
    if not REPORTLAB_AVAILABLE:
        raise ImportError(
            "ReportLab не встановлено. "
            "Встановіть: pip install 'fop-tax[pdf]' або pip install reportlab"
        )


class PDFReportGenerator:
    """Generates a one-page PDF summary of a quarterly calculation.

    The built-in Helvetica font has no Cyrillic glyphs; pass ``font_path``
    pointing to a TTF font (e.g. DejaVuSans.ttf) for readable Ukrainian text.
    """

    def __init__(
        self,
        calculation: "QuarterlyCalculation",
        profile: "FOPProfile",
        limit_check: "LimitCheck | None" = None,
        font_path: Optional[Path] = None,
    ):
        check_reportlab_available()
        self.calculation = calculation
        self.profile = profile
        self.limit_check = limit_check
        self.font_name = self._register_font(font_path)
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _register_font(self, font_path: Optional[Path]) -> str:
        if font_path is None:
            return "Helvetica"
        try:
            pdfmetrics.registerFont(TTFont(CUSTOM_FONT, str(font_path)))
        except Exception as e:
            raise ReportGenerationError(f"Не вдалося завантажити шрифт {font_path}: {e}") from e
        return CUSTOM_FONT

    def _setup_custom_styles(self) -> None:
        """Setup custom paragraph styles."""
        self.styles.add(
            ParagraphStyle(
                name="ReportTitle",
                parent=self.styles["Heading1"],
                fontName=self.font_name,
                fontSize=18,
                spaceAfter=16,
                textColor=colors.HexColor("#1a365d"),
                alignment=1,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="SectionHeader",
                parent=self.styles["Heading2"],
                fontName=self.font_name,
                fontSize=13,
                spaceBefore=16,
                spaceAfter=8,
                textColor=colors.HexColor("#2c5282"),
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="TableCell",
                parent=self.styles["Normal"],
                fontName=self.font_name,
                fontSize=9,
                leading=12,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="SmallText",
                parent=self.styles["Normal"],
                fontName=self.font_name,
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
        elements.extend(self._build_taxpayer_info())
        elements.extend(self._build_income())
        elements.extend(self._build_taxes())
        if self.limit_check and self.limit_check.warning_message:
            elements.extend(self._build_limit_warning())
        elements.extend(self._build_footer())

        doc.build(elements)
        return output_path

    def _cell(self, text: str) -> "Paragraph":
        return Paragraph(text, self.styles["TableCell"])

    def _table(self, rows: list[list[str]], col_widths: list[float]) -> "Table":
        table = Table(
            [[self._cell(value) for value in row] for row in rows], colWidths=col_widths
        )
        table.setStyle(
            TableStyle([
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#edf2f7")),
                ("BOX", (0, 0), (-1, -1), 1, colors.HexColor("#cbd5e0")),
                ("LINEBELOW", (0, 0), (-1, -2), 0.5, colors.HexColor("#e2e8f0")),
                ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                ("TOPPADDING", (0, 0), (-1, -1), 5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ])
        )
        return table

    def _build_header(self) -> list:
        calc = self.calculation
        return [
            Paragraph(
                f"Єдиний податок: {quarter_display_name(calc.year, calc.quarter)}",
                self.styles["ReportTitle"],
            )
        ]

    def _build_taxpayer_info(self) -> list:
        profile = self.profile
        rows = [
            ["ФОП", profile.full_name or "-"],
            ["РНОКПП", mask_tin(profile.tin)],
            ["Податкова", profile.tax_office.name or "-"],
            ["Група", str(profile.tax_group)],
        ]
        table = Table(
            [[self._cell(f"<b>{k}</b>"), self._cell(escape(v))] for k, v in rows],
            colWidths=[4 * cm, 14 * cm],
        )
        table.setStyle(
            TableStyle([
                ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#f7fafc")),
                ("BOX", (0, 0), (-1, -1), 1, colors.HexColor("#e2e8f0")),
                ("LEFTPADDING", (0, 0), (-1, -1), 8),
            ])
        )
        return [Paragraph("Платник", self.styles["SectionHeader"]), table]

    def _build_income(self) -> list:
        calc = self.calculation
        rows = [
            ["Дохід", "За квартал", "З початку року"],
            [
                "У гривнях",
                format_currency(calc.quarterly_income_local),
                format_currency(calc.cumulative_income_local),
            ],
            [
                "В іноземній валюті",
                format_currency(calc.quarterly_income_foreign),
                format_currency(calc.cumulative_income_foreign),
            ],
            [
                "<b>Разом</b>",
                format_currency(calc.quarterly_income),
                format_currency(calc.cumulative_income),
            ],
        ]
        return [
            Paragraph("Доходи", self.styles["SectionHeader"]),
            self._table(rows, [6 * cm, 6 * cm, 6 * cm]),
        ]

    def _build_taxes(self) -> list:
        calc = self.calculation
        rows = [
            ["Податок", "Нараховано", "Попередні періоди", "До сплати"],
            [
                f"Єдиний податок ({format_rate(self.profile.single_tax_rate)})",
                format_currency(calc.cumulative_single_tax),
                format_currency(calc.previous_single_tax),
                format_currency(calc.single_tax_to_pay),
            ],
            [
                f"Військовий збір ({format_rate(self.profile.military_tax_rate)})",
                format_currency(calc.cumulative_military_tax),
                format_currency(calc.previous_military_tax),
                format_currency(calc.military_tax_to_pay),
            ],
            [
                "ЄСВ",
                format_currency(calc.cumulative_social_contributions),
                "",
                format_currency(calc.quarterly_social_contributions),
            ],
        ]
        return [
            Paragraph("Податки", self.styles["SectionHeader"]),
            self._table(rows, [6 * cm, 4 * cm, 4 * cm, 4 * cm]),
        ]

    def _build_limit_warning(self) -> list:
        check = self.limit_check
        color = "#c53030" if check.limit_exceeded else "#b7791f"
        return [
            Spacer(1, 0.4 * cm),
            Paragraph(
                f'<font color="{color}">{check.warning_message}</font>',
                self.styles["TableCell"],
            ),
        ]

    def _build_footer(self) -> list:
        return [
            Spacer(1, 1 * cm),
            Paragraph(
                f"Сформовано {datetime.now().strftime('%d.%m.%Y %H:%M')}. "
                "Документ має довідковий характер.",
                self.styles["SmallText"],
            ),
        ]


def generate_pdf_report(
    calculation: "QuarterlyCalculation",
    profile: "FOPProfile",
    output_path: Path,
    limit_check: "LimitCheck | None" = None,
    font_path: Optional[Path] = None,
) -> Path:
    """Generate a PDF summary of a quarterly calculation."""
    generator = PDFReportGenerator(calculation, profile, limit_check, font_path=font_path)
    return generator.generate(output_path)
