"""
WSJF Calculator - PDF Report Engine
Renders the ranked initiative list and the configured weights to a PDF.

Preferred layout is a reportlab platypus table (header row repeated on each
page). If that build fails, the same content is written as plain text lines
straight onto a reportlab canvas.
"""
import io
import logging
from datetime import datetime
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from engines.scoring import LABELS, SCORE_FIELDS, weight_rows

TITLE = 'Weighted Shortest Job First (WSJF) Prioritization Report'
MARGIN = 0.5 * inch
HEADERS = (['Rank', 'Initiative'] + [LABELS[f][0] for f in SCORE_FIELDS]
           + ['Job Size (SP)', 'CoD', 'WSJF'])
COL_WIDTHS = [0.45*inch, 2.25*inch] + [0.6*inch]*4 + [0.6*inch, 0.8*inch, 0.8*inch]


class ReportError(RuntimeError):
    """Export refused or failed; message is user-facing."""


def report_filename(day=None):
    day = day or datetime.now()
    return f"wsjf_prioritization_report_{day:%Y-%m-%d}.pdf"


def _fmt_num(x):
    return f"{x:g}" if isinstance(x, float) else str(x)


def _rows(initiatives):
    return [
        [str(rank), i['name']] + [_fmt_num(i[f]) for f in SCORE_FIELDS]
        + [_fmt_num(i['jobSize']), f"{i['cod']:.2f}", f"{i['wsjf']:.2f}"]
        for rank, i in enumerate(initiatives, 1)
    ]


def _stamp(generated_at):
    return f"Generated {generated_at:%Y-%m-%d %H:%M:%S}"


def _page_number(cv, doc):
    cv.saveState()
    cv.setFont('Helvetica', 8)
    cv.setFillColor(colors.grey)
    cv.drawRightString(letter[0] - MARGIN, MARGIN / 2, f"Page {doc.page}")
    cv.restoreState()


def _build_table_pdf(initiatives, weights, generated_at):
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=letter, title=TITLE,
                            leftMargin=MARGIN, rightMargin=MARGIN,
                            topMargin=MARGIN, bottomMargin=MARGIN)
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle('ReportTitle', parent=styles['Heading1'], fontSize=15,
                                 alignment=TA_CENTER, spaceAfter=6,
                                 textColor=colors.HexColor('#333333'))
    sub_style = ParagraphStyle('Stamp', parent=styles['Normal'], fontSize=9,
                               alignment=TA_CENTER, textColor=colors.HexColor('#666666'))
    cell_style = ParagraphStyle('Cell', parent=styles['Normal'], fontSize=8, leading=10)

    story = [Paragraph(TITLE, title_style), Paragraph(_stamp(generated_at), sub_style),
             Spacer(1, 14), Paragraph('Configured Weights', styles['Heading2'])]
    for label, value in weight_rows(weights):
        story.append(Paragraph(f"{escape(label)}: <b>{_fmt_num(value)}</b>", styles['Normal']))
    story += [Spacer(1, 14), Paragraph('Prioritized Initiatives', styles['Heading2'])]

    data = [HEADERS]
    for row in _rows(initiatives):
        row[1] = Paragraph(escape(row[1]), cell_style)
        data.append(row)

    table = Table(data, colWidths=COL_WIDTHS, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#2E2E38')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('ALIGN', (2, 0), (-1, -1), 'CENTER'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#DDDDDD')),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#F9F9F9')]),
        ('FONTNAME', (-1, 1), (-1, -1), 'Helvetica-Bold'),
        ('TEXTCOLOR', (-1, 1), (-1, -1), colors.HexColor('#2563EB')),
    ]))
    story.append(table)
    doc.build(story, onFirstPage=_page_number, onLaterPages=_page_number)
    return buf.getvalue()


def _text_lines(initiatives, weights, generated_at):
    lines = [TITLE, _stamp(generated_at), '', 'Configured Weights:']
    lines += [f"  {label}: {_fmt_num(value)}" for label, value in weight_rows(weights)]
    lines += ['', 'Prioritized Initiatives:', '']
    fmt = '{:>4}  {:<32} {:>6} {:>6} {:>6} {:>6} {:>8} {:>8} {:>8}'
    lines.append(fmt.format('Rank', 'Initiative', *HEADERS[2:6], 'Job', 'CoD', 'WSJF'))
    lines.append('-' * 96)
    for row in _rows(initiatives):
        name = row[1] if len(row[1]) <= 32 else row[1][:31] + '~'
        lines.append(fmt.format(row[0], name, *row[2:]))
    return lines


def _build_text_pdf(initiatives, weights, generated_at):
    buf = io.BytesIO()
    cv = canvas.Canvas(buf, pagesize=letter)
    cv.setTitle(TITLE)
    width, height = letter
    leading = 12
    page = 1

    def _start_page():
        cv.setFont('Courier', 8)
        return height - MARGIN

    y = _start_page()
    for line in _text_lines(initiatives, weights, generated_at):
        if y < MARGIN + leading:
            cv.setFont('Helvetica', 8)
            cv.drawRightString(width - MARGIN, MARGIN / 2, f"Page {page}")
            cv.showPage()
            page += 1
            y = _start_page()
        cv.drawString(MARGIN, y, line)
        y -= leading
    cv.setFont('Helvetica', 8)
    cv.drawRightString(width - MARGIN, MARGIN / 2, f"Page {page}")
    cv.save()
    return buf.getvalue()


def build_report_pdf(initiatives, weights, generated_at=None, tabular=True):
    """Return the report as PDF bytes.

    Args:
        initiatives: ranked initiative dicts (already sorted by wsjf).
        weights: the weight set the ranking was computed with.
        generated_at: timestamp printed under the title, defaults to now.
        tabular: False skips the table layout and writes plain text.

    Raises:
        ReportError: when there is nothing to export.
    """
    if not initiatives:
        raise ReportError('No initiatives to export. Add at least one initiative first.')
    generated_at = generated_at or datetime.now()
    if tabular:
        try:
            return _build_table_pdf(initiatives, weights, generated_at)
        except Exception as e:
            logging.warning(f"Table layout failed ({type(e).__name__}: {e}), "
                            f"falling back to plain-text report")
    return _build_text_pdf(initiatives, weights, generated_at)
