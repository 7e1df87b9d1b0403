"""
CSV and PDF report builders

Both take rows already assembled by the calling service, so the same data
backs the on-screen table, the CSV download and the PDF download.
"""
import csv
import io
from datetime import datetime
from xml.sax.saxutils import escape

from flask import Response, send_file
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

HEADER_COLOR = '#0E254B'
NO_DATA_MESSAGE = 'No inventory data to export.'


def _text(value):
    return '' if value is None else str(value)


def build_csv(header, rows):
    """Comma separated, '\\n' line endings; only cells holding a comma, quote or line break are quoted"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')
    writer.writerow(header)
    for row in rows:
        writer.writerow([_text(value) for value in row])
    # Lines are joined, not terminated
    return buffer.getvalue()[:-1]


def _styles():
    styles = getSampleStyleSheet()
    cell_style = ParagraphStyle(
        'CellStyle',
        parent=styles['Normal'],
        fontSize=8,
        leading=10,
        wordWrap='CJK',
    )
    header_style = ParagraphStyle(
        'HeaderStyle',
        parent=styles['Normal'],
        fontSize=9,
        leading=11,
        fontName='Helvetica-Bold',
        textColor=colors.white,
        wordWrap='CJK',
    )
    return styles, cell_style, header_style


def _table(headers, rows, cell_style, header_style, col_widths=None):
    data = [[Paragraph(escape(_text(h)), header_style) for h in headers]]
    for row in rows:
        data.append([Paragraph(escape(_text(value)), cell_style) for value in row])

    table = Table(data, repeatRows=1, colWidths=col_widths)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor(HEADER_COLOR)),
        ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#F5F7FB')]),
        ('GRID', (0, 0), (-1, -1), 0.25, colors.HexColor('#D1D5DB')),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ('LEFTPADDING', (0, 0), (-1, -1), 3),
        ('RIGHTPADDING', (0, 0), (-1, -1), 3),
    ]))
    return table


def build_pdf(title, subtitle, headers, rows, summary=None, col_widths=None, generated_at=None):
    """Landscape A4 report: title block, optional Metric/Value summary, item table"""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=24,
        rightMargin=24,
        topMargin=24,
        bottomMargin=24,
        title=title,
    )
    styles, cell_style, header_style = _styles()
    generated_at = generated_at or datetime.now()

    elements = [
        Paragraph(escape(title), styles['Title']),
        Paragraph(escape(subtitle), styles['Heading3']),
        Paragraph(f"Generated on: {generated_at.strftime('%B %d, %Y %I:%M %p')}", styles['Normal']),
        Spacer(1, 12),
    ]

    if summary:
        elements.append(_table(['Metric', 'Value'], summary, cell_style, header_style, col_widths=[200, 200]))
        elements.append(Spacer(1, 12))

    elements.append(_table(headers, rows, cell_style, header_style, col_widths=col_widths))
    doc.build(elements)

    buffer.seek(0)
    return buffer


def csv_response(content, filename):
    return Response(
        content,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )


def pdf_response(buffer, filename):
    return send_file(
        buffer,
        mimetype='application/pdf',
        as_attachment=True,
        download_name=filename,
    )
