from __future__ import annotations

import csv
from datetime import datetime
from decimal import Decimal
from html import escape
from pathlib import Path
from typing import Any, Dict, Iterable, List

from reportlab.lib import colors
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

ReportRow = Dict[str, Any]


def _stringify(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return str(value)


def _headers(rows: List[ReportRow]) -> List[str]:
    return list(rows[0].keys()) if rows else []


def export_csv(rows: Iterable[ReportRow], output_path: Path) -> Path:
    rows = list(rows)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as handle:
        if not rows:
            return output_path
        writer = csv.DictWriter(handle, fieldnames=_headers(rows))
        writer.writeheader()
        for row in rows:
            writer.writerow({key: _stringify(value) for key, value in row.items()})
    return output_path


def export_pdf(rows: Iterable[ReportRow], output_path: Path, title: str) -> Path:
    rows_list = list(rows)
    styles = getSampleStyleSheet()
    story: List[Any] = [Paragraph(escape(title), styles["Title"]), Spacer(1, 8)]

    if rows_list:
        headers = _headers(rows_list)
        data = [[h.replace("_", " ").title() for h in headers]]
        data.extend([_stringify(row.get(h, "")) for h in headers] for row in rows_list)
        table = Table(data, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.whitesmoke),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                    ("LEFTPADDING", (0, 0), (-1, -1), 4),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        story.append(table)
    else:
        story.append(Paragraph("No rows returned", styles["Normal"]))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=landscape(letter),
        leftMargin=0.5 * inch,
        rightMargin=0.5 * inch,
        topMargin=0.5 * inch,
        bottomMargin=0.5 * inch,
        title=title,
    )
    doc.build(story)
    return output_path


def render_html(rows: Iterable[ReportRow], title: str) -> str:
    rows_list = list(rows)
    lines = [
        "<!DOCTYPE html>",
        "<html>",
        f"<head><meta charset=\"utf-8\"><title>{escape(title)}</title></head>",
        "<body>",
        f"<h1>{escape(title)}</h1>",
    ]
    if rows_list:
        headers = _headers(rows_list)
        lines.append("<table>")
        lines.append("<tr>" + "".join(f"<th>{escape(h)}</th>" for h in headers) + "</tr>")
        for row in rows_list:
            lines.append("<tr>" + "".join(f"<td>{escape(_stringify(row.get(h, '')))}</td>" for h in headers) + "</tr>")
        lines.append("</table>")
    else:
        lines.append("<p>No rows returned</p>")
    lines.extend(["</body>", "</html>"])
    return "\n".join(lines)


def export_html(rows: Iterable[ReportRow], output_path: Path, title: str) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_html(rows, title), encoding="utf-8")
    return output_path


def export_report(rows: Iterable[ReportRow], output_path: Path, title: str) -> Path:
    suffix = output_path.suffix.lower()
    if suffix == ".csv":
        return export_csv(rows, output_path)
    if suffix == ".pdf":
        return export_pdf(rows, output_path, title=title)
    if suffix in (".html", ".htm"):
        return export_html(rows, output_path, title=title)
    raise ValueError("Unsupported export format. Use .csv, .pdf or .html")
