# court_rotation/export_pdf.py
from __future__ import annotations
from typing import List
import io
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib import colors
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

from .minutes import player_minutes
from .models import Player, Rotation
from .timeline import format_clock


def rotation_table_rows(rotation: Rotation, players: List[Player]) -> List[List[str]]:
    by_id = {p.id: p for p in players}
    header = ["#", "Player"] + [p.id for p in rotation.periods] + ["Total", "On court"]
    rows = [header]
    for pa in rotation.player_assignments:
        p = by_id.get(pa.player_id)
        dist = player_minutes(pa, rotation)
        stints = ", ".join(
            f"{format_clock(s.start_time, rotation.periods)}-{format_clock(s.end_time, rotation.periods, closing=True)}"
            for s in pa.on_court_segments()
        )
        rows.append(
            [str(p.number) if p else "", p.name if p else pa.player_id]
            + [f"{dist.minutes_by_period[per.id]:.1f}" for per in rotation.periods]
            + [f"{dist.total_minutes:.1f}", stints]
        )
    return rows


def render_rotation_pdf(rotation: Rotation, players: List[Player]) -> bytes:
    buf = io.BytesIO()
    page_size = landscape(letter)
    c = canvas.Canvas(buf, pagesize=page_size)

    c.setFont("Helvetica-Bold", 16)
    c.drawString(40, page_size[1] - 40, f"{rotation.name} - Rotation")

    t = Table(rotation_table_rows(rotation, players), repeatRows=1)
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))

    table_w, table_h = t.wrapOn(c, page_size[0] - 80, page_size[1] - 100)
    t.drawOn(c, 40, page_size[1] - 80 - table_h)

    c.showPage()
    c.save()
    return buf.getvalue()
