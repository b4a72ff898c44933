import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

NO_MEALS = "No meals logged"
NO_WORKOUTS = "No workouts"


def _meals_cell(day):
    if not day['meals']:
        return NO_MEALS
    lines = []
    for m in day['meals']:
        text = f"{m['label']}: {m['name']}"
        if m['notes']:
            text += f" ({m['notes']})"
        lines.append(text)
    return "\n".join(lines)


def _workouts_cell(day):
    if not day['workouts']:
        return NO_WORKOUTS
    lines = []
    for w in day['workouts']:
        parts = [w['label']] + [t for t in (w['distance_text'], w['duration_text']) if t]
        lines.append(" · ".join(parts))
    return "\n".join(lines)


def generate_pdf_for_week(summary):
    """Generate a simple PDF table: Day / Meals / Workouts for a computed week summary."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    totals = summary['week_totals']
    elements = [
        Paragraph(f"Week summary – {summary['start']} to {summary['end']}", styles["Title"]),
        Paragraph(
            f"{totals['meals']} meals · {totals['workouts']} workouts · "
            f"{totals['distance_km']:.2f} km · {totals['duration_min']:.0f} min",
            styles["Normal"],
        ),
        Spacer(1, 16),
    ]

    data = [["Day", "Meals", "Workouts"]]
    for day in summary['days']:
        data.append([
            f"{day['weekday']} ({day['date']})",
            _meals_cell(day),
            _workouts_cell(day),
        ])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "LEFT"),
        ("VALIGN", (0,0), (-1,-1), "TOP"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
