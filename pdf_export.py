from __future__ import annotations
from datetime import date
from io import BytesIO
from typing import Dict, List
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from models import RoutineSlot, User
from stats import completion_percent


def routine_to_pdf(
    user: User,
    day: date,
    slots: List[RoutineSlot],
    subject_names: Dict[str, str] | None = None,
) -> bytes:
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=letter,
        leftMargin=40,
        rightMargin=40,
        topMargin=40,
        bottomMargin=40,
    )
    styles = getSampleStyleSheet()
    subject_names = subject_names or {}
    elems = []

    elems.append(Paragraph(f"Study Routine: {day.strftime('%A, %Y-%m-%d')}", styles["Title"]))
    elems.append(Spacer(1, 10))

    routine = user.study_routine
    streak = routine.streak if routine else 0
    bonus = routine.bonus_holidays if routine else 0
    elems.append(Paragraph(
        f"{user.name or user.id} | Class {user.class_level}"
        f"{' (' + user.stream + ')' if user.stream else ''} | Streak: {streak} days "
        f"| Bonus holidays: {bonus} | Completed: {completion_percent(slots)}%",
        styles["Normal"],
    ))
    elems.append(Spacer(1, 12))

    if not slots:
        elems.append(Paragraph("No backlog! Enjoy your holiday.", styles["Normal"]))
        doc.build(elems)
        return buf.getvalue()

    table_data = [["Time", "Minutes", "Subject", "Topic", "Type", "Done"]]
    total = 0
    for slot in slots:
        total += slot.duration_minutes
        table_data.append([
            slot.start_time,
            str(slot.duration_minutes),
            subject_names.get(slot.subject_id, slot.subject_id),
            slot.topic,
            slot.activity_type.value,
            "Yes" if slot.is_completed else "No",
        ])
    table_data.append(["Total", str(total), "", "", "", ""])

    table = Table(table_data, hAlign="LEFT", colWidths=[45, 50, 110, 170, 70, 35])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("BACKGROUND", (0, -1), (-1, -1), colors.whitesmoke),
        ("ALIGN", (1, 1), (1, -1), "RIGHT"),
    ]))
    elems.append(table)

    doc.build(elems)
    return buf.getvalue()
