import logging
from io import BytesIO
from datetime import datetime
from typing import Any, Dict, List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, PageBreak

from report_utils import (
    department_year_lookup, format_department_with_year, get_departments_with_years,
    get_hall_name_by_id, group_assignments_by_series, occupied_assignments
)

logger = logging.getLogger(__name__)

SUMMARY_STYLE = TableStyle([
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("BACKGROUND", (0, 0), (-1, 0), colors.Color(63 / 255, 81 / 255, 181 / 255)),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.Color(240 / 255, 240 / 255, 1)]),
    ("FONTSIZE", (0, 0), (-1, -1), 8),
    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
])

DETAIL_STYLE = TableStyle([
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("BACKGROUND", (0, 0), (-1, 0), colors.Color(100 / 255, 100 / 255, 100 / 255)),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.Color(245 / 255, 245 / 255, 245 / 255)]),
    ("FONTSIZE", (0, 0), (-1, -1), 8),
])


def _new_document(buffer: BytesIO) -> SimpleDocTemplate:
    return SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=30,
        leftMargin=30,
        topMargin=30,
        bottomMargin=30,
    )


def _summary_table(arrangements: List[Dict]) -> Table:
    table_data = [["Room", "Floor", "Departments & Years", "Students", "Dimensions"]]
    for arrangement in arrangements:
        departments = ", ".join(
            format_department_with_year(department, year)
            for department, year in get_departments_with_years(arrangement)
        )
        table_data.append([
            arrangement["room_no"],
            arrangement["floor_no"],
            departments,
            str(len(occupied_assignments(arrangement))),
            f"{arrangement['rows']} x {arrangement['columns']}",
        ])

    table = Table(table_data, colWidths=[60, 50, 245, 60, 70], repeatRows=1)
    table.setStyle(SUMMARY_STYLE)
    return table


def _arrangement_story(arrangement: Dict, styles) -> List[Any]:
    story: List[Any] = []
    occupied = occupied_assignments(arrangement)
    years = department_year_lookup(arrangement)

    story.append(Paragraph(escape(f"Room {arrangement['room_no']}, Floor {arrangement['floor_no']}"), styles["Heading2"]))
    story.append(Paragraph(
        f"Dimensions: {arrangement['rows']} rows x {arrangement['columns']} columns", styles["Normal"]))
    story.append(Paragraph(f"Total Students: {len(occupied)}", styles["Normal"]))

    departments = get_departments_with_years(arrangement)
    if departments:
        story.append(Paragraph("<b>Departments:</b>", styles["Normal"]))
        for department, year in departments:
            story.append(Paragraph(escape(f"- {format_department_with_year(department, year)}"), styles["Normal"]))
    story.append(Spacer(1, 10))

    for prefix, students in group_assignments_by_series(occupied).items():
        config = next(
            (c for c in arrangement.get("department_configs", []) if c.get("prefix") == prefix), None
        )
        department_name = (config or {}).get("department") or "Unknown"
        year_info = f" ({config['year']})" if config and config.get("year") else ""
        story.append(Paragraph(escape(f"{department_name}{year_info} - Seat Series {prefix}"), styles["Heading4"]))

        table_data = [["Seat No", "Registration No", "Department & Year", "Student Name"]]
        for student in students:
            department = student.get("department")
            if department in years:
                department = format_department_with_year(department, years[department])
            table_data.append([
                student.get("seat_no") or "",
                student.get("reg_no") or "",
                department or "Unknown",
                student.get("student_name") or "",
            ])

        table = Table(table_data, colWidths=[55, 85, 170, 170], repeatRows=1)
        table.setStyle(DETAIL_STYLE)
        story.append(table)
        story.append(Spacer(1, 12))

    return story


def generate_seating_pdf(arrangements: List[Dict], hall_id: str = "all") -> BytesIO:
    """
    Seating plan report: a summary table of every room followed by one page
    per room listing its students grouped by seat series.
    """
    buffer = BytesIO()
    doc = _new_document(buffer)
    styles = getSampleStyleSheet()

    title_style = styles["Heading1"]
    title_style.alignment = 1
    hall_name = get_hall_name_by_id(hall_id)
    title = "Consolidated Seating Plan" if hall_id in (None, "", "all") else f"{hall_name} Seating Plan"

    total_students = sum(len(occupied_assignments(a)) for a in arrangements)
    story: List[Any] = [
        Paragraph(title, title_style),
        Paragraph(f"Total Rooms: {len(arrangements)}", styles["Normal"]),
        Paragraph(f"Total Students: {total_students}", styles["Normal"]),
        Paragraph(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}", styles["Normal"]),
        Spacer(1, 12),
    ]

    if not arrangements:
        story.append(Paragraph("No seating arrangements to display.", styles["Heading2"]))
    else:
        story.append(_summary_table(arrangements))

    for arrangement in arrangements:
        story.append(PageBreak())
        story.extend(_arrangement_story(arrangement, styles))

    doc.build(story)
    buffer.seek(0)
    logger.info(f"Generated seating PDF for {len(arrangements)} rooms ({hall_name})")
    return buffer


def generate_attendance_pdf(arrangements: List[Dict]) -> BytesIO:
    """
    Room-wise attendance sheets with a signature column and an invigilator
    footer, one page per room.
    """
    buffer = BytesIO()
    doc = _new_document(buffer)
    styles = getSampleStyleSheet()
    title_style = styles["Heading1"]
    title_style.alignment = 1

    story: List[Any] = []
    rooms = [a for a in arrangements if occupied_assignments(a)]
    if not rooms:
        story.append(Paragraph("No allocated students found.", title_style))

    for i, arrangement in enumerate(rooms):
        story.append(Paragraph("EXAM ATTENDANCE SHEET", title_style))
        story.append(Spacer(1, 10))

        header_table = Table(
            [[f"Room No: {arrangement['room_no']} (Floor {arrangement['floor_no']})",
              "Date: ____________________"]],
            colWidths=[265, 265]
        )
        header_table.setStyle(TableStyle([
            ("ALIGN", (0, 0), (0, 0), "LEFT"),
            ("ALIGN", (1, 0), (1, 0), "RIGHT"),
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 12),
        ]))
        story.append(header_table)
        story.append(Spacer(1, 15))

        table_data = [["Sr. No", "Seat No", "Reg No", "Department", "Student Name", "Signature"]]
        for n, assignment in enumerate(occupied_assignments(arrangement), 1):
            table_data.append([
                str(n),
                assignment.get("seat_no") or "",
                assignment.get("reg_no") or "",
                assignment.get("department") or "-",
                assignment.get("student_name") or "",
                "",
            ])

        table = Table(table_data, colWidths=[35, 45, 55, 120, 165, 110], repeatRows=1)
        table.setStyle(TableStyle([
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("ALIGN", (4, 0), (4, -1), "LEFT"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("TOPPADDING", (0, 0), (-1, -1), 6),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ]))
        story.append(table)
        story.append(Spacer(1, 30))

        footer_table = Table([
            [Paragraph("<b>Invigilator Name:</b> ____________________", styles["Normal"]),
             Paragraph("<b>Signature:</b> ____________________", styles["Normal"])],
            [Paragraph("<br/><br/><b>Absentees:</b><br/>"
                       "________________________________________________________________________",
                       styles["Normal"]), ""],
        ], colWidths=[265, 265])
        footer_table.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("SPAN", (0, 1), (1, 1)),
        ]))
        story.append(footer_table)

        if i < len(rooms) - 1:
            story.append(PageBreak())

    doc.build(story)
    buffer.seek(0)
    return buffer
