import pandas as pd
import openpyxl
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter
import os
import zipfile
import logging
from datetime import datetime
from typing import Optional, Dict, List, Tuple

from report_utils import get_hall_name_by_id, group_reg_nos_by_department, occupied_assignments

THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)
HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
EMPTY_FILL = PatternFill(start_color="FFE6E6", end_color="FFE6E6", fill_type="solid")
OCCUPIED_FILL = PatternFill(start_color="E6F3FF", end_color="E6F3FF", fill_type="solid")


class ExcelHandler:
    def __init__(self, export_folder: str = 'exports'):
        self.logger = logging.getLogger(__name__)
        self.export_folder = export_folder

    def read_student_data(self, filepath: str) -> Optional[Tuple[pd.DataFrame, List[str]]]:
        """
        Read a student roster from an Excel file.
        Expected columns: Roll Number, Name, Department, Signature (optional)

        Returns:
            Tuple of (cleaned DataFrame, roll numbers repeated within the file),
            or None when the file cannot be used.
        """
        try:
            df = pd.read_excel(filepath)

            # Normalize column names (handle case variations and spaces)
            df.columns = df.columns.astype(str).str.strip().str.lower().str.replace(' ', '_')

            column_mappings = {
                'roll_number': ['roll_number', 'roll', 'rollno', 'roll_no', 'reg_no', 'register_number'],
                'name': ['name', 'student_name', 'full_name'],
                'department': ['department', 'dept', 'branch'],
                'signature': ['signature', 'sign'],
            }

            mapped_columns = {}
            for expected_col, possible_names in column_mappings.items():
                for possible_name in possible_names:
                    if possible_name in df.columns:
                        mapped_columns[expected_col] = possible_name
                        break

            missing_columns = [
                col for col in ['roll_number', 'name', 'department'] if col not in mapped_columns
            ]
            if missing_columns:
                self.logger.error(f"Missing columns: {missing_columns}")
                return None

            result_df = pd.DataFrame()
            for standard_name, original_name in mapped_columns.items():
                result_df[standard_name] = df[original_name]
            if 'signature' not in result_df.columns:
                result_df['signature'] = None

            return self._clean_student_data(result_df)

        except Exception as e:
            self.logger.error(f"Error reading Excel file: {str(e)}")
            return None

    def _clean_student_data(self, df: pd.DataFrame) -> Tuple[pd.DataFrame, List[str]]:
        df = df.dropna(subset=['roll_number', 'name']).copy()

        for col in ['roll_number', 'name', 'department']:
            df[col] = df[col].astype(str).str.strip()
        df['signature'] = df['signature'].astype(object).where(df['signature'].notna(), None)

        duplicated = df['roll_number'].duplicated(keep='first')
        duplicates_in_file = sorted(set(df.loc[duplicated, 'roll_number']))
        df = df.loc[~duplicated]

        return df.sort_values(['department', 'roll_number']), duplicates_in_file

    def export_students(self, students: List[Dict]) -> Optional[str]:
        try:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            filepath = os.path.join(self.export_folder, f"students_export_{timestamp}.xlsx")

            df = pd.DataFrame(students, columns=['roll_number', 'name', 'department', 'signature'])
            df.to_excel(filepath, index=False, engine='openpyxl')

            self.logger.info(f"Exported {len(df)} students to {filepath}")
            return filepath

        except Exception as e:
            self.logger.error(f"Error exporting students: {str(e)}")
            return None

    def _format_seat_short(self, assignment: Optional[Dict]) -> str:
        """Seat label and registration number on two lines for the grid view."""
        if not assignment or not assignment.get('reg_no'):
            return ""
        return f"{assignment.get('seat_no', '')}\n{assignment['reg_no']}"

    def export_arrangement_grid(self, arrangement: Dict) -> Optional[str]:
        """
        Export one room's seating in its rows x columns grid.
        """
        try:
            wb = openpyxl.Workbook()
            ws = wb.active
            room_no = arrangement['room_no']
            ws.title = f"Room {room_no} Grid"[:31]

            rows = arrangement['rows']
            columns = arrangement['columns']
            by_position = {a['position']: a for a in arrangement.get('seating_assignments', [])}

            ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=max(columns + 1, 2))
            title_cell = ws.cell(row=1, column=1,
                                 value=f"Room {room_no}, Floor {arrangement['floor_no']} - Seating Grid")
            title_cell.font = Font(size=16, bold=True)
            title_cell.alignment = Alignment(horizontal='center')

            current_row = 3
            ws.cell(row=current_row, column=1, value="Row/Col").font = Font(bold=True)
            for col in range(columns):
                cell = ws.cell(row=current_row, column=col + 2, value=f"Column {col + 1}")
                cell.font = Font(bold=True, color="FFFFFF")
                cell.fill = HEADER_FILL
                cell.alignment = Alignment(horizontal='center')

            current_row += 1
            for row in range(rows):
                ws.cell(row=current_row, column=1, value=f"Row {row + 1}").font = Font(bold=True)
                for col in range(columns):
                    assignment = by_position.get(row * columns + col)
                    info = self._format_seat_short(assignment)

                    cell = ws.cell(row=current_row, column=col + 2, value=info or "Empty")
                    cell.fill = OCCUPIED_FILL if info else EMPTY_FILL
                    cell.border = THIN_BORDER
                    cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
                current_row += 1

            current_row += 1
            ws.cell(row=current_row, column=1, value="Room Summary:").font = Font(bold=True, size=12)

            total_seats = rows * columns
            occupied = len(occupied_assignments(arrangement))
            utilization = round((occupied / total_seats) * 100, 1) if total_seats else 0
            ws.cell(row=current_row + 1, column=1, value=f"Total Seats: {total_seats}")
            ws.cell(row=current_row + 2, column=1, value=f"Occupied Seats: {occupied}")
            ws.cell(row=current_row + 3, column=1, value=f"Empty Seats: {total_seats - occupied}")
            ws.cell(row=current_row + 4, column=1, value=f"Utilization: {utilization}%")

            for col_idx in range(1, columns + 2):
                ws.column_dimensions[get_column_letter(col_idx)].width = 15

            filepath = os.path.join(self.export_folder, f"room_{room_no}_{arrangement['id']}_grid_layout.xlsx")
            wb.save(filepath)

            self.logger.info(f"Exported grid layout to {filepath}")
            return filepath

        except Exception as e:
            self.logger.error(f"Error exporting grid layout: {str(e)}")
            return None

    def export_consolidated_report(self, arrangements: List[Dict], hall_id: str = 'all') -> Optional[str]:
        """
        One row per room: room, departments seated there, their register
        numbers and the number of students.
        """
        try:
            hall_name = get_hall_name_by_id(hall_id)

            wb = openpyxl.Workbook()
            ws = wb.active
            ws.title = "Seating Plan"

            ws['A1'] = "DEPARTMENT OF COMPUTER SCIENCE AND BCA"
            ws['A1'].font = Font(bold=True, size=14)
            ws.merge_cells('A1:E1')
            ws['A2'] = f"SEATING PLAN - {hall_name} (EXAM DATE)"
            ws['A2'].font = Font(bold=True, size=12)
            ws.merge_cells('A2:E2')

            headers = ['S.NO', 'ROOM NO', 'CLASS', 'SEATS', 'TOTAL']
            for col, header in enumerate(headers, 1):
                cell = ws.cell(row=4, column=col, value=header)
                cell.font = Font(bold=True, color="FFFFFF")
                cell.fill = HEADER_FILL
                cell.border = THIN_BORDER
                cell.alignment = Alignment(horizontal='center', vertical='center')

            row_num = 5
            for arrangement in arrangements:
                occupied = occupied_assignments(arrangement)
                reg_nos_by_department = group_reg_nos_by_department(occupied)
                seats_text = "\n".join(
                    f"{department}: {', '.join(reg_nos)}"
                    for department, reg_nos in reg_nos_by_department.items()
                )
                row_data = [
                    arrangement['id'],
                    f"{arrangement['floor_no']}{arrangement['room_no']}",
                    "\n".join(reg_nos_by_department.keys()),
                    seats_text,
                    len(occupied),
                ]
                for col, value in enumerate(row_data, 1):
                    cell = ws.cell(row=row_num, column=col, value=value)
                    cell.border = THIN_BORDER
                    cell.alignment = Alignment(vertical='top', wrap_text=True)
                row_num += 1

            for column_letter, width in zip('ABCDE', [8, 10, 15, 50, 8]):
                ws.column_dimensions[column_letter].width = width

            slug = hall_name.lower().replace(' ', '-')
            filepath = os.path.join(self.export_folder, f"seating-plan-{slug}.xlsx")
            wb.save(filepath)

            self.logger.info(f"Exported consolidated report to {filepath}")
            return filepath

        except Exception as e:
            self.logger.error(f"Error exporting consolidated report: {str(e)}")
            return None

    def export_all_arrangements_zip(self, arrangements: List[Dict], hall_id: str = 'all') -> Optional[str]:
        """
        Export every room grid plus the consolidated report, bundled as a ZIP.
        """
        try:
            exported_files = []
            for arrangement in arrangements:
                filepath = self.export_arrangement_grid(arrangement)
                if filepath:
                    exported_files.append(filepath)

            summary_file = self.export_consolidated_report(arrangements, hall_id)
            if summary_file:
                exported_files.append(summary_file)

            if not exported_files:
                return None

            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            zip_filepath = os.path.join(self.export_folder, f"seating_plan_complete_{timestamp}.zip")

            with zipfile.ZipFile(zip_filepath, 'w', zipfile.ZIP_DEFLATED) as zip_file:
                for file_path in exported_files:
                    zip_file.write(file_path, os.path.basename(file_path))

            for file_path in exported_files:
                try:
                    os.remove(file_path)
                except OSError as e:
                    self.logger.warning(f"Could not remove {file_path}: {str(e)}")

            self.logger.info(f"Created complete seating plan ZIP: {zip_filepath}")
            return zip_filepath

        except Exception as e:
            self.logger.error(f"Error creating ZIP export: {str(e)}")
            return None
