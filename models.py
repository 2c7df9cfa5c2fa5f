# Records are plain dicts whose keys match the database columns in database.py,
# so configs, students and seats move between the seating core, SQLite and the
# Excel/PDF exporters without any translation layer.

from typing import Dict, Optional

SERIES_PREFIXES = ['A', 'B', 'C', 'D', 'E', 'F']

UNKNOWN_DEPARTMENT = 'Unknown Department'

EDITABLE_CONFIG_FIELDS = ('department', 'start_reg_no', 'end_reg_no', 'prefix', 'year')


def new_department_config(config_id: int, prefix: str, department: str = '',
                          start_reg_no: str = '', end_reg_no: str = '',
                          year: Optional[str] = None) -> Dict:
    return {
        'id': config_id,
        'department': department,
        'start_reg_no': start_reg_no,
        'end_reg_no': end_reg_no,
        'prefix': prefix,
        'year': year,
    }


def empty_seat(seat_id: int) -> Dict:
    """A grid cell with no occupant."""
    return {
        'id': seat_id,
        'seat_no': '',
        'student_name': None,
        'reg_no': None,
        'department': None,
        'subject_code': None,
        'subject_name': None,
    }


def occupied_seat(seat_id: int, student: Dict) -> Dict:
    return {
        'id': seat_id,
        'seat_no': student['seat_no'],
        'student_name': student['name'],
        'reg_no': student['reg_no'],
        'department': student['department'],
        'subject_code': student.get('subject_code'),
        'subject_name': student.get('subject_name'),
    }


def is_occupied(seat: Optional[Dict]) -> bool:
    return bool(seat) and seat.get('reg_no') is not None
