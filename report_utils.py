from collections import OrderedDict
from typing import Dict, List, Optional, Tuple

# No halls table exists, so halls and their room numbers are fixed here
DEFAULT_HALLS = [
    {'id': '1', 'name': 'Hall A', 'capacity': 30,
     'room_numbers': ['A101', 'A102', 'A103', 'A104', 'A105']},
    {'id': '2', 'name': 'Hall B', 'capacity': 40,
     'room_numbers': ['B201', 'B202', 'B203', 'B204', 'B205']},
    {'id': '3', 'name': 'Hall C', 'capacity': 50,
     'room_numbers': ['C301', 'C302', 'C303', 'C304', 'C305']},
]


def get_hall_by_id(hall_id: str) -> Optional[Dict]:
    return next((hall for hall in DEFAULT_HALLS if hall['id'] == hall_id), None)


def get_hall_name_by_id(hall_id: Optional[str]) -> str:
    if not hall_id or hall_id == 'all':
        return 'All Halls'
    hall = get_hall_by_id(hall_id)
    return hall['name'] if hall else 'Unknown Hall'


def get_hall_id_by_room_number(room_number: str) -> Optional[str]:
    for hall in DEFAULT_HALLS:
        if room_number in hall['room_numbers']:
            return hall['id']
    return None


def _hall_id_for_room(room_no: str) -> str:
    listed = get_hall_id_by_room_number(room_no)
    if listed:
        return listed
    # 1xx rooms are in hall 1, 2xx in hall 2, everything else in hall 3
    first_digit = str(room_no)[:1]
    if first_digit == '1':
        return '1'
    if first_digit == '2':
        return '2'
    return '3'


def filter_arrangements_by_hall(arrangements: List[Dict], hall_id: Optional[str]) -> List[Dict]:
    if not hall_id or hall_id == 'all':
        return arrangements
    return [a for a in arrangements if _hall_id_for_room(a['room_no']) == hall_id]


def occupied_assignments(arrangement: Dict) -> List[Dict]:
    return [a for a in arrangement.get('seating_assignments', []) if a.get('reg_no')]


def group_reg_nos_by_department(assignments: List[Dict]) -> Dict[str, List[str]]:
    """Registration numbers per department, in seating order."""
    groups = OrderedDict()
    for assignment in assignments:
        if not assignment.get('reg_no'):
            continue
        groups.setdefault(f"{assignment.get('department')}", []).append(assignment['reg_no'])
    return groups


def group_assignments_by_series(assignments: List[Dict]) -> Dict[str, List[Dict]]:
    """Occupied assignments keyed by the letter of their seat label, sorted."""
    groups = {}
    for assignment in assignments:
        if not assignment.get('reg_no'):
            continue
        prefix = (assignment.get('seat_no') or '')[:1] or 'Unknown'
        groups.setdefault(prefix, []).append(assignment)

    return OrderedDict(
        (prefix, sorted(groups[prefix], key=lambda a: a.get('seat_no') or ''))
        for prefix in sorted(groups)
    )


def format_department_with_year(department: Optional[str], year: Optional[str]) -> str:
    if not department:
        return 'Unknown'
    return f"{department} ({year})" if year else department


def get_departments_with_years(arrangement: Dict) -> List[Tuple[str, Optional[str]]]:
    """Distinct (department, year) pairs from the configs an arrangement was built from."""
    pairs = []
    for config in arrangement.get('department_configs', []):
        pair = (config.get('department'), config.get('year'))
        if pair[0] and pair not in pairs:
            pairs.append(pair)
    return pairs


def department_year_lookup(arrangement: Dict) -> Dict[str, Optional[str]]:
    return {department: year for department, year in get_departments_with_years(arrangement)}
