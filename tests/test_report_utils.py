"""
tests/test_report_utils.py

Hall lookup and grouping helpers shared by the Excel and PDF reports.
"""
from report_utils import (
    DEFAULT_HALLS, filter_arrangements_by_hall, format_department_with_year,
    get_departments_with_years, get_hall_by_id, get_hall_id_by_room_number,
    get_hall_name_by_id, group_assignments_by_series, group_reg_nos_by_department,
    occupied_assignments
)


def test_hall_lookup():
    assert get_hall_by_id('2')['name'] == 'Hall B'
    assert get_hall_by_id('9') is None
    assert get_hall_name_by_id('all') == 'All Halls'
    assert get_hall_name_by_id('') == 'All Halls'
    assert get_hall_name_by_id('3') == 'Hall C'
    assert get_hall_name_by_id('9') == 'Unknown Hall'
    assert [h['capacity'] for h in DEFAULT_HALLS] == [30, 40, 50]


def test_hall_id_by_room_number():
    assert get_hall_id_by_room_number('B203') == '2'
    assert get_hall_id_by_room_number('Z999') is None


def test_filter_arrangements_by_hall():
    arrangements = [{'room_no': '101'}, {'room_no': '205'}, {'room_no': '310'}, {'room_no': 'G1'}]

    assert filter_arrangements_by_hall(arrangements, 'all') == arrangements
    assert filter_arrangements_by_hall(arrangements, '1') == [{'room_no': '101'}]
    assert filter_arrangements_by_hall(arrangements, '2') == [{'room_no': '205'}]
    assert filter_arrangements_by_hall(arrangements, '3') == [{'room_no': '310'}, {'room_no': 'G1'}]


def test_group_reg_nos_by_department(sample_arrangement):
    occupied = occupied_assignments(sample_arrangement)
    assert len(occupied) == 3

    groups = group_reg_nos_by_department(occupied)
    assert list(groups.items()) == [('CS', ['001', '002']), ('EE', ['001'])]


def test_group_assignments_by_series(sample_arrangement):
    groups = group_assignments_by_series(sample_arrangement['seating_assignments'])

    assert list(groups) == ['A', 'B']
    assert [a['seat_no'] for a in groups['A']] == ['A1', 'A2']


def test_departments_with_years(sample_arrangement):
    sample_arrangement['department_configs'].append(
        {'prefix': 'C', 'department': 'CS', 'year': '2nd Year'}
    )
    pairs = get_departments_with_years(sample_arrangement)

    assert pairs == [('CS', '2nd Year'), ('EE', None)]
    assert [format_department_with_year(d, y) for d, y in pairs] == ['CS (2nd Year)', 'EE']
    assert format_department_with_year(None, '1st Year') == 'Unknown'


def test_filter_uses_listed_room_numbers_first():
    arrangements = [{'room_no': 'B203'}, {'room_no': 'A101'}, {'room_no': '105'}]

    assert filter_arrangements_by_hall(arrangements, '2') == [{'room_no': 'B203'}]
    assert filter_arrangements_by_hall(arrangements, '1') == [{'room_no': 'A101'}, {'room_no': '105'}]
    assert filter_arrangements_by_hall(arrangements, '3') == []
