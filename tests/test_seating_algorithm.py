"""
tests/test_seating_algorithm.py

Tests for the round-robin seating allocator and seat rotation.
"""
import pytest

from models import empty_seat
from seating_algorithm import SeatingAlgorithm, generate_seating_plan, rotate_students


@pytest.fixture
def algorithm() -> SeatingAlgorithm:
    return SeatingAlgorithm()


def _occupants(seats):
    return [(s['seat_no'], s['reg_no'], s['department']) for s in seats]


def test_interleave_example(algorithm, cs_ee_configs, subject_catalog):
    seats = algorithm.generate_seating_plan(cs_ee_configs, 1, 3, subject_catalog)

    assert _occupants(seats) == [('A1', '001', 'CS'), ('B1', '001', 'EE'), ('A2', '002', 'CS')]
    assert [s['id'] for s in seats] == [0, 1, 2]
    assert seats[0]['student_name'] == 'CS Student'


def test_interleave_round_robin(algorithm):
    merged = algorithm.interleave([['A1', 'A2', 'A3'], ['B1'], ['C1', 'C2']])
    assert merged == ['A1', 'B1', 'C1', 'A2', 'C2', 'A3']
    assert algorithm.interleave([]) == []


def test_generation_is_deterministic(algorithm, cs_ee_configs, subject_catalog):
    first = algorithm.generate_seating_plan(cs_ee_configs, 3, 4, subject_catalog)
    second = algorithm.generate_seating_plan(cs_ee_configs, 3, 4, subject_catalog)
    assert first == second


@pytest.mark.parametrize("rows,cols", [(1, 1), (2, 3), (5, 6), (4, 1), (20, 20)])
def test_grid_size_invariant(algorithm, cs_ee_configs, rows, cols):
    seats = algorithm.generate_seating_plan(cs_ee_configs, rows, cols)
    assert len(seats) == rows * cols
    assert [s['id'] for s in seats] == list(range(rows * cols))


def test_truncation_on_overflow(algorithm, cs_ee_configs, subject_catalog):
    seats = algorithm.generate_seating_plan(cs_ee_configs, 1, 2, subject_catalog)
    assert [s['seat_no'] for s in seats] == ['A1', 'B1']


def test_empty_seats_on_underflow(algorithm, cs_ee_configs, subject_catalog):
    seats = algorithm.generate_seating_plan(cs_ee_configs, 2, 2, subject_catalog)

    assert seats[3] == empty_seat(3)
    assert seats[3]['seat_no'] == ''
    assert seats[3]['student_name'] is None
    assert seats[3]['reg_no'] is None
    assert seats[3]['department'] is None


def test_invalid_range_contributes_nothing(algorithm, cs_ee_configs, subject_catalog):
    configs = cs_ee_configs + [
        {'id': 3, 'prefix': 'C', 'department': 'ME', 'start_reg_no': '5', 'end_reg_no': '2'}
    ]
    seats = algorithm.generate_seating_plan(configs, 1, 4, subject_catalog)
    assert [s['seat_no'] for s in seats] == ['A1', 'B1', 'A2', '']


def test_empty_department_is_skipped(algorithm):
    configs = [{'id': 1, 'prefix': 'A', 'department': '', 'start_reg_no': '1', 'end_reg_no': '9'}]
    seats = algorithm.generate_seating_plan(configs, 2, 2)
    assert all(s['reg_no'] is None for s in seats)


def test_seat_labels_restart_per_config(algorithm):
    configs = [
        {'id': 1, 'prefix': 'A', 'department': 'CS', 'start_reg_no': '1', 'end_reg_no': '2'},
        {'id': 2, 'prefix': 'A', 'department': 'BCA', 'start_reg_no': '10', 'end_reg_no': '11'},
    ]
    seats = algorithm.generate_seating_plan(configs, 1, 4)

    assert [s['seat_no'] for s in seats] == ['A1', 'A2', 'A1', 'A2']
    assert [s['reg_no'] for s in seats] == ['001', '002', '010', '011']


def test_series_order_canonical_then_first_seen(algorithm):
    configs = [{'prefix': p} for p in ['Z', 'C', 'A', 'X', 'B', 'C']]
    assert algorithm.series_order(configs) == ['A', 'B', 'C', 'Z', 'X']


def test_series_are_interleaved_in_canonical_order(algorithm, subject_catalog):
    configs = [
        {'id': 1, 'prefix': 'B', 'department': 'EE', 'start_reg_no': '1', 'end_reg_no': '1'},
        {'id': 2, 'prefix': 'A', 'department': 'CS', 'start_reg_no': '1', 'end_reg_no': '1'},
    ]
    seats = algorithm.generate_seating_plan(configs, 1, 2, subject_catalog)
    assert [s['seat_no'] for s in seats] == ['A1', 'B1']


@pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-1, 3)])
def test_non_positive_grid_gives_no_seats(algorithm, cs_ee_configs, rows, cols):
    assert algorithm.generate_seating_plan(cs_ee_configs, rows, cols) == []


def test_allocate_reports_dropped_students(algorithm, cs_ee_configs, subject_catalog):
    seats, dropped = algorithm.allocate(cs_ee_configs, 1, 2, subject_catalog)
    assert [s['seat_no'] for s in seats] == ['A1', 'B1']
    assert dropped == 1

    seats, dropped = algorithm.allocate(cs_ee_configs, 2, 2, subject_catalog)
    assert len(seats) == 4
    assert dropped == 0


def test_overflow_count(algorithm):
    assert algorithm.overflow_count(list(range(5)), 3) == 2
    assert algorithm.overflow_count(list(range(2)), 3) == 0


def test_rotate_right_moves_last_occupant_to_front(algorithm, cs_ee_configs, subject_catalog):
    seats = algorithm.generate_seating_plan(cs_ee_configs, 1, 3, subject_catalog)
    rotated = algorithm.rotate_students(seats, 'right')

    assert [s['seat_no'] for s in rotated] == ['A2', 'A1', 'B1']
    assert [s['id'] for s in rotated] == [0, 1, 2]


def test_rotate_left_moves_first_occupant_to_back(algorithm, cs_ee_configs, subject_catalog):
    seats = algorithm.generate_seating_plan(cs_ee_configs, 2, 2, subject_catalog)
    rotated = algorithm.rotate_students(seats, 'left')

    assert [s['seat_no'] for s in rotated] == ['B1', 'A2', '', 'A1']
    assert [s['id'] for s in rotated] == [0, 1, 2, 3]
    # original list untouched
    assert seats[0]['seat_no'] == 'A1'


@pytest.mark.parametrize("first,second", [('left', 'right'), ('right', 'left')])
def test_rotation_round_trip(algorithm, cs_ee_configs, subject_catalog, first, second):
    seats = algorithm.generate_seating_plan(cs_ee_configs, 3, 3, subject_catalog)
    round_trip = algorithm.rotate_students(algorithm.rotate_students(seats, first), second)
    assert round_trip == seats


def test_rotate_empty_and_unknown_direction(algorithm, cs_ee_configs):
    assert algorithm.rotate_students([], 'left') == []

    seats = algorithm.generate_seating_plan(cs_ee_configs, 1, 3)
    assert algorithm.rotate_students(seats, 'sideways') == seats


def test_validate_reports_same_department_neighbours(algorithm):
    configs = [{'id': 1, 'prefix': 'A', 'department': 'CS', 'start_reg_no': '1', 'end_reg_no': '4'}]
    seats = algorithm.generate_seating_plan(configs, 2, 2)
    violations = algorithm.validate_seating_plan(seats, 2)

    # A1-A2 and B1-B2 side by side, A1-B1 and A2-B2 front to back
    assert len(violations) == 4
    assert "Seats A1 and A2: same department side by side" in violations
    assert "Seats A1 and B1: same department front to back" in violations


def test_validate_interleaved_plan_is_clean(algorithm, cs_ee_configs, subject_catalog):
    seats = algorithm.generate_seating_plan(cs_ee_configs, 1, 3, subject_catalog)
    assert algorithm.validate_seating_plan(seats, 3) == []
    assert algorithm.validate_seating_plan(seats, 0) == []


def test_grid_helpers(algorithm):
    assert algorithm.grid_position_label(7, 6) == 'B2'
    assert algorithm.grid_position_label(0, 3) == 'A1'

    assert algorithm.grid_for_capacity(30) == (5, 6)
    assert algorithm.grid_for_capacity(40) == (6, 7)
    assert algorithm.grid_for_capacity(1) == (1, 1)
    assert algorithm.grid_for_capacity(0) == (0, 0)


def test_to_grid(algorithm, cs_ee_configs):
    seats = algorithm.generate_seating_plan(cs_ee_configs, 2, 3)
    grid = algorithm.to_grid(seats, 2, 3)

    assert len(grid) == 2
    assert [s['id'] for s in grid[1]] == [3, 4, 5]
    assert algorithm.to_grid(seats[:4], 2, 3)[1][2] is None


def test_module_wrappers(cs_ee_configs, subject_catalog):
    seats = generate_seating_plan(cs_ee_configs, 1, 3, subject_catalog)
    assert [s['seat_no'] for s in seats] == ['A1', 'B1', 'A2']
    assert rotate_students(rotate_students(seats, 'right'), 'left') == seats
