"""
tests/test_database.py

SQLite persistence: roster CRUD, subject catalog, saved arrangements and
dashboard counters, each on a fresh database file.
"""
import pytest

from database import (
    add_class, add_exam, add_exam_center, add_student, add_subject, add_teacher, clear_tables,
    delete_exam, delete_seating_arrangement, delete_student, get_all_classes, get_all_exams,
    get_all_seating_arrangements, get_all_students, get_all_teachers, get_dashboard_stats,
    get_exam_center_by_name, get_seating_arrangement, get_student_by_roll, get_subject_catalog, query_db,
    save_seating_arrangement, update_class, update_student, update_student_by_roll, update_teacher
)
from seating_algorithm import generate_seating_plan

pytestmark = pytest.mark.usefixtures('app_context')


def test_add_student_rejects_duplicate_roll_number():
    assert add_student('CS001', 'Asha Rao', 'Computer Science') is True
    assert add_student('CS001', 'Someone Else', 'BCA') is False
    assert len(get_all_students()) == 1


def test_update_and_delete_student():
    add_student('CS001', 'Asha Rao', 'Computer Science')
    add_student('CS002', 'Vikram Das', 'Computer Science')
    student = get_student_by_roll('CS001')

    assert update_student(student['id'], 'CS003', 'Asha R', 'BCA') is True
    assert get_student_by_roll('CS003')['department'] == 'BCA'
    # cannot take another student's roll number
    assert update_student(student['id'], 'CS002', 'Asha R', 'BCA') is False

    update_student_by_roll('CS002', 'Vikram D', 'EE', 'signed')
    assert get_student_by_roll('CS002')['signature'] == 'signed'

    delete_student(student['id'])
    assert [s['roll_number'] for s in get_all_students()] == ['CS002']


def test_teacher_and_class_updates():
    assert add_teacher('EMP001', 'Meera Iyer', 'Computer Science', 'Data Structures')
    assert add_teacher('EMP001', 'Duplicate', 'BCA', 'Web Programming') is False

    teacher_id = query_db("SELECT id FROM teachers", one=True)['id']
    update_teacher(teacher_id, 'EMP001', 'Meera Iyer', 'Computer Science', 'Operating Systems')
    assert get_all_teachers()[0]['subject'] == 'Operating Systems'

    add_class('BSc CS', 'A', 'Computer Science', 60)
    class_id = get_all_classes()[0]['id']
    update_class(class_id, 'BSc CS', 'B', 'Computer Science', 55)
    assert get_all_classes()[0]['section'] == 'B'
    assert get_all_classes()[0]['capacity'] == 55


def test_subject_catalog():
    add_subject('CS101', 'Data Structures', 'Computer Science', '4')
    assert add_subject('CS101', 'Again', 'Computer Science') is False

    assert get_subject_catalog() == [
        {'name': 'Data Structures', 'department': 'Computer Science', 'code': 'CS101'}
    ]


def test_exam_center_lookup():
    add_exam_center('Main Campus', 'MC01', 'Block A')
    assert get_exam_center_by_name('Main Campus')['code'] == 'MC01'
    assert get_exam_center_by_name('Nowhere') is None
    assert add_exam_center('Other', 'MC01') is False


def test_save_and_load_arrangement(cs_ee_configs, subject_catalog):
    configs = cs_ee_configs + [
        {'id': 3, 'prefix': 'C', 'department': '', 'start_reg_no': '', 'end_reg_no': '', 'year': None}
    ]
    seats = generate_seating_plan(configs, 2, 2, subject_catalog)
    arrangement_id = save_seating_arrangement('101', '1', 2, 2, seats, configs,
                                              center_name='Main Campus', center_code='MC01')

    arrangement = get_seating_arrangement(arrangement_id)
    assert arrangement['room_no'] == '101'
    assert arrangement['rows'] == 2
    assert (arrangement['center_name'], arrangement['center_code']) == ('Main Campus', 'MC01')
    assert [a['position'] for a in arrangement['seating_assignments']] == [0, 1, 2, 3]
    assert [a['seat_no'] for a in arrangement['seating_assignments']] == ['A1', 'B1', 'A2', '']
    assert arrangement['seating_assignments'][3]['reg_no'] is None
    # unfinished configs are not stored
    assert [c['prefix'] for c in arrangement['department_configs']] == ['A', 'B']


def test_delete_arrangement_removes_children(cs_ee_configs):
    seats = generate_seating_plan(cs_ee_configs, 1, 3)
    first = save_seating_arrangement('101', '1', 1, 3, seats, cs_ee_configs)
    second = save_seating_arrangement('201', '2', 1, 3, seats, cs_ee_configs)

    delete_seating_arrangement(first)

    assert get_seating_arrangement(first) is None
    assert [a['id'] for a in get_all_seating_arrangements()] == [second]
    assert query_db("SELECT COUNT(*) AS n FROM seating_assignments WHERE arrangement_id = ?",
                    [first], one=True)['n'] == 0


def test_delete_exam_detaches_arrangements(cs_ee_configs):
    add_exam('Data Structures', '2030-03-02', '10:00', '3 hours', 'Hall A')
    exam_id = get_all_exams()[0]['id']
    arrangement_id = save_seating_arrangement('101', '1', 1, 3, generate_seating_plan(cs_ee_configs, 1, 3),
                                              cs_ee_configs, exam_id)

    delete_exam(exam_id)

    assert get_all_exams() == []
    assert get_seating_arrangement(arrangement_id)['exam_id'] is None


def test_dashboard_stats(cs_ee_configs):
    add_student('CS001', 'Asha Rao', 'Computer Science')
    add_subject('CS101', 'Data Structures', 'Computer Science')
    add_exam('Data Structures', '2030-01-10', '10:00', '3 hours', 'Hall A')
    add_exam('Old Paper', '2020-01-10', '10:00', '3 hours', 'Hall B')
    save_seating_arrangement('101', '1', 1, 3, generate_seating_plan(cs_ee_configs, 1, 3), cs_ee_configs)

    stats = get_dashboard_stats(today='2025-06-01')
    assert stats == {
        'total_students': 1,
        'active_teachers': 0,
        'total_classes': 0,
        'active_subjects': 1,
        'seating_plans': 1,
        'upcoming_exams': 1,
    }

    clear_tables('students', 'exams')
    assert get_dashboard_stats(today='2025-06-01')['total_students'] == 0
