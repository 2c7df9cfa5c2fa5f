#!/usr/bin/env python3
"""
Create sample data for the exam hall seating manager: subjects, a student
roster, teachers, exam centers and exams.
"""
import random
from datetime import date, timedelta

import pandas as pd
from faker import Faker

SAMPLE_SUBJECTS = [
    {'code': 'CS101', 'name': 'Data Structures', 'department': 'Computer Science', 'credits': '4'},
    {'code': 'CS102', 'name': 'Operating Systems', 'department': 'Computer Science', 'credits': '4'},
    {'code': 'BCA201', 'name': 'Web Programming', 'department': 'BCA', 'credits': '3'},
    {'code': 'BCA202', 'name': 'Database Systems', 'department': 'BCA', 'credits': '3'},
    {'code': 'EE101', 'name': 'Circuit Theory', 'department': 'Electrical Engineering', 'credits': '4'},
    {'code': 'ME101', 'name': 'Engineering Mechanics', 'department': 'Mechanical Engineering', 'credits': '3'},
]

SAMPLE_CENTERS = [
    {'name': 'Main Campus', 'code': 'MC01', 'address': 'Block A, Main Campus'},
    {'name': 'North Campus', 'code': 'NC02', 'address': 'Science Block, North Campus'},
]

DEPARTMENT_CODES = {
    'Computer Science': 'CS',
    'BCA': 'BCA',
    'Electrical Engineering': 'EE',
    'Mechanical Engineering': 'ME',
}


def create_sample_students(students_per_department=30, seed=None):
    """Roster rows with roll numbers like CS001, one block per department."""
    fake = Faker('en_IN')
    if seed is not None:
        Faker.seed(seed)

    students = []
    for department, code in DEPARTMENT_CODES.items():
        for i in range(students_per_department):
            students.append({
                'roll_number': f"{code}{str(i + 1).zfill(3)}",
                'name': fake.name(),
                'department': department,
                'signature': None,
            })
    return students


def create_sample_teachers(seed=None):
    fake = Faker('en_IN')
    if seed is not None:
        Faker.seed(seed)

    teachers = []
    for i, subject in enumerate(SAMPLE_SUBJECTS, 1):
        teachers.append({
            'employee_id': f"EMP{str(i).zfill(3)}",
            'name': fake.name(),
            'department': subject['department'],
            'subject': subject['name'],
            'signature': None,
        })
    return teachers


def create_sample_exams(start=None):
    """One exam per subject on consecutive weekdays, forenoon session."""
    exam_day = start or date.today() + timedelta(days=7)
    exams = []
    for subject in SAMPLE_SUBJECTS:
        while exam_day.weekday() >= 5:
            exam_day += timedelta(days=1)
        exams.append({
            'subject': subject['name'],
            'date': exam_day.isoformat(),
            'start_time': '10:00',
            'duration': random.choice(['2 hours', '3 hours']),
            'venue': random.choice(['Hall A', 'Hall B', 'Hall C']),
        })
        exam_day += timedelta(days=1)
    return exams


def write_sample_roster(output_file='sample_students.xlsx', students_per_department=30):
    df = pd.DataFrame(create_sample_students(students_per_department))
    df.to_excel(output_file, index=False, engine='openpyxl')
    return output_file, df


if __name__ == "__main__":
    print("Creating sample data for the exam hall seating manager")
    print("=" * 50)

    output_file, df = write_sample_roster()
    print(f"Student roster written to '{output_file}' ({len(df)} students)")
    for department, count in df.groupby('department').size().items():
        print(f"   {department}: {count} students")

    print("\nSubjects:")
    for subject in SAMPLE_SUBJECTS:
        print(f"   {subject['code']}: {subject['name']} ({subject['department']})")
