import sqlite3
from datetime import date
from flask import g, current_app

SCHEMA = """
    CREATE TABLE IF NOT EXISTS students (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        roll_number TEXT UNIQUE NOT NULL,
        name TEXT NOT NULL,
        department TEXT,
        signature TEXT
    );

    CREATE TABLE IF NOT EXISTS teachers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        employee_id TEXT UNIQUE NOT NULL,
        name TEXT NOT NULL,
        department TEXT,
        subject TEXT NOT NULL,
        signature TEXT
    );

    CREATE TABLE IF NOT EXISTS classes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        section TEXT NOT NULL,
        department TEXT,
        capacity INTEGER NOT NULL DEFAULT 0
    );

    CREATE TABLE IF NOT EXISTS subjects (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        code TEXT UNIQUE NOT NULL,
        name TEXT NOT NULL,
        department TEXT,
        credits TEXT NOT NULL DEFAULT ''
    );

    CREATE TABLE IF NOT EXISTS exam_centers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        code TEXT UNIQUE NOT NULL,
        address TEXT
    );

    CREATE TABLE IF NOT EXISTS exams (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        subject TEXT NOT NULL,
        date TEXT NOT NULL,
        start_time TEXT NOT NULL,
        duration TEXT NOT NULL,
        venue TEXT NOT NULL,
        center_id INTEGER,
        FOREIGN KEY (center_id) REFERENCES exam_centers(id)
    );

    CREATE TABLE IF NOT EXISTS seating_arrangements (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        room_no TEXT NOT NULL,
        floor_no TEXT NOT NULL,
        rows INTEGER NOT NULL,
        columns INTEGER NOT NULL,
        exam_id INTEGER,
        center_name TEXT,
        center_code TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (exam_id) REFERENCES exams(id)
    );

    CREATE TABLE IF NOT EXISTS seating_assignments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        arrangement_id INTEGER NOT NULL,
        seat_no TEXT NOT NULL,
        student_name TEXT,
        reg_no TEXT,
        department TEXT,
        position INTEGER NOT NULL,
        FOREIGN KEY (arrangement_id) REFERENCES seating_arrangements(id)
    );

    CREATE TABLE IF NOT EXISTS department_configs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        arrangement_id INTEGER NOT NULL,
        department TEXT NOT NULL,
        start_reg_no TEXT NOT NULL,
        end_reg_no TEXT NOT NULL,
        prefix TEXT NOT NULL,
        year TEXT,
        FOREIGN KEY (arrangement_id) REFERENCES seating_arrangements(id)
    );
"""


def get_db():
    """Get a database connection"""
    if 'db' not in g:
        g.db = sqlite3.connect(current_app.config['DATABASE'])
        g.db.row_factory = sqlite3.Row
        g.db.executescript(SCHEMA)
    return g.db


def close_db(e=None):
    """Close the database connection"""
    db = g.pop('db', None)
    if db is not None:
        db.close()


def query_db(query, args=(), one=False):
    """Execute a query and return results"""
    db = get_db()
    cur = db.execute(query, args)
    rv = cur.fetchall()
    cur.close()
    return (rv[0] if rv else None) if one else rv


def execute_db(query, args=()):
    """Execute a query that doesn't return results"""
    db = get_db()
    db.execute(query, args)
    db.commit()


# Student operations
def get_all_students():
    return query_db("SELECT * FROM students ORDER BY name")


def get_student_by_roll(roll_number):
    return query_db("SELECT * FROM students WHERE roll_number = ?", [roll_number], one=True)


def add_student(roll_number, name, department, signature=None):
    try:
        execute_db(
            "INSERT INTO students (roll_number, name, department, signature) VALUES (?, ?, ?, ?)",
            (roll_number, name, department, signature)
        )
        return True
    except sqlite3.IntegrityError:
        return False


def update_student(student_id, roll_number, name, department, signature=None):
    try:
        execute_db(
            """UPDATE students SET roll_number = ?, name = ?, department = ?, signature = ?
            WHERE id = ?""",
            (roll_number, name, department, signature, student_id)
        )
        return True
    except sqlite3.IntegrityError:
        return False


def update_student_by_roll(roll_number, name, department, signature=None):
    execute_db(
        "UPDATE students SET name = ?, department = ?, signature = ? WHERE roll_number = ?",
        (name, department, signature, roll_number)
    )


def delete_student(student_id):
    execute_db("DELETE FROM students WHERE id = ?", [student_id])


# Teacher operations
def get_all_teachers():
    return query_db("SELECT * FROM teachers ORDER BY name")


def add_teacher(employee_id, name, department, subject, signature=None):
    try:
        execute_db(
            """INSERT INTO teachers (employee_id, name, department, subject, signature)
            VALUES (?, ?, ?, ?, ?)""",
            (employee_id, name, department, subject, signature)
        )
        return True
    except sqlite3.IntegrityError:
        return False


def update_teacher(teacher_id, employee_id, name, department, subject, signature=None):
    try:
        execute_db(
            """UPDATE teachers SET employee_id = ?, name = ?, department = ?, subject = ?, signature = ?
            WHERE id = ?""",
            (employee_id, name, department, subject, signature, teacher_id)
        )
        return True
    except sqlite3.IntegrityError:
        return False


def delete_teacher(teacher_id):
    execute_db("DELETE FROM teachers WHERE id = ?", [teacher_id])


# Class operations
def get_all_classes():
    return query_db("SELECT * FROM classes ORDER BY name, section")


def add_class(name, section, department, capacity):
    execute_db(
        "INSERT INTO classes (name, section, department, capacity) VALUES (?, ?, ?, ?)",
        (name, section, department, capacity)
    )
    return True


def update_class(class_id, name, section, department, capacity):
    execute_db(
        "UPDATE classes SET name = ?, section = ?, department = ?, capacity = ? WHERE id = ?",
        (name, section, department, capacity, class_id)
    )
    return True


def delete_class(class_id):
    execute_db("DELETE FROM classes WHERE id = ?", [class_id])


# Subject operations
def get_all_subjects():
    return query_db("SELECT * FROM subjects ORDER BY department, name")


def get_subject_catalog():
    """Subjects as plain dicts for seat label resolution."""
    return [
        {'name': s['name'], 'department': s['department'], 'code': s['code']}
        for s in get_all_subjects()
    ]


def add_subject(code, name, department, credits=''):
    try:
        execute_db(
            "INSERT INTO subjects (code, name, department, credits) VALUES (?, ?, ?, ?)",
            (code, name, department, credits)
        )
        return True
    except sqlite3.IntegrityError:
        return False


def update_subject(subject_id, code, name, department, credits=''):
    try:
        execute_db(
            "UPDATE subjects SET code = ?, name = ?, department = ?, credits = ? WHERE id = ?",
            (code, name, department, credits, subject_id)
        )
        return True
    except sqlite3.IntegrityError:
        return False


def delete_subject(subject_id):
    execute_db("DELETE FROM subjects WHERE id = ?", [subject_id])


# Exam center operations
def get_all_exam_centers():
    return query_db("SELECT * FROM exam_centers ORDER BY name")


def get_exam_center_by_name(name):
    return query_db("SELECT * FROM exam_centers WHERE name = ?", [name], one=True)


def add_exam_center(name, code, address=None):
    try:
        execute_db(
            "INSERT INTO exam_centers (name, code, address) VALUES (?, ?, ?)",
            (name, code, address)
        )
        return True
    except sqlite3.IntegrityError:
        return False


def update_exam_center(center_id, name, code, address=None):
    try:
        execute_db(
            "UPDATE exam_centers SET name = ?, code = ?, address = ? WHERE id = ?",
            (name, code, address, center_id)
        )
        return True
    except sqlite3.IntegrityError:
        return False


def delete_exam_center(center_id):
    execute_db("DELETE FROM exam_centers WHERE id = ?", [center_id])


# Exam operations
def get_all_exams():
    return query_db("SELECT * FROM exams ORDER BY date, start_time")


def add_exam(subject, exam_date, start_time, duration, venue, center_id=None):
    execute_db(
        """INSERT INTO exams (subject, date, start_time, duration, venue, center_id)
        VALUES (?, ?, ?, ?, ?, ?)""",
        (subject, exam_date, start_time, duration, venue, center_id)
    )
    return True


def update_exam(exam_id, subject, exam_date, start_time, duration, venue, center_id=None):
    execute_db(
        """UPDATE exams SET subject = ?, date = ?, start_time = ?, duration = ?, venue = ?,
        center_id = ? WHERE id = ?""",
        (subject, exam_date, start_time, duration, venue, center_id, exam_id)
    )
    return True


def delete_exam(exam_id):
    execute_db("UPDATE seating_arrangements SET exam_id = NULL WHERE exam_id = ?", [exam_id])
    execute_db("DELETE FROM exams WHERE id = ?", [exam_id])


# Seating arrangement operations
def save_seating_arrangement(room_no, floor_no, rows, columns, seats, configs, exam_id=None,
                             center_name=None, center_code=None):
    """Store a generated seat list with the department configs it came from."""
    db = get_db()
    cur = db.execute(
        """INSERT INTO seating_arrangements
        (room_no, floor_no, rows, columns, exam_id, center_name, center_code)
        VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (room_no, floor_no, rows, columns, exam_id, center_name, center_code)
    )
    arrangement_id = cur.lastrowid
    cur.close()

    db.executemany(
        """INSERT INTO seating_assignments
        (arrangement_id, seat_no, student_name, reg_no, department, position)
        VALUES (?, ?, ?, ?, ?, ?)""",
        [
            (arrangement_id, seat['seat_no'], seat['student_name'], seat['reg_no'],
             seat['department'], index)
            for index, seat in enumerate(seats)
        ]
    )
    db.executemany(
        """INSERT INTO department_configs
        (arrangement_id, department, start_reg_no, end_reg_no, prefix, year)
        VALUES (?, ?, ?, ?, ?, ?)""",
        [
            (arrangement_id, c['department'], c['start_reg_no'], c['end_reg_no'],
             c['prefix'], c.get('year'))
            for c in configs if c.get('department')
        ]
    )
    db.commit()
    return arrangement_id


def _load_arrangement(row):
    arrangement = dict(row)
    arrangement['seating_assignments'] = [
        dict(a) for a in query_db(
            "SELECT * FROM seating_assignments WHERE arrangement_id = ? ORDER BY position",
            [row['id']]
        )
    ]
    arrangement['department_configs'] = [
        dict(c) for c in query_db(
            "SELECT * FROM department_configs WHERE arrangement_id = ? ORDER BY id",
            [row['id']]
        )
    ]
    return arrangement


def get_seating_arrangement(arrangement_id):
    row = query_db("SELECT * FROM seating_arrangements WHERE id = ?", [arrangement_id], one=True)
    if not row:
        return None
    return _load_arrangement(row)


def get_all_seating_arrangements():
    return [
        _load_arrangement(row)
        for row in query_db("SELECT * FROM seating_arrangements ORDER BY id")
    ]


def delete_seating_arrangement(arrangement_id):
    db = get_db()
    db.execute("DELETE FROM seating_assignments WHERE arrangement_id = ?", [arrangement_id])
    db.execute("DELETE FROM department_configs WHERE arrangement_id = ?", [arrangement_id])
    db.execute("DELETE FROM seating_arrangements WHERE id = ?", [arrangement_id])
    db.commit()


def clear_tables(*tables):
    db = get_db()
    for table in tables:
        db.execute(f"DELETE FROM {table}")
    db.commit()


def _count(table, where="", args=()):
    row = query_db(f"SELECT COUNT(*) AS total FROM {table} {where}", args, one=True)
    return row['total']


def get_dashboard_stats(today=None):
    today = today or date.today().isoformat()
    return {
        'total_students': _count('students'),
        'active_teachers': _count('teachers'),
        'total_classes': _count('classes'),
        'active_subjects': _count('subjects'),
        'seating_plans': _count('seating_arrangements'),
        'upcoming_exams': _count('exams', "WHERE date >= ?", [today]),
    }
