import os
import logging
from flask import Flask, request, redirect, url_for, flash, jsonify, send_file, get_flashed_messages
from werkzeug.utils import secure_filename
from database import (
    close_db, get_all_students, get_student_by_roll, add_student, update_student,
    update_student_by_roll, delete_student, get_all_teachers, add_teacher, update_teacher, delete_teacher,
    get_all_classes, add_class, update_class, delete_class, get_all_subjects,
    get_subject_catalog, add_subject, update_subject, delete_subject,
    get_all_exam_centers, get_exam_center_by_name, add_exam_center, update_exam_center,
    delete_exam_center, get_all_exams, add_exam, update_exam, delete_exam,
    save_seating_arrangement, get_seating_arrangement, get_all_seating_arrangements,
    delete_seating_arrangement, clear_tables, get_dashboard_stats
)
from department_registry import DepartmentRegistry
from seating_algorithm import seating_algorithm
from excel_handler import ExcelHandler
from pdf_handler import generate_seating_pdf, generate_attendance_pdf
from report_utils import DEFAULT_HALLS, get_hall_by_id, get_hall_name_by_id, filter_arrangements_by_hall
from create_test_data import (
    SAMPLE_CENTERS, SAMPLE_SUBJECTS, create_sample_exams, create_sample_students, create_sample_teachers
)

# Set up logging
logging.basicConfig(level=logging.DEBUG)

app = Flask(__name__)
app.secret_key = os.environ.get("SESSION_SECRET", "dev-secret-key-change-in-production")

# Configuration
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
UPLOAD_FOLDER = os.path.join(BASE_DIR, 'uploads')
EXPORT_FOLDER = os.path.join(BASE_DIR, 'exports')
ALLOWED_EXTENSIONS = {'xlsx', 'xls'}
DEFAULT_ROWS = 5
DEFAULT_COLUMNS = 6
MAX_GRID_SIDE = 20

app.config['DATABASE'] = os.environ.get("DATABASE_PATH", os.path.join(BASE_DIR, 'seating.db'))
app.config['UPLOAD_FOLDER'] = UPLOAD_FOLDER
app.config['EXPORT_FOLDER'] = EXPORT_FOLDER
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # 16MB max file size

# Ensure directories exist
os.makedirs(UPLOAD_FOLDER, exist_ok=True)
os.makedirs(EXPORT_FOLDER, exist_ok=True)


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def _excel_handler():
    return ExcelHandler(app.config['EXPORT_FOLDER'])


def _registry():
    if 'DEPARTMENT_REGISTRY' not in app.config:
        app.config['DEPARTMENT_REGISTRY'] = DepartmentRegistry()
    return app.config['DEPARTMENT_REGISTRY']


def _seating_state():
    if 'SEATING_STATE' not in app.config:
        app.config['SEATING_STATE'] = {
            'center_name': '',
            'center_code': '',
            'room_no': '',
            'floor_no': '',
            'hall_id': '',
            'rows': DEFAULT_ROWS,
            'columns': DEFAULT_COLUMNS,
            'seats': [],
        }
    return app.config['SEATING_STATE']


def _form(*names):
    return [request.form.get(name, '').strip() for name in names]


@app.teardown_appcontext
def teardown_db(exception):
    close_db()


@app.route('/')
def index():
    return jsonify({
        'stats': get_dashboard_stats(),
        'messages': get_flashed_messages(with_categories=True),
    })


@app.route('/api/dashboard')
def dashboard():
    return jsonify(get_dashboard_stats())


# Seating session

@app.route('/seating')
def seating():
    state = _seating_state()
    registry = _registry()
    return jsonify({
        'department_configs': registry.configs,
        'center': {k: state[k] for k in ('center_name', 'center_code', 'room_no', 'floor_no', 'hall_id')},
        'rows': state['rows'],
        'columns': state['columns'],
        'seats': state['seats'],
        'violations': seating_algorithm.validate_seating_plan(state['seats'], state['columns']),
        'halls': DEFAULT_HALLS,
        'messages': get_flashed_messages(with_categories=True),
    })


@app.route('/seating/series', methods=['POST'])
def add_series():
    prefix = request.form.get('prefix', '').strip().upper()
    if not prefix:
        flash('Series prefix is required', 'error')
        return redirect(url_for('seating'))

    notice = _registry().add_series(prefix)
    flash(notice.message, notice.category)
    return redirect(url_for('seating'))


@app.route('/seating/series/<int:config_id>/delete', methods=['POST'])
def remove_series(config_id):
    notice = _registry().remove_series(config_id)
    if notice:
        flash(notice.message, notice.category)
    else:
        flash('Department configuration not found', 'error')
    return redirect(url_for('seating'))


@app.route('/seating/series/<int:config_id>/update', methods=['POST'])
def update_series(config_id):
    field = request.form.get('field', '').strip()
    value = request.form.get('value', '').strip()
    _registry().update_field(config_id, field, value)
    return redirect(url_for('seating'))


@app.route('/seating/center', methods=['POST'])
def update_center():
    try:
        state = _seating_state()
        center_name, center_code, room_no, floor_no = _form(
            'center_name', 'center_code', 'room_no', 'floor_no')
        rows = int(request.form.get('rows') or state['rows'])
        columns = int(request.form.get('columns') or state['columns'])

        if not (1 <= rows <= MAX_GRID_SIDE and 1 <= columns <= MAX_GRID_SIDE):
            flash(f'Rows and columns must be between 1 and {MAX_GRID_SIDE}', 'error')
            return redirect(url_for('seating'))

        center = get_exam_center_by_name(center_name) if center_name else None
        state.update({
            'center_name': center_name,
            'center_code': center_code or (center['code'] if center else state['center_code']),
            'room_no': room_no,
            'floor_no': floor_no,
            'rows': rows,
            'columns': columns,
        })
        flash('Center details updated', 'success')

    except ValueError:
        flash('Invalid number format for rows or columns', 'error')
    except Exception as e:
        logging.error(f"Error updating center details: {str(e)}")
        flash(f'Error updating center details: {str(e)}', 'error')

    return redirect(url_for('seating'))


@app.route('/seating/hall', methods=['POST'])
def select_hall():
    hall_id = request.form.get('hall_id', '').strip()
    hall = get_hall_by_id(hall_id)
    if not hall:
        flash('Hall not found', 'error')
        return redirect(url_for('seating'))

    rows, columns = seating_algorithm.grid_for_capacity(hall['capacity'])
    _seating_state().update({'hall_id': hall_id, 'rows': rows, 'columns': columns})
    flash(f"{hall['name']} selected with {hall['capacity']} seats ({rows} rows × {columns})", 'success')
    return redirect(url_for('seating'))


@app.route('/seating/generate', methods=['POST'])
def generate_seating():
    try:
        state = _seating_state()
        if not all([state['center_name'], state['center_code'], state['room_no'], state['floor_no']]):
            flash('Please fill in all center details', 'error')
            return redirect(url_for('seating'))

        configs = _registry().configs
        subject_catalog = get_subject_catalog()
        seats, dropped = seating_algorithm.allocate(
            configs, state['rows'], state['columns'], subject_catalog
        )
        state['seats'] = seats

        if dropped:
            flash(f'{dropped} students did not fit in the {state["rows"]}×{state["columns"]} grid', 'warning')
        flash('Seating arrangement generated successfully', 'success')

    except Exception as e:
        logging.error(f"Error generating seating: {str(e)}")
        flash(f'Error generating seating arrangement: {str(e)}', 'error')

    return redirect(url_for('seating'))


@app.route('/seating/rotate', methods=['POST'])
def rotate_seating():
    state = _seating_state()
    direction = request.form.get('direction', '').strip().lower()

    if not state['seats']:
        flash('Generate a seating arrangement first', 'error')
    elif direction not in ('left', 'right'):
        flash('Rotation direction must be left or right', 'error')
    else:
        state['seats'] = seating_algorithm.rotate_students(state['seats'], direction)
        flash(f'Students rotated {direction}', 'success')

    return redirect(url_for('seating'))


@app.route('/seating/reset', methods=['POST'])
def reset_seating():
    _seating_state()['seats'] = []
    flash('Seating arrangement cleared', 'info')
    return redirect(url_for('seating'))


@app.route('/seating/save', methods=['POST'])
def save_seating():
    try:
        state = _seating_state()
        if not state['seats']:
            flash('Generate a seating arrangement first', 'error')
            return redirect(url_for('seating'))

        exam_id = request.form.get('exam_id', type=int)
        arrangement_id = save_seating_arrangement(
            state['room_no'], state['floor_no'], state['rows'], state['columns'],
            state['seats'], _registry().configs, exam_id,
            state['center_name'], state['center_code']
        )
        flash('Seating arrangement saved successfully', 'success')
        return redirect(url_for('view_arrangement', arrangement_id=arrangement_id))

    except Exception as e:
        logging.error(f"Error saving seating arrangement: {str(e)}")
        flash('Failed to save seating arrangement', 'error')
        return redirect(url_for('seating'))


@app.route('/seating/load/<int:arrangement_id>', methods=['POST'])
def load_seating(arrangement_id):
    """Reopen a saved arrangement's department configs for editing."""
    arrangement = get_seating_arrangement(arrangement_id)
    if not arrangement:
        flash('Seating arrangement not found', 'error')
        return redirect(url_for('seating'))

    _registry().replace(arrangement['department_configs'])
    state = _seating_state()
    state.update({
        'center_name': arrangement['center_name'] or state['center_name'],
        'center_code': arrangement['center_code'] or state['center_code'],
        'room_no': arrangement['room_no'],
        'floor_no': arrangement['floor_no'],
        'rows': arrangement['rows'],
        'columns': arrangement['columns'],
        'seats': [],
    })
    flash(f"Loaded configuration of room {arrangement['room_no']}", 'success')
    return redirect(url_for('seating'))


# Students

@app.route('/api/students')
def list_students():
    return jsonify({
        'students': [dict(s) for s in get_all_students()],
        'messages': get_flashed_messages(with_categories=True),
    })


@app.route('/students/add', methods=['POST'])
def add_student_route():
    roll_number, name, department, signature = _form('roll_number', 'name', 'department', 'signature')
    if not all([roll_number, name]):
        flash('Roll number and name are required', 'error')
    elif add_student(roll_number, name, department, signature or None):
        flash('Student added successfully', 'success')
    else:
        flash('Roll number already exists', 'error')
    return redirect(url_for('list_students'))


@app.route('/students/<int:student_id>/update', methods=['POST'])
def update_student_route(student_id):
    roll_number, name, department, signature = _form('roll_number', 'name', 'department', 'signature')
    if not all([roll_number, name]):
        flash('Roll number and name are required', 'error')
    elif update_student(student_id, roll_number, name, department, signature or None):
        flash('Student updated successfully', 'success')
    else:
        flash('Roll number already exists', 'error')
    return redirect(url_for('list_students'))


@app.route('/students/<int:student_id>/delete', methods=['POST'])
def delete_student_route(student_id):
    try:
        delete_student(student_id)
        flash('Student deleted successfully', 'success')
    except Exception as e:
        logging.error(f"Error deleting student: {str(e)}")
        flash('Error deleting student', 'error')
    return redirect(url_for('list_students'))


@app.route('/upload_students', methods=['POST'])
def upload_students():
    try:
        if 'file' not in request.files:
            flash('No file selected', 'error')
            return redirect(url_for('list_students'))

        file = request.files['file']
        if file.filename == '':
            flash('No file selected', 'error')
            return redirect(url_for('list_students'))

        if not (file and file.filename and allowed_file(file.filename)):
            flash('Invalid file type. Please upload an Excel file (.xlsx or .xls)', 'error')
            return redirect(url_for('list_students'))

        filepath = os.path.join(app.config['UPLOAD_FOLDER'], secure_filename(file.filename))
        file.save(filepath)

        result = _excel_handler().read_student_data(filepath)
        if result is None:
            flash('Error processing Excel file. Please check the format.', 'error')
            return redirect(url_for('list_students'))

        students_df, duplicates_in_file = result
        update_existing = 'update_existing' in request.form
        added = updated = skipped = 0
        for _, row in students_df.iterrows():
            if get_student_by_roll(row['roll_number']) is None:
                add_student(row['roll_number'], row['name'], row['department'], row['signature'])
                added += 1
            elif update_existing:
                update_student_by_roll(row['roll_number'], row['name'], row['department'], row['signature'])
                updated += 1
            else:
                skipped += 1

        if duplicates_in_file:
            flash(f"Duplicate roll numbers in file ignored: {', '.join(duplicates_in_file)}", 'warning')
        flash(f'Imported {added} students ({updated} updated, {skipped} existing skipped)', 'success')

    except Exception as e:
        logging.error(f"Error uploading file: {str(e)}")
        flash(f'Error uploading file: {str(e)}', 'error')

    return redirect(url_for('list_students'))


@app.route('/export_students', methods=['POST'])
def export_students():
    students = get_all_students()
    if not students:
        flash('No student data to export', 'warning')
        return redirect(url_for('list_students'))

    filepath = _excel_handler().export_students([dict(s) for s in students])
    if not filepath:
        flash('Error exporting students', 'error')
        return redirect(url_for('list_students'))
    return send_file(filepath, as_attachment=True, download_name=os.path.basename(filepath))


# Teachers

@app.route('/api/teachers')
def list_teachers():
    return jsonify({
        'teachers': [dict(t) for t in get_all_teachers()],
        'messages': get_flashed_messages(with_categories=True),
    })


@app.route('/teachers/add', methods=['POST'])
def add_teacher_route():
    employee_id, name, department, subject, signature = _form(
        'employee_id', 'name', 'department', 'subject', 'signature')
    if not all([employee_id, name, subject]):
        flash('Employee ID, name and subject are required', 'error')
    elif add_teacher(employee_id, name, department, subject, signature or None):
        flash('Teacher added successfully', 'success')
    else:
        flash('Employee ID already exists', 'error')
    return redirect(url_for('list_teachers'))


@app.route('/teachers/<int:teacher_id>/update', methods=['POST'])
def update_teacher_route(teacher_id):
    employee_id, name, department, subject, signature = _form(
        'employee_id', 'name', 'department', 'subject', 'signature')
    if not all([employee_id, name, subject]):
        flash('Employee ID, name and subject are required', 'error')
    elif update_teacher(teacher_id, employee_id, name, department, subject, signature or None):
        flash('Teacher updated successfully', 'success')
    else:
        flash('Employee ID already exists', 'error')
    return redirect(url_for('list_teachers'))


@app.route('/teachers/<int:teacher_id>/delete', methods=['POST'])
def delete_teacher_route(teacher_id):
    delete_teacher(teacher_id)
    flash('Teacher deleted successfully', 'success')
    return redirect(url_for('list_teachers'))


# Classes

@app.route('/api/classes')
def list_classes():
    return jsonify({
        'classes': [dict(c) for c in get_all_classes()],
        'messages': get_flashed_messages(with_categories=True),
    })


@app.route('/classes/add', methods=['POST'])
def add_class_route():
    try:
        name, section, department = _form('name', 'section', 'department')
        capacity = int(request.form.get('capacity', 0))
        if not all([name, section]) or capacity < 0:
            flash('Invalid class details', 'error')
        else:
            add_class(name, section, department, capacity)
            flash('Class added successfully', 'success')
    except ValueError:
        flash('Invalid number format for capacity', 'error')
    return redirect(url_for('list_classes'))


@app.route('/classes/<int:class_id>/update', methods=['POST'])
def update_class_route(class_id):
    try:
        name, section, department = _form('name', 'section', 'department')
        capacity = int(request.form.get('capacity', 0))
        if not all([name, section]) or capacity < 0:
            flash('Invalid class details', 'error')
        else:
            update_class(class_id, name, section, department, capacity)
            flash('Class updated successfully', 'success')
    except ValueError:
        flash('Invalid number format for capacity', 'error')
    return redirect(url_for('list_classes'))


@app.route('/classes/<int:class_id>/delete', methods=['POST'])
def delete_class_route(class_id):
    delete_class(class_id)
    flash('Class deleted successfully', 'success')
    return redirect(url_for('list_classes'))


# Subjects

@app.route('/api/subjects')
def list_subjects():
    subjects = [dict(s) for s in get_all_subjects()]
    grouped = {}
    for subject in subjects:
        grouped.setdefault(subject['department'] or 'Unassigned', []).append(subject)
    return jsonify({
        'subjects': subjects,
        'grouped': grouped,
        'messages': get_flashed_messages(with_categories=True),
    })


@app.route('/subjects/add', methods=['POST'])
def add_subject_route():
    code, name, department, credits = _form('code', 'name', 'department', 'credits')
    if not all([code, name]):
        flash('Subject code and name are required', 'error')
    elif add_subject(code, name, department, credits):
        flash('Subject added successfully', 'success')
    else:
        flash('Subject code already exists', 'error')
    return redirect(url_for('list_subjects'))


@app.route('/subjects/<int:subject_id>/update', methods=['POST'])
def update_subject_route(subject_id):
    code, name, department, credits = _form('code', 'name', 'department', 'credits')
    if not all([code, name]):
        flash('Subject code and name are required', 'error')
    elif update_subject(subject_id, code, name, department, credits):
        flash('Subject updated successfully', 'success')
    else:
        flash('Subject code already exists', 'error')
    return redirect(url_for('list_subjects'))


@app.route('/subjects/<int:subject_id>/delete', methods=['POST'])
def delete_subject_route(subject_id):
    delete_subject(subject_id)
    flash('Subject deleted successfully', 'success')
    return redirect(url_for('list_subjects'))


# Exam centers

@app.route('/api/exam_centers')
def list_exam_centers():
    return jsonify({
        'exam_centers': [dict(c) for c in get_all_exam_centers()],
        'messages': get_flashed_messages(with_categories=True),
    })


@app.route('/exam_centers/add', methods=['POST'])
def add_exam_center_route():
    name, code, address = _form('name', 'code', 'address')
    if not all([name, code]):
        flash('Center name and code are required', 'error')
    elif add_exam_center(name, code, address or None):
        flash('Exam center added successfully', 'success')
    else:
        flash('Center code already exists', 'error')
    return redirect(url_for('list_exam_centers'))


@app.route('/exam_centers/<int:center_id>/update', methods=['POST'])
def update_exam_center_route(center_id):
    name, code, address = _form('name', 'code', 'address')
    if not all([name, code]):
        flash('Center name and code are required', 'error')
    elif update_exam_center(center_id, name, code, address or None):
        flash('Exam center updated successfully', 'success')
    else:
        flash('Center code already exists', 'error')
    return redirect(url_for('list_exam_centers'))


@app.route('/exam_centers/<int:center_id>/delete', methods=['POST'])
def delete_exam_center_route(center_id):
    delete_exam_center(center_id)
    flash('Exam center deleted successfully', 'success')
    return redirect(url_for('list_exam_centers'))


# Exams

@app.route('/api/exams')
def list_exams():
    return jsonify({
        'exams': [dict(e) for e in get_all_exams()],
        'messages': get_flashed_messages(with_categories=True),
    })


@app.route('/exams/add', methods=['POST'])
def add_exam_route():
    subject, exam_date, start_time, duration, venue = _form(
        'subject', 'date', 'start_time', 'duration', 'venue')
    center_id = request.form.get('center_id', type=int)
    if not all([subject, exam_date, start_time, duration, venue]):
        flash('All exam fields are required', 'error')
    else:
        add_exam(subject, exam_date, start_time, duration, venue, center_id)
        flash('Exam scheduled successfully', 'success')
    return redirect(url_for('list_exams'))


@app.route('/exams/<int:exam_id>/update', methods=['POST'])
def update_exam_route(exam_id):
    subject, exam_date, start_time, duration, venue = _form(
        'subject', 'date', 'start_time', 'duration', 'venue')
    center_id = request.form.get('center_id', type=int)
    if not all([subject, exam_date, start_time, duration, venue]):
        flash('All exam fields are required', 'error')
    else:
        update_exam(exam_id, subject, exam_date, start_time, duration, venue, center_id)
        flash('Exam updated successfully', 'success')
    return redirect(url_for('list_exams'))


@app.route('/exams/<int:exam_id>/delete', methods=['POST'])
def delete_exam_route(exam_id):
    delete_exam(exam_id)
    flash('Exam deleted successfully', 'success')
    return redirect(url_for('list_exams'))


# Saved arrangements and reports

def _arrangements_for_hall():
    hall_id = request.args.get('hall_id', 'all')
    return hall_id, filter_arrangements_by_hall(get_all_seating_arrangements(), hall_id)


@app.route('/api/arrangements')
def list_arrangements():
    hall_id, arrangements = _arrangements_for_hall()
    return jsonify({
        'hall': get_hall_name_by_id(hall_id),
        'arrangements': arrangements,
        'messages': get_flashed_messages(with_categories=True),
    })


@app.route('/arrangements/<int:arrangement_id>')
def view_arrangement(arrangement_id):
    arrangement = get_seating_arrangement(arrangement_id)
    if not arrangement:
        flash('Seating arrangement not found', 'error')
        return redirect(url_for('list_arrangements'))

    grid = [
        [assignment['seat_no'] or 'Empty' for assignment in row if assignment]
        for row in seating_algorithm.to_grid(
            arrangement['seating_assignments'], arrangement['rows'], arrangement['columns'])
    ]
    return jsonify({
        'arrangement': arrangement,
        'grid': grid,
        'messages': get_flashed_messages(with_categories=True),
    })


@app.route('/arrangements/<int:arrangement_id>/delete', methods=['POST'])
def delete_arrangement(arrangement_id):
    try:
        delete_seating_arrangement(arrangement_id)
        flash('Seating arrangement deleted successfully', 'success')
    except Exception as e:
        logging.error(f"Error deleting seating arrangement: {str(e)}")
        flash('Error deleting seating arrangement', 'error')
    return redirect(url_for('list_arrangements'))


@app.route('/reports/excel')
def export_excel_report():
    try:
        hall_id, arrangements = _arrangements_for_hall()
        filepath = _excel_handler().export_consolidated_report(arrangements, hall_id)
        if filepath:
            return send_file(filepath, as_attachment=True, download_name=os.path.basename(filepath))
        flash('Error generating Excel file', 'error')
    except Exception as e:
        logging.error(f"Error exporting Excel report: {str(e)}")
        flash(f'Error exporting Excel report: {str(e)}', 'error')
    return redirect(url_for('list_arrangements'))


@app.route('/reports/grid/<int:arrangement_id>')
def export_grid_report(arrangement_id):
    arrangement = get_seating_arrangement(arrangement_id)
    if not arrangement:
        flash('Seating arrangement not found', 'error')
        return redirect(url_for('list_arrangements'))

    filepath = _excel_handler().export_arrangement_grid(arrangement)
    if filepath:
        return send_file(filepath, as_attachment=True, download_name=os.path.basename(filepath))
    flash('Error generating grid layout file', 'error')
    return redirect(url_for('list_arrangements'))


@app.route('/reports/zip')
def export_zip_report():
    hall_id, arrangements = _arrangements_for_hall()
    if not arrangements:
        flash('No seating arrangements found', 'error')
        return redirect(url_for('list_arrangements'))

    filepath = _excel_handler().export_all_arrangements_zip(arrangements, hall_id)
    if filepath:
        return send_file(filepath, as_attachment=True, download_name=os.path.basename(filepath))
    flash('Error exporting complete plan', 'error')
    return redirect(url_for('list_arrangements'))


@app.route('/reports/pdf')
def export_pdf_report():
    try:
        hall_id, arrangements = _arrangements_for_hall()
        buffer = generate_seating_pdf(arrangements, hall_id)
        filename = f"seating-plan-{get_hall_name_by_id(hall_id).lower().replace(' ', '-')}.pdf"
        return send_file(buffer, mimetype='application/pdf', as_attachment=True, download_name=filename)
    except Exception as e:
        logging.error(f"Error generating PDF report: {str(e)}")
        flash('Error generating PDF report', 'error')
        return redirect(url_for('list_arrangements'))


@app.route('/reports/attendance')
def export_attendance_report():
    try:
        _, arrangements = _arrangements_for_hall()
        buffer = generate_attendance_pdf(arrangements)
        return send_file(buffer, mimetype='application/pdf', as_attachment=True,
                         download_name='attendance-sheets.pdf')
    except Exception as e:
        logging.error(f"Error generating attendance sheets: {str(e)}")
        flash('Error generating attendance sheets', 'error')
        return redirect(url_for('list_arrangements'))


# Sample data

@app.route('/load_sample_data', methods=['POST'])
def load_sample_data():
    try:
        for subject in SAMPLE_SUBJECTS:
            add_subject(subject['code'], subject['name'], subject['department'], subject['credits'])
        for center in SAMPLE_CENTERS:
            add_exam_center(center['name'], center['code'], center['address'])

        added = duplicates = 0
        for student in create_sample_students():
            if add_student(student['roll_number'], student['name'], student['department']):
                added += 1
            else:
                duplicates += 1

        for teacher in create_sample_teachers():
            add_teacher(teacher['employee_id'], teacher['name'], teacher['department'], teacher['subject'])
        for exam in create_sample_exams():
            add_exam(exam['subject'], exam['date'], exam['start_time'], exam['duration'], exam['venue'])

        flash(f'Sample data loaded: {added} students (skipped {duplicates} duplicates), '
              f'{len(SAMPLE_SUBJECTS)} subjects and {len(SAMPLE_CENTERS)} exam centers', 'success')
    except Exception as e:
        logging.error(f"Error loading sample data: {str(e)}")
        flash('Error loading sample data', 'error')

    return redirect(url_for('index'))


@app.route('/clear_data', methods=['POST'])
def clear_data():
    data_type = request.form.get('data_type')
    seating_tables = ('seating_assignments', 'department_configs', 'seating_arrangements')

    if data_type == 'students':
        clear_tables('students')
        flash('Student data cleared', 'info')
    elif data_type == 'seating':
        clear_tables(*seating_tables)
        _registry().clear()
        _seating_state()['seats'] = []
        flash('All seating plans cleared', 'info')
    elif data_type == 'all':
        clear_tables('students', 'teachers', 'classes', 'subjects', *seating_tables,
                     'exams', 'exam_centers')
        app.config.pop('DEPARTMENT_REGISTRY', None)
        app.config.pop('SEATING_STATE', None)
        flash('All data cleared', 'info')
    else:
        flash('Unknown data type', 'error')

    return redirect(url_for('index'))


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=5000, debug=True)
