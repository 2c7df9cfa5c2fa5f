import pytest

from app import app as flask_app


@pytest.fixture
def app(tmp_path):
    """The Flask app on a throwaway database and export folder, with a fresh seating session."""
    export_folder = tmp_path / 'exports'
    upload_folder = tmp_path / 'uploads'
    export_folder.mkdir()
    upload_folder.mkdir()

    flask_app.config.update(
        TESTING=True,
        DATABASE=str(tmp_path / 'seating-test.db'),
        EXPORT_FOLDER=str(export_folder),
        UPLOAD_FOLDER=str(upload_folder),
    )
    flask_app.config.pop('DEPARTMENT_REGISTRY', None)
    flask_app.config.pop('SEATING_STATE', None)
    yield flask_app
    flask_app.config.pop('DEPARTMENT_REGISTRY', None)
    flask_app.config.pop('SEATING_STATE', None)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield


@pytest.fixture
def cs_ee_configs():
    """Series A holds CS 1-2, series B holds EE 1-1."""
    return [
        {'id': 1, 'prefix': 'A', 'department': 'CS', 'start_reg_no': '1', 'end_reg_no': '2', 'year': None},
        {'id': 2, 'prefix': 'B', 'department': 'EE', 'start_reg_no': '1', 'end_reg_no': '1', 'year': None},
    ]


@pytest.fixture
def subject_catalog():
    return [
        {'name': 'CS', 'department': 'CS', 'code': 'CS101'},
        {'name': 'EE', 'department': 'EE', 'code': 'EE101'},
    ]


@pytest.fixture
def sample_arrangement():
    """A saved-arrangement shaped dict: room 101 on floor 1, 2x2 grid, three students."""
    return {
        'id': 1,
        'room_no': '101',
        'floor_no': '1',
        'rows': 2,
        'columns': 2,
        'exam_id': None,
        'seating_assignments': [
            {'position': 0, 'seat_no': 'A1', 'student_name': 'CS Student', 'reg_no': '001', 'department': 'CS'},
            {'position': 1, 'seat_no': 'B1', 'student_name': 'EE Student', 'reg_no': '001', 'department': 'EE'},
            {'position': 2, 'seat_no': 'A2', 'student_name': 'CS Student', 'reg_no': '002', 'department': 'CS'},
            {'position': 3, 'seat_no': '', 'student_name': None, 'reg_no': None, 'department': None},
        ],
        'department_configs': [
            {'prefix': 'A', 'department': 'CS', 'start_reg_no': '1', 'end_reg_no': '2', 'year': '2nd Year'},
            {'prefix': 'B', 'department': 'EE', 'start_reg_no': '1', 'end_reg_no': '1', 'year': None},
        ],
    }
