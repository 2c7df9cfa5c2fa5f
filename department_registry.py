import re
import logging
from collections import namedtuple
from typing import Dict, List, Optional, Tuple

from models import (
    EDITABLE_CONFIG_FIELDS, UNKNOWN_DEPARTMENT, new_department_config
)

logger = logging.getLogger(__name__)

# category is a Flask flash category, tag lets callers branch without parsing text
SeriesNotice = namedtuple('SeriesNotice', ['tag', 'category', 'message'])

REG_NO_PATTERN = re.compile(r"\s*([+-]?[0-9]+)")


def prefix_exists(configs: List[Dict], prefix: str) -> bool:
    return any(config.get('prefix') == prefix for config in configs)


def _max_numeric_id(configs: List[Dict]) -> int:
    ids = []
    for config in configs:
        try:
            ids.append(int(config.get('id')))
        except (TypeError, ValueError):
            continue
    return max(ids) if ids else 0


def add_series(configs: List[Dict], prefix: str,
               next_id: Optional[int] = None) -> Tuple[List[Dict], SeriesNotice]:
    """
    Append an empty department config for a new series.

    Rejected when any config already carries this exact prefix; the input
    list is then returned as-is.
    """
    if prefix_exists(configs, prefix):
        return configs, SeriesNotice(
            'duplicate_prefix', 'error',
            f"A {prefix} series department already exists"
        )

    new_id = _max_numeric_id(configs) + 1
    if next_id is not None and next_id > new_id:
        new_id = next_id

    new_configs = list(configs) + [new_department_config(new_id, prefix)]
    return new_configs, SeriesNotice(
        'series_added', 'success', f"Added new department to {prefix} series"
    )


def remove_series(configs: List[Dict], config_id) -> Tuple[List[Dict], Optional[SeriesNotice]]:
    target = next((c for c in configs if c.get('id') == config_id), None)
    if target is None:
        return configs, None

    new_configs = [c for c in configs if c.get('id') != config_id]
    return new_configs, SeriesNotice(
        'series_removed', 'success',
        f"Removed department from {target['prefix']} series"
    )


def update_field(configs: List[Dict], config_id, field: str, value) -> List[Dict]:
    """Replace one editable field of the matching config."""
    if field not in EDITABLE_CONFIG_FIELDS:
        logger.warning(f"Ignoring update of non-editable field '{field}'")
        return configs
    if not any(c.get('id') == config_id for c in configs):
        return configs

    return [
        dict(config, **{field: value}) if config.get('id') == config_id else config
        for config in configs
    ]


def _parse_reg_no(value) -> Optional[int]:
    """Leading integer of the value, so "3abc" reads as 3 and "2.9" as 2."""
    match = REG_NO_PATTERN.match(str(value))
    return int(match.group(1)) if match else None


def pad_reg_no(number: int) -> str:
    return str(number).rjust(3, '0')


def expand_to_students(config: Dict, subject_catalog: Optional[List[Dict]] = None) -> List[Dict]:
    """
    Expand a config's registration range into student records.

    Seat labels restart at 1 for every config, so two configs sharing a
    prefix both produce A1, A2, ...
    """
    students = []

    if not config.get('start_reg_no') or not config.get('end_reg_no') or not config.get('department'):
        return students

    start = _parse_reg_no(config['start_reg_no'])
    end = _parse_reg_no(config['end_reg_no'])
    if start is None or end is None or end < start:
        return students

    subject = next(
        (s for s in (subject_catalog or []) if s.get('name') == config['department']),
        None
    )
    department_name = (subject or {}).get('department') or UNKNOWN_DEPARTMENT
    subject_name = (subject or {}).get('name') or config['department']
    subject_code = (subject or {}).get('code')
    prefix = config.get('prefix') or ''

    for seat_num, reg in enumerate(range(start, end + 1), 1):
        students.append({
            'name': f"{department_name} Student",
            'reg_no': pad_reg_no(reg),
            'department': department_name,
            'subject_code': subject_code,
            'subject_name': subject_name,
            'seat_no': f"{prefix}{seat_num}",
            'year': config.get('year'),
        })

    return students


class DepartmentRegistry:
    """
    Session-scoped owner of the department config list.

    Wraps the pure operations above and keeps a high-water id so removed
    ids are not handed out again while the session lives.
    """

    def __init__(self, configs: Optional[List[Dict]] = None):
        self.logger = logging.getLogger(__name__)
        self.configs = list(configs or [])
        self._last_id = _max_numeric_id(self.configs)

    def add_series(self, prefix: str) -> SeriesNotice:
        prefix = (prefix or '').strip().upper()
        self.configs, notice = add_series(self.configs, prefix, next_id=self._last_id + 1)
        if notice.tag == 'series_added':
            self._last_id = self.configs[-1]['id']
            self.logger.info(f"Added series {prefix} as config {self._last_id}")
        else:
            self.logger.warning(f"Rejected duplicate series prefix {prefix}")
        return notice

    def remove_series(self, config_id: int) -> Optional[SeriesNotice]:
        self.configs, notice = remove_series(self.configs, config_id)
        if notice:
            self.logger.info(f"Removed config {config_id}")
        return notice

    def update_field(self, config_id: int, field: str, value) -> None:
        self.configs = update_field(self.configs, config_id, field, value)

    def get(self, config_id: int) -> Optional[Dict]:
        return next((c for c in self.configs if c['id'] == config_id), None)

    def replace(self, configs: List[Dict]) -> None:
        """Load configs from a saved arrangement, keeping the id high-water mark."""
        self.configs = [
            new_department_config(
                config['id'], config['prefix'], config.get('department') or '',
                config.get('start_reg_no') or '', config.get('end_reg_no') or '',
                config.get('year')
            )
            for config in configs
        ]
        self._last_id = max(self._last_id, _max_numeric_id(self.configs))

    def clear(self) -> None:
        self.configs = []
