import math
import logging
from typing import List, Dict, Tuple, Optional

from department_registry import expand_to_students
from models import SERIES_PREFIXES, empty_seat, occupied_seat, is_occupied


class SeatingAlgorithm:
    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def series_order(self, configs: List[Dict]) -> List[str]:
        """Canonical A-F first, then any other prefixes in first-seen order."""
        seen = []
        for config in configs:
            prefix = config.get('prefix')
            if prefix and prefix not in seen:
                seen.append(prefix)

        ordered = [p for p in SERIES_PREFIXES if p in seen]
        ordered.extend(p for p in seen if p not in SERIES_PREFIXES)
        return ordered

    def group_students_by_series(self, configs: List[Dict],
                                 subject_catalog: Optional[List[Dict]] = None) -> Dict[str, List[Dict]]:
        series_students = {prefix: [] for prefix in self.series_order(configs)}
        for config in configs:
            prefix = config.get('prefix')
            if prefix not in series_students:
                continue
            series_students[prefix].extend(expand_to_students(config, subject_catalog))
        return series_students

    def interleave(self, series_lists: List[List[Dict]]) -> List[Dict]:
        """Round-robin merge: first of each series, then second of each, and so on."""
        max_len = max((len(students) for students in series_lists), default=0)
        merged = []
        for i in range(max_len):
            for students in series_lists:
                if i < len(students):
                    merged.append(students[i])
        return merged

    def generate_seating_plan(self, configs: List[Dict], rows: int, cols: int,
                              subject_catalog: Optional[List[Dict]] = None) -> List[Dict]:
        """
        Lay out every configured series on a rows x cols grid.

        Students from different series alternate seat by seat. Seats past the
        last student stay empty and students past the last seat are dropped;
        neither case is an error.

        Returns:
            List of exactly rows*cols seat dicts, indexed row-major.
        """
        seats, _ = self.allocate(configs, rows, cols, subject_catalog)
        return seats

    def allocate(self, configs: List[Dict], rows: int, cols: int,
                 subject_catalog: Optional[List[Dict]] = None) -> Tuple[List[Dict], int]:
        """Seat list plus the number of students that did not fit."""
        total_seats = max(rows, 0) * max(cols, 0)

        series_students = self.group_students_by_series(configs, subject_catalog)
        merged = self.interleave(list(series_students.values()))

        seats = [empty_seat(index) for index in range(total_seats)]
        for index, student in enumerate(merged[:total_seats]):
            seats[index] = occupied_seat(index, student)

        dropped = self.overflow_count(merged, total_seats)
        if dropped:
            self.logger.warning(f"{dropped} students did not fit in a {rows}x{cols} grid")
        self.logger.debug(f"Generated {total_seats} seats for {len(merged)} students "
                          f"across {len(series_students)} series")
        return seats, dropped

    def overflow_count(self, students: List[Dict], total_seats: int) -> int:
        return max(len(students) - total_seats, 0)

    def rotate_students(self, seats: List[Dict], direction: str) -> List[Dict]:
        """
        Shift every occupant one seat along the grid.

        'right' moves the last occupant to seat 0, 'left' moves the first
        occupant to the last seat. Seat ids stay with their grid position.
        """
        if not seats:
            return []
        if direction not in ('left', 'right'):
            self.logger.warning(f"Unknown rotation direction: {direction}")
            return [dict(seat) for seat in seats]

        occupants = [{k: v for k, v in seat.items() if k != 'id'} for seat in seats]
        if direction == 'right':
            occupants = occupants[-1:] + occupants[:-1]
        else:
            occupants = occupants[1:] + occupants[:1]

        return [dict(occupant, id=seat['id']) for seat, occupant in zip(seats, occupants)]

    def validate_seating_plan(self, seats: List[Dict], cols: int) -> List[str]:
        """
        Report neighbouring occupied seats that share a department.
        Returns a list of violations found.
        """
        violations = []
        if cols <= 0:
            return violations

        for index, seat in enumerate(seats):
            if not is_occupied(seat):
                continue

            right = index + 1
            if right % cols != 0 and right < len(seats):
                neighbour = seats[right]
                if is_occupied(neighbour) and neighbour['department'] == seat['department']:
                    violations.append(
                        f"Seats {self.grid_position_label(index, cols)} and "
                        f"{self.grid_position_label(right, cols)}: same department side by side"
                    )

            below = index + cols
            if below < len(seats):
                neighbour = seats[below]
                if is_occupied(neighbour) and neighbour['department'] == seat['department']:
                    violations.append(
                        f"Seats {self.grid_position_label(index, cols)} and "
                        f"{self.grid_position_label(below, cols)}: same department front to back"
                    )

        return violations

    def grid_position_label(self, index: int, cols: int) -> str:
        """Row letter plus 1-based column, e.g. index 7 with 6 columns is B2."""
        return f"{chr(ord('A') + index // cols)}{index % cols + 1}"

    def grid_for_capacity(self, capacity: int) -> Tuple[int, int]:
        """Squarest rows x cols grid that holds capacity seats."""
        if capacity <= 0:
            return 0, 0
        cols = math.ceil(math.sqrt(capacity))
        rows = math.ceil(capacity / cols)
        return rows, cols

    def to_grid(self, seats: List[Dict], rows: int, cols: int) -> List[List[Optional[Dict]]]:
        grid = []
        for row in range(rows):
            grid_row = []
            for col in range(cols):
                index = row * cols + col
                grid_row.append(seats[index] if index < len(seats) else None)
            grid.append(grid_row)
        return grid


# Global wrapper functions for convenience
def generate_seating_plan(configs: List[Dict], rows: int, cols: int,
                          subject_catalog: Optional[List[Dict]] = None) -> List[Dict]:
    """
    Convenience wrapper for the SeatingAlgorithm class.
    """
    return seating_algorithm.generate_seating_plan(configs, rows, cols, subject_catalog)


def rotate_students(seats: List[Dict], direction: str) -> List[Dict]:
    return seating_algorithm.rotate_students(seats, direction)


# Global instance for import
seating_algorithm = SeatingAlgorithm()
