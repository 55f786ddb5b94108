"""Calendar layout engine - placement of activities on a day x hour grid.

One pass over an immutable activity list produces a CalendarLayout:

- ``days``: the covering day range
- ``stay_rows``: ``stay_depth`` rows of day-columns holding Stay activities
- ``hour_cells``: a ``[day_index][hour]`` array for every other activity

Both the interactive calendar and the spreadsheet export are drawn from the SpanCell
objects of one layout, so they always agree on placement, merge spans and colors.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Literal

from backend.travelgpt.models.activity import Activity, ActivityType
from backend.travelgpt.schedule.colors import activity_color
from backend.travelgpt.schedule.dates import compute_day_range, day_index

HOURS_PER_DAY = 24
NO_PROVIDER = "TBD"

GridName = Literal["stay", "hour"]


class LayoutInputError(ValueError):
    """Raised when an activity reaching the layout engine has unusable timestamps."""


@dataclass(frozen=True)
class SpanCell:
    """Anchor of one merged region.

    ``start``/``span`` count day-columns for Stay rows and hours for the hourly grid.
    Every position the region covers references the same SpanCell.
    """

    activity_index: int
    activity: Activity
    start: int
    span: int
    label: str
    color: str

    @property
    def end(self) -> int:
        return self.start + self.span - 1


@dataclass(frozen=True)
class PlacementConflict:
    """Position claimed by two activities.

    In the hourly grid the later activity takes the position from the earlier one. In a
    Stay row the earlier stay keeps it and the later stay is left unplaced.
    """

    grid: GridName
    row: int
    column: int
    displaced_index: int
    winner_index: int


@dataclass
class CalendarLayout:
    """Placement decisions for one plan."""

    days: list[date]
    stay_rows: list[list[SpanCell | None]]
    hour_cells: list[list[SpanCell | None]]
    conflicts: list[PlacementConflict] = field(default_factory=list)
    unplaced: list[int] = field(default_factory=list)

    @property
    def stay_depth(self) -> int:
        return len(self.stay_rows)

    def cell_at(self, day: int, hour: int) -> SpanCell | None:
        return self.hour_cells[day][hour]

    def is_anchor(self, day: int, hour: int) -> bool:
        """True when (day, hour) is the first cell of a merged hourly region."""
        cell = self.hour_cells[day][hour]
        return cell is not None and cell.start == hour

    def stay_anchors(self, row: int) -> list[SpanCell]:
        """Stay regions of one row, left to right."""
        line = self.stay_rows[row]
        return [cell for i, cell in enumerate(line) if cell is not None and cell.start == i]

    def hour_anchors(self, day: int) -> list[SpanCell]:
        """Hourly regions of one day-column, top to bottom."""
        line = self.hour_cells[day]
        return [cell for h, cell in enumerate(line) if cell is not None and cell.start == h]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation for renderers outside this process."""

        def region(cell: SpanCell) -> dict[str, Any]:
            return {
                "activity_index": cell.activity_index,
                "start": cell.start,
                "span": cell.span,
                "label": cell.label,
                "color": cell.color,
            }

        return {
            "days": [d.isoformat() for d in self.days],
            "stay_depth": self.stay_depth,
            "stay_rows": [[region(c) for c in self.stay_anchors(r)] for r in range(self.stay_depth)],
            "hour_columns": [[region(c) for c in self.hour_anchors(d)] for d in range(len(self.days))],
            "conflicts": [
                {
                    "grid": c.grid,
                    "row": c.row,
                    "column": c.column,
                    "displaced_index": c.displaced_index,
                    "winner_index": c.winner_index,
                }
                for c in self.conflicts
            ],
            "unplaced": list(self.unplaced),
        }


def stay_label(activity: Activity) -> str:
    return f"{activity.city}, {activity.provider_company or NO_PROVIDER}"


def _check_activity(index: int, activity: Activity) -> None:
    start, end = activity.initial_datetime, activity.final_datetime
    if not isinstance(start, datetime) or not isinstance(end, datetime):
        raise LayoutInputError(f"activity {index} has a non-datetime timestamp")
    if start > end:
        raise LayoutInputError(f"activity {index} ends before it starts")


def _claim(
    owners: list[int | None],
    positions: range,
    index: int,
    conflicts: list[PlacementConflict],
    make_conflict: Callable[[int, int, int], PlacementConflict],
) -> None:
    for pos in positions:
        previous = owners[pos]
        if previous is not None and previous != index:
            conflicts.append(make_conflict(pos, previous, index))
        owners[pos] = index


def _runs(
    owners: list[int | None],
    activities: Sequence[Activity],
    label: Callable[[Activity], str],
) -> list[SpanCell | None]:
    """Turn an ownership line into SpanCells, one per maximal run of the same owner."""
    cells: list[SpanCell | None] = [None] * len(owners)
    pos = 0
    while pos < len(owners):
        owner = owners[pos]
        if owner is None:
            pos += 1
            continue
        end = pos
        while end + 1 < len(owners) and owners[end + 1] == owner:
            end += 1
        activity = activities[owner]
        cell = SpanCell(
            activity_index=owner,
            activity=activity,
            start=pos,
            span=end - pos + 1,
            label=label(activity),
            color=activity_color(activity.activity_type),
        )
        for covered in range(pos, end + 1):
            cells[covered] = cell
        pos = end + 1
    return cells


def hour_segments(
    days: Sequence[date], activity: Activity, split_overnight: bool
) -> list[tuple[int, int, int]]:
    """(day_index, start_hour, end_hour) segments an hourly activity occupies.

    Same-day activities give one segment. Activities crossing midnight give one
    segment per covered day when split_overnight is set, and none otherwise.
    """
    first = day_index(days, activity.initial_datetime)
    last = day_index(days, activity.final_datetime)
    if first is None or last is None:
        return []
    start_hour = activity.initial_datetime.hour
    end_hour = activity.final_datetime.hour
    if first == last:
        return [(first, start_hour, end_hour)]
    if not split_overnight:
        return []
    segments = []
    for d in range(first, last + 1):
        seg_start = start_hour if d == first else 0
        seg_end = end_hour if d == last else HOURS_PER_DAY - 1
        segments.append((d, seg_start, seg_end))
    return segments


def stay_overlap_depth(days: Sequence[date], stays: Sequence[Activity]) -> int:
    """Maximum number of stays active on any single day."""
    counts = [0] * len(days)
    for stay in stays:
        first = day_index(days, stay.initial_datetime)
        last = day_index(days, stay.final_datetime)
        if first is None or last is None:
            continue
        for d in range(first, last + 1):
            counts[d] += 1
    return max(counts, default=0)


def build_layout(activities: Sequence[Activity], *, split_overnight: bool = True) -> CalendarLayout:
    """Compute the calendar placement for a plan.

    Args:
        activities: Canonical activities; never mutated or reordered
        split_overnight: Place non-Stay activities that cross midnight as one segment
            per day instead of leaving them out of the hourly grid

    Returns:
        CalendarLayout; an empty plan gives an empty layout

    Raises:
        LayoutInputError: If an activity has non-datetime or inverted timestamps
    """
    for i, activity in enumerate(activities):
        _check_activity(i, activity)

    days = compute_day_range(activities)
    conflicts: list[PlacementConflict] = []
    unplaced: list[int] = []

    # Stays: round-robin over rows in start order, each drawn whole or not at all
    stay_indices = sorted(
        (i for i, a in enumerate(activities) if a.is_stay),
        key=lambda i: activities[i].initial_datetime,
    )
    depth = stay_overlap_depth(days, [activities[i] for i in stay_indices])
    stay_owners: list[list[int | None]] = [[None] * len(days) for _ in range(depth)]
    for position, index in enumerate(stay_indices):
        row = position % depth
        stay = activities[index]
        first = day_index(days, stay.initial_datetime)
        last = day_index(days, stay.final_datetime)
        if first is None or last is None:
            unplaced.append(index)
            continue
        # First stay in start order keeps the row; a colliding later stay is not drawn
        line = stay_owners[row]
        taken = [col for col in range(first, last + 1) if line[col] is not None]
        if taken:
            conflicts.extend(
                PlacementConflict("stay", row, col, index, line[col]) for col in taken
            )
            unplaced.append(index)
            continue
        for col in range(first, last + 1):
            line[col] = index

    # Everything else: hour by hour, last write wins
    hour_owners: list[list[int | None]] = [[None] * HOURS_PER_DAY for _ in days]
    for index, activity in enumerate(activities):
        if activity.is_stay:
            continue
        segments = hour_segments(days, activity, split_overnight)
        if not segments:
            unplaced.append(index)
            continue
        for d, start_hour, end_hour in segments:
            _claim(
                hour_owners[d],
                range(start_hour, end_hour + 1),
                index,
                conflicts,
                lambda hour, old, new, d=d: PlacementConflict("hour", hour, d, old, new),
            )

    return CalendarLayout(
        days=days,
        stay_rows=[_runs(line, activities, stay_label) for line in stay_owners],
        hour_cells=[_runs(line, activities, lambda a: a.activity_name) for line in hour_owners],
        conflicts=conflicts,
        unplaced=sorted(unplaced),
    )


# --- Spreadsheet regions ---

TIME_HEADER = "Time"
STAYS_LABEL = "Stays"


@dataclass(frozen=True)
class SheetRegion:
    """Rectangular block of spreadsheet cells (1-based, inclusive)."""

    first_row: int
    first_col: int
    last_row: int
    last_col: int
    label: str
    color: str

    @property
    def is_merged(self) -> bool:
        return self.first_row != self.last_row or self.first_col != self.last_col


@dataclass
class SheetPlan:
    """Calendar worksheet: header row, Stay rows, then one row per hour."""

    header: list[str]
    stay_depth: int
    regions: list[SheetRegion]

    @property
    def first_hour_row(self) -> int:
        return 2 + self.stay_depth

    def hour_row(self, hour: int) -> int:
        return self.first_hour_row + hour

    def time_labels(self) -> list[tuple[int, str]]:
        return [(self.hour_row(h), f"{h:02d}:00") for h in range(HOURS_PER_DAY)]


def day_header(day: date) -> str:
    """Short column header, e.g. "Sun, Jun 1"."""
    return f"{day:%a}, {day:%b} {day.day}"


def sheet_regions(layout: CalendarLayout) -> SheetPlan:
    """Translate a layout into spreadsheet regions with identical spans and colors."""
    regions: list[SheetRegion] = []
    depth = layout.stay_depth

    if depth:
        regions.append(
            SheetRegion(2, 1, 1 + depth, 1, STAYS_LABEL, activity_color(ActivityType.stay))
        )
    for row in range(depth):
        for cell in layout.stay_anchors(row):
            regions.append(
                SheetRegion(2 + row, 2 + cell.start, 2 + row, 2 + cell.end, cell.label, cell.color)
            )

    plan = SheetPlan(
        header=[TIME_HEADER] + [day_header(d) for d in layout.days],
        stay_depth=depth,
        regions=regions,
    )
    for d in range(len(layout.days)):
        col = 2 + d
        for cell in layout.hour_anchors(d):
            regions.append(
                SheetRegion(
                    plan.hour_row(cell.start), col, plan.hour_row(cell.end), col, cell.label, cell.color
                )
            )
    return plan
