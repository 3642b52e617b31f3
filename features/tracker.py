import logging
import uuid
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple

from app_utils.metrics import percent

logger = logging.getLogger(__name__)

NEEDS_IMPROVEMENT_THRESHOLD = 3

CATEGORY_ORDER = (
    "Waste Management",
    "Transportation",
    "Food Purchasing",
    "Household Products",
    "Food Waste",
    "Electronics Disposal",
    "Packaging",
)

TASKS_BY_CATEGORY = {
    "Waste Management": ["Separate your waste", "Compost organic waste"],
    "Transportation": ["Use public transport or carpool", "Walk or bike for short trips"],
    "Food Purchasing": ["Bring reusable bags", "Buy local produce"],
    "Household Products": ["Switch to eco-friendly cleaners", "Avoid harsh chemical cleaners"],
    "Food Waste": ["Plan meals to reduce waste", "Compost food scraps"],
    "Electronics Disposal": ["Recycle old electronics properly", "Donate unused electronics"],
    "Packaging": ["Avoid plastic packaging", "Use reusable containers"],
}

DEFAULT_TASKS = [
    "Maintain your great habits",
    "Share your sustainability tips with others",
]


@dataclass(frozen=True)
class Task:
    id: str
    description: str
    done: bool = False
    selected: bool = False


@dataclass(frozen=True)
class Day:
    number: int
    tasks: Tuple[Task, ...]
    confirmed: bool = False


def _token() -> str:
    return uuid.uuid4().hex[:12]


def flagged_categories(snapshot: Sequence[int]) -> List[str]:
    flagged = []
    for idx, cat in enumerate(CATEGORY_ORDER):
        if idx < len(snapshot) and snapshot[idx] >= NEEDS_IMPROVEMENT_THRESHOLD:
            flagged.append(cat)
    return flagged


def task_descriptions(snapshot: Sequence[int]) -> List[str]:
    descriptions = []
    for cat in flagged_categories(snapshot):
        descriptions.extend(TASKS_BY_CATEGORY.get(cat, []))
    return descriptions or list(DEFAULT_TASKS)


def generate_tasks(snapshot: Sequence[int], token: Optional[Callable[[], str]] = None) -> Tuple[Task, ...]:
    """
    Build a fresh task list for every category the quiz flagged.

    Descriptions depend only on the snapshot; ids are new on every call.
    """
    prefix = (token or _token)()
    return tuple(
        Task(id=f"{prefix}-{i}", description=desc)
        for i, desc in enumerate(task_descriptions(snapshot))
    )


def start_tracker(snapshot: Sequence[int], token=None) -> List[Day]:
    return [Day(number=1, tasks=generate_tasks(snapshot, token))]


def add_day(days: Sequence[Day], snapshot: Sequence[int], token=None) -> List[Day]:
    return list(days) + [Day(number=len(days) + 1, tasks=generate_tasks(snapshot, token))]


def done_count(day: Day) -> int:
    return sum(1 for t in day.tasks if t.done)


def is_successful(day: Day) -> bool:
    # at least half the day's tasks done
    return done_count(day) * 2 >= len(day.tasks)


def compute_progress(days: Sequence[Day]) -> int:
    total = 0
    completed = 0
    for day in days:
        if day.confirmed:
            total += len(day.tasks)
            completed += done_count(day)
    return percent(completed, total)


def compute_streak(days: Sequence[Day]) -> int:
    streak = 0
    for day in reversed([d for d in days if d.confirmed]):
        if not is_successful(day):
            break
        streak += 1
    return streak


def _replace_latest(days: Sequence[Day], day: Day) -> List[Day]:
    return list(days[:-1]) + [day]


def toggle_selection(days: Sequence[Day], task_id: str) -> List[Day]:
    if not days or days[-1].confirmed:
        return list(days)
    current = days[-1]
    tasks = tuple(
        replace(t, selected=not t.selected) if t.id == task_id else t
        for t in current.tasks
    )
    return _replace_latest(days, replace(current, tasks=tasks))


def confirm_latest_day(days: Sequence[Day]) -> Tuple[List[Day], bool]:
    """Lock in the selected challenges of the latest day.

    Returns the days unchanged and False when nothing is selected.
    """
    if not days or days[-1].confirmed:
        return list(days), False
    current = days[-1]
    selected = [t for t in current.tasks if t.selected]
    if not selected:
        logger.debug(f"Day {current.number}: confirmation rejected, no challenges selected")
        return list(days), False
    confirmed = replace(
        current,
        confirmed=True,
        tasks=tuple(replace(t, done=False) for t in selected),
    )
    logger.info(f"Day {current.number} confirmed with {len(selected)} challenges")
    return _replace_latest(days, confirmed), True


def toggle_completion(days: Sequence[Day], task_id: str) -> List[Day]:
    # only the latest, confirmed day can be checked off
    if not days or not days[-1].confirmed:
        return list(days)
    current = days[-1]
    tasks = tuple(
        replace(t, done=not t.done) if t.id == task_id else t
        for t in current.tasks
    )
    return _replace_latest(days, replace(current, tasks=tasks))


def is_editable(days: Sequence[Day], index: int) -> bool:
    return index == len(days) - 1
