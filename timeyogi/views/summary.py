import math
from dataclasses import dataclass, field
from typing import Dict

from timeyogi.models.task_model import CATEGORIES, COMPLETED, STATUSES


@dataclass
class TaskSummary:
    total: int = 0
    by_status: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(STATUSES, 0))
    by_category: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(CATEGORIES, 0))

    @property
    def completion_percentage(self) -> int:
        if not self.total:
            return 0
        # halves round up
        return math.floor(self.by_status[COMPLETED] * 100 / self.total + 0.5)


def summarize(tasks) -> TaskSummary:
    """Count tasks per status and per category."""
    summary = TaskSummary()
    for task in tasks:
        summary.total += 1
        if task.status in summary.by_status:
            summary.by_status[task.status] += 1
        if task.category in summary.by_category:
            summary.by_category[task.category] += 1
    return summary
