"""Deterministic sales task generator for demos and empty task files."""

import random
from datetime import datetime, timedelta
from typing import List

from ..models.task import Priority, Status, Task
from ..utils.datetime_utils import utc_now


class SalesTaskGenerator:
    """Generates reproducible sales task sets."""

    ACTIONS = ['Follow up with', 'Demo for', 'Proposal to', 'Renewal call with', 'Onboard', 'Negotiate with']
    ACCOUNTS = ['Acme Corp', 'Globex', 'Initech', 'Umbrella', 'Stark Industries', 'Wayne Enterprises', 'Hooli', 'Soylent']

    def __init__(self, seed: int = 42, config: dict = None):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
        self.config = config or {}
        self.gen_config = self.config.get('generator', {})

    def generate(
        self,
        count: int = None,
        now: datetime = None,
        history_weeks: int = None,
    ) -> List[Task]:
        """Generate ``count`` tasks created over the last ``history_weeks``."""
        count = count if count is not None else self.gen_config.get('task_count', 50)
        history_weeks = history_weeks or self.gen_config.get('history_weeks', 12)
        now = now or utc_now()

        tasks = []
        for i in range(count):
            title = f"{self.random.choice(self.ACTIONS)} {self.random.choice(self.ACCOUNTS)}"

            # Deal sizes: mostly small, a few large
            if self.random.random() < 0.7:
                revenue = self.random.randint(100, 5000)
            else:
                revenue = self.random.randint(5000, 50000)

            time_taken = self.random.randint(1, 40)
            priority = self.random.choice(list(Priority)).value

            roll = self.random.random()
            if roll < 0.5:
                status = Status.DONE.value
            elif roll < 0.8:
                status = Status.IN_PROGRESS.value
            else:
                status = Status.TODO.value

            created_at = now - timedelta(
                days=self.random.randint(0, history_weeks * 7),
                hours=self.random.randint(0, 23),
            )

            completed_at = None
            if status == Status.DONE:
                completed_at = min(now, created_at + timedelta(days=self.random.randint(0, 21)))

            tasks.append(Task(
                task_id=f"task_{i:03d}",
                title=title,
                revenue=float(revenue),
                time_taken=float(time_taken),
                priority=priority,
                status=status,
                created_at=created_at,
                completed_at=completed_at,
            ))

        return tasks
