"""Random sample data for local development."""

import random
from collections import Counter
from datetime import timedelta
from typing import Any, Dict, List, Optional

from taskforge.core.models.tasks import TaskPriority, TaskStatus
from taskforge.db.models import Task, utcnow
from taskforge.db.store import TaskStore

WORDS = (
    "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua enim ad minim veniam quis nostrud "
    "exercitation ullamco laboris nisi aliquip ex ea commodo consequat duis aute irure "
    "in reprehenderit voluptate velit esse cillum fugiat nulla pariatur excepteur sint "
    "occaecat cupidatat non proident sunt culpa qui officia deserunt mollit anim id est"
).split()


def _sentence(rng: random.Random, min_words: int, max_words: int) -> str:
    words = rng.choices(WORDS, k=rng.randint(min_words, max_words))
    return " ".join(words).capitalize() + "."


def fake_task(rng: random.Random, horizon_days: int = 30) -> Dict[str, Any]:
    """One task payload due somewhere in the next `horizon_days` days."""
    description = " ".join(_sentence(rng, 6, 14) for _ in range(rng.randint(2, 5)))
    return {
        "title": _sentence(rng, 3, 8)[:200],
        "description": description[:1000],
        "status": rng.choice(list(TaskStatus)),
        "priority": rng.choice(list(TaskPriority)),
        "due_date": utcnow() + timedelta(seconds=rng.randint(0, horizon_days * 86400)),
    }


def seed_tasks(
    store: TaskStore,
    count: int = 40,
    clear: bool = True,
    seed: Optional[int] = None,
) -> List[Task]:
    rng = random.Random(seed)
    if clear:
        store.clear()
    return store.create_many(fake_task(rng) for _ in range(count))


def distribution(tasks: List[Task], field: str) -> Dict[str, int]:
    counts = Counter(getattr(task, field) for task in tasks)
    members = TaskStatus if field == "status" else TaskPriority
    return {member.value: counts.get(member.value, 0) for member in members}
