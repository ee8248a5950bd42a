from click.testing import CliRunner
from sqlalchemy import func, select

from taskforge.cli import cli
from taskforge.core.config import DbConfig
from taskforge.db.client import DbClient
from taskforge.db.models import Task
from taskforge.db.seed import distribution, fake_task, seed_tasks
from taskforge.db.store import TaskStore


def count_tasks(url: str) -> int:
    client = DbClient(DbConfig(url=url))
    try:
        with client.session() as session:
            return session.scalar(select(func.count()).select_from(Task))
    finally:
        client.dispose()


def test_init_db(tmp_path):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    result = CliRunner().invoke(cli, ["--database-url", url, "init-db"])
    assert result.exit_code == 0, result.output
    assert "tasks" in result.output
    assert count_tasks(url) == 0


def test_seed(tmp_path):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    runner = CliRunner()

    result = runner.invoke(cli, ["--database-url", url, "seed", "--count", "12", "--seed", "7"])
    assert result.exit_code == 0, result.output
    assert "Created 12 tasks" in result.output
    assert "Status Distribution" in result.output
    assert count_tasks(url) == 12

    runner.invoke(cli, ["--database-url", url, "seed", "--count", "3", "--no-clear"])
    assert count_tasks(url) == 15

    runner.invoke(cli, ["--database-url", url, "seed", "--count", "5"])
    assert count_tasks(url) == 5


def test_database_url_from_environment(tmp_path):
    url = f"sqlite:///{tmp_path / 'env.db'}"
    result = CliRunner().invoke(cli, ["seed", "-n", "2"], env={"TASKFORGE_DATABASE_URL": url})
    assert result.exit_code == 0, result.output
    assert count_tasks(url) == 2


def test_seed_count_must_be_positive(tmp_path):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    result = CliRunner().invoke(cli, ["--database-url", url, "seed", "--count", "0"])
    assert result.exit_code != 0


def test_fake_tasks_respect_field_bounds():
    import random

    rng = random.Random(1)
    for _ in range(50):
        task = fake_task(rng)
        assert 3 <= len(task["title"]) <= 200
        assert 10 <= len(task["description"]) <= 1000


def test_seed_is_repeatable(store):
    first = [t.title for t in seed_tasks(store, count=5, seed=42)]
    second = [t.title for t in seed_tasks(store, count=5, seed=42)]
    assert first == second


def test_distribution(store):
    tasks = seed_tasks(store, count=20, seed=3)
    counts = distribution(tasks, "status")
    assert set(counts) == {"pending", "in_progress", "completed"}
    assert sum(counts.values()) == 20
    assert sum(distribution(tasks, "priority").values()) == 20
