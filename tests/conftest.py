import pytest
from loguru import logger
from PySide6.QtCore import QCoreApplication

from datagrid.grid.data_source import generate_mock_rows
from datagrid.grid.models import Row


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float):
        self.now += ms


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(scope="session")
def mock_rows():
    """1000 deterministic user rows (ids 1..1000)."""
    return tuple(generate_mock_rows(1000, seed=42))


@pytest.fixture
def people():
    return [
        Row.from_record({"id": 1, "name": "alice", "department": "Engineering", "salary": 70000, "status": "active"}),
        Row.from_record({"id": 2, "name": "Bob", "department": "Sales", "salary": 50000, "status": "inactive"}),
        Row.from_record({"id": 3, "name": "carol", "department": "Engineering", "salary": 90000, "status": "active"}),
        Row.from_record({"id": 4, "name": "Dave", "department": "Design", "salary": 50000, "status": "active"}),
        Row.from_record({"id": 5, "name": "eve", "department": "Sales", "salary": 65000, "status": "inactive"}),
    ]


@pytest.fixture
def log_messages():
    """Collect loguru output at WARNING and above."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
