"""
Pytest configuration and shared fixtures for content import tests.
"""
import asyncio

import pytest
from hypothesis import settings, Verbosity

from content_import.events import SignalBus
from content_import.upload.models import FileDescriptor
from content_import.upload.task import UploadTask

settings.register_profile(
    "default",
    max_examples=100,
    deadline=5000,
    verbosity=Verbosity.normal,
)

settings.register_profile(
    "ci",
    max_examples=200,
    deadline=10000,
    verbosity=Verbosity.quiet,
)

settings.register_profile(
    "debug",
    max_examples=10,
    deadline=None,
    verbosity=Verbosity.verbose,
)

settings.load_profile("default")


class FakeTransport:
    """Transport double whose tasks are resolved by the test."""

    def __init__(self, progress: bool = True, cancellable: bool = True):
        self.progress = progress
        self.cancellable = cancellable
        self.calls: list[dict] = []
        self.cloud_calls: list[tuple] = []
        self.futures: list[asyncio.Future] = []
        self.tasks: list[UploadTask] = []
        self.cancel_count = 0

    def upload(self, kind, classification, label, payload):
        self.calls.append({
            "kind": kind,
            "classification": classification,
            "label": label,
            "payload": payload,
        })
        return self._new_task()

    def cloud_import(self, identifier, import_config):
        self.cloud_calls.append((identifier, import_config))
        return self._new_task()

    @property
    def last_future(self) -> asyncio.Future:
        return self.futures[-1]

    @property
    def last_task(self) -> UploadTask:
        return self.tasks[-1]

    def _new_task(self) -> UploadTask:
        future = asyncio.get_running_loop().create_future()
        task = UploadTask(
            future,
            cancel=self._cancel if self.cancellable else None,
            progress=self.progress,
        )
        self.futures.append(future)
        self.tasks.append(task)
        return task

    def _cancel(self) -> None:
        self.cancel_count += 1


class RecordingBus(SignalBus):
    """Signal bus that remembers everything published."""

    def __init__(self) -> None:
        super().__init__()
        self.published: list[tuple] = []

    def publish(self, signal, data=None):
        self.published.append((signal, data))
        super().publish(signal, data)

    def signals(self) -> list:
        return [signal for signal, _ in self.published]


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def bus():
    return RecordingBus()


@pytest.fixture
def settle():
    """Let pending loop callbacks run."""
    async def _settle(rounds: int = 5) -> None:
        for _ in range(rounds):
            await asyncio.sleep(0)
    return _settle


@pytest.fixture
def one_file():
    return [FileDescriptor(name="report.pdf", size=1024, payload=b"%PDF")]


@pytest.fixture
def two_files():
    return [
        FileDescriptor(name="a.txt", size=10, payload=b"a"),
        FileDescriptor(name="b.txt", size=20, payload=b"b"),
    ]
