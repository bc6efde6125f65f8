"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from formbuilder.constants import NotifyKind
from formbuilder.lib.storage import MemoryStorage
from formbuilder.models import FieldSchemaStore
from formbuilder.session import BuilderSession
from formbuilder.utils import editing


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings tests independent of the developer's shell."""
    for name in (
        "FORMBUILDER_STORAGE",
        "FORMBUILDER_SCHEMA_KEY",
        "FORMBUILDER_LOG_LEVEL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store() -> FieldSchemaStore:
    return FieldSchemaStore()


@pytest.fixture
def contact_form() -> FieldSchemaStore:
    """A small form: a radio question gating an email field, plus an upload.

    The email field is shown only while the radio field's label is "yes".
    """
    store = FieldSchemaStore()

    question = store.add("radio", 2)
    question = editing.set_option_label(question, 0, "yes")
    question = editing.set_option_label(question, 1, "no")
    store.update(question.id, editing.set_label(question, "yes"))

    email = store.add("text")
    email = editing.set_label(email, "Email")
    email = editing.select_validation_type(email, "email")
    email = editing.set_required(email)
    email = editing.set_condition(email, question.id, "yes")
    store.update(email.id, email)

    upload = store.add("file")
    upload = editing.select_file_type(editing.set_label(upload, "CV"), "pdf")
    store.update(upload.id, upload)

    return store


class RecordingNotifier:
    """Collects notifications so tests can assert on them."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, NotifyKind]] = []

    def __call__(self, message: str, kind: NotifyKind) -> None:
        self.messages.append((message, kind))

    @property
    def last(self) -> tuple[str, NotifyKind]:
        return self.messages[-1]


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def session(notifier: RecordingNotifier) -> BuilderSession:
    return BuilderSession(storage=MemoryStorage(), notify=notifier)
