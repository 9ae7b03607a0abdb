"""Record store adapter contract and an in-memory reference adapter.

Real deployments back this with the hosted datastore.  Whatever the
backend, ``save`` must be conditional on ``updated_at`` so concurrent
users cannot silently overwrite each other's stage moves.
"""

import logging
from collections.abc import Iterable
from typing import Protocol

import pandas as pd

from recruiting.domains.stages.engine import transition
from recruiting.domains.stages.models import Application, Stage
from recruiting.errors import ConcurrentModificationError, NotFoundError
from recruiting.utils.dates import to_timestamp
from recruiting.utils.types import RecordID, Timestampish

logger = logging.getLogger(__name__)


class ApplicationStore(Protocol):
    def get(self, application_id: RecordID) -> Application: ...

    def save(self, application: Application, *, expected_updated_at: pd.Timestamp) -> Application: ...

    def all(self) -> list[Application]: ...


class InMemoryApplicationStore:
    """Dict-backed store with compare-and-set writes on ``updated_at``."""

    def __init__(self, applications: Iterable[Application] = ()):
        self._records: dict[RecordID, Application] = {}
        for application in applications:
            self.add(application)

    def __len__(self) -> int:
        return len(self._records)

    def add(self, application: Application) -> Application:
        if application.application_id in self._records:
            raise ValueError(f"Duplicate application id: {application.application_id}")
        self._records[application.application_id] = application
        return application

    def get(self, application_id: RecordID) -> Application:
        try:
            return self._records[str(application_id)]
        except KeyError:
            raise NotFoundError("Application", application_id) from None

    def save(self, application: Application, *, expected_updated_at: Timestampish) -> Application:
        stored = self.get(application.application_id)
        expected = to_timestamp(expected_updated_at)
        if stored.updated_at != expected:
            raise ConcurrentModificationError(application.application_id, expected, stored.updated_at)
        self._records[application.application_id] = application
        return application

    def all(self) -> list[Application]:
        return list(self._records.values())


def move_application(
    store: ApplicationStore,
    application_id: RecordID,
    new_stage: Stage | str,
    *,
    now: Timestampish | None = None,
) -> Application:
    """Fetch, transition and conditionally persist a single application."""
    current = store.get(application_id)
    updated = transition(current, new_stage, now=now)
    saved = store.save(updated, expected_updated_at=current.updated_at)
    logger.info("Moved application %s to %s", application_id, saved.current_stage)
    return saved
