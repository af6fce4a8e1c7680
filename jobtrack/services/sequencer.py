"""Run an ``OperationSet`` against the store.

Two phases:

1. If a contact has to be created, create it alone. Its id is needed by the
   application payload. If this fails nothing else is sent.
2. Everything else (application, company, contact update or delete) runs
   concurrently.

Calls that were issued always run to completion; there is no retry and no
compensation. A failed application update after a successful contact create
leaves that contact in the store, unlinked.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from jobtrack.errors import OperationError, SubmissionStateError
from jobtrack.models.application import Application
from jobtrack.models.operations import OperationKind, OperationSet, Phase
from jobtrack.services.store_client import StoreClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SubmissionState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class ExecutionResult:
    state: SubmissionState
    error: OperationError | None = None
    application: Application | None = None
    contact_id: int | None = None

    @property
    def ok(self) -> bool:
        return self.state == SubmissionState.SUCCEEDED


class OperationSequencer:
    """Executes exactly one submission: ``IDLE -> SUBMITTING -> SUCCEEDED | FAILED``."""

    def __init__(self, store: StoreClient) -> None:
        self._store = store
        self._state = SubmissionState.IDLE

    @property
    def state(self) -> SubmissionState:
        return self._state

    async def execute(self, ops: OperationSet) -> ExecutionResult:
        if self._state != SubmissionState.IDLE:
            raise SubmissionStateError(f"Sequencer is {self._state.value}, expected idle")
        self._state = SubmissionState.SUBMITTING
        try:
            result = await self._run(ops)
        except BaseException:
            self._state = SubmissionState.FAILED
            raise
        self._state = result.state
        return result

    async def _call(self, phase: Phase, call: Awaitable[T]) -> T:
        logger.info("Store call %s started", phase.value)
        try:
            result = await call
        except Exception as e:
            logger.warning("Store call %s failed: %s", phase.value, e)
            raise OperationError(phase, e) from e
        logger.info("Store call %s done", phase.value)
        return result

    async def _run(self, ops: OperationSet) -> ExecutionResult:
        contact_op = ops.contact
        app_op = ops.application
        payload = app_op.payload
        contact_id = payload.contact_id

        # Phase 1: the application needs the id of a newly created contact
        if contact_op.kind == OperationKind.CREATE:
            try:
                created = await self._call(
                    Phase.CONTACT_CREATE, self._store.create_contact(contact_op.create)
                )
            except OperationError as e:
                return ExecutionResult(state=SubmissionState.FAILED, error=e)
            contact_id = created.id
            payload = payload.model_copy(update={"contact_id": created.id})
        elif app_op.link_created_contact:
            raise ValueError("Application expects a created contact but none is scheduled")

        # Phase 2: independent calls
        if app_op.kind == OperationKind.CREATE:
            app_task = asyncio.create_task(
                self._call(Phase.APPLICATION_CREATE, self._store.create_application(payload))
            )
        else:
            app_task = asyncio.create_task(
                self._call(
                    Phase.APPLICATION_UPDATE,
                    self._store.update_application(app_op.application_id, payload),
                )
            )
        tasks = [app_task]

        if ops.company is not None:
            tasks.append(
                asyncio.create_task(
                    self._call(
                        Phase.COMPANY_UPDATE,
                        self._store.update_company(ops.company.company_id, ops.company.payload),
                    )
                )
            )
        if contact_op.kind == OperationKind.UPDATE:
            tasks.append(
                asyncio.create_task(
                    self._call(
                        Phase.CONTACT_UPDATE,
                        self._store.update_contact(contact_op.contact_id, contact_op.changes),
                    )
                )
            )
        elif contact_op.kind == OperationKind.DELETE:
            tasks.append(
                asyncio.create_task(
                    self._call(Phase.CONTACT_DELETE, self._store.delete_contact(contact_op.contact_id))
                )
            )

        first_error: OperationError | None = None
        for finished in asyncio.as_completed(tasks):
            try:
                await finished
            except OperationError as e:
                if first_error is None:
                    first_error = e

        if first_error is not None:
            logger.error("Submission failed in %s: %s", first_error.phase.value, first_error.cause)
            return ExecutionResult(
                state=SubmissionState.FAILED, error=first_error, contact_id=contact_id
            )

        application = app_task.result()
        logger.info(
            "Submission succeeded: application %d, %d store calls",
            application.id,
            len(tasks) + (contact_op.kind == OperationKind.CREATE),
        )
        return ExecutionResult(
            state=SubmissionState.SUCCEEDED, application=application, contact_id=contact_id
        )
