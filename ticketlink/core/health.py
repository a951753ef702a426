"""Health/status controller for the ticketlink adapter.

A healthcheck is one read through the response pipeline. Its outcome
sets the controller state and emits exactly one ONLINE or OFFLINE
event. There is no polling loop here; hosts that want continuous
monitoring call healthcheck repeatedly.
"""

import logging
from datetime import datetime, timezone

from .models import (
    AdapterStatus,
    ChangeTicket,
    HealthState,
    Result,
    StatusEvent,
)
from .pipeline import ResponsePipeline, settle
from .ports import Completion
from .status import StatusEmitter

logger = logging.getLogger(__name__)


class HealthController:
    """Maps healthcheck outcomes onto availability events.

    State Transitions:
        - UNKNOWN → ONLINE | OFFLINE (first check)
        - ONLINE ↔ OFFLINE (every later check, re-emitted even if unchanged)
    """

    def __init__(
        self,
        adapter_id: str,
        pipeline: ResponsePipeline,
        emitter: StatusEmitter,
    ):
        self.adapter_id = adapter_id
        self.pipeline = pipeline
        self.emitter = emitter
        self.state = HealthState.UNKNOWN
        self.last_checked_at: datetime | None = None

    async def healthcheck(
        self, callback: Completion | None = None
    ) -> Result[list[ChangeTicket]]:
        """Probe the external system and emit the resulting status.

        Never raises on a failed probe: the failure is reported through
        the OFFLINE event and the returned Err.
        """
        logger.debug(f"Health check called for {self.adapter_id}")
        result = await self.pipeline.get_record()

        if result.ok:
            self._transition(AdapterStatus.ONLINE)
            logger.debug(f"{self.adapter_id} is ONLINE")
        else:
            logger.error(f"{self.adapter_id} : {result.error}")
            self._transition(AdapterStatus.OFFLINE)

        await settle(callback, result)
        return result

    def _transition(self, status: AdapterStatus) -> None:
        self.state = HealthState(status.value)
        self.last_checked_at = datetime.now(timezone.utc)
        self.emitter.emit(
            StatusEvent(
                adapter_id=self.adapter_id,
                status=status,
                checked_at=self.last_checked_at,
            )
        )

        if status is AdapterStatus.ONLINE:
            logger.info(f"{self.adapter_id}: Instance is available.")
        else:
            logger.warning(f"{self.adapter_id}: Instance is unavailable.")
