"""Push notification adapter."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from hydration_reminder.domain.errors import CapabilityUnavailableError
from hydration_reminder.domain.reminders import PermissionResult

logger = logging.getLogger(__name__)

_DENIED_STATUSES = {401, 403}


class Notifier(Protocol):
    """Interface for the host's notification capability."""

    async def request_permission(self) -> PermissionResult:
        """Ask the host whether notifications may be shown."""

    def notify(self, title: str, body: str) -> None:
        """Deliver a notification without waiting for the result."""


@dataclass
class HttpxPushNotifier:
    """Notifier that publishes to an ntfy-style topic URL with httpx."""

    topic_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10
    _pending: set[asyncio.Task[None]] = field(default_factory=set, repr=False)

    @classmethod
    def create(cls, topic_url: str, timeout_seconds: float = 10) -> "HttpxPushNotifier":
        """Create a notifier with a managed httpx session."""
        return cls(
            topic_url=topic_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def request_permission(self) -> PermissionResult:
        """Probe the topic; auth failures mean the host refused permission."""
        try:
            response = await self.http_client.get(
                self.topic_url, timeout=self.timeout_seconds
            )
        except httpx.HTTPError as exc:
            raise CapabilityUnavailableError(
                f"Notification endpoint unreachable: {exc}"
            ) from exc
        if response.status_code in _DENIED_STATUSES:
            return PermissionResult.DENIED
        if response.is_success:
            return PermissionResult.GRANTED
        raise CapabilityUnavailableError(
            f"Notification endpoint returned {response.status_code}"
        )

    def notify(self, title: str, body: str) -> None:
        """Schedule delivery on the running loop."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise CapabilityUnavailableError("No event loop to deliver on") from exc
        task = loop.create_task(self._publish(title, body))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _publish(self, title: str, body: str) -> None:
        try:
            response = await self.http_client.post(
                self.topic_url,
                content=body.encode("utf-8"),
                headers={"Title": title},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Failed to deliver hydration reminder")

    async def close(self) -> None:
        """Wait for in-flight deliveries and close the HTTP session."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        await self.http_client.aclose()
