"""Confirmation prompts and toast notifications presented to the user."""

from __future__ import annotations

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class DialogNotFoundError(KeyError):
    """Raised when answering or dismissing an unknown dialog id."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Notification:
    id: str
    level: NotificationLevel
    title: str
    text: str
    timer_ms: int | None = None
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def expires_at(self) -> datetime | None:
        if self.timer_ms is None:
            return None
        return self.created_at + timedelta(milliseconds=self.timer_ms)

    def is_expired(self, now: datetime) -> bool:
        expires_at = self.expires_at
        return expires_at is not None and now >= expires_at


@dataclass
class ConfirmationPrompt:
    id: str
    title: str
    text: str
    confirm_label: str
    cancel_label: str
    future: asyncio.Future = field(repr=False)
    created_at: datetime = field(default_factory=_utcnow)


class DialogPresenter(ABC):
    """Everything the catalog controller needs from the dialog layer."""

    @abstractmethod
    async def confirm(
        self,
        title: str,
        text: str,
        *,
        confirm_label: str = "Confirm",
        cancel_label: str = "Cancel",
    ) -> bool:
        """Block until the user accepts (True) or declines (False)."""

    @abstractmethod
    def notify(
        self,
        level: NotificationLevel,
        title: str,
        text: str,
        timer_ms: int | None = None,
    ) -> None:
        """Fire-and-forget toast; no timer means it stays until dismissed."""

    def success(self, title: str, text: str, timer_ms: int | None = None) -> None:
        self.notify(NotificationLevel.SUCCESS, title, text, timer_ms)

    def error(self, title: str, text: str, timer_ms: int | None = None) -> None:
        self.notify(NotificationLevel.ERROR, title, text, timer_ms)

    def info(self, title: str, text: str, timer_ms: int | None = None) -> None:
        self.notify(NotificationLevel.INFO, title, text, timer_ms)


class DialogService(DialogPresenter):
    """Queue of prompts and notifications that a front-end polls and answers."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._prompts: dict[str, ConfirmationPrompt] = {}
        self._notifications: dict[str, Notification] = {}

    async def confirm(
        self,
        title: str,
        text: str,
        *,
        confirm_label: str = "Confirm",
        cancel_label: str = "Cancel",
    ) -> bool:
        prompt = ConfirmationPrompt(
            id=uuid.uuid4().hex,
            title=title,
            text=text,
            confirm_label=confirm_label,
            cancel_label=cancel_label,
            future=asyncio.get_running_loop().create_future(),
            created_at=self._clock(),
        )
        self._prompts[prompt.id] = prompt
        logger.info(f"Awaiting confirmation {prompt.id}: {title}")
        try:
            return await prompt.future
        finally:
            self._prompts.pop(prompt.id, None)

    def answer(self, prompt_id: str, confirmed: bool) -> None:
        prompt = self._prompts.get(prompt_id)
        if prompt is None or prompt.future.done():
            raise DialogNotFoundError(prompt_id)
        prompt.future.set_result(confirmed)
        logger.info(f"Confirmation {prompt_id} answered: confirmed={confirmed}")

    def notify(
        self,
        level: NotificationLevel,
        title: str,
        text: str,
        timer_ms: int | None = None,
    ) -> None:
        notification = Notification(
            id=uuid.uuid4().hex,
            level=NotificationLevel(level),
            title=title,
            text=text,
            timer_ms=timer_ms,
            created_at=self._clock(),
        )
        self._notifications[notification.id] = notification
        log = logger.warning if notification.level is NotificationLevel.ERROR else logger.info
        log(f"[{notification.level.value}] {title}: {text}")

    def dismiss(self, notification_id: str) -> None:
        if self._notifications.pop(notification_id, None) is None:
            raise DialogNotFoundError(notification_id)

    def pending_prompts(self) -> list[ConfirmationPrompt]:
        return [p for p in self._prompts.values() if not p.future.done()]

    def active_notifications(self) -> list[Notification]:
        """Drop timed notifications whose timer ran out, return the rest."""
        now = self._clock()
        expired = [n.id for n in self._notifications.values() if n.is_expired(now)]
        for notification_id in expired:
            del self._notifications[notification_id]
        return list(self._notifications.values())

    def decline_pending(self) -> None:
        """Resolve every open prompt as declined (used on shutdown)."""
        for prompt in list(self._prompts.values()):
            if not prompt.future.done():
                prompt.future.set_result(False)
