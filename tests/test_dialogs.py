import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from catalog_manager.services.dialogs import DialogNotFoundError, DialogService, NotificationLevel


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now


def test_timed_notifications_expire_and_untimed_stay():
    clock = FakeClock()
    service = DialogService(clock=clock)
    service.success("Deleted!", "The product has been deleted successfully.", 2000)
    service.error("Deletion Failed", "offline")

    assert len(service.active_notifications()) == 2

    clock.now += timedelta(milliseconds=2000)
    remaining = service.active_notifications()

    assert [(n.level, n.title) for n in remaining] == [(NotificationLevel.ERROR, "Deletion Failed")]


def test_dismiss_removes_notification():
    service = DialogService()
    service.info("Heads up", "Something happened")
    notification = service.active_notifications()[0]

    service.dismiss(notification.id)

    assert service.active_notifications() == []
    with pytest.raises(DialogNotFoundError):
        service.dismiss(notification.id)


@pytest.mark.asyncio
async def test_confirm_waits_for_answer():
    service = DialogService()

    waiting = asyncio.create_task(service.confirm("Are you sure?", "Delete it", confirm_label="Yes"))
    await asyncio.sleep(0)
    prompts = service.pending_prompts()
    assert [(p.title, p.confirm_label) for p in prompts] == [("Are you sure?", "Yes")]
    assert not waiting.done()

    service.answer(prompts[0].id, True)

    assert await waiting is True
    assert service.pending_prompts() == []


@pytest.mark.asyncio
async def test_answering_unknown_prompt_fails():
    service = DialogService()

    with pytest.raises(DialogNotFoundError):
        service.answer("missing", True)


@pytest.mark.asyncio
async def test_decline_pending_resolves_prompts_as_declined():
    service = DialogService()
    waiting = asyncio.create_task(service.confirm("Are you sure?", "Delete it"))
    await asyncio.sleep(0)

    service.decline_pending()

    assert await waiting is False
