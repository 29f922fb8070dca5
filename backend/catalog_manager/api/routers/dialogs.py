"""Pending confirmation prompts and notifications for the front-end."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from catalog_manager.api.dependencies.catalog import get_dialogs
from catalog_manager.api.schemas.catalog import (
    DialogsRead,
    NotificationRead,
    PromptAnswer,
    PromptRead,
)
from catalog_manager.services.dialogs import DialogNotFoundError, DialogService

router = APIRouter()


@router.get("/", summary="Open prompts and active notifications", response_model=DialogsRead)
async def list_dialogs(
    dialogs: DialogService = Depends(get_dialogs),
) -> DialogsRead:
    """Timed notifications disappear from this list once their timer ran out."""
    return DialogsRead(
        prompts=[
            PromptRead(
                id=p.id,
                title=p.title,
                text=p.text,
                confirm_label=p.confirm_label,
                cancel_label=p.cancel_label,
            )
            for p in dialogs.pending_prompts()
        ],
        notifications=[
            NotificationRead(
                id=n.id,
                level=n.level.value,
                title=n.title,
                text=n.text,
                timer_ms=n.timer_ms,
                created_at=n.created_at,
            )
            for n in dialogs.active_notifications()
        ],
    )


@router.post("/prompts/{prompt_id}", summary="Answer a confirmation prompt")
async def answer_prompt(
    prompt_id: str,
    payload: PromptAnswer,
    dialogs: DialogService = Depends(get_dialogs),
) -> Response:
    try:
        dialogs.answer(prompt_id, payload.confirmed)
    except DialogNotFoundError as e:
        raise HTTPException(status_code=404, detail="Prompt not found") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/notifications/{notification_id}", summary="Dismiss a notification")
async def dismiss_notification(
    notification_id: str,
    dialogs: DialogService = Depends(get_dialogs),
) -> Response:
    try:
        dialogs.dismiss(notification_id)
    except DialogNotFoundError as e:
        raise HTTPException(status_code=404, detail="Notification not found") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
