"""HTTP routes for notes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.value_objects import Operation
from infrastructure.http_errors import to_http_exception
from notes.application import NoteService
from notes.dependencies import get_note_service, note_scope
from notes.domain import NoteScope
from notes.presentation.models import (
    CreateNoteRequest,
    DeleteNoteResponse,
    NoteResponse,
    NoteUsageResponse,
    UpdateNoteRequest,
)
from shared_kernel.errors import DomainError

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
)


@router.get("")
async def list_notes(
    scope: Annotated[NoteScope, Depends(note_scope(Operation.LIST_NOTES))],
    service: Annotated[NoteService, Depends(get_note_service)],
) -> list[NoteResponse]:
    """List the notes of the caller's tenant, most recently updated first."""
    try:
        notes = await service.list_notes(scope)
        return [NoteResponse.from_domain(note) for note in notes]

    except DomainError as e:
        raise to_http_exception(e) from e
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list notes",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(
    scope: Annotated[NoteScope, Depends(note_scope(Operation.CREATE_NOTE))],
    service: Annotated[NoteService, Depends(get_note_service)],
    request: CreateNoteRequest | None = None,
) -> NoteResponse:
    """Create a note in the caller's tenant.

    Raises:
        HTTPException: 400 if the title is missing or blank
        HTTPException: 401 if unauthenticated
        HTTPException: 403 if the tenant's plan quota is reached
        HTTPException: 500 for unexpected errors
    """
    request = request or CreateNoteRequest()
    try:
        note = await service.create_note(
            scope, title=request.title, content=request.content
        )
        return NoteResponse.from_domain(note)

    except DomainError as e:
        raise to_http_exception(e) from e
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create note",
        )


# Declared before /{note_id} so that "usage" is not taken for an id
@router.get("/usage")
async def get_usage(
    scope: Annotated[NoteScope, Depends(note_scope(Operation.LIST_NOTES))],
    service: Annotated[NoteService, Depends(get_note_service)],
) -> NoteUsageResponse:
    """Return the tenant's note count and plan limit."""
    try:
        usage = await service.usage(scope)
        return NoteUsageResponse.from_domain(usage)

    except DomainError as e:
        raise to_http_exception(e) from e
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get note usage",
        )


@router.get("/{note_id}")
async def get_note(
    note_id: str,
    scope: Annotated[NoteScope, Depends(note_scope(Operation.GET_NOTE))],
    service: Annotated[NoteService, Depends(get_note_service)],
) -> NoteResponse:
    """Get one of the tenant's notes.

    Raises:
        HTTPException: 401 if unauthenticated
        HTTPException: 404 if the tenant has no such note
    """
    try:
        note = await service.get_note(scope, note_id)
        return NoteResponse.from_domain(note)

    except DomainError as e:
        raise to_http_exception(e) from e
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get note",
        )


@router.put("/{note_id}")
async def update_note(
    note_id: str,
    scope: Annotated[NoteScope, Depends(note_scope(Operation.UPDATE_NOTE))],
    service: Annotated[NoteService, Depends(get_note_service)],
    request: UpdateNoteRequest | None = None,
) -> NoteResponse:
    """Replace the title and content of a note the caller created.

    Notes created by other members are reported as not found.

    Raises:
        HTTPException: 400 if the title is blank
        HTTPException: 401 if unauthenticated
        HTTPException: 404 if the caller has no such note
    """
    request = request or UpdateNoteRequest()
    try:
        note = await service.update_note(
            scope, note_id, title=request.title, content=request.content
        )
        return NoteResponse.from_domain(note)

    except DomainError as e:
        raise to_http_exception(e) from e
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update note",
        )


@router.delete("/{note_id}")
async def delete_note(
    note_id: str,
    scope: Annotated[NoteScope, Depends(note_scope(Operation.DELETE_NOTE))],
    service: Annotated[NoteService, Depends(get_note_service)],
) -> DeleteNoteResponse:
    """Delete a note the caller created.

    Raises:
        HTTPException: 401 if unauthenticated
        HTTPException: 404 if the caller has no such note
    """
    try:
        await service.delete_note(scope, note_id)
        return DeleteNoteResponse()

    except DomainError as e:
        raise to_http_exception(e) from e
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete note",
        )
