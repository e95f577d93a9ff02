"""HTTP routes for user invitation."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from iam.application.services import ProvisioningWorkflow
from iam.application.value_objects import Membership, Operation
from iam.dependencies.access import require
from iam.dependencies.provisioning import get_provisioning_workflow
from iam.presentation.users.models import InviteUserRequest, InviteUserResponse
from infrastructure.http_errors import to_http_exception
from shared_kernel.errors import DomainError

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.post(
    "/invite",
    status_code=status.HTTP_201_CREATED,
    responses={200: {"model": InviteUserResponse}},
)
async def invite_user(
    response: Response,
    membership: Annotated[Membership, Depends(require(Operation.INVITE_USER))],
    workflow: Annotated[ProvisioningWorkflow, Depends(get_provisioning_workflow)],
    request: InviteUserRequest | None = None,
) -> InviteUserResponse:
    """Invite a user into the caller's tenant.

    Creates a new identity when the email is unknown (201), or attaches the
    existing identity to this tenant (200).

    Raises:
        HTTPException: 400 if the email or role is invalid, or the user is
            already a member
        HTTPException: 401 if unauthenticated
        HTTPException: 403 if the caller is not an admin
        HTTPException: 500/502 if provisioning failed
    """
    request = request or InviteUserRequest()
    try:
        result = await workflow.invite(
            membership, email=request.email, role=request.role
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to invite user",
        )

    if not result.is_new_user:
        response.status_code = status.HTTP_200_OK
    return InviteUserResponse.from_result(result)
