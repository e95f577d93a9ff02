"""IAM presentation layer - aggregate-based organization.

Organizes presentation concerns by resource (me, tenants, users). Each
package contains its own routes and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import me, tenants, users

# Auth is enforced per-endpoint: each handler declares the operation it
# performs through a ``require`` dependency.
router = APIRouter()

router.include_router(me.router)
router.include_router(tenants.router)
router.include_router(users.router)

__all__ = ["router"]
