"""Auth Routes — credentials sign-in form.

Invariants:
    - Accepted credentials answer 303 to the dashboard
    - Rejected credentials answer 401 with {"error": "CredentialsSignin"}
    - Any other sign-in failure propagates to the global error handlers
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from app.api.dependencies import get_identity_provider
from app.core.domain_types import DASHBOARD_PATH
from app.services.invoice_actions import authenticate
from app.services.password_identity import PasswordIdentityProvider

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login")
async def login(
    request: Request,
    identity: PasswordIdentityProvider = Depends(get_identity_provider),
):
    form = await request.form()
    failure = await authenticate(identity, form)
    if failure is not None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": failure.value},
        )
    return RedirectResponse(DASHBOARD_PATH, status_code=status.HTTP_303_SEE_OTHER)
