from fastapi import APIRouter, Depends, status

from fleet.data.facade import DataAccessFacade
from fleet.dependencies import get_facade, get_current_user
from fleet.schemas.auth import LoginRequest, SessionIdentity
from fleet.schemas.common import SuccessResponse, success_response
from fleet.services.auth_service import auth_service

router = APIRouter(prefix="/auth")


# ─── POST /auth/login ─────────────────────────────────────────────────────────
@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="Login as the administrator or a driver",
    response_model=SuccessResponse,
)
def login(data: LoginRequest, facade: DataAccessFacade = Depends(get_facade)):
    """
    Authenticate by username and password.
    Returns an access token carrying {id, email, role, name, driverId}.
    """
    result = auth_service.login(facade, data)
    return success_response("Login successful", result, demoMode=facade.is_using_sample_data())


# ─── GET /auth/me ─────────────────────────────────────────────────────────────
@router.get("/me", summary="Current session identity", response_model=SuccessResponse)
def me(current_user: SessionIdentity = Depends(get_current_user)):
    return success_response("Session identity retrieved", current_user.model_dump(mode="json"))


# ─── POST /auth/logout ────────────────────────────────────────────────────────
@router.post("/logout", summary="Logout (client discards its token)", response_model=SuccessResponse)
def logout(current_user: SessionIdentity = Depends(get_current_user)):
    return success_response("Logout successful")
