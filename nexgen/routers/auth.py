from fastapi import APIRouter, Depends, HTTPException, status

from nexgen.dependencies import get_auth_service
from nexgen.schemas.user import LoginRequest, UserRead
from nexgen.services import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=UserRead)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    user = auth.authenticate(payload.username, payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid login ID or password.",
        )
    return UserRead.from_user(user)


__all__ = ["router"]
