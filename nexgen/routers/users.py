from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from nexgen.dependencies import get_user_repository
from nexgen.repositories import UserRepository
from nexgen.schemas.user import UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserRead])
def list_users(repo: UserRepository = Depends(get_user_repository)):
    return [UserRead.from_user(user) for user in repo.list()]


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, repo: UserRepository = Depends(get_user_repository)):
    return UserRead.from_user(repo.create(payload))


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: str,
    payload: UserUpdate,
    repo: UserRepository = Depends(get_user_repository),
):
    repo.update(user_id, payload)
    user = repo.get(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found.")
    return UserRead.from_user(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, repo: UserRepository = Depends(get_user_repository)):
    repo.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
