from typing import List
from fastapi import APIRouter, HTTPException, Depends, status

from fairshare.db.session import get_expense_service, get_repository
from fairshare.models.user import User
from fairshare.repositories.memory_repo import InMemoryRepository
from fairshare.schemas.user import UserCreate, UserSpending, UserUpdate
from fairshare.services.expense_service import ExpenseService

router = APIRouter()


@router.get("/", response_model=List[User])
async def list_users(repo: InMemoryRepository = Depends(get_repository)):
    return await repo.list_users()


@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(user_in: UserCreate, repo: InMemoryRepository = Depends(get_repository)):
    return await repo.create_user(user_in.name, user_in.avatar_color)


@router.get("/spending", response_model=List[UserSpending])
async def get_spending(service: ExpenseService = Depends(get_expense_service)):
    """Total share per user and how many expenses they paid for"""
    return await service.spending_summary()


@router.patch("/{user_id}", response_model=User)
async def rename_user(
    user_id: int,
    user_update: UserUpdate,
    repo: InMemoryRepository = Depends(get_repository)
):
    user = await repo.update_user(user_id, user_update.name)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, repo: InMemoryRepository = Depends(get_repository)):
    """Remove a user who neither paid for nor shares any expense"""
    if not await repo.get_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    if not await repo.delete_user(user_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User is part of recorded expenses"
        )
