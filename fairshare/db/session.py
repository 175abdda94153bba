from fastapi import Depends, Request

from fairshare.repositories.memory_repo import InMemoryRepository
from fairshare.services.expense_service import ExpenseService


def get_repository(request: Request) -> InMemoryRepository:
    """Return the repository owned by the running app."""
    return request.app.state.repository


def get_expense_service(repo: InMemoryRepository = Depends(get_repository)) -> ExpenseService:
    return ExpenseService(repo)
