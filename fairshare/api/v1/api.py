from fastapi import APIRouter
from fairshare.api.v1.endpoints import allocations, users, expenses, settlements, receipts

api_router = APIRouter()

api_router.include_router(allocations.router, prefix="/allocations", tags=["allocations"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])
api_router.include_router(settlements.router, prefix="/settlements", tags=["settlements"])
api_router.include_router(receipts.router, prefix="/receipts", tags=["receipts"])
