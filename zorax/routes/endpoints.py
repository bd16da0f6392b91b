from fastapi import APIRouter
from zorax.routes.v1.router import auth, health, records, users
from zorax.services.record_service import expense_service, gain_service

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(auth.router, tags=["Auth"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(records.build_router(expense_service), prefix="/expenses", tags=["Expenses"])
api_router.include_router(records.build_router(gain_service), prefix="/gains", tags=["Gains"])
