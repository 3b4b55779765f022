from fastapi import APIRouter

from app.api.routes import accounts, analytics, auth, budgets, categories, plaid, transactions

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(accounts.router)
api_router.include_router(transactions.router)
api_router.include_router(categories.router)
api_router.include_router(budgets.router)
api_router.include_router(analytics.router)
api_router.include_router(plaid.router)
