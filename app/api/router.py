from fastapi import APIRouter

from app.api.routes import customers, invoices, reports, users

api_router = APIRouter()
api_router.include_router(users.router)
api_router.include_router(customers.router)
api_router.include_router(invoices.router)
api_router.include_router(reports.router)
