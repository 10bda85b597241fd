"""
API v1 routes.
"""

from fastapi import APIRouter

from ferryapp.api.v1 import auth, accounts, companies, employees

router = APIRouter()

router.include_router(auth.router, tags=["Authentication"])
router.include_router(accounts.router, prefix="/account", tags=["Accounts"])
router.include_router(companies.router, prefix="/company", tags=["Companies"])
router.include_router(employees.router, prefix="/employee", tags=["Employees"])
