"""
Pydantic schemas for API request/response validation.
"""

from ferryapp.schemas.auth import (
    LoginRequest,
    LoginResponse,
    AdministratorCreate,
    AccountResponse,
    AccountUpdateRequest,
    PasswordChangeRequest,
)
from ferryapp.schemas.registration import (
    CompanyRegistration,
    EmployeeRegistration,
    RegistrationResponse,
    CompanyResponse,
)
from ferryapp.schemas.common import (
    SuccessResponse,
    StatusChangeResponse,
    HealthResponse,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "AdministratorCreate",
    "AccountResponse",
    "AccountUpdateRequest",
    "PasswordChangeRequest",
    "CompanyRegistration",
    "EmployeeRegistration",
    "RegistrationResponse",
    "CompanyResponse",
    "SuccessResponse",
    "StatusChangeResponse",
    "HealthResponse",
]
