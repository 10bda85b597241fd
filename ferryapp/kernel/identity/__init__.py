"""
Identity Core - credentials, paired registration and session tokens.
"""

from ferryapp.kernel.identity.password import PasswordHasher, verify_password, hash_password
from ferryapp.kernel.identity.jwt import TokenService, SessionClaims, IssuedToken
from ferryapp.kernel.identity.registration import EntityKind, RegistrationCoordinator
from ferryapp.kernel.identity.identity_service import IdentityService, LoginResult, AccountUpdate
from ferryapp.kernel.identity.entity_service import EntityService

__all__ = [
    "PasswordHasher",
    "verify_password",
    "hash_password",
    "TokenService",
    "SessionClaims",
    "IssuedToken",
    "EntityKind",
    "RegistrationCoordinator",
    "IdentityService",
    "LoginResult",
    "AccountUpdate",
    "EntityService",
]
