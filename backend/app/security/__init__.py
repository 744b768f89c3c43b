# Security module
from app.security.auth import (
    get_password_hash, verify_password, create_access_token,
    get_security_context, get_optional_security_context, get_current_user,
)

__all__ = [
    'get_password_hash', 'verify_password', 'create_access_token',
    'get_security_context', 'get_optional_security_context', 'get_current_user',
]
