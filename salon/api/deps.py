from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from salon.application.use_cases.auth import AuthUseCase
from salon.core.security import decode_access_token
from salon.domain.entities.principal import Principal
from salon.wiring.dependencies import get_auth_use_case

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthUseCase = Depends(get_auth_use_case),
) -> Principal:
    """Resolve the bearer token to a principal. The role is re-read from the store on every call."""
    if not credentials:
        raise _unauthorized("Missing authentication token")
    try:
        uid = decode_access_token(credentials.credentials)
    except JWTError:
        raise _unauthorized("Invalid token")
    if not uid:
        raise _unauthorized("Invalid token: missing subject")

    principal = auth.principal_for(uid)
    if principal is None:
        raise _unauthorized("User not found")
    return principal


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator access required")
    return principal


def ensure_owner_or_admin(principal: Principal, customer_id: str) -> None:
    if not principal.is_admin and principal.uid != customer_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to access this customer")
