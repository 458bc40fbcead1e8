from fastapi import APIRouter, Depends, HTTPException

from salon.api.deps import get_current_principal
from salon.api.v1.schemas import CredentialsSchema, PrincipalSchema, SignupSchema, TokenSchema
from salon.application.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    IdentityAlreadyExistsError,
    ValidationError,
)
from salon.application.use_cases.auth import AuthUseCase
from salon.core.security import create_access_token
from salon.domain.entities.principal import Principal
from salon.wiring.dependencies import get_auth_use_case

router = APIRouter()


def _token_for(principal: Principal) -> TokenSchema:
    return TokenSchema(
        access_token=create_access_token(principal.uid),
        principal=PrincipalSchema(uid=principal.uid, email=principal.email, role=principal.role.value),
    )


@router.post("/admin/login", response_model=TokenSchema)
def admin_login(req: CredentialsSchema, uc: AuthUseCase = Depends(get_auth_use_case)):
    try:
        principal = uc.admin_login(req.email, req.password)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except AuthenticationError:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return _token_for(principal)


@router.post("/customer/signup", response_model=TokenSchema, status_code=201)
def customer_signup(req: SignupSchema, uc: AuthUseCase = Depends(get_auth_use_case)):
    try:
        principal = uc.customer_signup(
            email=req.email,
            password=req.password,
            first_name=req.first_name,
            last_name=req.last_name,
            phone=req.phone,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except IdentityAlreadyExistsError:
        raise HTTPException(status_code=409, detail="An account with this email already exists")
    return _token_for(principal)


@router.post("/customer/login", response_model=TokenSchema)
def customer_login(req: CredentialsSchema, uc: AuthUseCase = Depends(get_auth_use_case)):
    try:
        principal = uc.customer_login(req.email, req.password)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except AuthenticationError:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return _token_for(principal)


@router.get("/me", response_model=PrincipalSchema)
def me(principal: Principal = Depends(get_current_principal)):
    return PrincipalSchema(uid=principal.uid, email=principal.email, role=principal.role.value)
