"""
Authentication API routes.
"""

from fastapi import APIRouter, Request, status

from api.dependencies import CurrentCallerDep, DatabaseDep
from schemas import AuthResponse, LoginRequest, RegisterRequest, UserEnvelope, UserResponse
from services.auth_service import AuthService
from services.exceptions import UnauthenticatedError

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, db: DatabaseDep):
    """
    Create an account and return it with an access token.

    - **role**: client (default), freelancer or agency
    """
    auth_service = AuthService(db)

    user = await auth_service.register_user(
        name=body.name,
        email=body.email,
        password=body.password,
        country=body.country,
        role=body.role,
        company=body.company,
    )

    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=auth_service.issue_token(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, request: Request, db: DatabaseDep):
    """
    Authenticate user and get access token.

    - **email**: User email address
    - **password**: User password
    """
    auth_service = AuthService(db)

    user = await auth_service.authenticate(
        email=body.email,
        password=body.password,
        ip_address=request.client.host if request.client else None,
    )

    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=auth_service.issue_token(user),
    )


@router.get("/me", response_model=UserEnvelope)
async def get_current_user(caller: CurrentCallerDep, db: DatabaseDep):
    """Get current user information."""
    user = await AuthService(db).get_user(caller.id)
    if not user:
        raise UnauthenticatedError("Authentication invalid")
    return UserEnvelope(user=UserResponse.model_validate(user))
