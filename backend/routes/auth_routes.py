"""
Auth Routes - sign-in against the fixed user directory
"""
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, EmailStr

from app.bootstrap import TrackerServices
from app.identity.domain.models import User, UserRole
from app.identity.infrastructure.tokens import create_access_token, decode_access_token
from routes.dependencies import get_services

# Security
security = HTTPBearer()

# Create router
auth_router = APIRouter(prefix="/api/auth", tags=["Auth"])


# ==================== PYDANTIC MODELS ====================

class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: str
    display_name: str
    email: str
    role: UserRole


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        display_name=user.display_name,
        email=user.email,
        role=user.role,
    )


# ==================== DEPENDENCIES ====================

async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    services: TrackerServices = Depends(get_services),
) -> User:
    user_id = decode_access_token(credentials.credentials, services.settings.secret_key)
    if user_id is None:
        raise HTTPException(status_code=401, detail="invalid access token")

    user = services.session.resolve(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="user not found")
    return user


def require_role(role: UserRole) -> Callable:
    async def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role != role:
            raise HTTPException(status_code=403, detail="not allowed for your role")
        return current_user

    return checker


# ==================== AUTH ROUTES ====================

@auth_router.post("/login", response_model=TokenResponse)
async def login(
    credentials: UserLogin,
    services: TrackerServices = Depends(get_services),
):
    """Exchange email and password for a bearer token"""
    user = services.session.authenticate(credentials.email, credentials.password)
    if user is None:
        raise HTTPException(status_code=401, detail="invalid email or password")

    token = create_access_token(
        user,
        services.settings.secret_key,
        services.settings.access_token_expire_minutes,
    )
    return TokenResponse(access_token=token, user=to_user_response(user))


@auth_router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    return to_user_response(current_user)


@auth_router.post("/logout")
async def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its token"""
    return {"message": f"{current_user.display_name} signed out"}
