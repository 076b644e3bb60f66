"""
Auth API Router
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from reportit.auth import authenticate_user, create_access_token
from reportit.dependencies import get_current_user, get_storage
from reportit.models.user import User
from reportit.schemas import RegisterRequest, TokenResponse, UserResponse
from reportit.services.user_service import UserService
from reportit.storage import Storage

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(data: RegisterRequest, storage: Storage = Depends(get_storage)):
    """Create a citizen account and log it in"""
    user = await UserService(storage).register(data)
    return TokenResponse(
        access_token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    storage: Storage = Depends(get_storage),
):
    """Exchange username and password for a bearer token"""
    user = await authenticate_user(storage, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TokenResponse(
        access_token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/user", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)):
    """Get the logged-in user with activity counters and badges"""
    return UserResponse.model_validate(user)
