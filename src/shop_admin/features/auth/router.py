"""API routes for user registration, login and the current-user lookup."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from typing import Annotated

from . import models
from . import schemas
from . import security as auth_security
from . import service as auth_service

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["Authentication"],
    prefix="/auth"
)

def _auth_response(user: models.User) -> schemas.AuthResponse:
    return schemas.AuthResponse(
        token=auth_security.create_user_token(user),
        user=schemas.UserResponse.model_validate(user),
    )

@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user_in: schemas.UserCreate):
    existing_user = await auth_service.get_user_by_mobile_number(user_in.mobile_number)
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists with this mobile number",
        )
    hashed_password = auth_security.get_password_hash(user_in.password)
    user_data_dict = user_in.model_dump(exclude={"password"})
    try:
        new_user = await auth_service.create_user(
            user_in=user_data_dict,
            hashed_password_val=hashed_password
        )
    except Exception as e:
        logger.error(f"Register user failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create user.",
        )
    logger.info(f"Registered user {new_user.public_id}")
    return _auth_response(new_user)

@router.post("/login", response_model=schemas.AuthResponse)
async def login(credentials: schemas.UserLogin):
    user = await auth_security.authenticate_user(credentials.mobile_number, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return _auth_response(user)

@router.post("/token", response_model=schemas.Token)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()]
):
    # OAuth2 form login for the interactive docs; "username" carries the mobile number.
    user = await auth_security.authenticate_user(form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect mobile number or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return {"access_token": auth_security.create_user_token(user), "token_type": "bearer"}

@router.get("/me", response_model=schemas.MeResponse)
async def read_current_user(
    current_user: Annotated[models.User, Depends(auth_security.get_current_active_user)]
):
    return schemas.MeResponse(data=schemas.UserResponse.model_validate(current_user))
