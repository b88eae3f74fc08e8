# Services/auth_router.py
import logging
from typing import Optional

from fastapi import APIRouter, status
from pydantic import BaseModel

from config import JWT_EXPIRE
from Services.auth import check_credentials, issue_token
from errors import Unauthorized

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/login",
    tags=["authentication"],
)


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    message: str
    security: str
    expiry: str
    token: str


@router.post("", response_model=LoginResponse, status_code=status.HTTP_200_OK,
             summary="Log in with the demo account and receive a bearer token")
async def login(credentials: LoginRequest):
    if not check_credentials(credentials.username, credentials.password):
        logger.info("Rejected login for %r", credentials.username)
        raise Unauthorized("Invalid credentials. Login failed.")

    return LoginResponse(
        message="Login Successful",
        security="JWT",
        expiry=JWT_EXPIRE,
        token=issue_token(credentials.username),
    )
