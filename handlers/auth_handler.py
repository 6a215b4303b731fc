"""
handlers/auth_handler.py
-------------------------
Signup and login.
"""

from fastapi import APIRouter, Depends, status

from handlers.dependencies import get_auth_service
from schemas import LoginBody, SignupBody
from services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(body: SignupBody, auth_service: AuthService = Depends(get_auth_service)):
    token, user = await auth_service.signup(
        email=body.email,
        password=body.password,
        full_name=body.full_name,
        age=body.age,
        gender=body.gender,
        interests=body.interests,
    )
    return {
        "success": True,
        "message": "User created successfully",
        "token": token,
        "user": user.to_public(),
    }


@router.post("/login")
async def login(body: LoginBody, auth_service: AuthService = Depends(get_auth_service)):
    token, user = await auth_service.login(body.email, body.password)
    return {
        "success": True,
        "message": "Login successful",
        "token": token,
        "user": user.to_public(),
    }
