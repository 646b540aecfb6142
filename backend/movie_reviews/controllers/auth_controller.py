from typing import Any
from fastapi import APIRouter, Body, Depends, status

from movie_reviews.controllers.errors import to_http_exception
from movie_reviews.domain.dto import SignupRequest, SigninRequest, UserEnvelope, UserResponse
from movie_reviews.service.dependencies import get_auth_service
from movie_reviews.service.auth_service import AuthService
from movie_reviews.validation import validate_payload

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={404: {"description": "Not found"}}
)

@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=UserEnvelope)
def signup(
    payload: Any = Body(None),
    auth_service: AuthService = Depends(get_auth_service)
):
    try:
        user_data = validate_payload(SignupRequest, payload)
        user = auth_service.signup(user_data.name, user_data.email, user_data.password)
        return UserEnvelope(message="User created successfully", user=UserResponse.from_domain(user))
    except Exception as e:
        raise to_http_exception(e, conflict_message="User already exists")

@router.post("/signin", response_model=UserEnvelope)
def signin(
    payload: Any = Body(None),
    auth_service: AuthService = Depends(get_auth_service)
):
    try:
        credentials = validate_payload(SigninRequest, payload)
        user = auth_service.signin(credentials.email, credentials.password)
        return UserEnvelope(message="Sign-in successful", user=UserResponse.from_domain(user))
    except Exception as e:
        raise to_http_exception(e)
