from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    display_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {"display_name": "Ada", "email": "ada@example.com", "password": "hunter2"}
        }
    }


class LoginRequest(BaseModel):
    email: str
    password: str

    model_config = {
        "json_schema_extra": {
            "example": {"email": "ada@example.com", "password": "hunter2"}
        }
    }


class UserOut(BaseModel):
    id: int
    display_name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int

    model_config = {
        "json_schema_extra": {
            "example": {"access_token": "<jwt>", "token_type": "bearer", "expires_in": 3600}
        }
    }


class MessageResponse(BaseModel):
    message: str
