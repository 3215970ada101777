from typing import Optional

from pydantic import BaseModel, Field, root_validator, validator

from app.models.enums import UserRole


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=72)
    confirm_password: str = Field(..., min_length=6, max_length=72)

    @validator("username")
    def normalize_username(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("username cannot be blank")
        return normalized

    @root_validator(skip_on_failure=True)
    def passwords_match(cls, values):
        if values.get("password") != values.get("confirm_password"):
            raise ValueError("Passwords do not match")
        return values


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=72)


class UserRead(BaseModel):
    id: int
    username: str
    role: UserRole

    class Config:
        orm_mode = True


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserRead


class ErrorResponse(BaseModel):
    detail: Optional[str] = None
