from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.validators import EMAIL_PATTERN, PHONE_PATTERN, check_password_strength


class UserRegister(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    email: str = Field(max_length=100, pattern=EMAIL_PATTERN)
    password: str
    address: str | None = Field(default=None, max_length=200)
    phone_number: str | None = Field(default=None, pattern=PHONE_PATTERN)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_strength(value)


class UserRead(BaseModel):
    id: int
    name: str
    address: str | None = None
    email: str
    phone_number: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    address: str | None = Field(default=None, max_length=200)
    phone_number: str | None = Field(default=None, pattern=PHONE_PATTERN)
    password: str
    password_confirmation: str

    @model_validator(mode="after")
    def passwords_match(self) -> "UserUpdate":
        if self.password != self.password_confirmation:
            raise ValueError("Passwords don't match.")
        return self


class PasswordChange(BaseModel):
    old_password: str
    new_password: str
    new_password_confirmation: str

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_strength(value)

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordChange":
        if self.new_password != self.new_password_confirmation:
            raise ValueError("Passwords don't match.")
        return self


class AccountDelete(BaseModel):
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRead
