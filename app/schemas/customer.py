from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.enums import CustomerStatus
from app.schemas.validators import EMAIL_PATTERN, PHONE_PATTERN, check_password_strength


class CustomerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=100, pattern=EMAIL_PATTERN)
    password: str
    address: str | None = Field(default=None, max_length=200)
    phone_number: str | None = Field(default=None, pattern=PHONE_PATTERN)
    status: CustomerStatus = CustomerStatus.ACTIVE

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_strength(value, require_special=True)


class CustomerRead(BaseModel):
    id: int
    name: str
    address: str | None = None
    email: str
    phone_number: str | None = None
    status: CustomerStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CustomerUpdate(BaseModel):
    """Profile changes; ``password`` is the customer's current password."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = Field(default=None, max_length=200)
    phone_number: str | None = Field(default=None, pattern=PHONE_PATTERN)
    password: str
    password_confirmation: str

    @model_validator(mode="after")
    def passwords_match(self) -> "CustomerUpdate":
        if self.password != self.password_confirmation:
            raise ValueError("Passwords don't match.")
        return self


class CustomerStatusUpdate(BaseModel):
    status: CustomerStatus
