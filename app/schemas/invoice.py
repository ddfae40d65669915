from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.enums import InvoiceStatus


class InvoiceRowCreate(BaseModel):
    service: str = Field(min_length=1, max_length=50)
    quantity: Decimal = Field(ge=0, max_digits=12, decimal_places=3)
    amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)


class InvoiceRowRead(BaseModel):
    id: int
    service: str
    quantity: Decimal
    amount: Decimal
    sum: Decimal

    model_config = ConfigDict(from_attributes=True)


class InvoiceCreate(BaseModel):
    customer_id: int = Field(gt=0)
    start_date: datetime
    end_date: datetime
    rows: list[InvoiceRowCreate] = Field(min_length=1)
    comment: str | None = Field(default=None, max_length=500)
    status: InvoiceStatus = InvoiceStatus.CREATED

    @model_validator(mode="after")
    def check_period(self) -> "InvoiceCreate":
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be later than end_date.")
        return self


class InvoiceRead(BaseModel):
    id: int
    customer_id: int
    start_date: datetime
    end_date: datetime
    rows: list[InvoiceRowRead]
    total_sum: Decimal
    comment: str | None = None
    status: InvoiceStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class InvoiceUpdate(BaseModel):
    customer_id: int | None = Field(default=None, gt=0)
    start_date: datetime | None = None
    end_date: datetime | None = None
    comment: str | None = Field(default=None, max_length=500)
    status: InvoiceStatus | None = None


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus


class InvoiceRowsReplace(BaseModel):
    rows: list[InvoiceRowCreate] = Field(min_length=1)
