from datetime import datetime, timezone

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
)


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: StrictStr = Field(min_length=1)
    quantity: StrictInt = Field(ge=0)
    serial_number: StrictStr = Field(min_length=1)
    created_at: datetime
    updated_at: datetime
    is_deleted: StrictBool = False

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # files written by hand may carry naive timestamps
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"
