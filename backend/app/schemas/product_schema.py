# backend/app/schemas/product_schema.py
from datetime import datetime
from pydantic import BaseModel
from pydantic import ConfigDict

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    quantity: int
    serial_number: str
    created_at: datetime
    updated_at: datetime
    is_deleted: bool

class MessageOut(BaseModel):
    message: str
