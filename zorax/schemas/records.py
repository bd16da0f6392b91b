from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class RecordBase(BaseModel):
    date: str = Field(..., max_length=10, examples=["2024-05-01"])
    time: str = Field(..., max_length=10, examples=["10:30"])
    name: str
    type: str
    detail: str
    payment_type: str
    amount: float

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RecordCreate(RecordBase):
    """Insert payload; ``slNo`` is allocated by the server when left out."""

    sl_no: Optional[str] = Field(None, min_length=1, max_length=10)


class RecordUpdate(BaseModel):
    sl_no:        Optional[str]   = Field(None, min_length=1, max_length=10)
    date:         Optional[str]   = Field(None, max_length=10)
    time:         Optional[str]   = Field(None, max_length=10)
    name:         Optional[str]   = None
    type:         Optional[str]   = None
    detail:       Optional[str]   = None
    payment_type: Optional[str]   = None
    amount:       Optional[float] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RecordOut(RecordBase):
    id: int
    sl_no: str
    created_by: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class NextSlNoOut(BaseModel):
    sl_no: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True
