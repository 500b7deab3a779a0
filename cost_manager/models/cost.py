from datetime import datetime
from typing import Any, Dict, Literal, Optional, Tuple, Union, get_args
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, confloat, field_validator

from cost_manager.utils.timestamps import as_utc, date_only_as_utc, format_timestamp, utcnow

Category = Literal["food", "health", "housing", "sport", "education"]
CATEGORIES: Tuple[str, ...] = get_args(Category)

# Integers stay integers; NaN and infinities are rejected
Amount = Union[int, confloat(allow_inf_nan=False)]


class CostCreate(BaseModel):
    """
    Body of POST /add. Every field is optional here so that presence can be
    checked by add_cost and reported with a single message.
    """

    description: Optional[str] = None
    category: Optional[str] = None
    userid: Optional[str] = None
    sum: Optional[Any] = None
    date: Optional[datetime] = None

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, value: Any) -> Any:
        return date_only_as_utc(value)


class CostInDB(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()), alias="_id")
    description: str = Field(..., min_length=1)
    category: Category
    userid: str = Field(..., min_length=1)  # weak reference to User.id, never checked
    sum: Amount
    date: datetime = Field(default_factory=utcnow)

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, value: Any) -> Any:
        return date_only_as_utc(value)

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: datetime) -> datetime:
        return as_utc(value)

    def to_document(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "description": self.description,
            "category": self.category,
            "userid": self.userid,
            "sum": self.sum,
            "date": format_timestamp(self.date),
        }
