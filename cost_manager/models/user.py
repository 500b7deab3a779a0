from datetime import date
from typing import Any, Dict, Literal, Tuple, Union, get_args

from pydantic import BaseModel, Field

MaritalStatus = Literal["single", "married", "divorced", "widowed"]
MARITAL_STATUSES: Tuple[str, ...] = get_args(MaritalStatus)


class UserInDB(BaseModel):
    id: str = Field(..., min_length=1)  # business identifier, unique
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    birthday: date
    marital_status: MaritalStatus

    def to_document(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "birthday": self.birthday.isoformat(),
            "marital_status": self.marital_status,
        }


class UserSummary(BaseModel):
    id: str
    first_name: str
    last_name: str
    total: Union[int, float] = 0


class Developer(BaseModel):
    first_name: str
    last_name: str
