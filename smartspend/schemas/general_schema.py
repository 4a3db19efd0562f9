from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel

# largest value a Numeric(15, 2) column holds
MAX_AMOUNT = 9_999_999_999_999.99


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# offset-aware input is stored as naive UTC, like the DateTime columns
UtcDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]


class RegisterResponse(BaseModel):
    message: str
