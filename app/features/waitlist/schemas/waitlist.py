from typing import Annotated, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, field_validator
from pydantic_core import PydanticCustomError


def check_email_format(value: str) -> str:
    # Format check only; the address is stored exactly as submitted
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise PydanticCustomError(
            "value_error", "value is not a valid email address: {reason}", {"reason": str(e)}
        ) from e
    return value


WaitlistEmail = Annotated[str, AfterValidator(check_email_format)]


class WaitlistIn(BaseModel):
    email: WaitlistEmail
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def blank_name_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class MessageOut(BaseModel):
    message: str


class WaitlistCountOut(BaseModel):
    count: int
