from pydantic import BaseModel, field_validator
from typing import Optional


class UserRegisterRequest(BaseModel):
    """
    Profile of a freshly signed-up identity. Unknown keys are kept as profile data.
    The email is stored as sent (trimmed only) so it keeps matching the
    identity token's email claim, which is what ownership is compared against.
    """
    email:    str
    name:     Optional[str] = None
    photoURL: Optional[str] = None

    model_config = {"extra": "allow"}

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        if not v.strip(): raise ValueError("email required")
        return v.strip()

    def extra_profile(self) -> dict:
        return dict(self.model_extra or {})
