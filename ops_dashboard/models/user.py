import re
from typing import Optional

from pydantic import BaseModel, field_validator

from ops_dashboard.models.enums import Role

_PHONE_RE = re.compile(r"^\+?[\d\s\-()]+$")


class User(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None
    role: Optional[Role] = None
    created_at: str


class UserCreateRequest(BaseModel):
    name: Optional[str] = None
    email: str

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


class RoleUpdateRequest(BaseModel):
    role: Role


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        if v and v.strip() and not _PHONE_RE.match(v):
            raise ValueError("Invalid phone format")
        return v

    def changes(self) -> dict[str, str]:
        """Trimmed non-blank fields only."""
        return {
            k: v.strip()
            for k, v in self.model_dump().items()
            if v is not None and v.strip() != ""
        }


class UserPage(BaseModel):
    page: list[User]
    is_done: bool
    continue_cursor: Optional[str] = None


class RoleStats(BaseModel):
    total: int = 0
    admin: int = 0
    editor: int = 0
    viewer: int = 0
    unauthenticated: int = 0
