# ==============================================
# Identity & Credential Roster (Data Classes)
# ==============================================
#
# ENUMS:
# ------
# - Role(Enum): USER, ADMIN
#
# CLASSES:
# --------
# - Identity (frozen dataclass)
#     The authenticated user's profile: id, name, email, role.
#     Replaced wholesale on login / logout, never edited.
#
# - CredentialEntry (dataclass)
#     One row of the credential roster: email, plaintext password,
#     name, role, and the stable user_id minted at registration
#     (None for rows written before stable ids existed).
#
#   Both serialize with the camelCase keys of the persisted layout
#   ("userId"), via to_dict() / from_dict().
#
# ==============================================

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ewaste.errors import ValidationError


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


def _parse_role(value: Any) -> Role:
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        raise ValidationError(f"Unknown role: {value!r}")


def _require_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValidationError(f"'{key}' must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class Identity:
    """The currently authenticated user's profile."""
    id: str
    name: str
    email: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Identity":
        if not isinstance(data, dict):
            raise ValidationError(f"Identity must be an object, got {type(data).__name__}")
        return cls(
            id=_require_str(data, "id"),
            name=_require_str(data, "name"),
            email=_require_str(data, "email"),
            role=_parse_role(data.get("role")),
        )


@dataclass
class CredentialEntry:
    """One registered (email, password, name, role) tuple."""
    email: str
    password: str
    name: str
    role: Role = Role.USER
    user_id: Optional[str] = None

    def matches(self, email: str, password: str) -> bool:
        return self.email == email and self.password == password

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "email": self.email,
            "password": self.password,
            "name": self.name,
            "role": self.role.value,
        }
        if self.user_id is not None:
            data["userId"] = self.user_id
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "CredentialEntry":
        if not isinstance(data, dict):
            raise ValidationError(f"Roster entry must be an object, got {type(data).__name__}")
        user_id = data.get("userId")
        if user_id is not None and not isinstance(user_id, str):
            raise ValidationError(f"'userId' must be a string, got {user_id!r}")
        return cls(
            email=_require_str(data, "email"),
            password=_require_str(data, "password"),
            name=_require_str(data, "name"),
            role=_parse_role(data.get("role", "user")),
            user_id=user_id,
        )
