"""Domain entity describing an authenticated user."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserSummary:
    """Public attributes of an employee bound to a live connection."""

    id: int
    name: str
    email: str
    role: str
    department_id: int | None = None
    department_name: str | None = None

    def to_public_dict(self) -> dict[str, object]:
        """Return the shape acknowledged to the client after authentication."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "department": self.department_name,
        }


__all__ = ["UserSummary"]
