"""On-call role definitions."""
from enum import Enum


class Role(str, Enum):
    """Responder roles filled once per period."""
    PRIMARY = "primary"
    SECONDARY = "secondary"

    @property
    def label(self) -> str:
        """Capitalized name for reports."""
        return self.value.capitalize()

    @classmethod
    def from_string(cls, s: str) -> "Role":
        """Parse role from various string formats."""
        mapping = {
            "p": cls.PRIMARY, "primary": cls.PRIMARY, "1": cls.PRIMARY,
            "s": cls.SECONDARY, "secondary": cls.SECONDARY, "2": cls.SECONDARY,
        }
        key = str(s).strip().lower()
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown role: {s!r}")


# Order used for variable creation and reporting
ROLES = [Role.PRIMARY, Role.SECONDARY]
