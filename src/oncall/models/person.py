"""Person model for rotation members."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Person:
    """A member of the on-call rotation."""

    name: str
    location: str = ""

    # Wholly unavailable for the scheduling window (long-term absence)
    out_of_office: bool = False

    def __post_init__(self):
        """Normalize fields."""
        object.__setattr__(self, "name", str(self.name).strip())
        object.__setattr__(self, "location", str(self.location).strip())

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "location": self.location,
            "out_of_office": self.out_of_office,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Person":
        """Create from dictionary."""
        return cls(
            name=d.get("name", ""),
            location=str(d.get("location", "")),
            out_of_office=bool(d.get("out_of_office", False)),
        )
