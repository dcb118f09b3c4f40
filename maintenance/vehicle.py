"""Vehicle class for fleet vehicle identification."""

from typing import Optional


class Vehicle:
    """A vehicle included in a maintenance request."""

    def __init__(
        self,
        id: str,
        plate_number: str,
        location: str,
        created_at: Optional[str] = None,
    ):
        self.id = id
        self.plate_number = plate_number
        self.location = location
        self.created_at = created_at

    @property
    def plate_key(self) -> str:
        """Normalized plate used for duplicate detection."""
        return self.plate_number.strip().lower()

    @property
    def name(self) -> str:
        """Human-readable vehicle label."""
        return f"{self.plate_number} ({self.location})"
