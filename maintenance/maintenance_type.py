"""MaintenanceType enum for the service categories a vehicle can receive."""

from enum import Enum


class MaintenanceType(Enum):
    """Service categories. Values match the stored/request-file strings."""

    OFFLINE = "offline"
    FLS = "fls"
    CALIBRATION = "calibration"
    FLS_CALIBRATION = "fls_calibration"

    @property
    def needs_field_crew(self) -> bool:
        """Anything beyond offline work requires a second crew member."""
        return self is not MaintenanceType.OFFLINE
