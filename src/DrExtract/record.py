"""
DME record domain model.

Defines the DmeRecord dataclass that the extractor builds once per note.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .equipment import AddOnOption, CpapMaskType, DeviceType, OxygenUsageContext

UNKNOWN_PROVIDER = "Unknown"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DmeRecord:
    """
    Structured DME order extracted from a single physician note.

    Attributes:
        device: Device classification, exactly one per record.
        ordering_provider: Physician name from the note, or "Unknown".
        mask_type: CPAP mask type (CPAP only).
        add_on: CPAP add-on (CPAP only).
        apnea_hypopnea_index: AHI qualifier threshold (CPAP only).
        oxygen_tank_capacity_liters: Tank flow/capacity in liters (oxygen tank only).
        oxygen_usage_context: When the tank is used (oxygen tank only).
        patient_name: Value of a "Patient Name:" line, or "".
        date_of_birth: Value of a "DOB:" line, or "".
        diagnosis: Value of a "Diagnosis:" line, or "".
        processed_timestamp: UTC instant the record was created.
    """

    device: DeviceType = DeviceType.UNKNOWN
    ordering_provider: str = UNKNOWN_PROVIDER
    mask_type: CpapMaskType = CpapMaskType.NONE
    add_on: AddOnOption = AddOnOption.NONE
    apnea_hypopnea_index: Optional[float] = None
    oxygen_tank_capacity_liters: Optional[float] = None
    oxygen_usage_context: OxygenUsageContext = OxygenUsageContext.NONE
    patient_name: str = ""
    date_of_birth: str = ""
    diagnosis: str = ""
    processed_timestamp: datetime = field(default_factory=_utc_now)

    def __post_init__(self):
        if not isinstance(self.device, DeviceType):
            raise TypeError(
                f"device must be a DeviceType, got {type(self.device).__name__}"
            )

        # CPAP attributes only travel with a CPAP record
        if self.device is not DeviceType.CPAP and (
            self.mask_type is not CpapMaskType.NONE
            or self.add_on is not AddOnOption.NONE
            or self.apnea_hypopnea_index is not None
        ):
            raise ValueError(f"CPAP attributes set on a {self.device.label} record")

        if self.device is not DeviceType.OXYGEN_TANK and (
            self.oxygen_tank_capacity_liters is not None
            or self.oxygen_usage_context is not OxygenUsageContext.NONE
        ):
            raise ValueError(f"Oxygen attributes set on a {self.device.label} record")

    @property
    def is_cpap(self) -> bool:
        return self.device is DeviceType.CPAP

    @property
    def is_oxygen_tank(self) -> bool:
        return self.device is DeviceType.OXYGEN_TANK
