"""
Equipment vocabulary.

Enumerations for the device classification and the device-specific
attributes of a DME order. Each enum carries an explicit mapping to the
label used in the outbound JSON; the labels are not derived from the
member names.
"""

from enum import Enum, auto


class DeviceType(Enum):
    """Supported device classifications for a physician note."""
    UNKNOWN = auto()
    CPAP = auto()
    OXYGEN_TANK = auto()
    WHEELCHAIR = auto()

    @property
    def label(self) -> str:
        return _DEVICE_LABELS[self]


class CpapMaskType(Enum):
    """Mask types for CPAP devices."""
    NONE = auto()
    FULL_FACE = auto()
    NASAL = auto()
    NASAL_PILLOW = auto()

    @property
    def label(self) -> str:
        return _MASK_LABELS[self]


class AddOnOption(Enum):
    """Add-on options for CPAP devices."""
    NONE = auto()
    HUMIDIFIER = auto()

    @property
    def label(self) -> str:
        return _ADD_ON_LABELS[self]


class OxygenUsageContext(Enum):
    """When the patient uses the oxygen tank."""
    NONE = auto()
    SLEEP = auto()
    EXERTION = auto()
    SLEEP_AND_EXERTION = auto()

    @property
    def label(self) -> str:
        """
        Lowercase phrase sent to the intake API ("sleep and exertion").
        NONE has no phrase and maps to an empty string.
        """
        return _USAGE_LABELS[self]

    @classmethod
    def from_flags(cls, sleep: bool, exertion: bool) -> "OxygenUsageContext":
        if sleep and exertion:
            return cls.SLEEP_AND_EXERTION
        if sleep:
            return cls.SLEEP
        if exertion:
            return cls.EXERTION
        return cls.NONE


_DEVICE_LABELS = {
    DeviceType.UNKNOWN: "Unknown",
    DeviceType.CPAP: "CPAP",
    DeviceType.OXYGEN_TANK: "Oxygen Tank",
    DeviceType.WHEELCHAIR: "Wheelchair",
}

_MASK_LABELS = {
    CpapMaskType.NONE: "None",
    CpapMaskType.FULL_FACE: "FullFace",
    CpapMaskType.NASAL: "Nasal",
    CpapMaskType.NASAL_PILLOW: "NasalPillow",
}

_ADD_ON_LABELS = {
    AddOnOption.NONE: "None",
    AddOnOption.HUMIDIFIER: "Humidifier",
}

_USAGE_LABELS = {
    OxygenUsageContext.NONE: "",
    OxygenUsageContext.SLEEP: "sleep",
    OxygenUsageContext.EXERTION: "exertion",
    OxygenUsageContext.SLEEP_AND_EXERTION: "sleep and exertion",
}
