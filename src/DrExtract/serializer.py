"""
Canonical JSON shape for a DmeRecord.

Key order per device:
  CPAP        device, mask_type, add_ons, qualifier, ordering_provider
  Oxygen Tank device, liters, usage, ordering_provider
  otherwise   device, ordering_provider
followed by patient_name / dob / diagnosis (only when present) and
processed_timestamp.

Fields expected for the device but not found in the note are emitted as
null (or "" for the CPAP qualifier); fields belonging to another device
are omitted.
"""

import json
from decimal import Decimal
import typing

from .equipment import AddOnOption, DeviceType, OxygenUsageContext
from .record import DmeRecord


def format_number(value: float) -> str:
    """Render 2.0 as "2", 2.5 as "2.5" and 1e-07 as "0.0000001" (never exponent notation)."""
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def _cpap_fields(record: DmeRecord) -> dict[str, typing.Any]:
    return {
        "mask_type": record.mask_type.label,
        "add_ons": [record.add_on.label] if record.add_on is not AddOnOption.NONE else None,
        "qualifier": (
            f"AHI > {format_number(record.apnea_hypopnea_index)}"
            if record.apnea_hypopnea_index is not None
            else ""
        ),
    }


def _oxygen_fields(record: DmeRecord) -> dict[str, typing.Any]:
    capacity = record.oxygen_tank_capacity_liters
    usage = record.oxygen_usage_context
    return {
        "liters": f"{format_number(capacity)} L" if capacity is not None else None,
        "usage": usage.label if usage is not OxygenUsageContext.NONE else None,
    }


def serialize(record: DmeRecord, include_timestamp: bool = True) -> dict[str, typing.Any]:
    """Build the outbound JSON object (as an ordered dict) for `record`."""
    payload: dict[str, typing.Any] = {"device": record.device.label}

    if record.device is DeviceType.CPAP:
        payload.update(_cpap_fields(record))
    elif record.device is DeviceType.OXYGEN_TANK:
        payload.update(_oxygen_fields(record))

    payload["ordering_provider"] = record.ordering_provider

    for key, value in (
        ("patient_name", record.patient_name),
        ("dob", record.date_of_birth),
        ("diagnosis", record.diagnosis),
    ):
        if value:
            payload[key] = value

    if include_timestamp:
        payload["processed_timestamp"] = record.processed_timestamp.isoformat()

    return payload


def to_json(record: DmeRecord, *, pretty: bool = False, include_timestamp: bool = True) -> str:
    """Serialize `record` to a JSON string; compact unless `pretty`."""
    payload = serialize(record, include_timestamp=include_timestamp)
    if pretty:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
