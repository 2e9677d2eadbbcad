"""
Physician note -> DmeRecord extraction.

A fixed sequence of keyword/pattern rules, applied in precedence order
(first match wins per field group):

  1) device type       CPAP > oxygen > wheelchair > Unknown
  2) CPAP mask type    full face > nasal pillow > nasal > None
  3) CPAP add-on       humidifier
  4) CPAP qualifier    literal "AHI > 20" only
  5) oxygen capacity   first "<number> L" / "<number>L"
  6) oxygen usage      sleep / exertion / both
  7) provider          first "Dr." to end of text
  8) demographics      "Patient Name:", "DOB:", "Diagnosis:" lines

Matching is case-insensitive substring or regex search over the raw text.
Extraction never raises: absent patterns leave the field at its default.
"""

import abc
import logging
import re
import typing

from stairval.notepad import Notepad

from .equipment import AddOnOption, CpapMaskType, DeviceType, OxygenUsageContext
from .record import DmeRecord, UNKNOWN_PROVIDER

logger = logging.getLogger(__name__)

# Ordered device keywords; the first one present wins
DEVICE_KEYWORDS: tuple[tuple[str, DeviceType], ...] = (
    ("cpap", DeviceType.CPAP),
    ("oxygen", DeviceType.OXYGEN_TANK),
    ("wheelchair", DeviceType.WHEELCHAIR),
)

# "nasal pillow" must be tested before the bare "nasal"
MASK_KEYWORDS: tuple[tuple[str, CpapMaskType], ...] = (
    ("full face", CpapMaskType.FULL_FACE),
    ("nasal pillow", CpapMaskType.NASAL_PILLOW),
    ("nasal", CpapMaskType.NASAL),
)

AHI_QUALIFIER_PHRASE = "ahi > 20"
AHI_QUALIFIER_VALUE = 20.0

_CAPACITY_PATTERN = re.compile(r"(\d+(?:\.\d+)?) ?L", re.IGNORECASE)
_PROVIDER_PATTERN = re.compile(r"dr\.", re.IGNORECASE)
_ORDERED_BY_PATTERN = re.compile(r"ordered by ", re.IGNORECASE)

# The value may sit on the line after the label; it never starts with the label's colon
_PATIENT_NAME_PATTERN = re.compile(r"Patient\s+Name:?\s*([^\s:].*?)(?:\r?\n|$)", re.IGNORECASE)
_DOB_PATTERN = re.compile(r"(?:DOB|Date\s+of\s+Birth):?\s*([^\s:].*?)(?:\r?\n|$)", re.IGNORECASE)
_DIAGNOSIS_PATTERN = re.compile(r"Diagnosis:?\s*([^\s:].*?)(?:\r?\n|$)", re.IGNORECASE)


def _contains(text: str, keyword: str) -> bool:
    # keywords are stored lowercase
    return keyword in text.lower()


class NoteExtractor(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def extract(self, note_text: str, notepad: typing.Optional[Notepad] = None) -> DmeRecord:
        raise NotImplementedError


class DefaultExtractor(NoteExtractor):
    """
    Rule-based extractor. Holds no state, so one instance can be shared
    across threads and calls.
    """

    def extract(self, note_text: str, notepad: typing.Optional[Notepad] = None) -> DmeRecord:
        """
        Process:
        1) classify the device
        2) run only the attribute rules relevant to that device
        3) pull provider and demographics
        4) build the immutable record in one step
        """
        if not note_text or not note_text.strip():
            logger.warning("Empty physician note provided to extractor")
            if notepad is not None:
                notepad.add_warning("Physician note is empty; no DME data extracted")
            return DmeRecord()

        logger.debug(f"Extracting DME data from note of length {len(note_text)}")

        device = self.determine_device_type(note_text)
        logger.info(f"Identified device type: {device.label}")

        attributes: dict[str, typing.Any] = {}
        if device is DeviceType.CPAP:
            attributes["mask_type"] = self.determine_mask_type(note_text)
            attributes["add_on"] = self.determine_add_on(note_text)
            attributes["apnea_hypopnea_index"] = self.extract_apnea_hypopnea_index(note_text)
        elif device is DeviceType.OXYGEN_TANK:
            attributes["oxygen_tank_capacity_liters"] = self.extract_oxygen_capacity(note_text)
            attributes["oxygen_usage_context"] = self.determine_usage_context(note_text)

        for name, value in attributes.items():
            logger.debug(f"{name}: {value!r}")

        provider = self.extract_ordering_provider(note_text)
        logger.debug(f"ordering_provider: {provider!r}")

        record = DmeRecord(
            device=device,
            ordering_provider=provider,
            patient_name=self._first_line_value(_PATIENT_NAME_PATTERN, note_text),
            date_of_birth=self._first_line_value(_DOB_PATTERN, note_text),
            diagnosis=self._first_line_value(_DIAGNOSIS_PATTERN, note_text),
            **attributes,
        )

        if notepad is not None:
            self._audit(record, notepad)

        return record

    @staticmethod
    def determine_device_type(note_text: str) -> DeviceType:
        for keyword, device in DEVICE_KEYWORDS:
            if _contains(note_text, keyword):
                return device
        return DeviceType.UNKNOWN

    @staticmethod
    def determine_mask_type(note_text: str) -> CpapMaskType:
        for keyword, mask in MASK_KEYWORDS:
            if _contains(note_text, keyword):
                return mask
        return CpapMaskType.NONE

    @staticmethod
    def determine_add_on(note_text: str) -> AddOnOption:
        return AddOnOption.HUMIDIFIER if _contains(note_text, "humidifier") else AddOnOption.NONE

    @staticmethod
    def extract_apnea_hypopnea_index(note_text: str) -> typing.Optional[float]:
        """
        Only the literal "AHI > 20" is recognized; other thresholds
        ("AHI > 25", "AHI of 30") yield None.
        """
        if _contains(note_text, AHI_QUALIFIER_PHRASE):
            return AHI_QUALIFIER_VALUE
        return None

    @staticmethod
    def extract_oxygen_capacity(note_text: str) -> typing.Optional[float]:
        m = _CAPACITY_PATTERN.search(note_text)
        if not m:
            return None
        return float(m.group(1))

    @staticmethod
    def determine_usage_context(note_text: str) -> OxygenUsageContext:
        return OxygenUsageContext.from_flags(
            sleep=_contains(note_text, "sleep"),
            exertion=_contains(note_text, "exertion"),
        )

    @staticmethod
    def extract_ordering_provider(note_text: str) -> str:
        """
        Everything from the first "Dr." to the end of the note, with any
        "Ordered by " removed and trailing periods/whitespace trimmed.
        A note naming two physicians, or continuing after the name, keeps
        that extra text.
        """
        m = _PROVIDER_PATTERN.search(note_text)
        if not m:
            return UNKNOWN_PROVIDER
        tail = _ORDERED_BY_PATTERN.sub("", note_text[m.start():])
        return tail.strip().rstrip(".").strip()

    @staticmethod
    def _first_line_value(pattern: re.Pattern, note_text: str) -> str:
        m = pattern.search(note_text)
        return m.group(1).strip() if m else ""

    @staticmethod
    def _audit(record: DmeRecord, notepad: Notepad) -> None:
        if record.device is DeviceType.UNKNOWN:
            notepad.add_warning("No supported device (CPAP, oxygen, wheelchair) found in note")
        if record.ordering_provider == UNKNOWN_PROVIDER:
            notepad.add_warning("No ordering provider ('Dr.') found in note")
        if record.is_cpap and record.mask_type is CpapMaskType.NONE:
            notepad.add_warning("CPAP ordered without a recognized mask type")
        if record.is_oxygen_tank and record.oxygen_tank_capacity_liters is None:
            notepad.add_warning("Oxygen tank ordered without a liter value")


_DEFAULT_EXTRACTOR = DefaultExtractor()


def extract(note_text: str, notepad: typing.Optional[Notepad] = None) -> DmeRecord:
    """Extract a DmeRecord from `note_text` with the default rule set."""
    return _DEFAULT_EXTRACTOR.extract(note_text, notepad)
