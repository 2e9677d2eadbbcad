import pytest


@pytest.fixture(scope="session")
def cpap_note() -> str:
    return "Patient needs a CPAP with full face mask and humidifier. AHI > 20. Ordered by Dr. Cameron."


@pytest.fixture(scope="session")
def oxygen_note() -> str:
    return "Patient requires oxygen tank 5L for sleep and exertion. Ordered by Dr. Smith."


@pytest.fixture(scope="session")
def finch_note() -> str:
    """
    Multi-line note with demographics; provider label is "Ordering Physician:".
    """
    return (
        "Patient Name: Harold Finch\n"
        "DOB: 04/12/1952\n"
        "Diagnosis: COPD\n"
        "Prescription: Requires a portable oxygen tank delivering 2 L per minute.\n"
        "Usage: During sleep and exertion.\n"
        "Ordering Physician: Dr. Cuddy"
    )
