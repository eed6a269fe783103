from __future__ import annotations

from datetime import datetime

import pytest

from rfid_attendance.persons.model import Person

from tests.fakes import ALPHA, BETA


@pytest.fixture
def fixed_now() -> datetime:
    # Monday, inside the default sign-in window (07:00-08:00)
    return datetime(2026, 3, 2, 7, 30, 0)


@pytest.fixture
def ama() -> Person:
    return Person(person_id=1, uid="A1B2C3D4", name="Ama Mensah", form="Form 1", api_key=ALPHA.api_key)


@pytest.fixture
def kofi() -> Person:
    return Person(person_id=2, uid="E5F6A7B8", name="Kofi Boateng", form="Form 2", api_key=ALPHA.api_key)


@pytest.fixture
def esi_beta() -> Person:
    return Person(person_id=3, uid="C0FFEE01", name="Esi Owusu", form="Year 3", api_key=BETA.api_key)
