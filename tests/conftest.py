import pytest

from reservation_calendar.models import Reservation

APT = "apt_1"


def make_reservation(id, check_in, check_out, status="booked", apartment_id=APT, **extra):
    return Reservation(
        id=id, apartment_id=apartment_id, check_in=check_in, check_out=check_out, status=status, **extra
    )


@pytest.fixture
def res():
    return make_reservation
