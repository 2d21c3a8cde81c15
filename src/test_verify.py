import pytest

from hexit.verify import Verification, VerificationFailed


@pytest.mark.parametrize("length", [0, 1, 1000])
def test_anything_goes(length):
    Verification.anything_goes().verify(length)


def test_exact_hit():
    Verification.exact_length(13).verify(13)


def test_exact_miss():
    with pytest.raises(VerificationFailed) as excinfo:
        Verification.exact_length(13).verify(3)
    assert str(excinfo.value) == "13"


@pytest.mark.parametrize("length", [0, 13, 26])
def test_multiple_hit(length):
    Verification.multiple(13).verify(length)


def test_multiple_miss():
    with pytest.raises(VerificationFailed) as excinfo:
        Verification.multiple(13).verify(14)
    assert str(excinfo.value) == "multiple of 13"
