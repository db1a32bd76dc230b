"""Author guard tests."""
import pytest

from developeer.errors import Unauthorized
from developeer.services.authorization import ensure_author, is_author


def test_author_passes():
    ensure_author("USR-A", "USR-A")


def test_ids_are_compared_after_trimming():
    assert is_author(" USR-A ", "USR-A")


@pytest.mark.parametrize("principal", [None, "", "   "])
def test_missing_principal_is_never_the_author(principal):
    assert not is_author(principal, "USR-A")
    with pytest.raises(Unauthorized) as exc_info:
        ensure_author(principal, "USR-A")
    assert "(anonymous)" in exc_info.value.message


def test_mismatch_names_both_ids():
    with pytest.raises(Unauthorized) as exc_info:
        ensure_author("USR-B", "USR-A", resource="form FRM-1")

    error = exc_info.value
    assert error.status_code == 401
    assert error.principal_id == "USR-B"
    assert error.owner_id == "USR-A"
    assert "USR-B" in error.message
    assert "USR-A" in error.message
    assert "form FRM-1" in error.message
    assert error.to_dict()["reason"] == "Unauthorized"
