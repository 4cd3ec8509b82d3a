import pytest

from gsmconsole.options import Confirmation


@pytest.mark.parametrize(
    ("agree", "decline", "needed"),
    [
        (True, False, False),
        (False, True, False),
        (False, False, True),
        (True, True, True),
    ],
)
def test_further_action_needed(agree, decline, needed):
    assert Confirmation(agree=agree, decline=decline).further_action_needed() is needed


@pytest.mark.parametrize(
    ("agree", "decline", "declined"),
    [
        (True, False, False),
        (False, True, True),
        (False, False, False),
        (True, True, False),
    ],
)
def test_declined(agree, decline, declined):
    assert Confirmation(agree=agree, decline=decline).declined() is declined


def test_declined_never_needs_further_action():
    confirmation = Confirmation(decline=True)
    assert confirmation.declined()
    assert not confirmation.further_action_needed()


def test_defaults_ask_the_user():
    confirmation = Confirmation()
    assert confirmation.further_action_needed()
    assert not confirmation.declined()