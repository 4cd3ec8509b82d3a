import io

import pytest

from gsmconsole.interact import make_confirmation


@pytest.mark.parametrize("answer", ["y", "yes", "Y", "  YES  "])
def test_affirmative_answers(monkeypatch, answer):
    monkeypatch.setattr("sys.stdin", io.StringIO(answer + "\n"))
    assert make_confirmation("Proceed?") is True


@pytest.mark.parametrize("answer", ["n", "no", "NO"])
def test_negative_answers(monkeypatch, answer):
    monkeypatch.setattr("sys.stdin", io.StringIO(answer + "\n"))
    assert make_confirmation("Proceed?") is False


def test_reprompts_until_valid(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("maybe\n\nyes\n"))
    assert make_confirmation("Proceed?") is True
    out = capsys.readouterr().out
    assert out.count("Proceed? [y(es)/n(o)]: ") == 3


def test_eof_raises(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("what\n"))
    with pytest.raises(EOFError):
        make_confirmation("Proceed?")