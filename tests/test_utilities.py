import pytest

from utilities import (
    ConfigurationError,
    REFLECTORS,
    ROTORS,
    get_settings,
    parse_letter_list,
    preprocess_message,
    resolve_reflector,
    resolve_rotor,
    validate_letter_list,
    validate_plug_pairs,
)


def test_configuration_error_is_a_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_parse_letter_list():
    assert parse_letter_list(" a d  q ") == ["A", "D", "Q"]


def test_validate_letter_list_normalises():
    assert validate_letter_list("a  b c", 3, "Ring settings") == "A B C"


@pytest.mark.parametrize("text", ["A A", "A A A A", "AB C D", "1 2 3", ""])
def test_validate_letter_list_rejects(text):
    with pytest.raises(ConfigurationError, match="Ring settings must be in format 'A A A'"):
        validate_letter_list(text, 3, "Ring settings")


def test_validate_plug_pairs():
    assert validate_plug_pairs("at bs") == ["AT", "BS"]
    assert validate_plug_pairs(["xy"]) == ["XY"]
    assert validate_plug_pairs("") == []


@pytest.mark.parametrize(
    "pairs, message",
    [
        ("ABC", "2 letters"),
        ("A1", "2 letters"),
        ("AA", "itself"),
        ("AB BC", "already used"),
    ],
)
def test_validate_plug_pairs_rejects(pairs, message):
    with pytest.raises(ConfigurationError, match=message):
        validate_plug_pairs(pairs)


def test_resolve_named_rotor():
    assert resolve_rotor("ii") == ROTORS["II"]
    assert resolve_rotor("II", "x") == (ROTORS["II"][0], "X")


def test_resolve_raw_rotor():
    wiring = ROTORS["IV"][0].lower()
    assert resolve_rotor(wiring, "j") == (ROTORS["IV"][0], "J")


@pytest.mark.parametrize(
    "wheel, notch",
    [
        ("VI", None),
        (ROTORS["I"][0], None),
        ("A" * 26, "Q"),
        ("II", "QQ"),
    ],
)
def test_resolve_rotor_rejects(wheel, notch):
    with pytest.raises(ConfigurationError):
        resolve_rotor(wheel, notch)


def test_resolve_reflector():
    assert resolve_reflector("b") == REFLECTORS["B"]
    assert resolve_reflector(REFLECTORS["C"].lower()) == REFLECTORS["C"]


@pytest.mark.parametrize("wheel", ["D", ROTORS["I"][0], "ABCDEFGHIJKLMNOPQRSTUVWXYZ"])
def test_resolve_reflector_rejects(wheel):
    with pytest.raises(ConfigurationError):
        resolve_reflector(wheel)


def test_preprocess_message():
    assert preprocess_message("Hi, there 42!") == "Hi there 42"


def test_get_settings_keeps_current_on_enter(monkeypatch):
    answers = iter(["", "b c d", "at xy"])
    monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))
    assert get_settings(3, "A A A", "A A A", []) == ("A A A", "B C D", ["AT", "XY"])


def test_get_settings_reprompts_on_bad_input(monkeypatch, capsys):
    answers = iter(["a a", "B B B", "", "AA", "-"])
    monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))
    assert get_settings(3, "A A A", "C C C", ["AT"]) == ("B B B", "C C C", [])
    out = capsys.readouterr().out
    assert "Ring settings must be in format 'A A A'" in out
    assert "itself" in out
