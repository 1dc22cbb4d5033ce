import pytest

from enigma import Enigma
from utilities import REFLECTORS, ROTORS

WIRINGS = [ROTORS["I"][0], ROTORS["II"][0], ROTORS["III"][0]]
NOTCHES = ["Q", "E", "V"]
REFLECTOR_B = REFLECTORS["B"]


@pytest.fixture
def make_machine():
    def _make(rings="A A A", positions="A A A", plugs=(), notches=NOTCHES, wirings=WIRINGS):
        return Enigma(wirings, notches, REFLECTOR_B, rings, positions, list(plugs))
    return _make


@pytest.fixture
def machine(make_machine):
    return make_machine()
