import logging

import pytest

from debug import COMPONENTS, Debug, add_log_file


def test_everything_starts_off():
    assert Debug().status() == {c: False for c in COMPONENTS}


def test_unknown_component():
    with pytest.raises(ValueError, match="No such component"):
        Debug().enable("flux")


def test_toggle_and_status_copy():
    dbg = Debug()
    dbg.toggle("rotor")
    status = dbg.status()
    status["rotor"] = False
    assert dbg.status()["rotor"] is True
    assert "rotor" in repr(dbg)


def test_log_respects_switches(caplog):
    caplog.set_level(logging.DEBUG, logger="ENIGMA")
    dbg = Debug()
    dbg.log("rotor", "silent")
    dbg.enable("rotor")
    dbg.log("rotor", "loud")
    dbg.toggle_global(False)
    dbg.log("rotor", "muted")
    assert "[ROTOR] loud" in caplog.text
    assert "silent" not in caplog.text
    assert "muted" not in caplog.text


def test_log_file_mirrors_records(tmp_path):
    path = tmp_path / "enigma.log"
    handler = add_log_file(str(path))
    try:
        dbg = Debug()
        dbg.enable("encipher")
        dbg.log("encipher", "A->B")
    finally:
        logging.getLogger("ENIGMA").removeHandler(handler)
        handler.close()
    assert "[ENCIPHER] A->B" in path.read_text(encoding="utf-8")
