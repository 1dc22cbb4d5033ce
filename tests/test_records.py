from datetime import datetime

import pytest

from records import FOOTER, HEADER, MessageRecord, load_record, save_record


def make_record(**overrides):
    fields = dict(
        input="Hello 42",
        output="ILBDA 42\n",
        ring_settings="A A A",
        initial_positions="A B C",
        plugboard_pairs=["AT", "BS"],
        date=datetime(2024, 5, 1, 12, 30),
    )
    fields.update(overrides)
    return MessageRecord(**fields)


def test_render_layout():
    lines = make_record().render().splitlines()
    assert lines == [
        HEADER,
        "Date: 2024-05-01T12:30:00",
        "Input: Hello 42",
        "Output: ILBDA 42",
        "Ring Settings: A A A",
        "Initial Positions: A B C",
        "Plugboard Pairs: AT BS",
        FOOTER,
    ]


def test_save_and_load(tmp_path):
    path = save_record(tmp_path / "msg.txt", make_record())
    text = load_record(path)
    assert text.startswith(HEADER)
    assert "Plugboard Pairs: AT BS" in text


def test_nothing_to_save(tmp_path):
    with pytest.raises(ValueError, match="No message"):
        save_record(tmp_path / "msg.txt", make_record(output=""))
    assert not (tmp_path / "msg.txt").exists()
