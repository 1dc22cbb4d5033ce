import json
from random import Random

from main import MachineConfig
from settings_generator import choose_pairs, generate, main


def test_same_seed_same_sheet():
    assert generate(Random(7)) == generate(Random(7))


def test_sheet_builds_a_machine():
    cfg = generate(Random(1))
    machine = MachineConfig.from_dict(cfg).build()
    assert machine.get_current_rotor_positions() == cfg["initial_positions"]
    assert len(set(cfg["rotors"])) == 3
    assert cfg["reflector"] in {"B", "C"}


def test_pairs_are_disjoint():
    pairs = choose_pairs("ABCDEFGHIJKLMNOPQRSTUVWXYZ", 10, Random(3))
    letters = "".join(pairs)
    assert len(pairs) == 10
    assert len(set(letters)) == 20


def test_pairs_capped_by_alphabet():
    assert len(choose_pairs("ABCD", 10, Random(0))) == 2


def test_cli_writes_json(tmp_path, capsys):
    out = tmp_path / "sheet.json"
    main(["--seed", "42", "--pairs", "4", "--outfile", str(out)])
    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data["plugboard"]) == 4
    assert "Wrote" in capsys.readouterr().out
