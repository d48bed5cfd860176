"""
Unit tests for machine descriptions and setup lines.

Usage:
  python -m pytest tests/test_config_reader.py -v
"""

import logging

import pytest

from alphabet import Alphabet
from config_reader import is_setup_line, parse_rotor, read_config, setup_machine
from errors import ConfigurationError
from rotor_and_reflector import RotorKind
from utilities import Alpha26, ENIGMA_I_CONFIG, M4_CONFIG

SMALL = """\
ABCD
 3 1
 L  MA  (AB)
 F  N   (CD)
 R  R   (AC) (BD)
 S  R   (AD) (BC)
"""


# =============================================================================
#  MACHINE DESCRIPTION
# =============================================================================

def test_read_builtin_m4():
    machine = read_config(M4_CONFIG)
    assert machine.num_rotors() == 5
    assert machine.num_pawls() == 3
    assert machine.alphabet().symbols == Alpha26
    names = [r.name for r in machine.available_rotors()]
    assert names == [
        "I", "II", "III", "IV", "V", "VI", "VII", "VIII",
        "Beta", "Gamma", "B", "C",
    ]


def test_rotor_kinds_and_notches():
    rotors = {r.name: r for r in read_config(M4_CONFIG).available_rotors()}
    assert rotors["VI"].kind is RotorKind.MOVING
    assert rotors["VI"].notches == frozenset("ZM")
    assert rotors["Beta"].kind is RotorKind.FIXED
    assert rotors["C"].kind is RotorKind.REFLECTOR


def test_wiring_continues_over_lines():
    rotors = {r.name: r for r in read_config(M4_CONFIG).available_rotors()}
    assert rotors["B"].permutation.derangement()
    assert rotors["C"].permutation.permute_symbol("Q") == "Z"


def test_every_builtin_wiring_is_a_full_permutation():
    for text in (M4_CONFIG, ENIGMA_I_CONFIG):
        for rotor in read_config(text).available_rotors():
            covered = sum(len(c) for c in rotor.permutation.cycles)
            assert covered == 26, rotor.name


def test_cycles_split_inside_a_group():
    machine = read_config("ABCD 2 1 X MA ( AB ) R R (AC)(BD)")
    rotors = {r.name: r for r in machine.available_rotors()}
    assert rotors["X"].permutation.permute_symbol("A") == "B"
    assert rotors["R"].permutation.permute_symbol("D") == "B"


def test_rotor_without_wiring_is_identity():
    machine = read_config("ABCD 2 1 X MA R R (AC)(BD)")
    rotors = {r.name: r for r in machine.available_rotors()}
    assert rotors["X"].permutation.cycles == ()


@pytest.mark.parametrize(
    "text",
    [
        "",
        "ABCD 3",
        "ABCD three 1",
        "ABCD 3 1 L XA (AB)",            # unknown type letter
        "ABCD 3 1 L MA (AB) L N (CD)",   # duplicate name
        "ABCD 3 1 L",                    # truncated rotor
        "ABCD 3 1 (AB)",                 # wiring with no name
        "AB(D 3 1",                      # forbidden alphabet symbol
        "ABCD 3 1 L M (AB)",             # moving rotor without notch
        "ABCD 3 1 L MA (AE)",            # symbol outside alphabet
        "ABCD 3 3",                      # pawls not below slot count
    ],
)
def test_bad_descriptions_rejected(text):
    with pytest.raises(ConfigurationError):
        read_config(text)


def test_non_derangement_reflector_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="enigma.config"):
        read_config("ABCD 2 1 R R (AB) X MA")
    assert "not a derangement" in caplog.text


def test_parse_rotor_direct():
    rotor = parse_rotor("F", "N", "(AB)", Alphabet("ABCD"))
    assert rotor.kind is RotorKind.FIXED
    assert not rotor.rotates


# =============================================================================
#  SETUP LINES
# =============================================================================

def test_is_setup_line():
    assert is_setup_line("* B I II III AAA")
    assert is_setup_line("   * B I II III AAA")
    assert not is_setup_line("HELLO")


def test_setup_applies_everything():
    machine = read_config(SMALL)
    setup_machine(machine, "* R F L DC (AB)")
    assert [machine.rotor(k).name for k in range(3)] == ["R", "F", "L"]
    assert machine.settings() == "DC"
    assert machine.plugboard().permute_symbol("A") == "B"


def test_setup_with_rings():
    machine = read_config(SMALL)
    setup_machine(machine, "* R F L AA BC")
    assert [machine.rotor(k).ring for k in (1, 2)] == [1, 2]
    setup_machine(machine, "* R F L AA")
    assert [machine.rotor(k).ring for k in (1, 2)] == [0, 0]


def test_m4_thin_reflector_matches_wide_reflector():
    machine = read_config(M4_CONFIG)
    setup_machine(machine, "* B Beta I II III AAAA")
    assert machine.convert_message("AAAAA") == "BDZGO"


@pytest.mark.parametrize(
    "line",
    [
        "R F L DC",             # no marker
        "* R F",                # too few names
        "* R F L",              # no setting
        "* R F L D",            # setting too short
        "* R F L DC AB XY",     # stray token
        "* R F L DC (AB",       # unbalanced plugboard
        "* R F L DC (AB) (BC)", # repeated plug
        "* R L F DC",           # moving rotor in a fixed slot
        "* F R L DC",           # reflector not in slot 0
        "* R F Q DC",           # unknown rotor
        "* R S L DC",           # second reflector in a fixed slot
        "* R F L DC A1",        # ring symbol outside alphabet
    ],
)
def test_bad_setup_rejected(line):
    machine = read_config(SMALL)
    with pytest.raises(ConfigurationError):
        setup_machine(machine, line)


def test_m4_reflector_in_greek_slot_rejected():
    machine = read_config(M4_CONFIG)
    with pytest.raises(ConfigurationError):
        setup_machine(machine, "* B C I II III AAAA")


@pytest.mark.parametrize(
    "line",
    [
        "* R L F DC",           # pawl layout fails after names pass
        "* R S L DC",           # reflector in slot 1
        "* R F L AB A1",        # rings fail after setting passes
        "* R F L AB BB (AB",    # plugboard fails last
        "* R F L ABC",          # setting fails
    ],
)
def test_rejected_setup_leaves_machine_unchanged(line):
    machine = read_config(SMALL)
    setup_machine(machine, "* R F L DC CB (AB)")
    with pytest.raises(ConfigurationError):
        setup_machine(machine, line)
    assert [machine.rotor(k).name for k in range(3)] == ["R", "F", "L"]
    assert machine.settings() == "DC"
    assert [machine.rotor(k).ring for k in (1, 2)] == [2, 1]
    assert machine.plugboard().permute_symbol("A") == "B"


def test_rejected_setup_keeps_m4_settings():
    machine = read_config(M4_CONFIG)
    setup_machine(machine, "* B Beta I II III AAAA")
    with pytest.raises(ConfigurationError):
        setup_machine(machine, "* B Beta I II III XYZA A1AA")
    assert machine.settings() == "AAAA"
    assert machine.convert_message("AAAAA") == "BDZGO"
