# utilities.py
from __future__ import annotations

from typing import Dict

# ────────────────────────────────────────────────────────────────────────
#  0. Alphabets
# ────────────────────────────────────────────────────────────────────────

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# ────────────────────────────────────────────────────────────────────────
#  1. Wheel database (cycle notation, notches after the type letter)
# ────────────────────────────────────────────────────────────────────────

_ROTORS = """\
 I    MQ   (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
 II   ME   (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
 III  MV   (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
 IV   MJ   (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
 V    MZ   (AVOLDRWFIUQ) (BZKSMNHYC) (EGTJPX)
 VI   MZM  (AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)
 VII  MZM  (ANOUPFRIMBZTLWKSVEGCJYDHXQ)
 VIII MZM  (AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)
"""

# Naval four-rotor machine: thin reflectors plus a fixed Greek wheel.
M4_CONFIG = Alpha26 + "\n 5 3\n" + _ROTORS + """\
 Beta  N   (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
 Gamma N   (AFNIRLBSQWVXGUZDKMTPCOYJHE)
 B     R   (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
           (RX) (SZ) (TV)
 C     R   (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW)
           (QZ) (SX) (UY)
"""

# Three-rotor service machine with the wide reflectors.
ENIGMA_I_CONFIG = Alpha26 + "\n 4 3\n" + _ROTORS + """\
 B     R   (AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO)
           (TZ) (VW)
 C     R   (AF) (BV) (CP) (DJ) (EI) (GO) (HY) (KR) (LZ) (MX) (NW)
           (QT) (SU)
"""

SUITES: Dict[str, str] = {
    "M4": M4_CONFIG,
    "I":  ENIGMA_I_CONFIG,
}


# ────────────────────────────────────────────────────────────────────────
#  2. Text helpers
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str) -> str:
    """Drop every whitespace character from a message line."""
    return "".join(msg.split())


def group_blocks(msg: str, block: int = 5) -> str:
    """Split *msg* into space-separated groups of *block* symbols."""
    return " ".join(msg[i : i + block] for i in range(0, len(msg), block))


__all__ = [
    "Alpha26",
    "SUITES",
    "preprocess_message",
    "group_blocks",
]
