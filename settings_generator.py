# settings_generator.py
from __future__ import annotations

import argparse
from pathlib import Path
from random import Random, SystemRandom
from typing import List

from config_reader import read_config
from errors import ConfigurationError
from machine import Machine
from utilities import SUITES

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    max_possible = len(alpha) // 2
    k = min(k, max_possible)
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def generate_setup(machine: Machine, rng: Random | SystemRandom, max_pairs: int = 10) -> str:
    """Return a random setup line that *machine* will accept."""
    n, pawls = machine.num_rotors(), machine.num_pawls()
    rotors = machine.available_rotors()
    reflectors = [r.name for r in rotors if r.reflects]
    fixed = [r.name for r in rotors if not r.reflects and not r.rotates]
    moving = [r.name for r in rotors if r.rotates]

    n_fixed = n - 1 - pawls
    if not reflectors or len(fixed) < n_fixed or len(moving) < pawls:
        raise ConfigurationError("Catalog has too few rotors of the needed kinds")

    names = (
        [rng.choice(reflectors)]
        + rng.sample(fixed, n_fixed)
        + rng.sample(moving, pawls)
    )
    alpha = machine.alphabet().symbols
    setting = "".join(rng.choices(alpha, k=n - 1))
    plugs = " ".join(f"({pair})" for pair in choose_pairs(alpha, max_pairs, rng))

    return " ".join(["*", *names, setting, plugs]).rstrip()


def parse_cli() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a random setup line")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument("--pairs", type=int, default=10, help="Plugboard pairs (default: 10)")
    p.add_argument("-c", "--config", type=Path, help="Machine description file")
    p.add_argument("-s", "--suite", choices=sorted(SUITES), default="M4", help="Built-in machine (default: M4)")
    return p.parse_args()


# ── main ─────────────────────────────────────────────────────────


def main() -> None:
    args = parse_cli()
    text = args.config.read_text(encoding="utf-8") if args.config else SUITES[args.suite]
    machine = read_config(text)
    print(generate_setup(machine, build_rng(args.seed), args.pairs))


if __name__ == "__main__":
    main()
