"""Reproducibility infrastructure: seeded random source and code provenance."""

from graphanon.reproducibility.git_hash import get_git_hash
from graphanon.reproducibility.seed import make_rng, verify_seed_determinism

__all__ = [
    "get_git_hash",
    "make_rng",
    "verify_seed_determinism",
]
