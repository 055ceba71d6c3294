"""
Test bootstrap: put scripts/ on sys.path so 'profile_pattern_density' imports
without an editable install, and provide small reference-genome fixtures.
"""
import os
import sys
from pathlib import Path

import pytest

# Headless plotting in CI
os.environ.setdefault("MPLBACKEND", "Agg")

SCRIPTS = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPTS) not in sys.path:
    sys.path.insert(0, str(SCRIPTS))


def build_chr1() -> str:
    """1000 bp of 'A' with 'CG' at 400-401 and 'cgcg' at 500-503 (1-based)."""
    bases = ["A"] * 1000
    bases[399:401] = "CG"
    bases[499:503] = "cgcg"
    return "".join(bases)


def write_fasta(path: Path, records: dict, width: int = 60) -> Path:
    with path.open("w", encoding="utf-8") as f:
        for name, seq in records.items():
            f.write(f">{name} test record\n")
            for i in range(0, len(seq), width):
                f.write(seq[i:i + width] + "\n")
    return path


@pytest.fixture
def genome_fasta(tmp_path):
    return write_fasta(
        tmp_path / "genome.fa",
        {"chr1": build_chr1(), "chr2": "ACGT" * 25},
    )
