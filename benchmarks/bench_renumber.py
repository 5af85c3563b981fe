#!/usr/bin/env python3
"""
Benchmark script comparing map-number renumbering speed between RDKit and mapsmi.

Both sides parse a mapped SMILES, renumber the atom map numbers to 1..N
and write the structure back out. RDKit writes with canonical ordering
switched off so that the atom order matches the input.

Usage:
    python benchmarks/bench_renumber.py [--extended]

Options:
    --extended    Run extended benchmark with multiple structures and per-atom cost
"""

import sys
import os
import time
from dataclasses import dataclass
from typing import Optional

# Ensure local mapsmi is used (not installed version)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Test structures with varying size
TEST_STRUCTURES = {
    "water": "[O:3]([H:9])[H:1]",
    "benzene": "[c:60]1[c:50][c:40][c:30][c:20][c:10]1",
    "chain_branch": "[C:7]([C:9]([O:2])[N:4])[S:1]",
    "t146j": (
        "[C:1]1([H:31])=[N:2][C:3]([C:4]([C:5]([C:6](/[N:7]=[S:8](\\[N:9]"
        "([C:10]([C:11]([C:12]([N:13]([c:14]2[n:15][c:16]([H:45])[c:17]([H:46])"
        "[c:18]([H:47])[c:19]2[H:48])[C:20]([c:21]2[c:22]([H:51])[c:23]([H:52])"
        "[c:24]([Br:25])[c:26]([H:53])[c:27]2[H:54])([H:49])[H:50])([H:43])[H:44])"
        "([H:41])[H:42])([H:39])[H:40])[H:38])[C:28]([H:55])([H:56])[H:57])([H:36])"
        "[H:37])([H:34])[H:35])([H:32])[H:33])=[C:29]([H:58])[N:30]1[H:59]"
    ),
}

# Default structure for quick benchmark
LARGE_STRUCTURE = TEST_STRUCTURES["t146j"]

ITERATIONS = 2000
EXTENDED_ITERATIONS = 1000


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    smiles: str
    output: str
    time_seconds: float
    iterations: int
    num_atoms: int
    
    @property
    def time_per_call_ms(self) -> float:
        return (self.time_seconds / self.iterations) * 1000
    
    @property
    def time_per_atom_us(self) -> float:
        """Microseconds per atom per call."""
        return (self.time_seconds / self.iterations / self.num_atoms) * 1_000_000


def renumber_rdkit(smiles: str) -> tuple[str, int]:
    """Renumber one structure with RDKit."""
    from rdkit import Chem
    
    mol = Chem.MolFromSmiles(smiles, sanitize=False)
    if mol is None:
        raise ValueError(f"RDKit failed to parse SMILES: {smiles}")
    
    atoms = list(mol.GetAtoms())
    order = sorted(range(len(atoms)), key=lambda i: atoms[i].GetAtomMapNum())
    for new_number, position in enumerate(order, start=1):
        atoms[position].SetAtomMapNum(new_number)
    
    return Chem.MolToSmiles(mol, canonical=False), len(atoms)


def renumber_mapsmi(smiles: str) -> tuple[str, int]:
    """Renumber one structure with mapsmi."""
    from mapsmi import parse, renumber
    
    structure, _ = renumber(parse(smiles))
    return str(structure), len(structure)


def benchmark(func, smiles: str, iterations: int) -> BenchmarkResult:
    """Time repeated calls of a renumbering function."""
    # Warmup
    output, num_atoms = func(smiles)
    
    start = time.perf_counter()
    for _ in range(iterations):
        func(smiles)
    end = time.perf_counter()
    
    return BenchmarkResult(
        smiles=smiles,
        output=output,
        time_seconds=end - start,
        iterations=iterations,
        num_atoms=num_atoms,
    )


def run_single_benchmark():
    """Run basic single-structure benchmark."""
    print("=" * 70)
    print("Map Number Renumbering Benchmark: RDKit vs mapsmi")
    print("=" * 70)
    print(f"\nTest structure ({len(LARGE_STRUCTURE)} chars):")
    print(f"  {LARGE_STRUCTURE[:60]}...")
    print(f"\nIterations: {ITERATIONS}")
    print("-" * 70)
    
    rdkit_result: Optional[BenchmarkResult] = None
    mapsmi_result: Optional[BenchmarkResult] = None
    
    print("\nRunning RDKit benchmark...", end=" ", flush=True)
    try:
        rdkit_result = benchmark(renumber_rdkit, LARGE_STRUCTURE, ITERATIONS)
        print("done")
        print(f"  Time: {rdkit_result.time_seconds:.3f}s ({rdkit_result.time_per_call_ms:.3f}ms per call)")
    except ImportError:
        print("SKIPPED (rdkit not installed)")
    except Exception as e:
        print(f"ERROR: {e}")
    
    print("\nRunning mapsmi benchmark...", end=" ", flush=True)
    try:
        mapsmi_result = benchmark(renumber_mapsmi, LARGE_STRUCTURE, ITERATIONS)
        print("done")
        print(f"  Time: {mapsmi_result.time_seconds:.3f}s ({mapsmi_result.time_per_call_ms:.3f}ms per call)")
    except ImportError:
        print("SKIPPED (mapsmi not installed)")
    except Exception as e:
        print(f"ERROR: {e}")
    
    print("\n" + "=" * 70)
    print("Summary")
    print("=" * 70)
    
    if rdkit_result and mapsmi_result:
        ratio = mapsmi_result.time_seconds / rdkit_result.time_seconds
        if ratio < 1:
            print(f"mapsmi is {1/ratio:.2f}x FASTER than RDKit")
        else:
            print(f"mapsmi is {ratio:.2f}x SLOWER than RDKit")
        # RDKit picks its own ring-closure digits and bond placement
        if rdkit_result.output == mapsmi_result.output:
            print("Outputs are identical")
        else:
            print("Outputs differ in text form")
    else:
        print("Could not compare (one or both libraries failed)")


def run_extended_benchmark():
    """Run extended benchmark with multiple structures."""
    print("=" * 80)
    print("EXTENDED Map Number Renumbering Benchmark: RDKit vs mapsmi")
    print("=" * 80)
    print(f"\nIterations per structure: {EXTENDED_ITERATIONS}")
    
    header = f"{'Structure':<16} {'Atoms':>6} {'RDKit ms':>10} {'mapsmi ms':>10} {'Ratio':>8} {'µs/atom':>10}"
    print(header)
    print("-" * 80)
    
    for name, smiles in TEST_STRUCTURES.items():
        rdkit_res: Optional[BenchmarkResult] = None
        try:
            rdkit_res = benchmark(renumber_rdkit, smiles, EXTENDED_ITERATIONS)
        except ImportError:
            pass
        mapsmi_res = benchmark(renumber_mapsmi, smiles, EXTENDED_ITERATIONS)
        
        rdkit_ms = f"{rdkit_res.time_per_call_ms:>10.4f}" if rdkit_res else f"{'N/A':>10}"
        ratio = (
            f"{mapsmi_res.time_seconds / rdkit_res.time_seconds:.2f}x" if rdkit_res else "N/A"
        )
        print(f"{name:<16} "
              f"{mapsmi_res.num_atoms:>6} "
              f"{rdkit_ms} "
              f"{mapsmi_res.time_per_call_ms:>10.4f} "
              f"{ratio:>8} "
              f"{mapsmi_res.time_per_atom_us:>10.2f}")


def main():
    if "--extended" in sys.argv or "-e" in sys.argv:
        run_extended_benchmark()
    else:
        run_single_benchmark()
        print("\n" + "-" * 70)
        print("TIP: Run with --extended for per-structure analysis")


if __name__ == "__main__":
    main()
