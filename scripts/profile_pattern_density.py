#!/usr/bin/env python3
"""Profile the coverage density of a short nucleotide pattern around coordinates.

For every coordinate in a TAB-separated list (chromosome, position, strand),
this script tiles the symmetric interval ``[position - interval, position +
interval]`` (clamped to the chromosome) into fixed-size windows, fetches each
window from a FASTA reference, and reports the fraction of bases covered by at
least one (possibly overlapping) case-insensitive match of the pattern.

Outputs:
    - A TAB-separated report with one row per window
      (``Chromosome_Coordinate, Distance, Ratio, Strand``)
    - Optionally, a CSV of the mean profile per strand and distance
    - Optionally, a line plot of the mean profile

Usage:
    python scripts/profile_pattern_density.py \
        --coordinates data/tss.tsv \
        --fasta data/genome.fa \
        --pattern CG \
        --interval-size 10000 --window-size 100 \
        --output results/cg_profile.tsv \
        --profile-csv results/cg_profile_mean.csv \
        --plot results/cg_profile.png
"""

# Enable postponed evaluation of annotations (PEP 604 union syntax, etc.)
from __future__ import annotations

# Standard-library imports
import argparse  # command-line argument parsing
import logging  # structured log output instead of bare print()
import sys  # stderr stream for logging
from collections import Counter  # run statistics for the final summary
from collections.abc import Callable, Iterable, Iterator, Mapping
from pathlib import Path  # object-oriented filesystem paths
from types import MappingProxyType  # read-only view of the length table
from typing import NamedTuple

# Third-party imports
import matplotlib.pyplot as plt  # low-level plotting API
import numpy as np  # coverage masks and numeric guards
import pandas as pd  # tabular data manipulation
import seaborn as sns  # high-level statistical plotting
from pyfaidx import Fasta, FetchError  # indexed FASTA access
from scipy.stats import pearsonr, spearmanr  # correlation coefficients

# ---------------------------------------------------------------------------
# Configure module-level logger so all messages go to stderr
# ---------------------------------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Default half-width of the analysed interval around each coordinate (bp)
DEFAULT_INTERVAL_SIZE: int = 10_000

# Default length of each window within the interval (bp)
DEFAULT_WINDOW_SIZE: int = 100

# Column names of the per-window report, in output order
REPORT_COLUMNS: list[str] = ["Chromosome_Coordinate", "Distance", "Ratio", "Strand"]

# Strand annotations accepted in the coordinate list
VALID_STRANDS: frozenset[str] = frozenset({"+", "-"})

# Emit a progress message every N coordinate records
PROGRESS_EVERY: int = 1_000

# Minimum number of windows required to compute a correlation
MIN_CORR_SAMPLES: int = 4

# Rows buffered in memory before each append to the report
REPORT_CHUNK_SIZE: int = 10_000


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ConfigurationError(ValueError):
    """Raised when the run configuration is unusable (fatal, pre-flight)."""


class InvalidPatternError(ValueError):
    """Raised when the density is requested for an empty pattern."""


class SequenceRetrievalError(RuntimeError):
    """Raised when the reference cannot return the exact requested range."""


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class CoordinateRecord(NamedTuple):
    """One line of the coordinate list (1-based position)."""

    chromosome: str
    coordinate: int
    strand: str


class WindowSpec(NamedTuple):
    """A closed, 1-based window ``[start, end]`` and its offset from the coordinate."""

    start: int
    end: int
    distance: int


class DensityResult(NamedTuple):
    label: str
    distance: int
    ratio: float
    strand: str


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

def validate_config(pattern: str, interval_size: int, window_size: int) -> None:
    """Check the run configuration before any record is processed.

    Parameters
    ----------
    pattern : str
        Literal nucleotide pattern; must be non-empty.
    interval_size : int
        Half-width of the interval around each coordinate.
    window_size : int
        Length of each window.

    Raises
    ------
    ConfigurationError
        If any value is missing, non-positive, or ``interval_size`` does not
        exceed ``window_size``.
    """
    if not pattern:
        raise ConfigurationError("pattern must be a non-empty string")
    if interval_size <= 0:
        raise ConfigurationError(f"interval size must be positive (got {interval_size})")
    if window_size <= 0:
        raise ConfigurationError(f"window size must be positive (got {window_size})")
    if interval_size <= window_size:
        raise ConfigurationError(
            f"interval size ({interval_size}) must be greater than "
            f"window size ({window_size})"
        )


# ---------------------------------------------------------------------------
# Input readers
# ---------------------------------------------------------------------------

def read_chromosome_lengths(path: Path) -> Mapping[str, int]:
    """Read chromosome lengths from a FASTA index (``.fai``) or chrom.sizes file.

    Only the first two TAB-separated columns (name, length) are used.
    Duplicate chromosome names are dropped (first occurrence kept).

    Parameters
    ----------
    path : Path
        Filesystem path to the genome index.

    Returns
    -------
    Mapping[str, int]
        Read-only mapping of chromosome name to length in bases.
    """
    # Read just the name and length columns; extra .fai columns are ignored
    index_df: pd.DataFrame = pd.read_csv(
        path,
        sep="\t",
        header=None,
        usecols=[0, 1],
        names=["chromosome", "length"],
        dtype={"chromosome": str, "length": np.int64},
        keep_default_na=False,  # chromosome names like "NA" stay strings
        na_filter=False,
    )

    # Keep the first entry for any repeated chromosome name
    index_df = index_df.drop_duplicates(subset=["chromosome"], keep="first")

    # Non-positive lengths cannot hold any window; drop them loudly
    bad = index_df["length"] <= 0
    if bad.any():
        logger.warning(
            "Ignoring chromosomes with non-positive length: %s",
            ", ".join(index_df.loc[bad, "chromosome"]),
        )
        index_df = index_df[~bad]

    lengths = {
        name: int(length)
        for name, length in zip(index_df["chromosome"], index_df["length"])
    }
    logger.info("Loaded %d chromosome lengths from %s", len(lengths), path)

    return MappingProxyType(lengths)


def read_coordinates(path: Path) -> Iterator[CoordinateRecord]:
    """Yield coordinate records from a TAB-separated file, one per line.

    Expected format (no header)::

        chr1\\t1000\\t+
        chr2\\t52311\\t-

    Blank lines and ``#`` comments are ignored. Malformed lines are skipped
    with a warning naming the line number.
    """
    # Decode line by line so one bad byte only costs its own line
    with path.open("rb") as handle:
        for line_no, raw in enumerate(handle, start=1):
            try:
                line = raw.decode("utf-8").rstrip("\r\n")
            except UnicodeDecodeError as exc:
                logger.warning(
                    "%s:%d: line is not valid UTF-8 (%s); skipping",
                    path, line_no, exc.reason,
                )
                continue

            # Skip blank lines and comment lines
            if not line.strip() or line.startswith("#"):
                continue

            parts: list[str] = line.split("\t")
            if len(parts) < 3:
                logger.warning(
                    "%s:%d: expected 3 columns (chromosome, coordinate, strand); skipping",
                    path, line_no,
                )
                continue

            chromosome, raw_coordinate, strand = (p.strip() for p in parts[:3])

            try:
                coordinate = int(raw_coordinate)
            except ValueError:
                logger.warning(
                    "%s:%d: coordinate %r is not an integer; skipping",
                    path, line_no, raw_coordinate,
                )
                continue

            if coordinate < 1:
                logger.warning(
                    "%s:%d: coordinate %d is not 1-based; skipping",
                    path, line_no, coordinate,
                )
                continue

            if strand not in VALID_STRANDS:
                logger.warning(
                    "%s:%d: strand %r is not '+' or '-'; skipping",
                    path, line_no, strand,
                )
                continue

            yield CoordinateRecord(chromosome, coordinate, strand)


# ---------------------------------------------------------------------------
# Sequence retrieval
# ---------------------------------------------------------------------------

class FastaSequenceSource:
    """Fetch exact base ranges from an indexed FASTA file via pyfaidx.

    pyfaidx writes ``<fasta>.fai`` next to the FASTA if it does not exist yet,
    so the same index can serve as the chromosome length table.
    """

    def __init__(self, fasta_path: Path):
        self.fasta_path = fasta_path

        if not fasta_path.exists():
            raise FileNotFoundError(f"Reference fasta not found: {fasta_path}")

        # as_raw returns plain strings; case is normalised by the calculator
        self.fasta = Fasta(str(fasta_path), as_raw=True, sequence_always_upper=False)

    @property
    def index_path(self) -> Path:
        """Path of the ``.fai`` index pyfaidx keeps next to the FASTA."""
        return Path(f"{self.fasta_path}.fai")

    def fetch(self, chromosome: str, start: int, end: int) -> str:
        """Return bases ``[start, end]`` (1-based, inclusive) of *chromosome*."""
        record = self.fasta[chromosome]
        if start < 1 or end > len(record):
            raise SequenceRetrievalError(
                f"{chromosome}:{start}-{end} lies outside 1-{len(record)}"
            )

        seq: str = record[start - 1:end]

        # pyfaidx silently clips slices at the record end
        expected = end - start + 1
        if len(seq) != expected:
            raise SequenceRetrievalError(
                f"{chromosome}:{start}-{end}: expected {expected} bases, got {len(seq)}"
            )
        return seq

    def close(self) -> None:
        """Close the underlying FASTA file handle."""
        self.fasta.close()

    def __enter__(self) -> FastaSequenceSource:
        """Use the source as a context manager."""
        return self

    def __exit__(self, *exc_info) -> None:
        """Close the FASTA on leaving the ``with`` block."""
        self.close()


# ---------------------------------------------------------------------------
# Window generation
# ---------------------------------------------------------------------------

def generate_windows(
    coordinate: int,
    chromosome_length: int,
    interval_size: int,
    window_size: int,
) -> Iterator[WindowSpec]:
    """Tile the clamped interval around *coordinate* with full-length windows.

    The interval ``[coordinate - interval_size, coordinate + interval_size]``
    is clamped to ``[1, chromosome_length]``. Windows start at the clamped
    interval start and advance by ``window_size``; a trailing window that
    would run past the clamped interval end is dropped rather than shortened.

    ``distance`` is measured from the window *start* to the coordinate.

    Parameters
    ----------
    coordinate : int
        1-based position of interest.
    chromosome_length : int
        Total length of the chromosome.
    interval_size : int
        Half-width of the interval.
    window_size : int
        Length of every emitted window.

    Yields
    ------
    WindowSpec
        Consecutive windows in ascending order; none if the clamped interval
        is shorter than one window.
    """
    interval_start: int = max(1, coordinate - interval_size)
    interval_end: int = min(chromosome_length, coordinate + interval_size)

    # Last admissible start keeps start + window_size - 1 <= interval_end
    last_start: int = interval_end - window_size + 1

    for start in range(interval_start, last_start + 1, window_size):
        yield WindowSpec(start, start + window_size - 1, start - coordinate)


# ---------------------------------------------------------------------------
# Pattern density
# ---------------------------------------------------------------------------

def pattern_density(sequence: str, pattern: str) -> float:
    """Return the fraction of *sequence* covered by matches of *pattern*.

    Every offset is tested, so overlapping matches all contribute; a base
    covered by several matches is counted once. Matching is
    case-insensitive. The ratio is truncated (not rounded) to two decimals.

    Parameters
    ----------
    sequence : str
        Nucleotide sequence of the window.
    pattern : str
        Literal pattern to search for.

    Returns
    -------
    float
        Coverage ratio in ``[0.0, 1.0]``; ``0.0`` when the pattern cannot fit.

    Raises
    ------
    InvalidPatternError
        If *pattern* is empty.

    Examples
    --------
    >>> pattern_density("AAA", "aa")
    1.0
    >>> pattern_density("ACGTTTTTTT", "CG")
    0.2
    """
    if not pattern:
        raise InvalidPatternError("pattern must not be empty")

    seq: str = sequence.upper()
    pat: str = pattern.upper()
    n: int = len(seq)
    k: int = len(pat)

    if n < k:
        return 0.0

    # Positions touched by at least one match
    covered: np.ndarray = np.zeros(n, dtype=bool)

    # str.find from i + 1 visits overlapping occurrences too
    i: int = seq.find(pat)
    while i != -1:
        covered[i:i + k] = True
        i = seq.find(pat, i + 1)

    # Integer arithmetic gives exact truncation toward zero
    return (int(covered.sum()) * 100 // n) / 100


# ---------------------------------------------------------------------------
# Coordinate processing
# ---------------------------------------------------------------------------

def process_coordinates(
    records: Iterable[CoordinateRecord],
    chromosome_lengths: Mapping[str, int],
    fetch: Callable[[str, int, int], str],
    pattern: str,
    interval_size: int,
    window_size: int,
    stats: Counter | None = None,
) -> Iterator[DensityResult]:
    """Yield one density result per window, coordinate by coordinate.

    Records on chromosomes missing from *chromosome_lengths* are skipped with
    a warning. A window whose sequence cannot be fetched is skipped with a
    warning; the other windows of the record are still reported. Results
    keep the input record order and, within a record, the window order.

    Parameters
    ----------
    records : Iterable[CoordinateRecord]
        Coordinates to profile.
    chromosome_lengths : Mapping[str, int]
        Chromosome length table.
    fetch : Callable[[str, int, int], str]
        ``fetch(chromosome, start, end)`` returning the 1-based inclusive range.
    pattern : str
        Pattern passed to :func:`pattern_density`.
    interval_size, window_size : int
        Windowing configuration (already validated).
    stats : Counter, optional
        Incremented with ``coordinates``, ``skipped_unknown_chromosome``,
        ``windows`` and ``windows_failed``.
    """
    if stats is None:
        stats = Counter()

    for record in records:
        chromosome_length = chromosome_lengths.get(record.chromosome)
        if chromosome_length is None:
            logger.warning(
                "Chromosome %s not found in genome index; skipping %s:%d",
                record.chromosome, record.chromosome, record.coordinate,
            )
            stats["skipped_unknown_chromosome"] += 1
            continue

        stats["coordinates"] += 1
        label: str = f"{record.chromosome}_{record.coordinate}"

        windows = generate_windows(
            record.coordinate, chromosome_length, interval_size, window_size,
        )
        for window in windows:
            try:
                sequence = fetch(record.chromosome, window.start, window.end)
            except (SequenceRetrievalError, FetchError, KeyError, OSError) as exc:
                logger.warning(
                    "Failed to fetch %s:%d-%d for %s: %s",
                    record.chromosome, window.start, window.end, label, exc,
                )
                stats["windows_failed"] += 1
                continue

            # InvalidPatternError is fatal and propagates to the caller
            ratio = pattern_density(sequence, pattern)
            stats["windows"] += 1
            yield DensityResult(label, window.distance, ratio, record.strand)

        if stats["coordinates"] % PROGRESS_EVERY == 0:
            logger.info("Processed %d coordinates", stats["coordinates"])


# ---------------------------------------------------------------------------
# Report writing
# ---------------------------------------------------------------------------

def results_to_frame(results: Iterable[DensityResult]) -> pd.DataFrame:
    """Collect density results into a DataFrame with the report columns."""
    frame = pd.DataFrame.from_records(
        list(results), columns=list(DensityResult._fields),
    )
    frame.columns = REPORT_COLUMNS
    return frame


def _append_rows(rows: list[DensityResult], path: Path) -> None:
    results_to_frame(rows).to_csv(
        path, sep="\t", index=False, header=False, mode="a", float_format="%.2f",
    )


def write_report(
    results: Iterable[DensityResult],
    path: Path,
    chunk_size: int = REPORT_CHUNK_SIZE,
) -> int:
    """Stream per-window results into a TAB-separated report.

    The header is written first and rows are appended in chunks of
    *chunk_size* as *results* produces them, so memory stays bounded. If
    *results* raises, the rows produced so far are flushed before the error
    propagates, leaving a valid partial report.

    Parameters
    ----------
    results : Iterable[DensityResult]
        Results in report order.
    path : Path
        Destination TSV; parent directories are created.
    chunk_size : int
        Rows buffered per append.

    Returns
    -------
    int
        Number of rows written.
    """
    # Create parent directories so a fresh --output path just works
    path.parent.mkdir(parents=True, exist_ok=True)
    results_to_frame([]).to_csv(path, sep="\t", index=False)

    n_rows: int = 0
    chunk: list[DensityResult] = []
    try:
        for result in results:
            chunk.append(result)
            if len(chunk) >= chunk_size:
                _append_rows(chunk, path)
                n_rows += len(chunk)
                chunk = []
    finally:
        # Flush the tail, including rows produced before a failure
        if chunk:
            _append_rows(chunk, path)
            n_rows += len(chunk)

    logger.info("Wrote %d windows to %s", n_rows, path)
    return n_rows


def read_report(path: Path) -> pd.DataFrame:
    """Load a report written by :func:`write_report` for summarising."""
    return pd.read_csv(
        path,
        sep="\t",
        dtype={"Chromosome_Coordinate": str, "Distance": np.int64, "Ratio": float, "Strand": str},
        keep_default_na=False,
        na_filter=False,
    )


# ---------------------------------------------------------------------------
# Profile summary
# ---------------------------------------------------------------------------

def summarize_profile(report_df: pd.DataFrame) -> pd.DataFrame:
    """Average the window ratios per strand and distance.

    Parameters
    ----------
    report_df : pd.DataFrame
        Output of :func:`read_report` (or :func:`results_to_frame`).

    Returns
    -------
    pd.DataFrame
        Columns ``strand, distance, mean_ratio, median_ratio, n_windows``,
        sorted by strand then distance.
    """
    if report_df.empty:
        return pd.DataFrame(
            columns=["strand", "distance", "mean_ratio", "median_ratio", "n_windows"]
        )

    profile_df: pd.DataFrame = (
        report_df.groupby(["Strand", "Distance"])["Ratio"]
        .agg(mean_ratio="mean", median_ratio="median", n_windows="count")
        .reset_index()
        .rename(columns={"Strand": "strand", "Distance": "distance"})
        .sort_values(["strand", "distance"])
        .reset_index(drop=True)
    )
    return profile_df


def distance_correlation(report_df: pd.DataFrame) -> pd.DataFrame:
    """Correlate absolute window distance with ratio, per strand and overall.

    A negative coefficient means the pattern is denser close to the
    coordinates than further away.

    Returns
    -------
    pd.DataFrame
        One row per subset (``+``, ``-``, ``all``) with Pearson r, Spearman
        rho and their p-values; NaN where the subset is too small or constant.
    """
    subsets: list[tuple[str, pd.DataFrame]] = [
        (strand, report_df[report_df["Strand"] == strand])
        for strand in sorted(VALID_STRANDS)
    ]
    subsets.append(("all", report_df))

    rows: list[dict] = []
    for subset, work in subsets:
        x: np.ndarray = work["Distance"].abs().to_numpy(dtype=float)
        y: np.ndarray = work["Ratio"].to_numpy(dtype=float)

        if len(x) < MIN_CORR_SAMPLES:
            if len(x) > 0:
                logger.warning(
                    "Only %d windows on strand %s; skipping correlation",
                    len(x), subset,
                )
            pearson_r = pearson_p = spearman_rho = spearman_p = np.nan

        # Correlation is undefined when either variable is constant
        elif np.isclose(np.std(x), 0.0) or np.isclose(np.std(y), 0.0):
            logger.warning(
                "Zero variance in distance or ratio on strand %s; correlation undefined",
                subset,
            )
            pearson_r = pearson_p = spearman_rho = spearman_p = np.nan

        else:
            pearson_r, pearson_p = pearsonr(x, y)
            spearman_rho, spearman_p = spearmanr(x, y)

        rows.append(
            {
                "strand": subset,
                "n_windows": len(x),
                "pearson_r": pearson_r,
                "pearson_pvalue": pearson_p,
                "spearman_rho": spearman_rho,
                "spearman_pvalue": spearman_p,
            }
        )

    return pd.DataFrame(rows)


# ---------------------------------------------------------------------------
# Visualisation
# ---------------------------------------------------------------------------

def plot_profile(profile_df: pd.DataFrame, pattern: str, output_path: Path) -> None:
    """Draw the mean coverage ratio against distance, one line per strand.

    Parameters
    ----------
    profile_df : pd.DataFrame
        Output of :func:`summarize_profile`.
    pattern : str
        Pattern name used in the title.
    output_path : Path
        Where to save the PNG image.
    """
    plt.figure(figsize=(12, 5))

    sns.lineplot(
        data=profile_df,
        x="distance",
        y="mean_ratio",
        hue="strand",
        hue_order=[s for s in ("+", "-") if s in set(profile_df["strand"])],
        marker="o",
        markersize=3,
    )

    # Mark the coordinate itself
    plt.axvline(0, color="grey", linestyle="--", linewidth=1)

    plt.title(f"{pattern.upper()} coverage density around coordinates")
    plt.xlabel("Distance of window start from coordinate (bp)")
    plt.ylabel("Mean coverage ratio")
    plt.ylim(0, 1)

    plt.tight_layout()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(output_path, dpi=200)
    plt.close()

    logger.info("Saved profile plot to %s", output_path)


# ---------------------------------------------------------------------------
# Summary report
# ---------------------------------------------------------------------------

def print_summary(
    stats: Counter,
    profile_df: pd.DataFrame,
    corr_df: pd.DataFrame,
) -> None:
    """Print a human-readable summary of the run to stdout."""
    print(f"Coordinates profiled: {stats['coordinates']}")
    if stats["skipped_unknown_chromosome"]:
        print(
            f"Coordinates skipped (unknown chromosome): "
            f"{stats['skipped_unknown_chromosome']}"
        )
    print(f"Windows reported: {stats['windows']}")
    if stats["windows_failed"]:
        print(f"Windows skipped (sequence unavailable): {stats['windows_failed']}")

    if profile_df.empty:
        print("\nNo windows were reported; profile summary unavailable.")
        return

    # Distance with the highest mean ratio per strand
    print("\nPeak mean coverage per strand:")
    for strand, group in profile_df.groupby("strand"):
        best = group.loc[group["mean_ratio"].idxmax()]
        print(
            f"  {strand}: {best['mean_ratio']:.3f} at distance {int(best['distance'])} "
            f"({int(best['n_windows'])} windows)"
        )

    print("\nCorrelation of |distance| with coverage ratio:")
    for _, row in corr_df.iterrows():
        if row["n_windows"] == 0:
            continue
        print(
            f"  {row['strand']:3s}: "
            f"Pearson r={row['pearson_r']:.3f} (p={row['pearson_pvalue']:.3g}), "
            f"Spearman rho={row['spearman_rho']:.3f} (p={row['spearman_pvalue']:.3g})"
        )


# ---------------------------------------------------------------------------
# CLI argument parsing
# ---------------------------------------------------------------------------

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and validate command-line arguments.

    Configuration problems (missing files, empty pattern, bad sizes) abort
    through ``parser.error`` before any coordinate is read.
    """
    parser = argparse.ArgumentParser(
        description=(
            "Profile the coverage density of a nucleotide pattern in windows "
            "around genomic coordinates."
        ),
    )

    parser.add_argument(
        "--coordinates",
        type=Path,
        required=True,
        help="TAB-separated coordinate list (chromosome<TAB>position<TAB>strand)",
    )
    parser.add_argument(
        "--fasta",
        type=Path,
        required=True,
        help="Reference genome FASTA (indexed with pyfaidx on first use)",
    )
    parser.add_argument(
        "--genome-index",
        type=Path,
        default=None,
        help="Chromosome lengths as .fai or chrom.sizes (default: <fasta>.fai)",
    )
    parser.add_argument(
        "--pattern",
        required=True,
        help="Literal pattern to profile, matched case-insensitively (e.g. CG)",
    )
    parser.add_argument(
        "--interval-size",
        type=int,
        default=DEFAULT_INTERVAL_SIZE,
        help=f"Half-width of the interval around each coordinate (default: {DEFAULT_INTERVAL_SIZE})",
    )
    parser.add_argument(
        "--window-size",
        type=int,
        default=DEFAULT_WINDOW_SIZE,
        help=f"Window length within the interval (default: {DEFAULT_WINDOW_SIZE})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Path of the per-window TSV report",
    )
    parser.add_argument(
        "--profile-csv",
        type=Path,
        default=None,
        help="Optional CSV of the mean profile per strand and distance",
    )
    parser.add_argument(
        "--plot",
        type=Path,
        default=None,
        help="Optional PNG of the mean profile",
    )

    args: argparse.Namespace = parser.parse_args(argv)

    args.pattern = args.pattern.strip()
    try:
        validate_config(args.pattern, args.interval_size, args.window_size)
    except ConfigurationError as exc:
        parser.error(str(exc))

    if not args.coordinates.exists():
        parser.error(f"Coordinate file not found: {args.coordinates}")

    if not args.fasta.exists():
        parser.error(f"FASTA file not found: {args.fasta}")

    if args.genome_index is not None and not args.genome_index.exists():
        parser.error(f"Genome index not found: {args.genome_index}")

    return args


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """Run the profile: read, window, fetch, measure, report, summarise."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    args: argparse.Namespace = parse_args(argv)

    logger.info(
        "Profiling pattern %s (interval ±%d bp, window %d bp)",
        args.pattern.upper(), args.interval_size, args.window_size,
    )

    # --- Step 1: Open the reference and load chromosome lengths ---
    with FastaSequenceSource(args.fasta) as source:
        index_path: Path = args.genome_index or source.index_path
        chromosome_lengths = read_chromosome_lengths(index_path)

        # --- Step 2: Window, fetch and measure every coordinate ---
        stats: Counter = Counter()
        results = process_coordinates(
            read_coordinates(args.coordinates),
            chromosome_lengths,
            source.fetch,
            args.pattern,
            args.interval_size,
            args.window_size,
            stats=stats,
        )

        # --- Step 3: Write the per-window report ---
        write_report(results, args.output)

    # --- Step 4: Summarise the profile from the written report ---
    report_df: pd.DataFrame = read_report(args.output)
    profile_df: pd.DataFrame = summarize_profile(report_df)
    corr_df: pd.DataFrame = distance_correlation(report_df)

    if args.profile_csv is not None:
        args.profile_csv.parent.mkdir(parents=True, exist_ok=True)
        profile_df.to_csv(args.profile_csv, index=False)
        logger.info("Wrote %s", args.profile_csv)

    if args.plot is not None and not profile_df.empty:
        sns.set_theme(style="whitegrid")
        plot_profile(profile_df, args.pattern, args.plot)

    # --- Step 5: Print human-readable summary to stdout ---
    print_summary(stats, profile_df, corr_df)
    print(f"\nWrote report to: {args.output.resolve()}")


if __name__ == "__main__":
    main()
