"""Benchmark configuration and metadata management."""

import os
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class BenchmarkConfig:
    """Configuration for benchmark runs."""

    # Reproducibility
    seed: int = 42

    # Benchmark parameters
    sizes: List[int] = None
    iterations: int = 3
    distribution: str = "uniform"

    # Quadratic probing coefficients for the probing hash table
    c1: int = 1
    c2: int = 3

    # Execution control
    measure_memory: bool = False
    verify: bool = False
    csv: bool = True

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        if self.sizes is None:
            self.sizes = [1_000, 10_000, 100_000]
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        if any(size < 1 for size in self.sizes):
            raise ValueError(f"sizes must be positive, got {self.sizes}")

    @classmethod
    def from_env(cls) -> "BenchmarkConfig":
        """Create config from environment variables."""
        sizes = os.environ.get("BENCHMARK_SIZES")
        return cls(
            seed=int(os.environ.get("BENCHMARK_SEED", "42")),
            sizes=[int(s) for s in sizes.split(",")] if sizes else None,
            iterations=int(os.environ.get("BENCHMARK_ITERATIONS", "3")),
            measure_memory=os.environ.get("BENCHMARK_MEMORY", "").lower() == "true",
            verify=os.environ.get("BENCHMARK_VERIFY", "").lower() == "true",
            log_level=os.environ.get("BENCHMARK_LOG_LEVEL", "INFO"),
        )


def get_git_commit_hash() -> Optional[str]:
    """Get the current git commit hash."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            cwd=os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None


@dataclass
class BenchmarkMetadata:
    """Metadata about a benchmark run."""

    commit_hash: Optional[str]
    config: BenchmarkConfig
    structures: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        """Format metadata as string."""
        lines = [
            f"Commit: {self.commit_hash or 'unknown'}",
            f"Seed: {self.config.seed}",
            f"Sizes (n): {', '.join(str(s) for s in self.config.sizes)}",
            f"Distribution: {self.config.distribution}",
            f"Iterations: {self.config.iterations}",
            f"Probing coefficients: c1={self.config.c1}, c2={self.config.c2}",
            f"Structures: {', '.join(self.structures)}",
        ]
        return "\n".join(lines)
