"""
Throughput comparison: AES-GCM (authenticated) vs AES-CFB (legacy).

Usage:
    from envelope_toolkit.benchmark import run_benchmark, format_report
    print(format_report(run_benchmark()))

Cases mirror the classic encryption benchmark suite: a short message, a
51-byte message, 1 KiB and 1 MiB random payloads, each run sequentially
with an AES-256 key, plus a concurrent run of the first payload.
Iteration and worker counts default to ToolkitSettings.from_env().
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from .aead import AesGcmCipher
from .config import ToolkitSettings
from .keys import AES_256_KEY_SIZE, SymmetricKey, generate_symmetric_key
from .legacy import AesCfbCipher

logger = logging.getLogger(__name__)

DEFAULT_PAYLOADS: Dict[str, bytes] = {
    "small": b"Short data",
    "message": b"Hello, World! This is a test string for encryption.",
}
DEFAULT_RANDOM_SIZES: Sequence[int] = (1024, 1024 * 1024)

ENGINES: Dict[str, type] = {
    "aes-gcm": AesGcmCipher,
    "aes-cfb": AesCfbCipher,
}


@dataclass
class BenchmarkResult:
    """Timing for one engine/payload/mode case."""

    engine: str
    case: str
    payload_size: int
    iterations: int
    seconds: float
    workers: int = 1

    @property
    def ops_per_sec(self) -> float:
        return self.iterations / self.seconds if self.seconds > 0 else float("inf")

    @property
    def mib_per_sec(self) -> float:
        return self.ops_per_sec * self.payload_size / (1024 * 1024)


def default_payloads() -> Dict[str, bytes]:
    """Fixed messages plus fresh random payloads of DEFAULT_RANDOM_SIZES."""
    payloads = dict(DEFAULT_PAYLOADS)
    for size in DEFAULT_RANDOM_SIZES:
        label = f"{size // 1024}KiB" if size < 1024 * 1024 else f"{size // (1024 * 1024)}MiB"
        payloads[label] = os.urandom(size)
    return payloads


def _time_sequential(encrypt: Callable[[bytes, SymmetricKey], str], data: bytes, key: SymmetricKey, iterations: int) -> float:
    start = time.perf_counter()
    for _ in range(iterations):
        encrypt(data, key)
    return time.perf_counter() - start


def _time_concurrent(
    encrypt: Callable[[bytes, SymmetricKey], str],
    data: bytes,
    key: SymmetricKey,
    iterations: int,
    workers: int,
) -> float:
    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=workers) as pool:
        # list() re-raises the first worker exception
        list(pool.map(lambda _: encrypt(data, key), range(iterations)))
    return time.perf_counter() - start


def run_benchmark(
    iterations: Optional[int] = None,
    payloads: Optional[Dict[str, bytes]] = None,
    workers: Optional[int] = None,
    key: Optional[SymmetricKey] = None,
    settings: Optional[ToolkitSettings] = None,
) -> List[BenchmarkResult]:
    """
    Time encryption for every engine and payload.

    Args:
        iterations: Encryptions per case (settings default if None)
        payloads: Label -> data; default_payloads() if None
        workers: Thread count for the concurrent case (settings default if None)
        key: AES key; a fresh AES-256 key if None
        settings: Source of defaults; loaded from the environment if None

    Returns:
        One result per (engine, payload) plus one concurrent result per engine
    """
    if iterations is None or workers is None:
        settings = settings or ToolkitSettings.from_env()
        iterations = iterations if iterations is not None else settings.bench_iterations
        workers = workers if workers is not None else settings.bench_workers

    payloads = payloads if payloads is not None else default_payloads()
    key = key if key is not None else generate_symmetric_key(AES_256_KEY_SIZE)

    results: List[BenchmarkResult] = []
    for engine_name, factory in ENGINES.items():
        encrypt = factory().encrypt

        for case, data in payloads.items():
            seconds = _time_sequential(encrypt, data, key, iterations)
            results.append(BenchmarkResult(engine_name, case, len(data), iterations, seconds))
            logger.info("%s %s: %.2f ops/sec", engine_name, case, results[-1].ops_per_sec)

        if payloads:
            case, data = next(iter(payloads.items()))
            seconds = _time_concurrent(encrypt, data, key, iterations, workers)
            results.append(
                BenchmarkResult(engine_name, f"{case}-concurrent", len(data), iterations, seconds, workers)
            )

    return results


def format_report(results: Sequence[BenchmarkResult]) -> str:
    """Render results as a fixed-width text table."""
    lines = [
        "=" * 70,
        "            Encryption Throughput: AES-GCM vs AES-CFB (legacy)",
        "=" * 70,
        f"{'engine':<10} {'case':<20} {'bytes':>9} {'ops/sec':>12} {'MiB/sec':>10}",
        "-" * 70,
    ]
    for r in results:
        lines.append(
            f"{r.engine:<10} {r.case:<20} {r.payload_size:>9} {r.ops_per_sec:>12.2f} {r.mib_per_sec:>10.2f}"
        )
    lines.append("=" * 70)
    return "\n".join(lines)
