"""
Benchmarks for ECDH key agreement and AES-GCM encryption.

Measures average time per operation for key pair generation, key derivation,
encryption and decryption, together with process memory deltas.
"""

import gc
import logging
import time
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional

import psutil

from ..crypto.keys import DEFAULT_CURVE, generate_key_pair
from ..crypto.kdf import derive_symmetric_key, KDF_RAW
from ..crypto.aead import encrypt_message, decrypt_message, generate_iv, TAG_LENGTH
from ..crypto.utils import generate_random_bytes

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_SIZES = [16, 256, 1024, 16384]


@dataclass
class BenchmarkResult:
    """Container for benchmark results."""
    name: str
    operation: str
    curve: str
    message_size: int
    iterations: int
    total_time: float
    avg_time: float
    ops_per_second: float
    throughput_mbps: Optional[float] = None
    overhead_bytes: Optional[int] = None
    rss_delta_mb: Optional[float] = None


class PerformanceBenchmark:
    """
    Performance benchmarking for ECDH key agreement and AES-GCM.
    """

    def __init__(self, curve: str = DEFAULT_CURVE, kdf: str = KDF_RAW):
        """
        Initialize benchmark suite.

        Args:
            curve: Curve to generate key pairs on
            kdf: Key derivation mode passed to derive_symmetric_key
        """
        self.curve = curve
        self.kdf = kdf
        self.results: List[BenchmarkResult] = []

    def measure_memory_usage(self) -> Dict[str, float]:
        """
        Measure current memory usage.

        Returns:
            Dictionary with memory statistics in MB
        """
        process = psutil.Process()
        memory_info = process.memory_info()

        return {
            'rss': memory_info.rss / 1024 / 1024,
            'vms': memory_info.vms / 1024 / 1024,
            'percent': process.memory_percent()
        }

    def _run(self, name: str, operation: str, func: Callable[[], Any], iterations: int,
             message_size: int = 0, overhead_bytes: Optional[int] = None) -> BenchmarkResult:
        if iterations <= 0:
            raise ValueError("Iterations must be positive")

        gc.collect()
        memory_before = self.measure_memory_usage()

        start = time.perf_counter()
        for _ in range(iterations):
            func()
        total_time = time.perf_counter() - start

        memory_after = self.measure_memory_usage()

        avg_time = total_time / iterations
        throughput = None
        if message_size and total_time > 0:
            throughput = (message_size * iterations) / total_time / (1024 * 1024)

        result = BenchmarkResult(
            name=name,
            operation=operation,
            curve=self.curve,
            message_size=message_size,
            iterations=iterations,
            total_time=total_time,
            avg_time=avg_time,
            ops_per_second=iterations / total_time if total_time > 0 else float('inf'),
            throughput_mbps=throughput,
            overhead_bytes=overhead_bytes,
            rss_delta_mb=memory_after['rss'] - memory_before['rss']
        )
        logger.debug("%s: %.6f s/op over %d iterations", name, avg_time, iterations)
        self.results.append(result)
        return result

    def benchmark_key_generation(self, iterations: int = 100) -> BenchmarkResult:
        """Benchmark ECDH key pair generation."""
        return self._run(f"KeyGen-{self.curve}", "keygen",
                         lambda: generate_key_pair(self.curve), iterations)

    def benchmark_key_derivation(self, iterations: int = 100) -> BenchmarkResult:
        """Benchmark shared key derivation for a fixed pair of key pairs."""
        alice = generate_key_pair(self.curve)
        bob = generate_key_pair(self.curve)

        return self._run(f"Derive-{self.curve}-{self.kdf}", "derive",
                         lambda: derive_symmetric_key(alice.private_key, bob.public_key, kdf=self.kdf),
                         iterations)

    def _shared_key(self):
        alice = generate_key_pair(self.curve)
        bob = generate_key_pair(self.curve)
        return derive_symmetric_key(alice.private_key, bob.public_key, kdf=self.kdf)

    def benchmark_encryption_performance(self, message_sizes: List[int],
                                         iterations: int = 1000) -> List[BenchmarkResult]:
        """
        Benchmark AES-GCM encryption across message sizes.

        A fresh IV is generated inside the timed loop, as a real sender would.

        Args:
            message_sizes: List of message sizes to test
            iterations: Number of iterations per size

        Returns:
            List of benchmark results
        """
        key = self._shared_key()
        results = []

        for size in message_sizes:
            plaintext = generate_random_bytes(size)
            results.append(self._run(
                f"Encrypt-AES-GCM-{size}B", "encrypt",
                lambda: encrypt_message(key, generate_iv(), plaintext),
                iterations, message_size=size, overhead_bytes=TAG_LENGTH
            ))

        return results

    def benchmark_decryption_performance(self, message_sizes: List[int],
                                         iterations: int = 1000) -> List[BenchmarkResult]:
        """
        Benchmark AES-GCM decryption across message sizes.

        Args:
            message_sizes: List of message sizes to test
            iterations: Number of iterations per size

        Returns:
            List of benchmark results
        """
        key = self._shared_key()
        results = []

        for size in message_sizes:
            iv = generate_iv()
            ciphertext = encrypt_message(key, iv, generate_random_bytes(size))
            results.append(self._run(
                f"Decrypt-AES-GCM-{size}B", "decrypt",
                lambda: decrypt_message(key, iv, ciphertext, decode=False),
                iterations, message_size=size, overhead_bytes=TAG_LENGTH
            ))

        return results

    def results_as_dicts(self) -> List[Dict[str, Any]]:
        return [asdict(r) for r in self.results]


def run_comprehensive_benchmark(iterations: int = 100,
                                message_sizes: Optional[List[int]] = None,
                                curve: str = DEFAULT_CURVE,
                                kdf: str = KDF_RAW) -> PerformanceBenchmark:
    """
    Run every benchmark once and return the populated suite.

    Args:
        iterations: Iterations per measurement
        message_sizes: Plaintext sizes for the AES-GCM benchmarks
        curve: Curve name
        kdf: Key derivation mode

    Returns:
        PerformanceBenchmark whose results list holds every measurement
    """
    if message_sizes is None:
        message_sizes = DEFAULT_MESSAGE_SIZES

    benchmark = PerformanceBenchmark(curve=curve, kdf=kdf)
    benchmark.benchmark_key_generation(iterations)
    benchmark.benchmark_key_derivation(iterations)
    benchmark.benchmark_encryption_performance(message_sizes, iterations)
    benchmark.benchmark_decryption_performance(message_sizes, iterations)
    return benchmark
