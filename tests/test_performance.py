"""
Performance Tests for key agreement and AES-GCM.

Tests the benchmark suite, result writing and system info capture. Timing
bounds are loose so they hold on slow CI machines.
"""

import json
import time

import pytest

from ecdh_drive.crypto.keys import generate_key_pair
from ecdh_drive.crypto.kdf import derive_symmetric_key
from ecdh_drive.crypto.aead import encrypt_message, decrypt_message, generate_iv
from ecdh_drive.evaluation.benchmark import (
    BenchmarkResult,
    PerformanceBenchmark,
    run_comprehensive_benchmark,
)
from ecdh_drive.evaluation.results import new_run_root, write_data
from ecdh_drive.evaluation.sysinfo import capture_system_info


class PerformanceTimer:
    """Context manager for timing operations."""

    def __init__(self):
        self.duration = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time


class TestTiming:
    """Sanity bounds on operation cost."""

    def test_full_exchange_under_one_second(self):
        """Test a complete exchange and round-trip is fast."""
        with PerformanceTimer() as timer:
            alice = generate_key_pair()
            bob = generate_key_pair()
            alice_key = derive_symmetric_key(alice.private_key, bob.public_key)
            bob_key = derive_symmetric_key(bob.private_key, alice.public_key)
            iv = generate_iv()
            decrypt_message(bob_key, iv, encrypt_message(alice_key, iv, "Hello, Deno 2.0!"))

        assert timer.duration < 1.0


class TestBenchmark:
    """Test the benchmark suite."""

    def test_key_generation(self):
        bench = PerformanceBenchmark()
        result = bench.benchmark_key_generation(iterations=3)

        assert isinstance(result, BenchmarkResult)
        assert result.operation == "keygen"
        assert result.iterations == 3
        assert result.avg_time > 0
        assert result.throughput_mbps is None

    def test_key_derivation_hkdf(self):
        bench = PerformanceBenchmark(curve="P-384", kdf="hkdf-sha256")
        result = bench.benchmark_key_derivation(iterations=3)
        assert result.name == "Derive-P-384-hkdf-sha256"
        assert result.curve == "P-384"

    def test_encryption_and_decryption(self):
        bench = PerformanceBenchmark()
        enc = bench.benchmark_encryption_performance([16, 1024], iterations=5)
        dec = bench.benchmark_decryption_performance([16, 1024], iterations=5)

        assert [r.message_size for r in enc] == [16, 1024]
        assert [r.message_size for r in dec] == [16, 1024]
        assert all(r.overhead_bytes == 16 for r in enc + dec)
        assert all(r.throughput_mbps > 0 for r in enc + dec)
        assert len(bench.results) == 4

    def test_invalid_iterations(self):
        with pytest.raises(ValueError):
            PerformanceBenchmark().benchmark_key_generation(iterations=0)

    def test_memory_usage(self):
        usage = PerformanceBenchmark().measure_memory_usage()
        assert usage['rss'] > 0

    def test_comprehensive(self):
        bench = run_comprehensive_benchmark(iterations=2, message_sizes=[32])
        operations = [r.operation for r in bench.results]
        assert operations == ['keygen', 'derive', 'encrypt', 'decrypt']

        rows = bench.results_as_dicts()
        assert rows[0]['name'] == "KeyGen-P-256"


class TestResults:
    """Test writing results and system info."""

    def test_write_csv_and_json(self, tmp_path):
        rows = [{'name': 'a', 'avg_time': 0.1}, {'name': 'b', 'avg_time': 0.2}]
        written = write_data(tmp_path, 'data', rows, 'both')

        assert {p.suffix for p in written} == {'.csv', '.json'}
        assert json.loads((tmp_path / 'data.json').read_text()) == rows
        assert (tmp_path / 'data.csv').read_text().splitlines()[0] == 'name,avg_time'

    def test_dict_falls_back_to_json(self, tmp_path):
        written = write_data(tmp_path, 'info', {'nested': {'x': 1}}, 'csv')
        assert [p.name for p in written] == ['info.json']

    def test_unknown_format(self, tmp_path):
        with pytest.raises(ValueError):
            write_data(tmp_path, 'data', [], 'xml')

    def test_new_run_root(self, tmp_path):
        root = new_run_root(tmp_path / 'results')
        assert root.is_dir()
        assert root.parent == tmp_path / 'results'

    def test_capture_system_info(self):
        info = capture_system_info()
        assert set(info) == {'timestamp', 'system', 'python', 'hardware', 'libraries'}
        assert 'cryptography' in info['libraries']
        assert info['hardware']['cpu']['logical_cores'] >= 1
