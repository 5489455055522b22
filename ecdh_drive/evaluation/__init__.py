"""
Benchmarking tools for ECDH key agreement and AES-GCM.
"""

from .benchmark import BenchmarkResult, PerformanceBenchmark, run_comprehensive_benchmark
from .results import new_run_root, write_data
from .sysinfo import capture_system_info
