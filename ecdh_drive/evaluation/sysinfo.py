"""
System information capture for reproducible benchmark results.
"""

import platform
import sys
from datetime import datetime
from typing import Dict, Any

import cryptography
import psutil


def capture_system_info() -> Dict[str, Any]:
    """Capture system information alongside benchmark results."""
    return {
        "timestamp": get_timestamp(),
        "system": get_system_info(),
        "python": get_python_info(),
        "hardware": get_hardware_info(),
        "libraries": get_library_versions()
    }


def get_timestamp() -> str:
    return datetime.now().isoformat()


def get_system_info() -> Dict[str, Any]:
    """Get operating system information."""
    return {
        "platform": platform.platform(),
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
        "processor": platform.processor()
    }


def get_python_info() -> Dict[str, Any]:
    """Get Python interpreter information."""
    return {
        "version": sys.version,
        "implementation": platform.python_implementation(),
        "executable": sys.executable
    }


def get_hardware_info() -> Dict[str, Any]:
    """Get CPU and memory information from psutil."""
    cpu_freq = psutil.cpu_freq()
    memory = psutil.virtual_memory()

    return {
        "cpu": {
            "physical_cores": psutil.cpu_count(logical=False),
            "logical_cores": psutil.cpu_count(logical=True),
            "max_frequency_mhz": cpu_freq.max if cpu_freq else None
        },
        "memory": {
            "total_gb": round(memory.total / (1024**3), 2),
            "available_gb": round(memory.available / (1024**3), 2)
        }
    }


def get_library_versions() -> Dict[str, str]:
    """Get versions of the libraries the benchmarks exercise."""
    return {
        "cryptography": cryptography.__version__,
        "psutil": psutil.__version__
    }
