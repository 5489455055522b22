"""
Writing benchmark results to disk.
"""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Any, List, Union


def new_run_root(outdir: Union[str, Path]) -> Path:
    """Create a new timestamped results directory."""
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    run_root = Path(outdir) / timestamp
    run_root.mkdir(parents=True, exist_ok=True)
    return run_root


def write_data(output_root: Path, filename: str, data: Any, format: str = 'both') -> List[Path]:
    """
    Write data to files in the specified format(s).

    CSV is only produced for a list of flat dictionaries; anything else
    falls back to JSON.

    Args:
        output_root: Directory to write files
        filename: Base filename (without extension)
        data: Data to write
        format: 'csv', 'json', or 'both'

    Returns:
        List of written file paths
    """
    if format not in ('csv', 'json', 'both'):
        raise ValueError(f"Unknown output format '{format}'")

    output_root = Path(output_root)
    output_root.mkdir(parents=True, exist_ok=True)
    written_files = []

    if format in ('csv', 'both') and isinstance(data, list) and data and isinstance(data[0], dict):
        csv_path = output_root / f"{filename}.csv"
        with open(csv_path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=list(data[0].keys()))
            writer.writeheader()
            writer.writerows(data)
        written_files.append(csv_path)

    if format in ('json', 'both') or not written_files:
        json_path = output_root / f"{filename}.json"
        with open(json_path, 'w') as f:
            json.dump(data, f, indent=2, default=str)
        written_files.append(json_path)

    return written_files
