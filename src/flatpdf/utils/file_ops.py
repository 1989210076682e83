"""Output delivery: files and data URIs."""

import base64
import pathlib
from typing import Union


def ensure_parent_dir(path: Union[str, pathlib.Path]) -> pathlib.Path:
    """Ensure the parent directory of path exists and return Path object."""
    out_path = pathlib.Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    return out_path


def write_pdf(path: Union[str, pathlib.Path], data: bytes) -> pathlib.Path:
    out_path = ensure_parent_dir(path)
    out_path.write_bytes(data)
    return out_path


def pdf_data_uri(data: bytes) -> str:
    """Wrap PDF bytes as a base64 data URI, suitable for a browser location."""
    return 'data:application/pdf;base64,' + base64.b64encode(data).decode('ascii')


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format."""
    if size_bytes == 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB"]
    unit_index = 0
    size = float(size_bytes)

    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {units[unit_index]}"
    return f"{size:.1f} {units[unit_index]}"
