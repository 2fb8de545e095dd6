"""
File I/O for the command line wrapper.

The compiler pipeline itself never touches the filesystem.
"""

import sys
from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_FILE_ENCODING


def read_source_file(path: Optional[Union[Path, str]]) -> str:
    """Read source file with standard encoding; `None` or "-" reads stdin."""
    if path is None or str(path) == "-":
        return sys.stdin.read()
    p = Path(path) if not isinstance(path, Path) else path
    return p.read_text(encoding=DEFAULT_FILE_ENCODING)
