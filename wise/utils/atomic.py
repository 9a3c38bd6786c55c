"""Atomic file replacement."""

import os
import tempfile
from pathlib import Path
from typing import Union


def atomic_write(path: Union[str, Path], data: bytes) -> None:
    """
    Write data to path so readers never observe a partial file.

    The data goes to a temporary file in the same directory, which is
    then moved over the destination with os.replace. On failure the
    temporary file is removed and the error propagates.

    Args:
        path: Destination file
        data: Complete new file content
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=path.parent)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
