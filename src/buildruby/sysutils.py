# Copyright (C) 2024 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT

"""
This module provides host-level utilities for the buildruby package.
It includes helpers to query the host running the tool and to write the extracted package to the
local filesystem.
"""

import os
from pathlib import Path

PathType = str | Path


def get_cpu_count() -> int:
    """
    Retrieves the number of logical processors of the host running this tool.

    Returns:
        int: The number of logical CPUs, at least 1.
    """
    return os.cpu_count() or 1


def write_file(path: PathType, data: bytes) -> Path:
    """
    Creates (or truncates) a file and writes the given bytes to it.
    Missing parent directories are not created.

    Parameters:
        path (PathType): Destination of the file.
        data (bytes): The content to write.

    Returns:
        Path: The path of the written file.

    Raises:
        OSError: If the file cannot be created or written.
    """
    path = Path(path)
    with open(path, "wb") as out:
        out.write(data)
    return path
