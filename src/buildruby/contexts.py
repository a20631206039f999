# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT
"""
In-memory tar archives exchanged with the container engine.

The engine takes an image build context as a tar stream and returns files copied
out of a container as a tar stream. Here both archives carry a single regular
file: the Dockerfile on the way in and the built package on the way out.

Archives are plain (uncompressed) tar, written and read fully in memory.
"""

import io
import tarfile
from typing import Tuple

from buildruby.errors import ArchiveError

DOCKERFILE_NAME = "Dockerfile"


def pack_build_context(content: str | bytes, name: str = DOCKERFILE_NAME) -> bytes:
    """
    Wrap a single file into an uncompressed tar archive.

    The entry's size header is the exact byte length of the content. The
    archive is closed before its bytes are returned, so the end-of-archive
    blocks are present.

    Args:
        content: The file content; text is encoded as UTF-8.
        name: The entry name inside the archive.

    Returns:
        The bytes of the archive.

    Raises:
        ArchiveError: If the archive cannot be written.
    """
    data = content.encode("utf-8") if isinstance(content, str) else content

    info = tarfile.TarInfo(name=name)
    info.size = len(data)
    info.mode = 0o644

    buffer = io.BytesIO()
    try:
        with tarfile.open(fileobj=buffer, mode="w") as tar:
            tar.addfile(info, io.BytesIO(data))
    except (tarfile.TarError, OSError, ValueError) as e:
        raise ArchiveError(f"Failed to write build context archive: {e}") from e
    return buffer.getvalue()


def unpack_single_file(archive: bytes) -> Tuple[str, bytes]:
    """
    Read the first entry of a tar archive.

    Archives returned by the engine's copy-from-container call hold exactly
    one entry; anything after the first entry is ignored.

    Args:
        archive: The raw tar bytes.

    Returns:
        The entry name and its content.

    Raises:
        ArchiveError: If the archive is empty, cannot be decoded, or its first
            entry is not a regular file.
    """
    try:
        with tarfile.open(fileobj=io.BytesIO(archive), mode="r:") as tar:
            member = tar.next()
            if member is None:
                raise ArchiveError("Archive contains no entries")
            if not member.isfile():
                raise ArchiveError(f"Archive entry is not a regular file: {member.name}")
            extracted = tar.extractfile(member)
            if extracted is None:
                raise ArchiveError(f"Cannot read archive entry: {member.name}")
            return member.name, extracted.read()
    except (tarfile.TarError, EOFError) as e:
        raise ArchiveError(f"Failed to read archive: {e}") from e
