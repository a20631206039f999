# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT

"""
Error types raised by the build-ruby pipeline.

Every stage raises its own subclass of `BuildRubyError`. The CLI only tells two
kinds apart: `InputError` is a usage problem, and every other `BuildRubyError`
is fatal for the current run.
"""


class BuildRubyError(Exception):
    """Base class for all build-ruby failures."""


class InputError(BuildRubyError):
    """Raised when the requested version or distro cannot be built."""


class ConfigError(BuildRubyError):
    """Raised when the container engine endpoint is missing or invalid."""


class RenderError(BuildRubyError):
    """Raised when the Dockerfile template cannot be loaded or rendered."""


class ArchiveError(BuildRubyError):
    """Raised when a tar archive cannot be written or decoded."""


class ImageBuildError(BuildRubyError):
    """Raised when the engine fails to build or inspect the image."""


class ContainerError(BuildRubyError):
    """Raised when a container cannot be created, stopped, copied from or removed."""


class ArtifactError(BuildRubyError):
    """Raised when the extracted package cannot be written to the local filesystem."""
