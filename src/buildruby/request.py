# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT

"""
Build request model and input resolution.

A `BuildRequest` is built once from the command-line options and is not changed
afterwards. The distro table maps every accepted distro selector (either a
codename alias or the image tag itself) to the base image used in the
generated Dockerfile.
"""

from dataclasses import dataclass
from typing import Dict

from buildruby.errors import InputError

DISTROS: Dict[str, str] = {
    "ubuntu_precise": "ubuntu:12.04",
    "ubuntu:12.04": "ubuntu:12.04",
    "ubuntu_raring": "ubuntu:13.04",
    "ubuntu:13.04": "ubuntu:13.04",
    "ubuntu_trusty": "ubuntu:14.04",
    "ubuntu:14.04": "ubuntu:14.04",
}

DEFAULT_DISTRO = "ubuntu:12.04"
DEFAULT_ARCH = "amd64"

# Arch value that leaves the architecture out of the package file name.
NO_ARCH = "none"


def package_file_name(version: str, iteration: str = "", arch: str = DEFAULT_ARCH) -> str:
    """
    Computes the file name of the package produced inside the build container.

    Parameters:
        version (str): The Ruby version, e.g. '2.1.1' or '2.0.0-p451'.
        iteration (str): Optional packaging iteration, appended when non-empty.
        arch (str): Package architecture, appended unless it is 'none'.

    Returns:
        str: A name of the form 'ruby-<version>[_<iteration>][_<arch>].deb'.
    """
    formatted_iteration = f"_{iteration}" if iteration else ""
    formatted_arch = f"_{arch}" if arch != NO_ARCH else ""
    return f"ruby-{version}{formatted_iteration}{formatted_arch}.deb"


@dataclass(frozen=True)
class BuildRequest:
    """
    The inputs of one package build.

    Attributes:
        version: Ruby version to build.
        distro: Distro selector, always a key of `DISTROS`.
        arch: Architecture written into the package and its file name.
        iteration: Packaging iteration, may be empty.
    """

    version: str
    distro: str = DEFAULT_DISTRO
    arch: str = DEFAULT_ARCH
    iteration: str = ""

    @classmethod
    def resolve(
        cls,
        version: str | None,
        distro: str | None,
        arch: str = DEFAULT_ARCH,
        iteration: str | None = "",
    ) -> "BuildRequest":
        """
        Validates raw command-line values and returns the matching request.

        Only the version and the distro are checked; arch and iteration are
        passed through as given.

        Raises:
            InputError: If the version is empty or the distro is unknown.
        """
        if not version:
            raise InputError("You didn't specify a Ruby version to build!")
        if not distro or distro not in DISTROS:
            raise InputError("You specified a distro that I don't know how to build for")
        return cls(version=version, distro=distro, arch=arch, iteration=iteration or "")

    @property
    def base_image(self) -> str:
        """The base image tag for the requested distro."""
        return DISTROS[self.distro]

    @property
    def file_name(self) -> str:
        """The package file name produced by this request."""
        return package_file_name(version=self.version, iteration=self.iteration, arch=self.arch)
