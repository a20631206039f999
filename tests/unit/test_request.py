# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT
"""Unit tests for build request resolution and package naming."""

import pytest

from buildruby.errors import InputError
from buildruby.request import DISTROS, BuildRequest, package_file_name


@pytest.mark.parametrize(
    "version, iteration, arch, expected",
    [
        ("2.1.1", "", "amd64", "ruby-2.1.1_amd64.deb"),
        ("2.1.1", "37s~precise", "amd64", "ruby-2.1.1_37s~precise_amd64.deb"),
        ("2.1.1", "", "none", "ruby-2.1.1.deb"),
        ("2.0.0-p451", "1", "none", "ruby-2.0.0-p451_1.deb"),
        ("2.1.1", "", "i386", "ruby-2.1.1_i386.deb"),
    ],
)
def test_package_file_name(version: str, iteration: str, arch: str, expected: str) -> None:
    """The package name only carries the iteration and arch suffixes when they apply."""
    assert package_file_name(version=version, iteration=iteration, arch=arch) == expected


def test_resolve_keeps_arch_and_iteration_verbatim() -> None:
    """Only version and distro are validated; any other arch is a literal suffix."""
    request = BuildRequest.resolve(
        version="2.1.1", distro="ubuntu_trusty", arch="whatever", iteration="2"
    )
    assert request.base_image == "ubuntu:14.04"
    assert request.arch == "whatever"
    assert request.file_name == "ruby-2.1.1_2_whatever.deb"


@pytest.mark.parametrize("distro", sorted(DISTROS))
def test_resolve_accepts_every_known_distro(distro: str) -> None:
    """Both codename aliases and image tags are accepted."""
    request = BuildRequest.resolve(version="2.1.1", distro=distro)
    assert request.base_image.startswith("ubuntu:")


@pytest.mark.parametrize("version", ["", None])
def test_resolve_rejects_missing_version(version: str | None) -> None:
    """An empty version is a usage error, whatever the other inputs are."""
    with pytest.raises(InputError, match="Ruby version"):
        BuildRequest.resolve(version=version, distro="ubuntu:12.04", arch="none", iteration="1")


@pytest.mark.parametrize("distro", ["", "debian:wheezy", "ubuntu:16.04", "UBUNTU:12.04"])
def test_resolve_rejects_unknown_distro(distro: str) -> None:
    """Distros outside the table are rejected."""
    with pytest.raises(InputError, match="distro"):
        BuildRequest.resolve(version="2.1.1", distro=distro)
