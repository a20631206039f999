# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT
"""
Pytest configuration for build-ruby tests.

Registers custom markers:
- integration: requires Docker engine
- slow: long build/pull

Provides a fake low-level Docker API client so that the pipeline can be exercised
without an engine.
"""

from typing import Callable, Iterator
from unittest.mock import MagicMock

import docker
import pytest

from buildruby.contexts import pack_build_context
from buildruby.engine import DockerEngine

FakeClientFactory = Callable[..., MagicMock]


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers so --strict-markers doesn’t error."""
    config.addinivalue_line("markers", "integration: requires Docker engine")
    config.addinivalue_line("markers", "slow: long build/pull")


def _build_log() -> Iterator[dict]:
    yield {"stream": "Step 1/2 : FROM ubuntu:12.04\n"}
    yield {"stream": "Successfully built 4f2c0ffee\n"}


@pytest.fixture
def make_fake_client() -> FakeClientFactory:
    """Factory of mock `docker.APIClient` objects answering like a healthy engine.

    The returned factory takes the entry name of the archive returned by
    `get_archive` and, optionally, the package bytes it holds.
    """

    def factory(package_name: str, package: bytes = b"fake package bytes") -> MagicMock:
        client = MagicMock(spec=docker.APIClient)
        client.build.side_effect = lambda **_: _build_log()
        client.inspect_image.return_value = {"Id": "sha256:4f2c0ffee"}
        client.create_container.return_value = {"Id": "c0ntainer1d", "Warnings": []}
        archive = pack_build_context(content=package, name=package_name)
        client.get_archive.side_effect = lambda *_args, **_kwargs: (
            iter([archive[:512], archive[512:]]),
            {"name": package_name, "size": len(package)},
        )
        return client

    return factory


@pytest.fixture
def fake_client(make_fake_client: FakeClientFactory) -> MagicMock:
    """A fake engine client whose container holds `ruby-2.1.1_amd64.deb`."""
    return make_fake_client(package_name="ruby-2.1.1_amd64.deb")


@pytest.fixture
def fake_engine(fake_client: MagicMock) -> DockerEngine:
    """A DockerEngine wired to the fake client."""
    return DockerEngine(client=fake_client)
