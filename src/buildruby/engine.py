# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT

"""
This module defines the DockerEngine class, a thin wrapper over the Docker remote API used to build
the package image, materialize a container from it, copy the package out and remove the container.
Every engine failure is turned into an ImageBuildError or a ContainerError.
"""

import io
import uuid
from typing import IO, Any, Dict, List

import click
import docker
from docker.errors import DockerException
from requests.exceptions import RequestException

from buildruby.config import Settings
from buildruby.errors import ConfigError, ContainerError, ImageBuildError

IMAGE_NAME_PREFIX = "ruby_build"

# The container only exists so that files can be copied out of the image.
NOOP_COMMAND: List[str] = ["date"]

STOP_TIMEOUT_SECONDS = 1


def new_image_name() -> str:
    """
    Generates a unique image name.

    Returns:
        str: The fixed prefix followed by a random UUID, e.g. 'ruby_build_<uuid>'.
    """
    return f"{IMAGE_NAME_PREFIX}_{uuid.uuid4()}"


def container_name_for_image(image_id: str) -> str:
    """
    Names the container after the image id, without its digest algorithm prefix.

    Parameters:
        image_id (str): The engine image id, e.g. 'sha256:4f2c...'.

    Returns:
        str: A valid container name, e.g. '4f2c...'.
    """
    return image_id.split(":", 1)[-1]


class DockerEngine:
    """
    A class to drive the Docker engine through its low-level API client for the few calls needed to
    build a package: build, inspect, create, stop, copy from and remove.
    """

    def __init__(self, client: docker.APIClient) -> None:
        """
        Initializes the engine with an API client.

        Parameters:
            client (docker.APIClient): The low-level Docker API client used for every call.
        """
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "DockerEngine":
        """
        Creates an engine connected to the endpoint given by the settings.

        Parameters:
            settings (Settings): The loaded configuration.

        Returns:
            DockerEngine: The connected engine.

        Raises:
            ConfigError: If the API client cannot be constructed.
        """
        try:
            client = docker.APIClient(base_url=settings.docker_host, version="auto", timeout=None)
        except (DockerException, RequestException) as e:
            raise ConfigError(f"Cannot connect to Docker at {settings.docker_host}: {e}") from e
        return cls(client=client)

    def build_image(
        self,
        context: bytes,
        name: str,
        output: IO[str] | None = None,
    ) -> str:
        """
        Builds an image from an in-memory build context and resolves its id.

        The build log is streamed to the output as it is received. Intermediate containers are
        kept and the build cache is used.

        Parameters:
            context (bytes): An uncompressed tar archive holding the Dockerfile.
            name (str): The tag given to the built image.
            output (IO[str] | None): Where the build log is written; defaults to stdout.

        Returns:
            str: The engine-assigned image id.

        Raises:
            ImageBuildError: If the build reports an error or the image cannot be inspected.
        """
        try:
            chunks = self._client.build(
                fileobj=io.BytesIO(context),
                custom_context=True,
                tag=name,
                nocache=False,
                quiet=False,
                rm=False,
                decode=True,
            )
            for chunk in chunks:
                self._echo_build_chunk(chunk=chunk, output=output)
        except (DockerException, RequestException) as e:
            raise ImageBuildError(f"Failed to build image {name}: {e}") from e

        try:
            image: Dict[str, Any] = self._client.inspect_image(name)
        except (DockerException, RequestException) as e:
            raise ImageBuildError(f"Failed to inspect image {name}: {e}") from e
        return image["Id"]

    @staticmethod
    def _echo_build_chunk(chunk: Dict[str, Any], output: IO[str] | None) -> None:
        if "error" in chunk:
            raise ImageBuildError(f"Image build failed: {chunk['error'].strip()}")
        if "stream" in chunk:
            click.echo(chunk["stream"], file=output, nl=False)
        elif "status" in chunk:
            click.echo(chunk["status"], file=output)

    def create_container(self, image_id: str) -> str:
        """
        Creates a container from an image without starting it.

        Parameters:
            image_id (str): The id of the image to materialize.

        Returns:
            str: The id of the created container.

        Raises:
            ContainerError: If the engine refuses to create the container.
        """
        try:
            container = self._client.create_container(
                image=image_id,
                command=NOOP_COMMAND,
                name=container_name_for_image(image_id),
                stdin_open=False,
                tty=False,
            )
        except (DockerException, RequestException) as e:
            raise ContainerError(f"Failed to create container from image {image_id}: {e}") from e
        return container["Id"]

    def stop_container(self, container_id: str, timeout: int = STOP_TIMEOUT_SECONDS) -> None:
        """
        Stops a container, which succeeds whether or not its process is still running.

        Raises:
            ContainerError: If the engine fails to stop the container.
        """
        try:
            self._client.stop(container_id, timeout=timeout)
        except (DockerException, RequestException) as e:
            raise ContainerError(f"Failed to stop container {container_id}: {e}") from e

    def copy_from_container(self, container_id: str, path: str) -> bytes:
        """
        Copies a path out of a container.

        Parameters:
            container_id (str): The container to copy from.
            path (str): The path inside the container.

        Returns:
            bytes: A tar archive holding the requested path.

        Raises:
            ContainerError: If the path cannot be retrieved.
        """
        try:
            stream, _stat = self._client.get_archive(container_id, path)
            return b"".join(stream)
        except (DockerException, RequestException) as e:
            raise ContainerError(
                f"Failed to copy {path} from container {container_id}: {e}"
            ) from e

    def remove_container(self, container_id: str) -> None:
        """
        Removes a stopped container together with its volumes.

        Raises:
            ContainerError: If the engine fails to remove the container.
        """
        try:
            self._client.remove_container(container_id, v=True, force=False)
        except (DockerException, RequestException) as e:
            raise ContainerError(f"Failed to remove container {container_id}: {e}") from e
