# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT

"""
End-to-end Ruby package build.

`build_ruby` chains the stages in a fixed order: render the Dockerfile, pack it
into a build context, build and inspect the image, create and stop a container,
copy the package out, write it locally and remove the container.

The container is removed only once the package has been written. Images are
never removed, and nothing is cleaned up when a stage fails.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import IO

import click

from buildruby.contexts import pack_build_context, unpack_single_file
from buildruby.engine import DockerEngine, new_image_name
from buildruby.errors import ArtifactError
from buildruby.renderer import render_dockerfile
from buildruby.request import BuildRequest
from buildruby.sysutils import PathType, write_file


@dataclass(frozen=True)
class BuildResult:
    """
    What a successful build left behind.

    Attributes:
        image_name: The unique tag of the built image (still present on the engine).
        image_id: The engine id of that image.
        container_id: The id of the removed container.
        package_path: Where the package was written locally.
    """

    image_name: str
    image_id: str
    container_id: str
    package_path: Path


def extract_package(
    engine: DockerEngine,
    container_id: str,
    file_name: str,
    output_dir: PathType = ".",
) -> Path:
    """
    Copies the package out of the container and writes it under `output_dir`.

    Parameters:
        engine (DockerEngine): The engine holding the container.
        container_id (str): The stopped container.
        file_name (str): The package file name, both in the container and locally.
        output_dir (PathType): The local destination directory.

    Returns:
        Path: The local package path.

    Raises:
        ContainerError: If the engine cannot copy the file.
        ArchiveError: If the returned archive cannot be decoded.
        ArtifactError: If the local file cannot be written.
    """
    click.secho("Copying package out of the container", fg="green", bold=True)
    archive = engine.copy_from_container(container_id=container_id, path=f"/{file_name}")
    entry_name, data = unpack_single_file(archive=archive)
    click.secho(f"Extracting package file {entry_name} ({len(data)} bytes)", fg="green", bold=True)

    package_path = Path(output_dir) / file_name
    try:
        return write_file(path=package_path, data=data)
    except OSError as e:
        raise ArtifactError(f"Failed to write package {package_path}: {e}") from e


def build_ruby(
    request: BuildRequest,
    engine: DockerEngine,
    output_dir: PathType = ".",
    cpu_count: int | None = None,
    build_output: IO[str] | None = None,
) -> BuildResult:
    """
    Builds the Ruby package described by `request` and writes it under `output_dir`.

    Parameters:
        request (BuildRequest): The validated build request.
        engine (DockerEngine): The connected container engine.
        output_dir (PathType): Where the package is written.
        cpu_count (int | None): Overrides the host CPU count used for compiling.
        build_output (IO[str] | None): Where the image build log goes; defaults to stdout.

    Returns:
        BuildResult: The names and ids involved in the build.

    Raises:
        BuildRubyError: From the first stage that fails.
    """
    dockerfile = render_dockerfile(request=request, cpu_count=cpu_count)
    click.secho("Using Dockerfile:", fg="green", bold=True)
    click.secho(dockerfile, fg="cyan")

    context = pack_build_context(content=dockerfile)

    image_name = new_image_name()
    image_id = engine.build_image(context=context, name=image_name, output=build_output)
    click.secho(f"Created image with name {image_name}", fg="green", bold=True)

    click.secho(f"Creating container from image id {image_id}", fg="green", bold=True)
    container_id = engine.create_container(image_id=image_id)
    engine.stop_container(container_id=container_id)

    package_path = extract_package(
        engine=engine,
        container_id=container_id,
        file_name=request.file_name,
        output_dir=output_dir,
    )

    click.secho(f"Removing container: {container_id}", fg="green", bold=True)
    engine.remove_container(container_id=container_id)

    return BuildResult(
        image_name=image_name,
        image_id=image_id,
        container_id=container_id,
        package_path=package_path,
    )
