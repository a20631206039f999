# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT
"""
CLI interface for build-ruby.

This module provides the `build-ruby` command, which builds a Ruby `.deb`
package for an Ubuntu release inside a throwaway Docker container and copies
it into the current directory.

The container engine is the one named by the `DOCKER_HOST` environment variable.
Errors come in two kinds:

- usage errors (no Ruby version, unknown distro) print a message and the help
  text, then exit with status 1;
- any other failure stops the build and is reported as `Error: ...`.
"""

import sys

import click

from buildruby.config import load_settings
from buildruby.engine import DockerEngine
from buildruby.errors import BuildRubyError, InputError
from buildruby.pipeline import build_ruby
from buildruby.request import DEFAULT_ARCH, DEFAULT_DISTRO, DISTROS, BuildRequest

# Make "-h" behave like "--help"
CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _usage_error(ctx: click.Context, message: str) -> None:
    """Print the message and the help text to stderr, then exit with status 1."""
    click.secho(message, fg="red", bold=True, err=True)
    click.echo(ctx.get_help(), err=True)
    ctx.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(
    package_name="build-ruby",
    prog_name="build-ruby",
    message="%(prog)s %(version)s",
)
@click.option(
    "-r",
    "--ruby",
    default="",
    help="Required. The version to build, eg. 2.1.0 (for recent versions with no patch release) "
    "or 2.0.0-p451",
)
@click.option(
    "-d",
    "--distro",
    default=DEFAULT_DISTRO,
    show_default=True,
    help="Which distro to use for the build",
)
@click.option(
    "-a",
    "--arch",
    default=DEFAULT_ARCH,
    show_default=True,
    help="Arch to use in package filename, eg: 'none', 'all', 'amd64' etc.",
)
@click.option("-i", "--iteration", default="", help="eg: 37s~precise")
@click.option("--list-distros", "list_only", is_flag=True, help="List the distros I can build for")
@click.pass_context
def cli(
    ctx: click.Context,
    ruby: str,
    distro: str,
    arch: str,
    iteration: str,
    list_only: bool,
) -> None:
    """Build ruby debs from source for Ubuntu."""
    if list_only:
        click.echo("Available distros:")
        for name, base_image in DISTROS.items():
            click.echo(f"  {name} ({base_image})")
        sys.exit(0)

    try:
        request = BuildRequest.resolve(version=ruby, distro=distro, arch=arch, iteration=iteration)
    except InputError as e:
        _usage_error(ctx, str(e))
        return

    try:
        engine = DockerEngine.from_settings(load_settings())
        result = build_ruby(request=request, engine=engine)
    except BuildRubyError as e:
        raise click.ClickException(str(e)) from e

    click.secho(f"Package written to {result.package_path}", fg="green", bold=True)


def main() -> None:
    """Entry point for the build-ruby CLI when installed as a script."""
    cli()


if __name__ == "__main__":
    main()
