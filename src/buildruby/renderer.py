# Copyright (C) 2025 Antonio Paolillo. All rights reserved.
# SPDX-License-Identifier: MIT

"""
Dockerfile rendering for Ruby package builds.

The Dockerfile is produced from a fixed Jinja2 template shipped inside the
package (`data/Dockerfile.template`). Besides the request fields, the template
receives a few derived values: the source tarball URL, the package file name,
the formatted `fpm` iteration flag and the host CPU count used for `make -j`.
"""

from importlib import resources
from typing import Any, Dict

from jinja2 import Environment, StrictUndefined, TemplateError

from buildruby.errors import RenderError
from buildruby.request import BuildRequest
from buildruby.sysutils import get_cpu_count

TEMPLATE_NAME = "Dockerfile.template"
RUBY_DOWNLOAD_BASE_URL = "http://cache.ruby-lang.org/pub/ruby"


def major_minor(version: str) -> str:
    """
    Returns the first two dot-separated components of a version.

    >>> major_minor("2.0.0-p451")
    '2.0'

    Raises:
        RenderError: If the version has fewer than two components.
    """
    parts = version.split(".", 2)
    if len(parts) < 2:
        raise RenderError(f"Cannot derive major.minor from Ruby version '{version}'")
    return ".".join(parts[:2])


def download_url(version: str) -> str:
    """
    Returns the URL of the source tarball for a Ruby version, e.g.
    http://cache.ruby-lang.org/pub/ruby/2.1/ruby-2.1.1.tar.gz
    """
    return f"{RUBY_DOWNLOAD_BASE_URL}/{major_minor(version)}/ruby-{version}.tar.gz"


def format_iteration(iteration: str) -> str:
    """Formats the `fpm` iteration flag, terminated by a line continuation."""
    if not iteration:
        return ""
    return f"--iteration {iteration} \\"


def load_template() -> str:
    """
    Reads the Dockerfile template bundled with the package.

    Raises:
        RenderError: If the template is missing or empty.
    """
    template_path = resources.files("buildruby") / "data" / TEMPLATE_NAME
    try:
        content = template_path.read_text(encoding="utf-8")
    except OSError as e:
        raise RenderError(f"Couldn't read Dockerfile template {TEMPLATE_NAME}: {e}") from e
    if not content:
        raise RenderError(f"Dockerfile template {TEMPLATE_NAME} is empty")
    return content


def get_template_vars(request: BuildRequest, cpu_count: int | None = None) -> Dict[str, Any]:
    """
    Computes the variables substituted into the Dockerfile template.

    Parameters:
        request (BuildRequest): The validated build request.
        cpu_count (int | None): Parallelism of the compile step; defaults to the host CPU count.

    Returns:
        Dict[str, Any]: The template context.
    """
    return {
        "distro": request.base_image,
        "ruby_version": request.version,
        "arch": request.arch,
        "iteration": format_iteration(request.iteration),
        "download_url": download_url(request.version),
        "file_name": request.file_name,
        "num_cpu": cpu_count if cpu_count is not None else get_cpu_count(),
    }


def render_dockerfile(
    request: BuildRequest,
    cpu_count: int | None = None,
    template: str | None = None,
) -> str:
    """
    Renders the Dockerfile that builds and packages the requested Ruby version.

    Parameters:
        request (BuildRequest): The validated build request.
        cpu_count (int | None): Overrides the host CPU count.
        template (str | None): Template text to use instead of the bundled one.

    Returns:
        str: The rendered Dockerfile content.

    Raises:
        RenderError: If the template is unusable or references an unknown variable.
    """
    if template is None:
        template = load_template()
    elif not template:
        raise RenderError("Dockerfile template is empty")

    template_vars = get_template_vars(request=request, cpu_count=cpu_count)

    env = Environment(
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        undefined=StrictUndefined,
    )
    try:
        return env.from_string(template).render(**template_vars)
    except TemplateError as e:
        raise RenderError(f"Failed to render Dockerfile template: {e}") from e
