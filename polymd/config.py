"""polymd configuration.

Typed models for a scaffold request and the options derived from it. The
request is what the user asked for; ``ResolvedOptions`` is what the generator
actually uses once environment defaults and derived fields are filled in.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

AUTHOR_ENV_VAR = "POLYMD_AUTHOR"
USER_ENV_VAR = "USER"
REPOSITORY_ENV_VAR = "POLYMD_REPO"

DEFAULT_AUTHOR = "Add author here"
DEFAULT_REPOSITORY_OWNER = "YOUR-NAME"
DEFAULT_DESCRIPTION = "Insert description here."
DEFAULT_VERSION = "0.0.1"

BRANDED_AUTHOR = "The Advanced REST client authors <arc@mulesoft.com>"
BRANDED_REPOSITORY_OWNER = "advanced-rest-client"

_NAME_RE = re.compile(r"[A-Za-z0-9]+(?:-[A-Za-z0-9]+)+")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for every error raised by polymd."""


class InvalidNameError(ScaffoldError):
    """Raised when a component name is empty or not a valid custom element name."""

    def __init__(self, name: Any) -> None:
        self.name = name
        super().__init__(
            f"The name of the component is invalid: {name!r}. "
            "Only A-Z, a-z, 0-9 and `-` signs are allowed. "
            "The name must contain a `-` sign."
        )


def validate_component_name(raw: Any) -> str:
    """Return *raw* lowercased if it is a valid component name.

    A valid name consists of letters, digits and single hyphens, contains at
    least one hyphen and neither starts nor ends with one.

    Raises:
        InvalidNameError: If the name is missing or malformed.
    """
    if not raw or not isinstance(raw, str):
        raise InvalidNameError(raw)
    if not _NAME_RE.fullmatch(raw):
        raise InvalidNameError(raw)
    return raw.lower()


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ScaffoldRequest(BaseModel):
    """What the user asked for. Immutable once validated."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Custom element name, e.g. 'paper-button'")
    description: str | None = Field(default=None)
    author: str | None = Field(default=None)
    version: str | None = Field(default=None)
    repository: str | None = Field(
        default=None, description="Repository owner; the component name is appended"
    )
    path: Path | None = Field(default=None, description="Explicit target directory")
    branded: bool = Field(default=False, description="Advanced REST Client branding")
    tests: bool = Field(default=False, description="Include the test suite")
    demo: bool = Field(default=False, description="Include the demo page")
    deps: bool = Field(default=False, description="Install dependencies after scaffolding")
    ci: bool = Field(default=False, description="Include the Travis CI config")

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        return validate_component_name(value)


class ResolvedOptions(BaseModel):
    """Everything the generator needs, with every fallback applied."""

    name: str
    author: str
    description: str
    version: str
    repository: str
    target: Path | None
    branded: bool = False
    skip_tests: bool = True
    skip_demo: bool = True
    skip_deps: bool = True
    skip_ci: bool = True

    @property
    def component_file(self) -> str:
        """File name of the generated element definition."""
        return f"{self.name}.html"


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_author(request: ScaffoldRequest, environ: Mapping[str, str]) -> str:
    """Branded author, explicit author, ``POLYMD_AUTHOR``, ``USER``, placeholder."""
    if request.branded:
        return BRANDED_AUTHOR
    return (
        request.author
        or environ.get(AUTHOR_ENV_VAR)
        or environ.get(USER_ENV_VAR)
        or DEFAULT_AUTHOR
    )


def resolve_repository(request: ScaffoldRequest, environ: Mapping[str, str]) -> str:
    """Return the ``owner/name`` repository slug for the component.

    ``POLYMD_REPO`` is prepended to the name as-is, so it is expected to
    carry its own trailing slash.
    """
    if request.branded:
        return f"{BRANDED_REPOSITORY_OWNER}/{request.name}"
    if request.repository:
        return f"{request.repository}/{request.name}"
    prefix = environ.get(REPOSITORY_ENV_VAR)
    if prefix:
        return prefix + request.name
    return f"{DEFAULT_REPOSITORY_OWNER}/{request.name}"


def resolve_options(
    request: ScaffoldRequest,
    environ: Mapping[str, str],
    cwd: str | Path,
) -> ResolvedOptions:
    """Merge *request* with environment defaults.

    Args:
        request: The validated request.
        environ: Environment variables to consult (usually ``os.environ``).
        cwd: Directory the target is created in when no path was given.

    Returns:
        The resolved options. No I/O is performed.
    """
    target = Path(request.path) if request.path else Path(cwd) / request.name
    return ResolvedOptions(
        name=request.name,
        author=resolve_author(request, environ),
        description=request.description or DEFAULT_DESCRIPTION,
        version=request.version or DEFAULT_VERSION,
        repository=resolve_repository(request, environ),
        target=target,
        branded=request.branded,
        skip_tests=not request.tests,
        skip_demo=not request.demo,
        skip_deps=not request.deps,
        skip_ci=not request.ci,
    )
