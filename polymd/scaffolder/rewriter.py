"""Placeholder substitution in generated files.

Templates carry literal tokens such as ``ELEMENT-NAME`` which are replaced,
case-insensitively and everywhere they occur, with values from the resolved
options.  Branded projects additionally get their JSON manifests patched.
"""

from __future__ import annotations

import re
from pathlib import Path

from polymd.config import ResolvedOptions, ScaffoldError
from polymd.utils import load_json, print_detail, save_json

TokenMap = list[tuple[str, str]]

BRANDED_LICENSE_SUFFIX = " OR CC-BY-4.0"
BRANDED_BUGS_EMAIL = "arc@mulesoft.com"


class ManifestError(ScaffoldError):
    """Raised when a manifest lacks a field that branding must patch."""

    def __init__(self, path: Path, field: str) -> None:
        self.path = path
        self.field = field
        super().__init__(f"{path} has no string \"{field}\" field to patch")


def build_token_map(options: ResolvedOptions) -> TokenMap:
    """Return the ``(token, value)`` pairs in the order they are applied."""
    return [
        ("ELEMENT-NAME", options.name),
        ("ELEMENT-AUTHOR", options.author),
        ("ELEMENT-DESCRIPTION", options.description),
        ("ELEMENT-VERSION", options.version),
        ("REPOSITORY-NAME", options.repository),
    ]


def replace_tokens(text: str, token_map: TokenMap) -> str:
    """Apply every substitution in *token_map* to *text*."""
    for token, value in token_map:
        pattern = re.compile(re.escape(token), re.IGNORECASE | re.MULTILINE)
        # Values are inserted literally, backslashes included.
        text = pattern.sub(lambda _match, value=value: value, text)
    return text


def rewrite_file(path: str | Path, token_map: TokenMap) -> None:
    """Rewrite *path* in place with the tokens substituted.

    Raises:
        FileNotFoundError: If *path* does not exist.
    """
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")
    file_path.write_text(replace_tokens(text, token_map), encoding="utf-8")
    print_detail(f"  Updated {file_path}")


def generated_files(options: ResolvedOptions) -> list[Path]:
    """Files under the target that contain placeholders after copying."""
    root = Path(options.target)
    files = [
        root / "bower.json",
        root / "package.json",
        root / "README.md",
        root / options.component_file,
        root / "index.html",
    ]
    if not options.skip_ci:
        files.append(root / ".travis.yml")
    if not options.skip_tests:
        files.append(root / "test" / "basic-test.html")
    if not options.skip_demo:
        files.append(root / "demo" / "index.html")
    return files


def patch_branded_manifests(target: str | Path) -> None:
    """Dual-license both manifests and point bug reports at the ARC team.

    Raises:
        json.JSONDecodeError: If either manifest is malformed.
        ManifestError: If either manifest has no string ``license``.
    """
    root = Path(target)

    package_path = root / "package.json"
    package = load_json(package_path)
    _dual_license(package, package_path)
    package.setdefault("bugs", {})["email"] = BRANDED_BUGS_EMAIL
    save_json(package, package_path)

    bower_path = root / "bower.json"
    bower = load_json(bower_path)
    _dual_license(bower, bower_path)
    save_json(bower, bower_path)


def _dual_license(manifest: dict, path: Path) -> None:
    license_ = manifest.get("license")
    if not isinstance(license_, str):
        raise ManifestError(path, "license")
    manifest["license"] = license_ + BRANDED_LICENSE_SUFFIX
