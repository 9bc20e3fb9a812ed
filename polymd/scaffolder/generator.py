"""Main scaffolding orchestrator.

Takes a ``ScaffoldRequest``, resolves it against the environment and writes a
ready-to-develop web component project: helper files, the component
definition, manifests, build tasks and, on request, tests, a demo page and CI
configuration.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from rich.panel import Panel

from polymd.config import ResolvedOptions, ScaffoldError, ScaffoldRequest, resolve_options
from polymd.utils import console, print_detail, print_warning, run_command

from .copier import CopyResult, copy_tree
from .rewriter import build_token_map, generated_files, patch_branded_manifests, rewrite_file

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

INSTALL_COMMAND = "npm run deps"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MissingTargetError(ScaffoldError):
    """Raised when ``run()`` is called without a target directory."""

    def __init__(self) -> None:
        super().__init__("Unknown target. Set argument first.")


class TemplateCopyError(ScaffoldError):
    """Raised when a required template could not be copied."""

    def __init__(self, source: Path, dest: Path, result: CopyResult) -> None:
        self.source = source
        self.dest = dest
        self.result = result
        super().__init__(f"Unable to copy template {source} to {dest}: {result.value}")


class DependencyInstallError(ScaffoldError):
    """Raised when the dependency install command exits with a non-zero code."""

    def __init__(
        self,
        command: str,
        cwd: Path,
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.command = command
        self.cwd = cwd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"Unable to execute command {command!r} in {cwd} (exit code {returncode})"
        )


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass
class ScaffoldResult:
    """Summary of a completed scaffold."""

    target: Path
    copied: list[str] = field(default_factory=list)
    rewritten: list[Path] = field(default_factory=list)
    dependencies_installed: bool = False


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ComponentGenerator:
    """Scaffolds a web component project from the bundled templates.

    Options are resolved once, when the generator is created; invalid names
    therefore fail before anything touches the filesystem.
    """

    def __init__(
        self,
        request: ScaffoldRequest,
        environ: Mapping[str, str] | None = None,
        cwd: str | Path | None = None,
        template_dir: str | Path | None = None,
        install_command: str = INSTALL_COMMAND,
    ) -> None:
        self.request = request
        self.options: ResolvedOptions = resolve_options(
            request,
            os.environ if environ is None else environ,
            Path.cwd() if cwd is None else cwd,
        )
        self.template_dir = Path(template_dir) if template_dir else _DEFAULT_TEMPLATE_DIR
        self.install_command = install_command

    # -- Public API --------------------------------------------------------

    async def run(self) -> ScaffoldResult:
        """Generate the project and optionally install its dependencies.

        Returns:
            A ``ScaffoldResult`` describing what was written.

        Raises:
            MissingTargetError: If no target directory is set.
            TemplateCopyError: If a required template is missing or unreadable.
        """
        opts = self.options
        if opts.target is None:
            raise MissingTargetError()
        target = Path(opts.target)
        result = ScaffoldResult(target=target)

        # 1. Helper files (.gitignore, .editorconfig, CI config)
        ignore = [".travis.yml"] if opts.skip_ci else []
        self._copy("helpers", target, result, exclusions=ignore)

        # 2. Component metadata and logic
        self._copy("logic", target, result)
        self._copy("_package.json", target / "package.json", result)

        # 3. Build tasks
        self._copy("tasks", target / "tasks", result)

        # 4. The component
        self._copy("component.html", target / opts.component_file, result)

        # 5. Optional parts
        if not opts.skip_tests:
            self._copy("test", target / "test", result)
        if not opts.skip_demo:
            self._copy("demo", target / "demo", result)
        if opts.branded:
            self._copy("license-file-arc.md", target / "LICENSE.md", result)

        # 6. Placeholders
        result.rewritten = self.update_variables()

        # 7. Dependencies
        if not opts.skip_deps:
            try:
                await self.install_dependencies()
                result.dependencies_installed = True
            except DependencyInstallError as exc:
                print_warning("Unable to install dependencies.")
                if exc.stderr:
                    print_detail(exc.stderr)
                print_warning(f"Run: '{self.install_command}' manually.")

        self._print_end()
        return result

    def update_variables(self) -> list[Path]:
        """Substitute placeholders in every generated file.

        Returns:
            The rewritten files, in the order they were processed.
        """
        token_map = build_token_map(self.options)
        files = generated_files(self.options)
        for path in files:
            rewrite_file(path, token_map)
        if self.options.branded:
            patch_branded_manifests(self.options.target)
        return files

    async def install_dependencies(self) -> str:
        """Run the install command inside the target directory.

        Returns:
            The command's captured stdout.

        Raises:
            DependencyInstallError: If the command exits with a non-zero code.
        """
        target = Path(self.options.target)
        console.print("Installing dependencies...")
        returncode, stdout, stderr = await run_command(self.install_command, cwd=target)
        if returncode != 0:
            raise DependencyInstallError(
                self.install_command, target, returncode, stdout, stderr
            )
        return stdout

    # -- Helpers -----------------------------------------------------------

    def _copy(
        self,
        template: str,
        dest: Path,
        result: ScaffoldResult,
        exclusions: list[str] | None = None,
    ) -> None:
        source = self.template_dir / template
        outcome = copy_tree(source, dest, exclusions or [])
        if outcome is CopyResult.DESTINATION_CONFLICT:
            print_warning(f"  Some files from {template} were not copied to {dest}.")
        elif not outcome.ok:
            raise TemplateCopyError(source, dest, outcome)
        result.copied.append(template)

    def _print_end(self) -> None:
        console.print()
        console.print(
            Panel(
                "[bold green]All set. You can now start development.[/bold green]\n"
                "Try [bold]npm run serve[/bold] to see the component's documentation.",
                title=f"[bold]{self.options.name}[/bold]",
                border_style="green",
            )
        )
