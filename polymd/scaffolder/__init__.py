"""polymd scaffolder -- generates web component project structures.

Quick usage::

    from polymd.config import ScaffoldRequest
    from polymd.scaffolder import ComponentGenerator

    request = ScaffoldRequest(name="paper-badge", description="A badge", tests=True)
    generator = ComponentGenerator(request)
    result = await generator.run()
"""

from polymd.scaffolder.copier import CopyResult, copy_tree
from polymd.scaffolder.generator import (
    ComponentGenerator,
    DependencyInstallError,
    MissingTargetError,
    ScaffoldResult,
    TemplateCopyError,
)
from polymd.scaffolder.rewriter import (
    ManifestError,
    build_token_map,
    patch_branded_manifests,
    rewrite_file,
)

__all__ = [
    "ComponentGenerator",
    "CopyResult",
    "DependencyInstallError",
    "ManifestError",
    "MissingTargetError",
    "ScaffoldResult",
    "TemplateCopyError",
    "build_token_map",
    "copy_tree",
    "patch_branded_manifests",
    "rewrite_file",
]
