import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from planning_copilot.console import print_info, print_success, print_warning
from planning_copilot.io.files import atomic_write, is_yaml_mapping
from planning_copilot.io.paths import copilot_path, github_path, relative_to_root, resolve_root
from planning_copilot.services.assets import (
    GITIGNORE,
    INSTRUCTIONS_TEMPLATE,
    Asset,
    AssetGroup,
    AssetUnavailableError,
    EmbeddedAssetProvider,
    FirstSuccessProvider,
    default_provider,
    select_assets,
)
from planning_copilot.services.state_templates import (
    CORE_KINDS,
    EXTRA_KINDS,
    StateKind,
    render_state,
    state_path,
)

logger = logging.getLogger(__name__)


class InstallOptions(BaseModel):
    root: Optional[str] = None
    with_standards: bool = True
    minimal: bool = False
    offline: bool = False
    preserve_state: bool = False

    @model_validator(mode="after")
    def minimal_skips_standards(self) -> "InstallOptions":
        if self.minimal:
            self.with_standards = False
        return self


class InstalledFile(BaseModel):
    path: str
    # remote, embedded or local
    source: str


class InstallReport(BaseModel):
    root: str
    directories_created: list[str] = Field(default_factory=list)
    files: list[InstalledFile] = Field(default_factory=list)
    fallbacks: list[str] = Field(default_factory=list)
    preserved: list[str] = Field(default_factory=list)

    def paths(self) -> list[str]:
        return [f.path for f in self.files]


def _directories(root: Path, options: InstallOptions) -> list[Path]:
    dirs = [
        copilot_path(root, "docs", "decisions"),
        copilot_path(root, "plans"),
        copilot_path(root, "tmp"),
        github_path(root, "agents"),
    ]
    if not options.minimal:
        dirs.extend(
            copilot_path(root, name) for name in ("prompts", "memory", "testing", "context")
        )
    if options.with_standards:
        dirs.append(copilot_path(root, "standards"))
    return dirs


def create_directory_structure(root: Path, options: InstallOptions, report: InstallReport) -> None:
    print_info("Creating directory structure...")
    for directory in _directories(root, options):
        existed = directory.is_dir()
        directory.mkdir(parents=True, exist_ok=True)
        if not existed:
            report.directories_created.append(relative_to_root(root, directory))
    print_success("Directory structure created")


def _record(root: Path, report: InstallReport, path: Path, source: str) -> None:
    report.files.append(InstalledFile(path=relative_to_root(root, path), source=source))


def write_local_template(root: Path, asset: Asset, report: InstallReport) -> None:
    """Write a template that only ships embedded (never fetched)."""
    text = EmbeddedAssetProvider().get(asset)
    if text is None:
        raise AssetUnavailableError(f"Embedded template '{asset.name}' is missing")
    path = root / asset.target
    atomic_write(path, text)
    _record(root, report, path, "local")
    print_success(f"{asset.label} created")


def write_state_files(
    root: Path, kinds: tuple[StateKind, ...], options: InstallOptions, report: InstallReport
) -> None:
    for kind in kinds:
        path = state_path(kind, root)
        rel = relative_to_root(root, path)
        if options.preserve_state and is_yaml_mapping(path):
            logger.info("Keeping existing state file %s", path)
            report.preserved.append(rel)
            print_info(f"Kept existing {rel}")
            continue
        atomic_write(path, render_state(kind))
        _record(root, report, path, "local")
        print_success(f"{rel} initialized")


def install_asset(
    root: Path, asset: Asset, provider: FirstSuccessProvider, report: InstallReport
) -> None:
    text, source = provider.fetch(asset)
    primary = provider.providers[0].name
    if source != primary:
        print_warning(f"Could not download {asset.label} from {primary}, using {source} copy")
        report.fallbacks.append(asset.name)
    path = root / asset.target
    atomic_write(path, text)
    _record(root, report, path, source)
    print_success(f"{asset.label} installed")


def install(
    options: InstallOptions, provider: Optional[FirstSuccessProvider] = None
) -> InstallReport:
    """Materialize the planning layout into the project root.

    Directories are created idempotently and content files are overwritten
    (state files are kept instead when `preserve_state` is set and they parse).
    A failed download falls back to the embedded copy; any filesystem error
    propagates and aborts the run, leaving whatever was already written.

    Args:
        options: What to install and where
        provider: Asset provider chain; defaults to remote with embedded fallback

    Returns:
        InstallReport: Directories created, files written and their sources
    """
    root = resolve_root(options.root)
    provider = provider or default_provider(options.offline)
    report = InstallReport(root=str(root))
    logger.info(
        "Installing into %s (standards=%s, minimal=%s, offline=%s, providers=%s)",
        root,
        options.with_standards,
        options.minimal,
        options.offline,
        [p.name for p in provider.providers],
    )

    if not os.path.isdir(root / ".git"):
        print_warning("Not in a git repository. The .copilot folder will still be created.")

    create_directory_structure(root, options, report)
    write_local_template(root, GITIGNORE, report)

    kinds = CORE_KINDS if options.minimal else CORE_KINDS + EXTRA_KINDS
    write_state_files(root, kinds, options, report)

    assets = select_assets(options.with_standards, options.minimal)
    for asset in assets:
        if asset.group is not AssetGroup.STANDARD:
            install_asset(root, asset, provider, report)

    write_local_template(root, INSTRUCTIONS_TEMPLATE, report)

    standards = [a for a in assets if a.group is AssetGroup.STANDARD]
    if standards:
        print_info("Installing language standards...")
    for asset in standards:
        install_asset(root, asset, provider, report)

    logger.info(
        "Install finished: %d files, %d fallbacks, %d preserved",
        len(report.files),
        len(report.fallbacks),
        len(report.preserved),
    )
    return report
