#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Shared installer actions used by several subcommands.
"""

import os

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from stackctl.stack_constants import SNAPSHOT_DIR, STACKCTL_WORKDIR_ENV
from stackctl.stack_utils import check_socket, file_contents, run_process
from stackctl.installer.configs.constants.constants import (
    ARTIFACT_ENV,
    ARTIFACT_FILENAMES,
    COMPOSE_SUBCOMMAND,
    DOCKER_BIN,
    SERVICE_IP_LOCAL,
    SERVICE_PORT_HTTP,
    SERVICE_PORT_HTTPS,
)
from stackctl.installer.configs.constants.enums import ControlFlow, InstallerResult
from stackctl.installer.core.renderer import RenderedConfigSet
from stackctl.installer.core.snapshot import SnapshotManager
from stackctl.installer.core.topology import RoleProfile
from stackctl.installer.utils.exceptions import DeploymentError, FileOperationError
from stackctl.installer.utils.logger_utils import InstallerLogger, SkipReasons


def resolve_workdir(cli_value: Optional[str], ui=None, interactive: bool = True) -> str:
    """Working directory: --workdir, then $STACKCTL_WORKDIR, then a prompt (or the cwd)."""
    workdir = cli_value or os.environ.get(STACKCTL_WORKDIR_ENV, "")
    if not workdir:
        workdir = os.getcwd()
        if interactive and ui is not None:
            workdir = ui.ask_string("Working directory for the stack configuration", default=workdir) or workdir
    return os.path.abspath(os.path.expanduser(workdir))


def artifact_paths(workdir: str) -> Dict[str, str]:
    """artifact kind -> path in the working directory"""
    return {kind: os.path.join(workdir, file_name) for kind, file_name in ARTIFACT_FILENAMES.items()}


def snapshot_manager(workdir: str, retention: int) -> SnapshotManager:
    return SnapshotManager(os.path.join(workdir, SNAPSHOT_DIR), retention=retention)


def _changed_artifacts(rendered: RenderedConfigSet, paths: Dict[str, str]) -> Dict[str, bool]:
    return {kind: file_contents(paths[kind]) != text for kind, text in rendered.by_kind().items()}


def _restrict_env_permissions(env_path: str) -> None:
    try:
        os.chmod(env_path, 0o600)
    except OSError as e:
        InstallerLogger.warning(f"Could not restrict permissions on {env_path}: {e}")


def _write_text(path: str, text: str, private: bool = False) -> None:
    if not private:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return
    # created owner-only, and tightened before writing if it already existed
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        os.fchmod(fd, 0o600)
    except OSError:
        os.close(fd)
        raise
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(text)


@dataclass
class ArtifactWrite:
    """Outcome of write_artifacts.

    previous maps each path this run overwrote to its text beforehand (None if
    the file didn't exist), which is exactly what a rollback has to put back.
    """

    result: InstallerResult
    previous: Dict[str, Optional[str]] = field(default_factory=dict)

    @property
    def wrote_files(self) -> bool:
        return bool(self.previous)


def write_artifacts(
    rendered: RenderedConfigSet,
    workdir: str,
    control_flow: ControlFlow,
    snapshots: SnapshotManager,
) -> ArtifactWrite:
    """Snapshot the artifacts on disk, then overwrite them with the rendered set.

    Raises:
        FileOperationError: if an artifact can't be written
    """
    InstallerLogger.start("Writing Configuration")
    paths = artifact_paths(workdir)
    changed = _changed_artifacts(rendered, paths)

    if not control_flow.should_write_files():
        for kind, is_changed in changed.items():
            state = "changed" if is_changed else "unchanged"
            InstallerLogger.info(control_flow.would(f"write {paths[kind]} ({state})"))
        InstallerLogger.end("Writing Configuration", InstallerResult.SKIPPED, SkipReasons.DRY_RUN)
        return ArtifactWrite(InstallerResult.SKIPPED)

    if not any(changed.values()):
        _restrict_env_permissions(paths[ARTIFACT_ENV])
        InstallerLogger.end("Writing Configuration", InstallerResult.SKIPPED, SkipReasons.UNCHANGED)
        return ArtifactWrite(InstallerResult.SKIPPED)

    snapshots.maybe_snapshot(paths)

    written = ArtifactWrite(InstallerResult.SUCCESS)
    try:
        os.makedirs(workdir, exist_ok=True)
        for kind, text in rendered.by_kind().items():
            if not changed[kind]:
                continue
            previous = file_contents(paths[kind])
            _write_text(paths[kind], text, private=(kind == ARTIFACT_ENV))
            written.previous[paths[kind]] = previous
            InstallerLogger.info(f"Wrote {paths[kind]}")
    except OSError as e:
        InstallerLogger.end("Writing Configuration", InstallerResult.FAILURE, str(e))
        raise FileOperationError(f"Could not write configuration to {workdir}: {e}") from e

    _restrict_env_permissions(paths[ARTIFACT_ENV])
    InstallerLogger.end("Writing Configuration", InstallerResult.SUCCESS)
    return written


def restore_previous_artifacts(workdir: str, written: ArtifactWrite) -> bool:
    """Put back what write_artifacts overwrote after the runtime rejected the new artifacts.

    Files this run created are removed; nothing is touched if it wrote nothing.
    """
    if not written.wrote_files:
        InstallerLogger.info("Configuration was not changed by this run; nothing to restore")
        return False
    env_path = artifact_paths(workdir)[ARTIFACT_ENV]
    try:
        for path, text in written.previous.items():
            if text is None:
                os.remove(path)
            else:
                _write_text(path, text, private=(path == env_path))
    except OSError as e:
        raise FileOperationError(f"Could not restore the previous configuration in {workdir}: {e}") from e
    InstallerLogger.warning(f"Restored {len(written.previous)} file(s) to their previous contents")
    return True


def preflight(profile: RoleProfile, runner: Callable = run_process, port_check: Callable = check_socket) -> InstallerResult:
    """Check the container runtime is usable and warn about busy edge ports.

    Raises:
        DeploymentError: if docker or docker compose is unavailable
    """
    InstallerLogger.start("Preflight Checks")
    for cmd, description in (
        ([DOCKER_BIN, "info"], "docker"),
        ([DOCKER_BIN, COMPOSE_SUBCOMMAND, "version"], "docker compose"),
    ):
        err, out = runner(cmd, stderr=False)
        InstallerLogger.debug(f"{' '.join(cmd)} returned {err}")
        if err != 0:
            InstallerLogger.end("Preflight Checks", InstallerResult.FAILURE, f"{description} is not available")
            raise DeploymentError(f"{description} is not available: {' '.join(out[-2:])}")

    if profile.runs_edge:
        for port in (SERVICE_PORT_HTTP, SERVICE_PORT_HTTPS):
            if port_check(SERVICE_IP_LOCAL, port, timeout=1):
                InstallerLogger.warning(
                    f"Port {port} is already accepting connections; the edge proxy may fail to bind it"
                )

    InstallerLogger.end("Preflight Checks", InstallerResult.SUCCESS)
    return InstallerResult.SUCCESS
