#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Change-aware snapshots of the generated artifacts.

Before generated files are overwritten, their current versions are copied into
a timestamp-named directory under the snapshot root, but only when they differ
from the newest existing snapshot. Each snapshot carries a manifest of SHA-256
hashes per artifact kind so later comparisons don't re-read the snapshot's
files. Only the newest `retention` snapshots are kept.

Snapshot creation and pruning problems are logged as warnings and never raised.
"""

import json
import os
import re
import shutil

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Mapping, Optional

from stackctl.stack_utils import sha256sum
from stackctl.installer.configs.constants.constants import DEFAULT_SNAPSHOT_RETENTION, SNAPSHOT_MANIFEST_FILENAME
from stackctl.installer.utils.exceptions import FileOperationError
from stackctl.installer.utils.logger_utils import InstallerLogger

SNAPSHOT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S_%f"
_SNAPSHOT_NAME_RE = re.compile(r"^(\d{8}_\d{6}_\d{6})(?:_(\d+))?$")


@dataclass(frozen=True)
class SnapshotResult:
    created: bool
    path: Optional[str] = None
    pruned: List[str] = field(default_factory=list)


def _snapshot_sort_key(name: str):
    match = _SNAPSHOT_NAME_RE.match(name)
    return (match.group(1), int(match.group(2) or 0))


class SnapshotManager:
    def __init__(
        self,
        snapshot_root: str,
        retention: int = DEFAULT_SNAPSHOT_RETENTION,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if retention < 1:
            raise ValueError(f"Snapshot retention must be at least 1 (got {retention})")
        self.snapshot_root = snapshot_root
        self.retention = retention
        self.clock = clock

    def list_snapshots(self) -> List[str]:
        """Snapshot directory paths, newest first."""
        if not os.path.isdir(self.snapshot_root):
            return []
        names = [
            name
            for name in os.listdir(self.snapshot_root)
            if _SNAPSHOT_NAME_RE.match(name) and os.path.isdir(os.path.join(self.snapshot_root, name))
        ]
        return [os.path.join(self.snapshot_root, name) for name in sorted(names, key=_snapshot_sort_key, reverse=True)]

    def latest_snapshot(self) -> Optional[str]:
        return next(iter(self.list_snapshots()), None)

    def _manifest(self, snapshot_path: str) -> Dict[str, Dict[str, str]]:
        """kind -> {"file": name, "sha256": hash}; rebuilt from the files when the manifest is unusable."""
        manifest_path = os.path.join(snapshot_path, SNAPSHOT_MANIFEST_FILENAME)
        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                artifacts = json.load(f).get("artifacts", {})
            if isinstance(artifacts, dict):
                return artifacts
        except FileNotFoundError:
            pass
        except (OSError, ValueError, AttributeError) as e:
            InstallerLogger.warning(f"Ignoring unreadable snapshot manifest {manifest_path}: {e}")

        # snapshots written without a manifest carry the artifact files under their own names
        artifacts = {}
        for name in os.listdir(snapshot_path):
            file_path = os.path.join(snapshot_path, name)
            if (name != SNAPSHOT_MANIFEST_FILENAME) and os.path.isfile(file_path):
                artifacts[name] = {"file": name, "sha256": sha256sum(file_path)}
        return artifacts

    def _prior_hash(self, manifest: Dict[str, Dict[str, str]], kind: str, file_name: str) -> Optional[str]:
        if kind in manifest:
            return manifest[kind].get("sha256")
        # manifest rebuilt from files is keyed by file name
        if file_name in manifest:
            return manifest[file_name].get("sha256")
        return None

    def _new_snapshot_path(self) -> str:
        base_name = self.clock().strftime(SNAPSHOT_TIMESTAMP_FORMAT)
        path = os.path.join(self.snapshot_root, base_name)
        suffix = 0
        while os.path.exists(path):
            suffix += 1
            path = os.path.join(self.snapshot_root, f"{base_name}_{suffix}")
        return path

    def maybe_snapshot(self, current_artifacts: Mapping[str, str]) -> SnapshotResult:
        """Snapshot the current artifacts if any differs from the newest snapshot.

        Args:
            current_artifacts: artifact kind -> path of the file currently on disk;
                               kinds whose file doesn't exist are skipped

        Returns:
            SnapshotResult; created is False when nothing changed, nothing exists, or creation failed
        """
        present = {
            kind: path for kind, path in current_artifacts.items() if path and os.path.isfile(path)
        }
        if not present:
            return SnapshotResult(created=False)

        current_hashes = {kind: sha256sum(path) for kind, path in present.items()}

        if (latest := self.latest_snapshot()) is not None:
            manifest = self._manifest(latest)
            if all(
                self._prior_hash(manifest, kind, os.path.basename(present[kind])) == digest
                for kind, digest in current_hashes.items()
            ):
                InstallerLogger.debug(f"Artifacts unchanged since snapshot {latest}")
                return SnapshotResult(created=False)

        snapshot_path = self._new_snapshot_path()
        try:
            os.makedirs(snapshot_path)
            manifest = {}
            for kind, path in present.items():
                file_name = os.path.basename(path)
                shutil.copy2(path, os.path.join(snapshot_path, file_name))
                manifest[kind] = {"file": file_name, "sha256": current_hashes[kind]}
            with open(os.path.join(snapshot_path, SNAPSHOT_MANIFEST_FILENAME), "w", encoding="utf-8") as f:
                json.dump({"created": os.path.basename(snapshot_path), "artifacts": manifest}, f, indent=2, sort_keys=True)
        except OSError as e:
            InstallerLogger.warning(f"Could not create configuration snapshot {snapshot_path}: {e}")
            shutil.rmtree(snapshot_path, ignore_errors=True)
            return SnapshotResult(created=False)

        InstallerLogger.info(f"Saved configuration snapshot {snapshot_path}")
        return SnapshotResult(created=True, path=snapshot_path, pruned=self.prune())

    def prune(self) -> List[str]:
        """Delete all but the newest `retention` snapshots, returning the deleted paths."""
        pruned = []
        for old_snapshot in self.list_snapshots()[self.retention:]:
            try:
                shutil.rmtree(old_snapshot)
                pruned.append(old_snapshot)
                InstallerLogger.debug(f"Pruned configuration snapshot {old_snapshot}")
            except OSError as e:
                InstallerLogger.warning(f"Could not prune configuration snapshot {old_snapshot}: {e}")
        return pruned

    def restore(self, snapshot_path: str, destinations: Mapping[str, str]) -> List[str]:
        """Copy a snapshot's artifacts back to their destinations.

        Args:
            snapshot_path: snapshot directory to restore from
            destinations: artifact kind -> destination path

        Returns:
            The destination paths that were restored

        Raises:
            FileOperationError: if a snapshot file can't be copied back
        """
        manifest = self._manifest(snapshot_path)
        restored = []
        for kind, destination in destinations.items():
            entry = manifest.get(kind) or manifest.get(os.path.basename(destination))
            if not entry:
                continue
            source = os.path.join(snapshot_path, entry["file"])
            if not os.path.isfile(source):
                continue
            try:
                shutil.copy2(source, destination)
            except OSError as e:
                raise FileOperationError(f"Could not restore {destination} from {snapshot_path}: {e}") from e
            restored.append(destination)
        return restored
