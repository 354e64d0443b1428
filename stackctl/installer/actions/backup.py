#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Scheduled backups: the crontab entry and the backup run it invokes."""

import glob
import gzip
import os
import shlex
import shutil
import sys

from datetime import datetime
from typing import Callable, List, Optional

from stackctl.stack_constants import DATA_BACKUP_DIR, LOGS_DIR
from stackctl.stack_utils import run_process
from stackctl.installer.configs.constants.constants import CRON_MARKER, SERVICE_POSTGRES
from stackctl.installer.configs.constants.enums import InstallerResult
from stackctl.installer.utils.logger_utils import InstallerLogger

DUMP_PREFIX = "pg_"
DUMP_SUFFIX = ".sql.gz"
DUMP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def stackctl_command() -> str:
    """Absolute command line for stackctl; cron's PATH doesn't include venv or pip script directories."""
    if (script := shutil.which("stackctl")) is not None:
        return shlex.quote(os.path.abspath(script))
    return f"{shlex.quote(sys.executable)} -m stackctl"


def cron_entry(schedule: str, workdir: str, command: Optional[str] = None) -> str:
    """The crontab line that runs a backup for a working directory."""
    log_file = os.path.join(workdir, LOGS_DIR, "backup.log")
    return (
        f"{schedule.strip()} {command or stackctl_command()} backup --workdir {shlex.quote(workdir)} --non-interactive"
        f" >> {shlex.quote(log_file)} 2>&1 {CRON_MARKER}"
    )


def merge_crontab(existing: List[str], entry: str) -> List[str]:
    """Replace any stackctl backup line in a crontab with entry."""
    kept = [line for line in existing if CRON_MARKER not in line]
    return kept + [entry]


def install_cron_entry(entry: str, runner: Callable = run_process) -> InstallerResult:
    """Install entry into the current user's crontab, replacing an earlier stackctl line.

    Returns:
        SUCCESS if installed, SKIPPED if already present, FAILURE otherwise
    """
    err, out = runner(["crontab", "-l"], stderr=False)
    # crontab -l fails when the user has no crontab yet
    existing = [line for line in out if line.strip()] if err == 0 else []
    merged = merge_crontab(existing, entry)
    if merged == existing:
        InstallerLogger.info("Backup schedule already installed in crontab")
        return InstallerResult.SKIPPED

    err, out = runner(["crontab", "-"], stdin="\n".join(merged) + "\n")
    if err != 0:
        InstallerLogger.error(f"Failed to install crontab entry: {' '.join(out)}")
        return InstallerResult.FAILURE
    InstallerLogger.info(f"Installed crontab entry: {entry}")
    return InstallerResult.SUCCESS


def list_dumps(backup_dir: str) -> List[str]:
    """Database dumps in backup_dir, newest first."""
    return sorted(glob.glob(os.path.join(backup_dir, f"{DUMP_PREFIX}*{DUMP_SUFFIX}")), reverse=True)


def prune_dumps(backup_dir: str, retention: int) -> List[str]:
    pruned = []
    for old_dump in list_dumps(backup_dir)[max(1, retention):]:
        try:
            os.remove(old_dump)
            pruned.append(old_dump)
        except OSError as e:
            InstallerLogger.warning(f"Could not prune database dump {old_dump}: {e}")
    return pruned


def dump_database(
    runtime,
    workdir: str,
    postgres_user: str,
    postgres_db: str,
    retention: int,
    clock: Callable[[], datetime] = datetime.now,
) -> Optional[str]:
    """Stream a gzip'd pg_dump of the local database into the backup directory.

    pg_dump's output is copied byte for byte; a failed dump leaves no file behind.

    Returns:
        The dump's path, or None if the dump failed (logged as a warning)
    """
    backup_dir = os.path.join(workdir, DATA_BACKUP_DIR)
    dump_path = os.path.join(
        backup_dir, f"{DUMP_PREFIX}{postgres_db}_{clock().strftime(DUMP_TIMESTAMP_FORMAT)}{DUMP_SUFFIX}"
    )

    try:
        os.makedirs(backup_dir, exist_ok=True)
        with gzip.open(dump_path, "wb") as f:
            err, errors = runtime.exec_to_file(
                SERVICE_POSTGRES, ["pg_dump", "-U", postgres_user, "-d", postgres_db], f
            )
    except OSError as e:
        _remove_partial_dump(dump_path)
        InstallerLogger.warning(f"Could not write database dump {dump_path}: {e}")
        return None

    if err != 0:
        _remove_partial_dump(dump_path)
        InstallerLogger.warning(f"pg_dump failed with exit code {err}: {' '.join(errors[-2:])}")
        return None

    InstallerLogger.info(f"Wrote database dump {dump_path}")
    prune_dumps(backup_dir, retention)
    return dump_path


def _remove_partial_dump(dump_path: str) -> None:
    try:
        os.remove(dump_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        InstallerLogger.warning(f"Could not remove incomplete database dump {dump_path}: {e}")
