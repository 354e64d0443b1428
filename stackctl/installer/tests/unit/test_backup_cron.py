#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Unit tests for the backup crontab entry and database dump rotation."""

import gzip
import io
import os
import shutil
import sys
import tempfile
import unittest

from datetime import datetime
from unittest import mock

from stackctl.installer.actions.backup import (
    cron_entry,
    dump_database,
    install_cron_entry,
    list_dumps,
    merge_crontab,
    prune_dumps,
    stackctl_command,
)
from stackctl.stack_utils import run_process_to_file
from stackctl.installer.configs.constants.constants import CRON_MARKER
from stackctl.installer.configs.constants.enums import InstallerResult


class FakeCrontab:
    """Stands in for run_process when it runs `crontab -l` and `crontab -`."""

    def __init__(self, lines=None, list_rc=0, write_rc=0):
        self.lines = lines
        self.list_rc = list_rc
        self.write_rc = write_rc
        self.written = None
        self.commands = []

    def __call__(self, command, stdin=None, **kwargs):
        self.commands.append(list(command))
        if command == ["crontab", "-l"]:
            return self.list_rc, list(self.lines or [])
        if command == ["crontab", "-"]:
            self.written = stdin
            return self.write_rc, [] if self.write_rc == 0 else ["crontab: permission denied"]
        raise AssertionError(f"unexpected command {command}")


class FakeExecRuntime:
    def __init__(self, rc=0, output=b"-- PostgreSQL database dump\nCREATE TABLE t ();\n", errors=None):
        self.rc = rc
        self.output = output
        self.errors = errors or []
        self.calls = []

    def exec_to_file(self, service, command, output_file):
        self.calls.append((service, list(command)))
        output_file.write(self.output)
        return self.rc, list(self.errors)


class TestCronEntry(unittest.TestCase):
    def test_entry_format(self):
        entry = cron_entry("0 3 * * *", "/srv/stack", command="/opt/venv/bin/stackctl")
        self.assertEqual(
            entry,
            "0 3 * * * /opt/venv/bin/stackctl backup --workdir /srv/stack --non-interactive"
            f" >> /srv/stack/logs/backup.log 2>&1 {CRON_MARKER}",
        )

    def test_paths_are_quoted(self):
        entry = cron_entry("@daily", "/srv/my stack")
        self.assertIn("--workdir '/srv/my stack'", entry)
        self.assertIn(">> '/srv/my stack/logs/backup.log'", entry)

    def test_default_command_is_absolute(self):
        with mock.patch("shutil.which", return_value="/opt/venv/bin/stackctl"):
            entry = cron_entry("0 3 * * *", "/srv/stack")
        self.assertTrue(entry.startswith("0 3 * * * /opt/venv/bin/stackctl backup --workdir /srv/stack "))

    def test_command_falls_back_to_interpreter(self):
        with mock.patch("shutil.which", return_value=None), mock.patch.object(sys, "executable", "/opt/py 3/bin/python3"):
            self.assertEqual(stackctl_command(), "'/opt/py 3/bin/python3' -m stackctl")

    def test_merge_replaces_previous_entry(self):
        existing = ["MAILTO=ops@example.com", f"0 1 * * * old command {CRON_MARKER}", "5 * * * * other-job"]
        merged = merge_crontab(existing, "NEW")
        self.assertEqual(merged, ["MAILTO=ops@example.com", "5 * * * * other-job", "NEW"])

    def test_install_new_entry(self):
        crontab = FakeCrontab(lines=["MAILTO=ops@example.com"])
        entry = cron_entry("0 3 * * *", "/srv/stack")
        self.assertEqual(install_cron_entry(entry, runner=crontab), InstallerResult.SUCCESS)
        self.assertEqual(crontab.written, f"MAILTO=ops@example.com\n{entry}\n")

    def test_install_is_idempotent(self):
        entry = cron_entry("0 3 * * *", "/srv/stack")
        crontab = FakeCrontab(lines=["MAILTO=ops@example.com", entry])
        self.assertEqual(install_cron_entry(entry, runner=crontab), InstallerResult.SKIPPED)
        self.assertIsNone(crontab.written)

    def test_install_without_existing_crontab(self):
        crontab = FakeCrontab(lines=["no crontab for user"], list_rc=1)
        self.assertEqual(install_cron_entry("ENTRY", runner=crontab), InstallerResult.SUCCESS)
        self.assertEqual(crontab.written, "ENTRY\n")

    def test_install_failure(self):
        crontab = FakeCrontab(lines=[], write_rc=1)
        self.assertEqual(install_cron_entry("ENTRY", runner=crontab), InstallerResult.FAILURE)


class TestDatabaseDumps(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.backup_dir = os.path.join(self.temp_dir, "backups")

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _touch_dump(self, name):
        os.makedirs(self.backup_dir, exist_ok=True)
        path = os.path.join(self.backup_dir, name)
        with open(path, "wb") as f:
            f.write(b"")
        return path

    def test_dump_written_and_rotated(self):
        for stamp in ("20250101_030000", "20250102_030000", "20250103_030000"):
            self._touch_dump(f"pg_app_{stamp}.sql.gz")
        runtime = FakeExecRuntime()

        path = dump_database(
            runtime,
            self.temp_dir,
            "app",
            "app",
            retention=2,
            clock=lambda: datetime(2025, 1, 4, 3, 0, 0),
        )

        self.assertEqual(path, os.path.join(self.backup_dir, "pg_app_20250104_030000.sql.gz"))
        self.assertEqual(runtime.calls, [("postgres", ["pg_dump", "-U", "app", "-d", "app"])])
        with gzip.open(path, "rt", encoding="utf-8") as f:
            self.assertEqual(f.read(), "-- PostgreSQL database dump\nCREATE TABLE t ();\n")
        self.assertEqual(
            [os.path.basename(p) for p in list_dumps(self.backup_dir)],
            ["pg_app_20250104_030000.sql.gz", "pg_app_20250103_030000.sql.gz"],
        )

    def test_failed_dump_writes_nothing(self):
        runtime = FakeExecRuntime(rc=1, output=b"-- partial", errors=["pg_dump: error: connection refused"])
        self.assertIsNone(dump_database(runtime, self.temp_dir, "app", "app", retention=7))
        self.assertEqual(list_dumps(self.backup_dir), [])

    def test_dump_bytes_are_preserved(self):
        # vertical tabs and non-UTF-8 bytes inside COPY data must survive untouched
        raw = b"COPY t (a) FROM stdin;\nrow\x0bwith-vtab\tx\n\xff\xfe latin \xe9\n\\.\n"
        path = dump_database(FakeExecRuntime(output=raw), self.temp_dir, "app", "app", retention=7)
        with gzip.open(path, "rb") as f:
            self.assertEqual(f.read(), raw)

    def test_streamed_process_output(self):
        raw = b"row\x0bwith-vtab\t\xff\x85\n"
        output = io.BytesIO()
        rc, errors = run_process_to_file(
            [sys.executable, "-c", "import sys; sys.stdout.buffer.write(%r); sys.stderr.write('done')" % raw],
            output,
        )
        self.assertEqual(rc, 0)
        self.assertEqual(output.getvalue(), raw)
        self.assertEqual(errors, ["done"])

    def test_prune_keeps_at_least_one(self):
        for stamp in ("20250101_030000", "20250102_030000"):
            self._touch_dump(f"pg_app_{stamp}.sql.gz")
        other = self._touch_dump("notes.txt")
        pruned = prune_dumps(self.backup_dir, 0)
        self.assertEqual([os.path.basename(p) for p in pruned], ["pg_app_20250101_030000.sql.gz"])
        self.assertTrue(os.path.isfile(other))


if __name__ == "__main__":
    unittest.main()
