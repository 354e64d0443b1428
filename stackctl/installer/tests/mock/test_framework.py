#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Test framework infrastructure for stackctl flow tests."""

import os
import shutil
import sys
import tempfile
import unittest
from typing import Any, BinaryIO, Dict, List, Optional, Sequence, Tuple

# Add the project root directory to the Python path
sys.path.insert(
    0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "..", ".."))
)

from stackctl.installer.actions.rollout import ComposeRuntime, ContainerState
from stackctl.installer.configs.constants.constants import HEALTH_HEALTHY, STATE_RUNNING
from stackctl.installer.ui.shared.installer_ui import InstallerUI
from stackctl.installer.utils.logger_utils import InstallerLogger


class MockUI(InstallerUI):
    """Mock UI implementation for testing.

    Answers come from the responses dict keyed by prompt text; anything not
    listed gets the default (or the preselected choice).
    """

    def __init__(self, responses: Dict[str, Any] = None, non_interactive: bool = True):
        super().__init__(non_interactive=non_interactive)
        self.responses = responses or {}
        self.called_methods = []

    def _answer(self, prompt: str, default):
        value = self.responses.get(prompt, default)
        # a list answers the same prompt differently on each call
        if isinstance(value, list):
            return value.pop(0) if value else default
        return value

    def ask_yes_no(self, message: str, default: bool = True) -> bool:
        self.called_methods.append(("ask_yes_no", message, default))
        return self._answer(message, default)

    def ask_string(self, prompt: str, default: str = "") -> Optional[str]:
        self.called_methods.append(("ask_string", prompt, default))
        return self._answer(prompt, default)

    def ask_password(self, prompt: str, default: str = "") -> Optional[str]:
        self.called_methods.append(("ask_password", prompt, default))
        return self._answer(prompt, default)

    def choose_one(self, prompt: str, choices: List[Tuple[str, str, bool]]) -> str:
        self.called_methods.append(("choose_one", prompt, [tag for tag, _, _ in choices]))
        selected = next((tag for tag, _, is_selected in choices if is_selected), choices[0][0])
        return self._answer(prompt, selected)

    def ask_int(
        self,
        question: str,
        default: Optional[int] = None,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
    ) -> int:
        self.called_methods.append(("ask_int", question, default))
        return self._answer(question, default)

    def display_message(self, message: str) -> None:
        self.called_methods.append(("display_message", message))

    def prompts(self, method: str) -> List[str]:
        """Prompt texts passed to a given method, in call order."""
        return [c[1] for c in self.called_methods if c[0] == method]


class MockRuntime(ComposeRuntime):
    """ComposeRuntime that records calls instead of running docker.

    Every service is healthy unless state_sequences says otherwise; a
    sequence is consumed one entry per service_states call and its last
    entry repeats.
    """

    def __init__(self):
        self.calls = []
        self.validate_result = (True, [])
        self.pull_result = (True, [])
        self.up_results = {}
        self.ids = {}
        self.state_sequences: Dict[str, List[List[ContainerState]]] = {}
        self.failed_restarts = set()
        self.exec_result = (0, [])
        self.exec_output = b"-- PostgreSQL database dump\n"

    @staticmethod
    def healthy(service: str, count: int = 1) -> List[ContainerState]:
        return [ContainerState(f"{service}-{i + 1}", service, STATE_RUNNING, HEALTH_HEALTHY) for i in range(count)]

    @staticmethod
    def unhealthy(service: str, count: int = 1) -> List[ContainerState]:
        return [ContainerState(f"{service}-{i + 1}", service, STATE_RUNNING, "starting") for i in range(count)]

    def validate(self) -> Tuple[bool, List[str]]:
        self.calls.append(("validate",))
        return self.validate_result

    def pull(self) -> Tuple[bool, List[str]]:
        self.calls.append(("pull",))
        return self.pull_result

    def up(self, services: Optional[Sequence[str]] = None) -> Tuple[bool, List[str]]:
        key = tuple(services) if services else None
        self.calls.append(("up", key))
        return self.up_results.get(key, (True, []))

    def container_ids(self, service: str) -> List[str]:
        self.calls.append(("container_ids", service))
        return list(self.ids.get(service, [f"{service}-1"]))

    def restart_container(self, container_id: str) -> bool:
        self.calls.append(("restart", container_id))
        return container_id not in self.failed_restarts

    def service_states(self, service: str) -> List[ContainerState]:
        self.calls.append(("service_states", service))
        sequence = self.state_sequences.get(service)
        if not sequence:
            return self.healthy(service)
        return sequence.pop(0) if len(sequence) > 1 else sequence[0]

    def exec_to_file(self, service: str, command: Sequence[str], output_file: BinaryIO) -> Tuple[int, List[str]]:
        self.calls.append(("exec", service, list(command)))
        output_file.write(self.exec_output)
        return self.exec_result

    def calls_named(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]


class FakeRunner:
    """Stands in for run_process: records commands and returns canned results.

    Results are keyed by the space-joined command; anything else succeeds with
    no output. `crontab -l` reports an empty crontab.
    """

    def __init__(self):
        self.results: Dict[str, Tuple[int, List[str]]] = {}
        self.executed_commands = []

    def __call__(self, command, stdin=None, stderr=True, cwd=None, **kwargs):
        cmd_str = " ".join(command)
        self.executed_commands.append({"command": cmd_str, "stdin": stdin, "stderr": stderr, "cwd": cwd})
        if cmd_str in self.results:
            return self.results[cmd_str]
        if cmd_str == "crontab -l":
            return 1, ["no crontab for user"]
        return 0, []

    def set_command_result(self, command: str, return_code: int, output: list):
        self.results[command] = (return_code, output)

    def commands(self) -> List[str]:
        return [c["command"] for c in self.executed_commands]


class BaseStackTest(unittest.TestCase):
    """Base test class with a scratch working directory and quiet logging."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.workdir = os.path.join(self.temp_dir, "stack")
        self.mock_ui = MockUI()
        self.mock_runtime = MockRuntime()
        self.runner = FakeRunner()
        self.sleeps = []
        InstallerLogger.set_console_output(False)

    def tearDown(self):
        InstallerLogger.set_console_output(True)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def fake_sleep(self, seconds):
        self.sleeps.append(seconds)

    def workdir_path(self, *parts) -> str:
        return os.path.join(self.workdir, *parts)

    def read_workdir_file(self, name: str) -> str:
        with open(self.workdir_path(name), encoding="utf-8") as f:
            return f.read()

    def assert_command_executed(self, command_pattern: str):
        """Assert that a command matching the pattern was executed."""
        executed = self.runner.commands()
        matching_commands = [cmd for cmd in executed if command_pattern in cmd]
        self.assertTrue(
            len(matching_commands) > 0,
            f"Command pattern '{command_pattern}' not found in executed commands: {executed}",
        )

    def assert_no_command_executed(self, command_pattern: str):
        """Assert that no command matching the pattern was executed."""
        matching_commands = [cmd for cmd in self.runner.commands() if command_pattern in cmd]
        self.assertEqual(
            len(matching_commands),
            0,
            f"Command pattern '{command_pattern}' was unexpectedly executed: {matching_commands}",
        )
