#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Compose rollout: validate, pull, staged start, health verification and gentle restarts.

The driver talks to the container runtime only through the narrow ComposeRuntime
port so flows can be exercised against a mock runtime, and its sleeping is an
injected callable.
"""

import json
import time

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Callable, List, Optional, Sequence, Tuple

from stackctl.stack_utils import run_process, run_process_to_file
from stackctl.installer.configs.constants.constants import (
    COMPOSE_DETACH_FLAG,
    COMPOSE_SUBCOMMAND,
    COMPOSE_UP_SUBCOMMAND,
    DATA_SERVICES,
    DEFAULT_HEALTH_ATTEMPTS,
    DEFAULT_HEALTH_INTERVAL_SEC,
    DEFAULT_RESTART_DELAY_SEC,
    DOCKER_BIN,
    HEALTH_HEALTHY,
    HEALTH_NONE,
    SERVICE_CADDY,
    SERVICE_POSTGRES,
    SERVICE_WEB,
    STATE_RUNNING,
)
from stackctl.installer.core.topology import RoleProfile
from stackctl.installer.utils.exceptions import ComposeValidationError, DeploymentError
from stackctl.installer.utils.logger_utils import InstallerLogger


@dataclass(frozen=True)
class ContainerState:
    container_id: str
    service: str
    state: str
    health: str = HEALTH_NONE

    @property
    def is_healthy(self) -> bool:
        """healthy, or running without a healthcheck"""
        if self.health:
            return self.health.lower() == HEALTH_HEALTHY
        return self.state.lower() == STATE_RUNNING


class ComposeRuntime(ABC):
    """The container runtime operations the rollout needs."""

    @abstractmethod
    def validate(self) -> Tuple[bool, List[str]]:
        pass

    @abstractmethod
    def pull(self) -> Tuple[bool, List[str]]:
        pass

    @abstractmethod
    def up(self, services: Optional[Sequence[str]] = None) -> Tuple[bool, List[str]]:
        pass

    @abstractmethod
    def container_ids(self, service: str) -> List[str]:
        pass

    @abstractmethod
    def restart_container(self, container_id: str) -> bool:
        pass

    @abstractmethod
    def service_states(self, service: str) -> List[ContainerState]:
        pass

    @abstractmethod
    def exec_to_file(self, service: str, command: Sequence[str], output_file: BinaryIO) -> Tuple[int, List[str]]:
        """Run command in a service container, writing its raw stdout to output_file.

        Returns:
            The exit code and the command's stderr lines
        """
        pass


def parse_ps_json(output: Sequence[str]) -> List[dict]:
    """Parse `compose ps --format json` output.

    Older compose releases print a single JSON array, newer ones print one
    object per line; anything that isn't JSON is ignored.
    """
    text = "\n".join(output).strip()
    if not text:
        return []
    if text.startswith("["):
        try:
            parsed = json.loads(text)
            return [x for x in parsed if isinstance(x, dict)]
        except json.JSONDecodeError:
            pass
    entries = []
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith("{"):
            continue
        try:
            entries.append(json.loads(line))
        except json.JSONDecodeError:
            InstallerLogger.debug(f"Ignoring unparseable compose ps line: {line}")
    return entries


class DockerComposeRuntime(ComposeRuntime):
    """ComposeRuntime backed by the `docker compose` CLI."""

    def __init__(
        self,
        workdir: str,
        project_name: str,
        compose_file: str,
        env_file: str,
        profiles: Sequence[str] = (),
        docker_bin: str = DOCKER_BIN,
        runner: Callable = run_process,
        stream_runner: Callable = run_process_to_file,
    ):
        self.workdir = workdir
        self.project_name = project_name
        self.compose_file = compose_file
        self.env_file = env_file
        self.profiles = list(profiles)
        self.docker_bin = docker_bin
        self.runner = runner
        self.stream_runner = stream_runner

    def compose_command(self, *args) -> List[str]:
        cmd = [
            self.docker_bin,
            COMPOSE_SUBCOMMAND,
            "-p",
            self.project_name,
            "-f",
            self.compose_file,
            "--env-file",
            self.env_file,
            "--project-directory",
            self.workdir,
        ]
        for profile in self.profiles:
            cmd.extend(["--profile", profile])
        cmd.extend(args)
        return cmd

    def _run(self, cmd: List[str], stderr: bool = True) -> Tuple[int, List[str]]:
        InstallerLogger.debug(f"Running: {' '.join(cmd)}")
        err, out = self.runner(cmd, stderr=stderr, cwd=self.workdir)
        InstallerLogger.debug(f"Exit code {err}: {out[-5:] if out else []}")
        return err, out

    def validate(self) -> Tuple[bool, List[str]]:
        err, out = self._run(self.compose_command("config", "--quiet"))
        return err == 0, out

    def pull(self) -> Tuple[bool, List[str]]:
        err, out = self._run(self.compose_command("pull"))
        return err == 0, out

    def up(self, services: Optional[Sequence[str]] = None) -> Tuple[bool, List[str]]:
        err, out = self._run(self.compose_command(COMPOSE_UP_SUBCOMMAND, COMPOSE_DETACH_FLAG, *(services or [])))
        return err == 0, out

    def container_ids(self, service: str) -> List[str]:
        err, out = self._run(self.compose_command("ps", "--quiet", service), stderr=False)
        return [line.strip() for line in out if line.strip()] if err == 0 else []

    def restart_container(self, container_id: str) -> bool:
        err, _ = self._run([self.docker_bin, "restart", container_id])
        return err == 0

    def service_states(self, service: str) -> List[ContainerState]:
        err, out = self._run(self.compose_command("ps", "--all", "--format", "json", service), stderr=False)
        if err != 0:
            return []
        return [
            ContainerState(
                container_id=str(entry.get("ID", "")),
                service=str(entry.get("Service", service)),
                state=str(entry.get("State", "")),
                health=str(entry.get("Health", "") or ""),
            )
            for entry in parse_ps_json(out)
        ]

    def exec_to_file(self, service: str, command: Sequence[str], output_file: BinaryIO) -> Tuple[int, List[str]]:
        cmd = self.compose_command("exec", "-T", service, *command)
        InstallerLogger.debug(f"Running: {' '.join(cmd)}")
        err, errors = self.stream_runner(cmd, output_file, cwd=self.workdir)
        InstallerLogger.debug(f"Exit code {err}: {errors[-5:]}")
        return err, errors


class RolloutDriver:
    def __init__(
        self,
        runtime: ComposeRuntime,
        sleep: Callable[[float], None] = time.sleep,
        restart_delay: int = DEFAULT_RESTART_DELAY_SEC,
        health_interval: int = DEFAULT_HEALTH_INTERVAL_SEC,
        health_attempts: int = DEFAULT_HEALTH_ATTEMPTS,
    ):
        self.runtime = runtime
        self.sleep = sleep
        self.restart_delay = restart_delay
        self.health_interval = health_interval
        self.health_attempts = max(1, health_attempts)

    @staticmethod
    def primary_service(profile: RoleProfile) -> str:
        if profile.runs_compute:
            return SERVICE_WEB
        if profile.runs_data:
            return SERVICE_POSTGRES
        return SERVICE_CADDY

    def _up(self, services: Optional[Sequence[str]], description: str) -> None:
        InstallerLogger.info(f"Starting {description}...")
        ok, out = self.runtime.up(services)
        if not ok:
            raise DeploymentError(f"Failed to start {description}: {' '.join(out[-3:])}")

    def apply(self, profile: RoleProfile) -> None:
        """Validate, pull and converge the stack for a role, data services first.

        Raises:
            ComposeValidationError: if the compose configuration is rejected
            DeploymentError: if pulling images or starting containers fails
        """
        ok, out = self.runtime.validate()
        if not ok:
            raise ComposeValidationError(f"Compose configuration is invalid: {' '.join(out[-3:])}")

        InstallerLogger.info("Pulling images...")
        ok, out = self.runtime.pull()
        if not ok:
            raise DeploymentError(f"Failed to pull images: {' '.join(out[-3:])}")

        if profile.runs_data:
            self._up(DATA_SERVICES, "data services")
            for service in DATA_SERVICES:
                self.wait_for_health(service)

        if profile.runs_edge:
            self._up([SERVICE_CADDY], "edge proxy")

        self._up(None, "remaining services")

    def wait_for_health(self, service: str) -> bool:
        """Poll a service until every instance is healthy, for a bounded number of attempts.

        Returns:
            True if healthy; False (with a warning) on timeout
        """
        for attempt in range(self.health_attempts):
            states = self.runtime.service_states(service)
            if states and all(s.is_healthy for s in states):
                InstallerLogger.info(f"{service}: {len(states)} of {len(states)} instance(s) healthy")
                return True
            InstallerLogger.debug(
                f"{service}: attempt {attempt + 1}/{self.health_attempts}, "
                f"{sum(1 for s in states if s.is_healthy)} of {len(states)} instance(s) healthy"
            )
            if attempt < self.health_attempts - 1:
                self.sleep(self.health_interval)

        InstallerLogger.warning(
            f"{service} did not become healthy after {self.health_attempts * self.health_interval} seconds"
        )
        return False

    def gentle_restart(self, service: str) -> int:
        """Restart a service's containers one at a time.

        Returns:
            The number of containers restarted successfully
        """
        container_ids = self.runtime.container_ids(service)
        if not container_ids:
            InstallerLogger.warning(f"No running containers found for {service}; nothing to restart")
            return 0

        restarted = 0
        for i, container_id in enumerate(container_ids):
            InstallerLogger.info(f"Restarting {service} container {container_id} ({i + 1}/{len(container_ids)})")
            if self.runtime.restart_container(container_id):
                restarted += 1
            else:
                InstallerLogger.error(f"Failed to restart {service} container {container_id}")
            if i < len(container_ids) - 1:
                self.sleep(self.restart_delay)
        return restarted
