#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""The render, write and roll out pipeline shared by install, update and scale."""

import time

from typing import Callable, Optional, Sequence

from stackctl.stack_utils import run_process, tablify
from stackctl.installer.actions.registry import registry_login
from stackctl.installer.actions.rollout import ComposeRuntime, DockerComposeRuntime, RolloutDriver
from stackctl.installer.actions.shared import (
    artifact_paths,
    preflight,
    restore_previous_artifacts,
    snapshot_manager,
    write_artifacts,
)
from stackctl.installer.configs.constants.constants import ARTIFACT_COMPOSE, ARTIFACT_ENV
from stackctl.installer.configs.constants.enums import ControlFlow, InstallerResult
from stackctl.installer.core.stack_config import DeploymentPlan
from stackctl.installer.utils.exceptions import ComposeValidationError, DeploymentError
from stackctl.installer.utils.logger_utils import InstallerLogger, SkipReasons
from stackctl.installer.utils.summary_utils import build_configuration_summary_items, public_urls


def build_runtime(plan: DeploymentPlan, workdir: str, runner: Callable = run_process) -> DockerComposeRuntime:
    paths = artifact_paths(workdir)
    return DockerComposeRuntime(
        workdir=workdir,
        project_name=plan.options.project_name,
        compose_file=paths[ARTIFACT_COMPOSE],
        env_file=paths[ARTIFACT_ENV],
        profiles=plan.profile.compose_profiles,
        runner=runner,
    )


def build_driver(plan: DeploymentPlan, runtime: ComposeRuntime, sleep: Callable = time.sleep) -> RolloutDriver:
    return RolloutDriver(
        runtime,
        sleep=sleep,
        restart_delay=plan.options.restart_delay,
        health_interval=plan.options.health_interval,
        health_attempts=plan.options.health_attempts,
    )


def show_summary(plan: DeploymentPlan, workdir: str) -> None:
    InstallerLogger.info("Configuration summary:")
    for label, value in build_configuration_summary_items(plan, workdir):
        InstallerLogger.info(f"  {label}: {value}")


def show_public_urls(plan: DeploymentPlan) -> None:
    urls = public_urls(plan)
    if not urls:
        return
    print()
    tablify([["Service", "URL"]] + [[name, url] for name, url in urls])


def deploy(
    plan: DeploymentPlan,
    workdir: str,
    control_flow: ControlFlow,
    ui,
    runtime: Optional[ComposeRuntime] = None,
    runner: Callable = run_process,
    sleep: Callable = time.sleep,
    login: bool = True,
    gentle_restart: Sequence[str] = (),
) -> InstallerResult:
    """Render the plan, write it (snapshotting what it replaces) and converge the stack.

    Raises:
        RequiredFieldError: required inputs are missing (nothing is written)
        FileOperationError: the artifacts couldn't be written
        DeploymentError: preflight, registry login, validation, pull or start failed
    """
    rendered = plan.render()
    show_summary(plan, workdir)

    snapshots = snapshot_manager(workdir, plan.options.snapshot_retention)
    written = write_artifacts(rendered, workdir, control_flow, snapshots)

    if not control_flow.should_run_install_steps():
        reason = SkipReasons.DRY_RUN if control_flow.is_dry_run() else SkipReasons.CONFIG_ONLY
        InstallerLogger.start("Rollout")
        InstallerLogger.info(control_flow.would(f"converge compose profiles {', '.join(plan.profile.compose_profiles)}"))
        InstallerLogger.end("Rollout", InstallerResult.SKIPPED, reason)
        return InstallerResult.SKIPPED

    preflight(plan.profile, runner=runner)

    if login and plan.profile.runs_compute:
        registry_login(plan.images, ui, interactive=ui.interactive, runner=runner)

    runtime = runtime or build_runtime(plan, workdir, runner=runner)
    driver = build_driver(plan, runtime, sleep=sleep)

    InstallerLogger.start("Rollout")
    try:
        driver.apply(plan.profile)
    except ComposeValidationError:
        InstallerLogger.end("Rollout", InstallerResult.FAILURE, "compose rejected the new configuration")
        restore_previous_artifacts(workdir, written)
        raise
    except DeploymentError:
        InstallerLogger.end("Rollout", InstallerResult.FAILURE)
        raise

    healthy = driver.wait_for_health(driver.primary_service(plan.profile))
    for service in gentle_restart:
        driver.gentle_restart(service)
        driver.wait_for_health(service)

    InstallerLogger.end(
        "Rollout",
        InstallerResult.SUCCESS,
        None if healthy else "started, but not every instance reported healthy",
    )
    show_public_urls(plan)
    return InstallerResult.SUCCESS
