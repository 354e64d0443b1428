#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""stackctl command line: install, update, scale, backup-configure, registry-login, backup, restart and status."""

import os
import sys
import time

from dataclasses import dataclass
from typing import Callable, List, Optional

from stackctl.stack_utils import run_process, tablify
from stackctl.installer.actions.backup import cron_entry, dump_database, install_cron_entry, stackctl_command
from stackctl.installer.actions.deploy import (
    build_driver,
    build_runtime,
    deploy,
    show_public_urls,
)
from stackctl.installer.actions.registry import registry_login
from stackctl.installer.actions.rollout import ComposeRuntime
from stackctl.installer.actions.shared import (
    artifact_paths,
    resolve_workdir,
    snapshot_manager,
    write_artifacts,
)
from stackctl.installer.args.subcommand_args import (
    SUBCOMMAND_BACKUP,
    SUBCOMMAND_BACKUP_CONFIGURE,
    SUBCOMMAND_INSTALL,
    SUBCOMMAND_REGISTRY_LOGIN,
    SUBCOMMAND_RESTART,
    SUBCOMMAND_SCALE,
    SUBCOMMAND_STATUS,
    SUBCOMMAND_UPDATE,
    build_arg_parser,
)
from stackctl.installer.configs.constants.configuration_item_keys import (
    KEY_CONFIG_ITEM_IMAGE_TAG,
    KEY_CONFIG_ITEM_PEAK_USERS,
    KEY_CONFIG_ITEM_REQUESTS_PER_MINUTE,
)
from stackctl.installer.configs.constants.constants import ARTIFACT_ENV, ENV_FILENAME
from stackctl.installer.configs.constants.enums import ControlFlow, InstallerResult
from stackctl.installer.core.stack_config import DeploymentPlan, StackConfig
from stackctl.installer.core.validation import format_validation_summary
from stackctl.installer.ui.shared.config_prompts import (
    prompt_all,
    prompt_backup_settings,
    prompt_capacity,
)
from stackctl.installer.ui.tui.tui_installer_ui import TUIInstallerUI
from stackctl.installer.utils.exceptions import FileOperationError, RequiredFieldError, StackConfigError
from stackctl.installer.utils.logger_utils import InstallerLogger, SkipReasons
from stackctl.installer.utils.summary_utils import build_status_rows


@dataclass
class CommandContext:
    """What every subcommand handler works with."""

    args: object
    ui: object
    control_flow: ControlFlow
    runner: Callable = run_process
    runtime: Optional[ComposeRuntime] = None
    sleep: Callable = time.sleep
    workdir: str = ""


def determine_control_flow(args) -> ControlFlow:
    if args.dryRun:
        return ControlFlow.DRYRUN
    elif args.configOnly:
        return ControlFlow.CONFIG
    return ControlFlow.INSTALL


def configure_logging(args) -> None:
    if args.quiet:
        InstallerLogger.set_console_output(False)
    if args.debug:
        InstallerLogger.set_debug_enabled(True)
    if args.logToFile is not None:
        log_filename = args.logToFile or InstallerLogger.generate_timestamped_filename()
        InstallerLogger.set_log_file(log_filename)
        InstallerLogger.info(f"Logging to file: {log_filename}")


def load_stack_config(workdir: str, overrides: List[str], require_existing: bool = True) -> StackConfig:
    """Load the persisted .env of a working directory, then apply --set overrides.

    Raises:
        FileOperationError: require_existing and the working directory has no .env
    """
    stack_config = StackConfig()
    env_path = artifact_paths(workdir)[ARTIFACT_ENV]
    if os.path.isfile(env_path):
        stack_config.load_from_env_file(env_path)
    elif require_existing:
        raise FileOperationError(f"No {ENV_FILENAME} found in {workdir}; run 'stackctl install' first")
    stack_config.apply_overrides(overrides)
    return stack_config


def _plan(stack_config: StackConfig) -> DeploymentPlan:
    stack_config.ensure_generated_secrets(stack_config.resolve_profile())
    return stack_config.build_plan()


def _deploy(ctx: CommandContext, plan: DeploymentPlan, **kwargs) -> InstallerResult:
    return deploy(
        plan,
        ctx.workdir,
        ctx.control_flow,
        ctx.ui,
        runtime=ctx.runtime,
        runner=ctx.runner,
        sleep=ctx.sleep,
        **kwargs,
    )


def _runtime(ctx: CommandContext, plan: DeploymentPlan) -> ComposeRuntime:
    return ctx.runtime or build_runtime(plan, ctx.workdir, runner=ctx.runner)


###################################################################################################
# subcommand handlers; each returns the process exit code


def cmd_install(ctx: CommandContext) -> int:
    stack_config = load_stack_config(ctx.workdir, ctx.args.overrides, require_existing=False)
    if stack_config.env_file_loaded:
        InstallerLogger.info(f"Using existing settings from {stack_config.env_file_loaded} as defaults")
    prompt_all(ctx.ui, stack_config)
    _deploy(ctx, _plan(stack_config))
    return 0


def cmd_update(ctx: CommandContext) -> int:
    stack_config = load_stack_config(ctx.workdir, ctx.args.overrides)
    if ctx.args.imageTag:
        stack_config.set_value(KEY_CONFIG_ITEM_IMAGE_TAG, ctx.args.imageTag)
    _deploy(ctx, _plan(stack_config), gentle_restart=ctx.args.gentleRestart)
    return 0


def cmd_scale(ctx: CommandContext) -> int:
    stack_config = load_stack_config(ctx.workdir, ctx.args.overrides)
    profile = stack_config.resolve_profile()
    if not profile.needs_capacity:
        InstallerLogger.info(f"The {profile.role.value} role runs no scalable services; nothing to scale")
        return 0
    if ctx.args.peakUsers is not None:
        stack_config.set_value(KEY_CONFIG_ITEM_PEAK_USERS, ctx.args.peakUsers)
    if ctx.args.requestsPerMinute is not None:
        stack_config.set_value(KEY_CONFIG_ITEM_REQUESTS_PER_MINUTE, ctx.args.requestsPerMinute)
    prompt_capacity(ctx.ui, stack_config, profile)
    _deploy(ctx, _plan(stack_config), login=False)
    return 0


def cmd_backup_configure(ctx: CommandContext) -> int:
    stack_config = load_stack_config(ctx.workdir, ctx.args.overrides)
    prompt_backup_settings(ctx.ui, stack_config)
    plan = _plan(stack_config)
    snapshots = snapshot_manager(ctx.workdir, plan.options.snapshot_retention)
    write_artifacts(plan.render(), ctx.workdir, ctx.control_flow, snapshots)

    entry = cron_entry(plan.options.backup_schedule, ctx.workdir, command=stackctl_command())
    InstallerLogger.start("Backup Schedule")
    if not ctx.control_flow.should_run_install_steps():
        InstallerLogger.info(ctx.control_flow.would(f"install crontab entry: {entry}"))
        InstallerLogger.end(
            "Backup Schedule",
            InstallerResult.SKIPPED,
            SkipReasons.DRY_RUN if ctx.control_flow.is_dry_run() else SkipReasons.CONFIG_ONLY,
        )
        return 0
    result = install_cron_entry(entry, runner=ctx.runner)
    InstallerLogger.end("Backup Schedule", result)
    return 1 if result == InstallerResult.FAILURE else 0


def cmd_registry_login(ctx: CommandContext) -> int:
    stack_config = load_stack_config(ctx.workdir, ctx.args.overrides)
    plan = stack_config.build_plan()
    if ctx.control_flow.is_dry_run():
        InstallerLogger.info(ctx.control_flow.would(f"log in to {plan.images.registry}"))
        return 0
    result = registry_login(plan.images, ctx.ui, interactive=ctx.ui.interactive, runner=ctx.runner)
    return 0 if result == InstallerResult.SUCCESS else 1


def cmd_backup(ctx: CommandContext) -> int:
    stack_config = load_stack_config(ctx.workdir, ctx.args.overrides)
    plan = stack_config.build_plan()
    if ctx.control_flow.is_dry_run():
        InstallerLogger.info(ctx.control_flow.would("snapshot the configuration and dump the database"))
        return 0

    InstallerLogger.start("Backup")
    snapshots = snapshot_manager(ctx.workdir, plan.options.snapshot_retention)
    snapshots.maybe_snapshot(artifact_paths(ctx.workdir))

    if not plan.profile.runs_data:
        InstallerLogger.end("Backup", InstallerResult.SKIPPED, SkipReasons.NOT_DATA_NODE)
        return 0

    dump_path = dump_database(
        _runtime(ctx, plan),
        ctx.workdir,
        plan.credentials.postgres_user,
        plan.credentials.postgres_db,
        plan.options.backup_retention,
    )
    if dump_path is None:
        InstallerLogger.end("Backup", InstallerResult.FAILURE, "database dump failed")
        return 1
    InstallerLogger.end("Backup", InstallerResult.SUCCESS, dump_path)
    return 0


def cmd_restart(ctx: CommandContext) -> int:
    stack_config = load_stack_config(ctx.workdir, ctx.args.overrides)
    plan = stack_config.build_plan()
    service = ctx.args.service
    if ctx.control_flow.is_dry_run():
        InstallerLogger.info(ctx.control_flow.would(f"restart {service} one container at a time"))
        return 0
    driver = build_driver(plan, _runtime(ctx, plan), sleep=ctx.sleep)
    if driver.gentle_restart(service):
        driver.wait_for_health(service)
    return 0


def cmd_status(ctx: CommandContext) -> int:
    stack_config = load_stack_config(ctx.workdir, ctx.args.overrides)
    plan = stack_config.build_plan()
    tablify(build_status_rows(_runtime(ctx, plan), plan.profile))
    show_public_urls(plan)
    return 0


SUBCOMMAND_HANDLERS = {
    SUBCOMMAND_INSTALL: cmd_install,
    SUBCOMMAND_UPDATE: cmd_update,
    SUBCOMMAND_SCALE: cmd_scale,
    SUBCOMMAND_BACKUP_CONFIGURE: cmd_backup_configure,
    SUBCOMMAND_REGISTRY_LOGIN: cmd_registry_login,
    SUBCOMMAND_BACKUP: cmd_backup,
    SUBCOMMAND_RESTART: cmd_restart,
    SUBCOMMAND_STATUS: cmd_status,
}


def main(
    argv: Optional[List[str]] = None,
    ui=None,
    runner: Callable = run_process,
    runtime: Optional[ComposeRuntime] = None,
    sleep: Callable = time.sleep,
) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args)

    InstallerLogger.debug(f"Arguments: {args}")

    ctx = CommandContext(
        args=args,
        ui=ui or TUIInstallerUI(non_interactive=args.non_interactive),
        control_flow=determine_control_flow(args),
        runner=runner,
        runtime=runtime,
        sleep=sleep,
    )

    try:
        ctx.workdir = resolve_workdir(args.workdir, ctx.ui, interactive=ctx.ui.interactive)
        InstallerLogger.debug(f"Working directory: {ctx.workdir}")
        return SUBCOMMAND_HANDLERS[args.command](ctx)
    except KeyboardInterrupt:
        InstallerLogger.error("Cancelled by user.")
        return 130
    except RequiredFieldError as e:
        InstallerLogger.error(format_validation_summary(e.issues))
        return 1
    except StackConfigError as e:
        InstallerLogger.error(str(e))
        return 1
    except EOFError:
        InstallerLogger.error("Input closed while waiting for an answer; use --non-interactive for unattended runs")
        return 1


if __name__ == "__main__":
    sys.exit(main())
