#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Terminal UI implementation for the installer."""

from typing import List, Optional, Tuple

from stackctl.stack_common import (
    AskForInt,
    AskForPassword,
    AskForString,
    ChooseOne,
    INTERACTIVE_DEFAULTS,
    NON_INTERACTIVE_DEFAULTS,
    YesOrNo,
)
from stackctl.installer.ui.shared.installer_ui import InstallerUI


class TUIInstallerUI(InstallerUI):
    """Terminal UI implementation using stack_common prompts."""

    @property
    def default_behavior(self):
        return NON_INTERACTIVE_DEFAULTS if self.non_interactive else INTERACTIVE_DEFAULTS

    def ask_yes_no(self, message: str, default: bool = True) -> bool:
        return YesOrNo(message, default=default, defaultBehavior=self.default_behavior)

    def ask_string(self, prompt: str, default: str = "") -> Optional[str]:
        return AskForString(prompt, default=default, defaultBehavior=self.default_behavior)

    def ask_password(self, prompt: str, default: str = "") -> Optional[str]:
        return AskForPassword(prompt, default=default, defaultBehavior=self.default_behavior)

    def choose_one(self, prompt: str, choices: List[Tuple[str, str, bool]]) -> str:
        return ChooseOne(prompt, choices=choices, defaultBehavior=self.default_behavior)

    def ask_int(
        self,
        question: str,
        default: Optional[int] = None,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
    ) -> int:
        return AskForInt(
            question,
            default=default,
            minValue=min_value,
            maxValue=max_value,
            defaultBehavior=self.default_behavior,
        )
