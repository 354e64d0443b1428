#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Abstract base class for installer UI implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple


class InstallerUI(ABC):
    """Abstract base class for installer UI implementations.

    This interface decouples the installer flows from the presentation layer,
    so the same flows run against the terminal prompts or a scripted mock.
    """

    def __init__(self, non_interactive: bool = False):
        self.non_interactive = non_interactive

    @property
    def interactive(self) -> bool:
        return not self.non_interactive

    @abstractmethod
    def ask_yes_no(self, message: str, default: bool = True) -> bool:
        """Ask the user a yes/no question.

        Args:
            message: The question to ask the user
            default: Default answer if user just presses enter

        Returns:
            True for yes, False for no
        """
        pass

    @abstractmethod
    def ask_string(self, prompt: str, default: str = "") -> Optional[str]:
        """Ask the user for a string input.

        Args:
            prompt: The prompt to show the user
            default: Default value if user just presses enter

        Returns:
            The user's input string
        """
        pass

    @abstractmethod
    def ask_password(self, prompt: str, default: str = "") -> Optional[str]:
        """Ask the user for a password (hidden input)."""
        pass

    @abstractmethod
    def choose_one(self, prompt: str, choices: List[Tuple[str, str, bool]]) -> str:
        """Pick one of (tag, description, selected) choices, returning the tag."""
        pass

    @abstractmethod
    def ask_int(
        self,
        question: str,
        default: Optional[int] = None,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
    ) -> int:
        """Ask for a whole number within an inclusive range.

        Non-integers and out-of-range values are rejected and asked again; the
        default is used only for an empty reply.
        """
        pass

    def display_message(self, message: str) -> None:
        print(message)
