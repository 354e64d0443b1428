#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Unit tests for the bounded integer prompt and its use by the terminal UI."""

import unittest
from unittest.mock import call, patch

from stackctl.stack_common import AskForInt, NON_INTERACTIVE_DEFAULTS
from stackctl.installer.configs.constants.configuration_item_keys import KEY_CONFIG_ITEM_PEAK_USERS
from stackctl.installer.core.stack_config import StackConfig
from stackctl.installer.ui.shared.prompt_utils import prompt_config_item_value
from stackctl.installer.ui.tui.tui_installer_ui import TUIInstallerUI


class TestAskForInt(unittest.TestCase):
    @patch("builtins.print")
    @patch("builtins.input", side_effect=["abc", "0", "۱۲"])
    def test_rejects_until_valid(self, mock_input, mock_print):
        self.assertEqual(AskForInt("How many", default=5, minValue=1, maxValue=100), 12)
        self.assertEqual(mock_input.call_count, 3)
        mock_print.assert_has_calls(
            [
                call("'abc' is not a whole number, please try again"),
                call("0 is out of range [1-100], please try again"),
            ]
        )

    @patch("builtins.input", side_effect=["1,500"])
    def test_grouped_digits(self, mock_input):
        self.assertEqual(AskForInt("How many", minValue=1), 1500)

    @patch("builtins.input", side_effect=[""])
    def test_empty_reply_takes_default(self, mock_input):
        self.assertEqual(AskForInt("How many", default=7, minValue=1, maxValue=10), 7)
        self.assertIn("[1-10] (7)", mock_input.call_args[0][0])

    @patch("builtins.print")
    @patch("builtins.input", side_effect=["500", ""])
    def test_rejected_reply_never_becomes_default(self, mock_input, mock_print):
        self.assertEqual(AskForInt("How many", default=7, maxValue=10), 7)
        mock_print.assert_called_once_with("500 is out of range [<= 10], please try again")

    @patch("builtins.input", side_effect=["", "", "3"])
    def test_empty_reply_without_default_asks_again(self, mock_input):
        self.assertEqual(AskForInt("How many"), 3)
        self.assertEqual(mock_input.call_count, 3)

    @patch("builtins.input")
    def test_non_interactive_uses_default(self, mock_input):
        self.assertEqual(AskForInt("How many", default=9, defaultBehavior=NON_INTERACTIVE_DEFAULTS), 9)
        mock_input.assert_not_called()


class TestTUIAskInt(unittest.TestCase):
    @patch("builtins.input", side_effect=["۱۰۰۰۰"])
    def test_capacity_item_prompt(self, mock_input):
        config = StackConfig()
        ui = TUIInstallerUI()
        value = prompt_config_item_value(ui, config.get_item(KEY_CONFIG_ITEM_PEAK_USERS))
        self.assertEqual(value, 10000)
        self.assertIn("[1-10000000]", mock_input.call_args[0][0])

    @patch("builtins.input")
    def test_non_interactive_keeps_current_value(self, mock_input):
        config = StackConfig()
        config.set_value(KEY_CONFIG_ITEM_PEAK_USERS, 2500)
        ui = TUIInstallerUI(non_interactive=True)
        self.assertEqual(prompt_config_item_value(ui, config.get_item(KEY_CONFIG_ITEM_PEAK_USERS)), 2500)
        mock_input.assert_not_called()


if __name__ == "__main__":
    unittest.main()
