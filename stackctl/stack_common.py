#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import getpass
import io
import os
import sys

from enum import IntFlag, auto
from typing import Dict, Optional

from dotenv import dotenv_values
from ruamel.yaml import YAML

from stackctl.stack_utils import str2bool
from stackctl.installer.utils.digit_utils import parse_int


###################################################################################################
class UserInputDefaultsBehavior(IntFlag):
    DefaultsPrompt = auto()
    DefaultsAccept = auto()
    DefaultsNonInteractive = auto()


INTERACTIVE_DEFAULTS = UserInputDefaultsBehavior.DefaultsPrompt | UserInputDefaultsBehavior.DefaultsAccept
NON_INTERACTIVE_DEFAULTS = INTERACTIVE_DEFAULTS | UserInputDefaultsBehavior.DefaultsNonInteractive


def _accepts_defaults_silently(defaultBehavior):
    return (defaultBehavior & UserInputDefaultsBehavior.DefaultsAccept) and (
        defaultBehavior & UserInputDefaultsBehavior.DefaultsNonInteractive
    )


###################################################################################################
class NullRepresenter:
    def __call__(self, repr, data):
        ret_val = repr.represent_scalar(u'tag:yaml.org,2002:null', u'')
        return ret_val


def _round_trip_yaml():
    rtYaml = YAML(typ='rt')
    rtYaml.boolean_representation = ['false', 'true']
    rtYaml.preserve_quotes = False
    rtYaml.representer.ignore_aliases = lambda *args: True
    rtYaml.representer.add_representer(type(None), NullRepresenter())
    rtYaml.width = sys.maxsize
    rtYaml.indent(mapping=2, sequence=4, offset=2)
    return rtYaml


###################################################################################################
def LoadYamlStr(data):
    return _round_trip_yaml().load(data)


###################################################################################################
def DumpYamlStr(data):
    stream = io.StringIO()
    _round_trip_yaml().dump(data, stream)
    return stream.getvalue()


###################################################################################################
# parse a KEY=value environment file, returning an empty dict if it doesn't exist
def LoadEnvFile(envFileName) -> Dict[str, Optional[str]]:
    if envFileName and os.path.isfile(envFileName):
        return dict(dotenv_values(envFileName, encoding='utf-8'))
    else:
        return {}


###################################################################################################
# get interactive user response to Y/N question
def YesOrNo(
    question,
    default=None,
    defaultBehavior=INTERACTIVE_DEFAULTS,
):
    if (default is not None) and _accepts_defaults_silently(defaultBehavior):
        return bool(str2bool(default))

    if (default is not None) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsPrompt):
        questionStr = f"\n{question} ({'Y / n' if str2bool(default) else 'y / N'}): "
    else:
        questionStr = f"\n{question} (y / n): "

    while True:
        reply = str(input(questionStr)).lower().strip()
        if len(reply) > 0:
            try:
                return str2bool(reply)
            except ValueError:
                pass
        elif (defaultBehavior & UserInputDefaultsBehavior.DefaultsAccept) and (default is not None):
            return bool(str2bool(default))


###################################################################################################
# get interactive user response
def AskForString(
    question,
    default=None,
    defaultBehavior=INTERACTIVE_DEFAULTS,
):
    if (default is not None) and _accepts_defaults_silently(defaultBehavior):
        return default

    showDefault = (default is not None) and (len(str(default)) > 0) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsPrompt)
    reply = str(input(f"\n{question}{f' ({default})' if showDefault else ''}: ")).strip()
    if (len(reply) == 0) and (default is not None) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsAccept):
        reply = default

    return reply


###################################################################################################
# get interactive password (without echoing)
def AskForPassword(
    prompt,
    default=None,
    defaultBehavior=INTERACTIVE_DEFAULTS,
):
    if (default is not None) and _accepts_defaults_silently(defaultBehavior):
        return default

    reply = getpass.getpass(prompt=f"{prompt}: ")
    if (len(reply) == 0) and (default is not None) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsAccept):
        reply = default

    return reply


###################################################################################################
# Choose one of many.
# choices - an iterable of (tag, item, status) tuples where status specifies the initial
# selected/unselected state of each entry. No more than one entry should be set to True.
def ChooseOne(
    prompt,
    choices=[],
    defaultBehavior=INTERACTIVE_DEFAULTS,
):
    validChoices = [x for x in choices if len(x) == 3 and isinstance(x[0], str) and isinstance(x[2], bool)]
    defaulted = next(iter([x for x in validChoices if x[2] is True]), None)

    if _accepts_defaults_silently(defaultBehavior):
        return defaulted[0] if defaulted is not None else ""

    print()
    for index, choice in enumerate(validChoices, start=1):
        print(f"{index}: {choice[0]}{f' - {choice[1]}' if isinstance(choice[1], str) and len(choice[1]) > 0 else ''}")
    showDefault = (defaulted is not None) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsPrompt)
    while True:
        inputRaw = input(f"{prompt}{f' ({defaulted[0]})' if showDefault else ''}: ").strip()
        if (
            (len(inputRaw) == 0)
            and (defaulted is not None)
            and (defaultBehavior & UserInputDefaultsBehavior.DefaultsAccept)
        ):
            return defaulted[0]
        elif (inputIndex := parse_int(inputRaw)) is not None:
            if 0 < inputIndex <= len(validChoices):
                return validChoices[inputIndex - 1][0]
        elif inputRaw in [x[0] for x in validChoices]:
            return inputRaw


###################################################################################################
# get an integer within an inclusive range, re-prompting until one is given; an empty reply
# takes the default, a rejected reply never does
def AskForInt(
    question,
    default=None,
    minValue=None,
    maxValue=None,
    defaultBehavior=INTERACTIVE_DEFAULTS,
):
    if (default is not None) and _accepts_defaults_silently(defaultBehavior):
        return default

    if (minValue is not None) and (maxValue is not None):
        rangeStr = f" [{minValue}-{maxValue}]"
    elif minValue is not None:
        rangeStr = f" [>= {minValue}]"
    elif maxValue is not None:
        rangeStr = f" [<= {maxValue}]"
    else:
        rangeStr = ""
    showDefault = (default is not None) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsPrompt)
    questionStr = f"\n{question}{rangeStr}{f' ({default})' if showDefault else ''}: "

    while True:
        reply = str(input(questionStr)).strip()
        if len(reply) == 0:
            if (default is not None) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsAccept):
                return default
            continue
        value = parse_int(reply)
        if value is None:
            print(f"'{reply}' is not a whole number, please try again")
        elif ((minValue is not None) and (value < minValue)) or ((maxValue is not None) and (value > maxValue)):
            print(f"{value} is out of range{rangeStr}, please try again")
        else:
            return value
