#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import contextlib
import hashlib
import ipaddress
import os
import re
import shutil
import socket
import string
import subprocess
import sys
import tempfile
import time

from collections.abc import Iterable
from typing import List, Optional, Tuple


###################################################################################################
# test if a local or remote port is accepting connections
def check_socket(host, port, timeout=3):
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as sock:
        sock.settimeout(timeout)
        if sock.connect_ex((host, port)) == 0:
            return True
        else:
            return False


###################################################################################################
# flatten a collection, but don't split strings
def flatten(coll):
    for i in coll:
        if isinstance(i, Iterable) and not isinstance(i, str):
            for subc in flatten(i):
                yield subc
        else:
            yield i


###################################################################################################
# if the object is an iterable, return it, otherwise return a tuple with it as a single element.
# useful if you want to user either a scalar or an array in a loop, etc.
def get_iterable(x):
    if isinstance(x, Iterable) and not isinstance(x, str):
        return x
    else:
        return (x,)


###################################################################################################
# calculate a sha256 hash of a file
def sha256sum(filename):
    h = hashlib.sha256()
    b = bytearray(64 * 1024)
    mv = memoryview(b)
    with open(filename, "rb", buffering=0) as f:
        for n in iter(lambda: f.readinto(mv), 0):
            h.update(mv[:n])
    return h.hexdigest()


###################################################################################################
# convenient boolean argument parsing
def str2bool(v):
    if isinstance(v, bool):
        return v
    elif isinstance(v, str):
        if v.lower() in ("yes", "true", "t", "y", "1"):
            return True
        elif v.lower() in ("no", "false", "f", "n", "0", ""):
            return False
        else:
            raise ValueError("Boolean value expected")
    elif not v:
        return False
    else:
        raise ValueError("Boolean value expected")


def bool_to_str(v):
    if isinstance(v, bool):
        return "true" if v else "false"
    else:
        return str(v)


###################################################################################################
# read the contents of a text file, or None if it doesn't exist
def file_contents(filename, encoding="utf-8"):
    if os.path.isfile(filename):
        with open(filename, "r", encoding=encoding) as f:
            return f.read()
    else:
        return None


###################################################################################################
# run command with arguments and return its exit code and output
def run_process(
    command,
    stdin: Optional[str] = None,
    retry: int = 0,
    retry_sleep_sec: int = 5,
    stderr: bool = True,
    cwd: Optional[str] = None,
    env: Optional[dict] = None,
) -> Tuple[int, List[str]]:
    retcode = -1
    output = []
    flat_command = [str(x) for x in flatten(get_iterable(command))]

    for i in range(retry + 1):
        output = []
        try:
            process = subprocess.run(
                flat_command,
                input=stdin,
                capture_output=True,
                check=False,
                text=True,
                errors="ignore",
                cwd=cwd,
                env=env,
            )
            retcode = process.returncode
            if process.stdout:
                output.extend(process.stdout.splitlines())
            if stderr and process.stderr:
                output.extend(process.stderr.splitlines())
        except FileNotFoundError:
            output = [f"Command {' '.join(flat_command)} not found or unable to execute"]
            retcode = 127
            break
        except OSError as e:
            output = [f"Error executing command {' '.join(flat_command)}: {e}"]
            retcode = 1

        if (retcode == 0) or (i >= retry):
            break
        time.sleep(retry_sleep_sec)

    return retcode, output


###################################################################################################
# run command with its stdout streamed as bytes into output_file; returns exit code and stderr lines
def run_process_to_file(
    command,
    output_file,
    cwd: Optional[str] = None,
    env: Optional[dict] = None,
    chunk_size: int = 1024 * 1024,
) -> Tuple[int, List[str]]:
    flat_command = [str(x) for x in flatten(get_iterable(command))]
    try:
        # stderr goes to a temporary file so a chatty command can't block on a full pipe
        with tempfile.TemporaryFile() as err_file:
            with subprocess.Popen(flat_command, stdout=subprocess.PIPE, stderr=err_file, cwd=cwd, env=env) as process:
                shutil.copyfileobj(process.stdout, output_file, chunk_size)
                retcode = process.wait()
            err_file.seek(0)
            errors = err_file.read().decode("utf-8", errors="replace").splitlines()
    except FileNotFoundError:
        return 127, [f"Command {' '.join(flat_command)} not found or unable to execute"]
    except OSError as e:
        return 1, [f"Error executing command {' '.join(flat_command)}: {e}"]
    return retcode, errors


###################################################################################################
def contains_whitespace(s):
    return True in [c in s for c in string.whitespace]


###################################################################################################
def isipaddress(value):
    result = True
    try:
        if isinstance(value, list) or isinstance(value, tuple) or isinstance(value, set):
            for v in value:
                ipaddress.ip_address(v)
        else:
            ipaddress.ip_address(value)
    except ValueError:
        result = False
    return result


###################################################################################################
_HOSTNAME_LABEL_RE = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


# RFC 1123 hostname (or IP address)
def is_valid_hostname(value):
    if not isinstance(value, str) or not value or len(value) > 253:
        return False
    if isipaddress(value):
        return True
    return all(_HOSTNAME_LABEL_RE.match(label) for label in value.rstrip(".").split("."))


###################################################################################################
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_email(value):
    return isinstance(value, str) and (_EMAIL_RE.match(value) is not None)


###################################################################################################
# five whitespace-separated cron fields (or a @macro like @daily)
_CRON_FIELD_RE = re.compile(r"^[0-9A-Za-z*/,\-]+$")
_CRON_MACROS = ("@yearly", "@annually", "@monthly", "@weekly", "@daily", "@midnight", "@hourly")


def is_valid_cron_expression(value):
    if not isinstance(value, str):
        return False
    expression = value.strip()
    if expression in _CRON_MACROS:
        return True
    fields = expression.split()
    return (len(fields) == 5) and all(_CRON_FIELD_RE.match(f) for f in fields)


###################################################################################################
def tablify(matrix, file=sys.stdout):
    colMaxLen = {i: max(map(len, inner)) for i, inner in enumerate(zip(*matrix))}
    for row in matrix:
        for col, data in enumerate(row):
            print(f"{data:{colMaxLen[col]}}", end=" | ", file=file)
        print(file=file)
