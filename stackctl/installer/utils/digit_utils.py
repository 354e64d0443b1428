#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Normalization of operator-typed numbers.

Operators may type digits in the Eastern Arabic-Indic (۰-۹) or Arabic-Indic
(٠-٩) scripts and may group thousands with separators. Everything here is
digit substitution only; there is no locale-aware parsing.
"""

import re
from typing import Optional

# U+06F0..U+06F9 and U+0660..U+0669 to ASCII
_DIGIT_TRANSLATION = {
    **{0x06F0 + i: str(i) for i in range(10)},
    **{0x0660 + i: str(i) for i in range(10)},
}

# comma, Arabic thousands separator (U+066C), Arabic comma (U+060C)
THOUSANDS_SEPARATORS = (",", "٬", "،")
for _sep in THOUSANDS_SEPARATORS:
    _DIGIT_TRANSLATION[ord(_sep)] = None

_INT_RE = re.compile(r"^[+-]?[0-9]+$")


def normalize_digits(value: str) -> str:
    """Map non-ASCII digits to ASCII and strip thousands separators.

    Unrecognised characters pass through unchanged; this never raises.
    """
    if value is None:
        return ""
    return str(value).translate(_DIGIT_TRANSLATION)


def parse_int(value) -> Optional[int]:
    """Parse a (possibly non-ASCII, possibly grouped) decimal integer.

    Returns None when the normalized text is not a plain signed integer.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    normalized = normalize_digits(value).strip()
    if not _INT_RE.match(normalized):
        return None
    return int(normalized)
