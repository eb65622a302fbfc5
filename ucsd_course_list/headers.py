"""
Resolve a course header such as "CSE 101. Design and Analysis of Algorithms (4)"
into (code, name, units).

No single pattern fits every department, so headers go through a fixed,
ordered list of rules and the first one that matches wins:

1. JOINT             "(ETHN/MUS) 178. Listening Across Cultures (4)"
2. JOINT_NO_UNITS    "(ETHN/MUS) 199. Independent Study"
3. IRREGULAR         "COMM XL Study of 20th Century Media (4)"
4. GENERAL           "CSE 101. Design and Analysis of Algorithms (4)"
5. GENERAL_NO_UNITS  "CSE 199. Independent Study"

The JOINT and IRREGULAR rules come first because GENERAL would mis-split both.
"""
from __future__ import annotations

import enum
import re
from typing import Dict, Optional, Tuple

from .errors import UnrecognizedHeader
from .records import HeaderFields

# Department whose independent-study listings use a two-token code whose
# second token may carry no digit at all ("COMM XL").
IRREGULAR_DEPARTMENT = "COMM"

_UNITS = r"\s*\((?P<units>[^()]+)\)\s*$"
_CODE = r"(?P<code>[A-Za-z0-9/\- ]*?\d[A-Za-z0-9/\-]*)"
_JOINT_PREFIX = (
    r"^\((?P<programs>[^()]+)\)\s*"
    r"(?P<number>[A-Za-z]*\s*\d[A-Za-z0-9\-]*)[.:]?\s+"
)


class ParseRule(enum.Enum):
    JOINT = "joint"
    JOINT_NO_UNITS = "joint_no_units"
    IRREGULAR = "irregular"
    GENERAL = "general"
    GENERAL_NO_UNITS = "general_no_units"


# Priority order; do not reorder.
RULE_ORDER: Tuple[ParseRule, ...] = (
    ParseRule.JOINT,
    ParseRule.JOINT_NO_UNITS,
    ParseRule.IRREGULAR,
    ParseRule.GENERAL,
    ParseRule.GENERAL_NO_UNITS,
)

_PATTERNS: Dict[ParseRule, re.Pattern] = {
    ParseRule.JOINT: re.compile(_JOINT_PREFIX + r"(?P<name>.+?)" + _UNITS),
    ParseRule.JOINT_NO_UNITS: re.compile(_JOINT_PREFIX + r"(?P<name>.+?)\s*$"),
    ParseRule.IRREGULAR: re.compile(
        r"^(?P<code>" + IRREGULAR_DEPARTMENT + r"\s+\S+?)[.:]?\s+"
        r"(?P<name>.+?)" + _UNITS
    ),
    ParseRule.GENERAL: re.compile(
        r"^" + _CODE + r"[.:\s]\s*(?P<name>.+?)" + _UNITS
    ),
    ParseRule.GENERAL_NO_UNITS: re.compile(
        r"^" + _CODE + r"[.:\s]\s*(?P<name>.+?)\s*$"
    ),
}

# Lexical cue that must hold before a rule is tried at all.
_CUES = {
    ParseRule.JOINT: lambda text: text.startswith("("),
    ParseRule.JOINT_NO_UNITS: lambda text: text.startswith("("),
    ParseRule.IRREGULAR: lambda text: text.startswith(IRREGULAR_DEPARTMENT + " "),
}


def _apply_rule(rule: ParseRule, text: str) -> Optional[HeaderFields]:
    """Return the captured fields, or None unless every group captured something."""
    cue = _CUES.get(rule)
    if cue is not None and not cue(text):
        return None
    m = _PATTERNS[rule].match(text)
    if not m:
        return None
    groups = m.groupdict()
    if any(v is None or not v.strip() for v in groups.values()):
        return None

    if rule in (ParseRule.JOINT, ParseRule.JOINT_NO_UNITS):
        code = f"{groups['programs'].strip()} {groups['number'].strip()}"
    else:
        code = groups["code"].strip()
    units = (groups.get("units") or "").strip()
    return HeaderFields(code=code, name=groups["name"].strip(), units=units)


def match_rule(name_text: str) -> Tuple[ParseRule, HeaderFields]:
    """Like parse_header, but also report which rule matched."""
    text = name_text.strip()
    for rule in RULE_ORDER:
        fields = _apply_rule(rule, text)
        if fields is not None:
            return rule, fields
    raise UnrecognizedHeader(name_text)


def parse_header(name_text: str) -> HeaderFields:
    """
    Split a decoded, tag-free course header into (code, name, units).

    units is "" when the header carries no trailing unit count.
    Raises UnrecognizedHeader if no rule matches.
    """
    return match_rule(name_text)[1]


def course_number(code: str, department: str) -> str:
    """Drop the leading department token from a parsed code ("CSE 101" -> "101")."""
    prefix = department + " "
    if code.upper().startswith(prefix.upper()) and len(code) > len(prefix):
        return code[len(prefix):].strip()
    return code
