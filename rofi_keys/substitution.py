"""Execution-time substitution inside command strings.

Substitution (``$(xclip -o)``, ``$HOME`` and friends) is left to the shell
that runs the command, so it happens once, at launch, and never while the
config is loaded.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_SUBSTITUTION_RE = re.compile(
    r"""
    \$\((?:[^()]|\([^()]*\))*\)   # $(command), one level of nesting
    | `[^`]*`                     # `command`
    | \$\{[^}]+\}                 # ${VAR}
    | \$[A-Za-z_][A-Za-z0-9_]*    # $VAR
    """,
    re.VERBOSE,
)


def find_substitutions(template: str) -> list[str]:
    """Return the substitution spans the shell will evaluate, in order."""
    spans: list[str] = []
    in_single = False
    in_double = False
    pos = 0
    while pos < len(template):
        char = template[pos]
        if char == "\\" and not in_single:
            pos += 2
            continue
        if char == "'" and not in_double:
            in_single = not in_single
            pos += 1
            continue
        if char == '"' and not in_single:
            in_double = not in_double
            pos += 1
            continue
        if not in_single:
            match = _SUBSTITUTION_RE.match(template, pos)
            if match:
                spans.append(match.group(0))
                pos = match.end()
                continue
        pos += 1
    return spans


def expand(template: str) -> str:
    """Return the command to hand to the shell.

    The string is passed through untouched; this is the single point where
    a command becomes final before it is spawned.
    """
    spans = find_substitutions(template)
    if spans:
        logger.debug("deferring %d substitution(s) to the shell: %s", len(spans), spans)
    return template
