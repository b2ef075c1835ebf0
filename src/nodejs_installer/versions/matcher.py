"""Version constraint matching for Node.js releases.

Version parsing and precedence come from ``semver``; this module only
translates constraint expressions into comparator sets.

Supported expressions:
- alternatives separated by ``||`` (any alternative may match)
- terms separated by ``,`` or whitespace inside an alternative (all must match)
- ``*``, ``x`` or an empty string (any version)
- comparators ``>=1.2.3``, ``>1.2``, ``<=2``, ``<2.0.0``, ``=1.2.3``, ``!=1.2.3``
- x-ranges ``1.x``, ``1.2.*`` and bare partial versions (``14`` is ``14.x``)
- caret ranges ``^x.y.z`` and tilde ranges ``~x.y.z`` with npm semantics
  (``~1.2`` is ``>=1.2.0 <1.3.0``, not Composer's ``<2.0``)
- hyphen ranges ``1.2.3 - 2.3``
"""

from __future__ import annotations

import logging
import operator
import re
from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from semver import Version

from ..errors import ConstraintSyntaxError

logger = logging.getLogger(__name__)

Comparator = Tuple[str, Version]
Alternative = Tuple[Comparator, ...]
Partial = Tuple[Optional[int], Optional[int], Optional[int], Optional[str]]

_OPERATORS: Dict[str, Callable[[Version, Version], bool]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
}

_TERM_RE = re.compile(r"^(>=|<=|>|<|==|=|!=|\^|~>?)?\s*v?(.+)$")
_PARTIAL_RE = re.compile(
    r"^(\d+|[xX*])(?:\.(\d+|[xX*]))?(?:\.(\d+|[xX*]))?"
    r"(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"
)
_HYPHEN_RE = re.compile(r"^(\S+)\s+-\s+(\S+)$")
_ALTERNATIVE_SPLIT = re.compile(r"\s*\|\|?\s*")
_WILDCARDS = {"", "*", "x", "X"}

# No release is lower than 0.0.0, so this comparator rejects everything
_NOTHING: Comparator = ("<", Version(0, 0, 0))


def parse_version(version: str) -> Optional[Version]:
    """Parse a release version (``v`` prefix and partial forms allowed)."""
    text = version.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    try:
        return Version.parse(text, optional_minor_and_patch=True)
    except (ValueError, TypeError):
        return None


def _parse_partial(text: str, constraint: str, term: str) -> Partial:
    match = _PARTIAL_RE.match(text)
    if not match:
        raise ConstraintSyntaxError(constraint, term)

    parts: List[Optional[int]] = []
    for group in match.group(1, 2, 3):
        # Everything after a wildcard is a wildcard too
        if group is None or group in _WILDCARDS or (parts and parts[-1] is None):
            parts.append(None)
        else:
            parts.append(int(group))

    return parts[0], parts[1], parts[2], match.group(4)


def _floor(partial: Partial) -> Version:
    major, minor, patch, prerelease = partial
    return Version(major or 0, minor or 0, patch or 0, prerelease=prerelease)


def _next_up(partial: Partial) -> Version:
    """First version above every version the partial covers."""
    major, minor, _, _ = partial
    if minor is None:
        return Version(major + 1, 0, 0)
    return Version(major, minor + 1, 0)


def _x_range(partial: Partial) -> Alternative:
    major, minor, patch, _ = partial
    if major is None:
        return ()
    if patch is None:
        return ((">=", _floor(partial)), ("<", _next_up(partial)))
    return (("==", _floor(partial)),)


def _comparator(op: str, partial: Partial) -> Alternative:
    major, _, patch, _ = partial
    if op in ("", "=", "=="):
        return _x_range(partial)
    if major is None:
        return () if op in (">=", "<=") else (_NOTHING,)
    if patch is not None:
        return ((op, _floor(partial)),)
    if op == ">":
        return ((">=", _next_up(partial)),)
    if op == "<=":
        return (("<", _next_up(partial)),)
    return ((op, _floor(partial)),)


def _tilde(partial: Partial) -> Alternative:
    major, minor, _, _ = partial
    if major is None:
        return ()
    upper = Version(major + 1, 0, 0) if minor is None else Version(major, minor + 1, 0)
    return ((">=", _floor(partial)), ("<", upper))


def _caret(partial: Partial) -> Alternative:
    major, minor, patch, _ = partial
    if major is None:
        return ()
    if major > 0 or minor is None:
        upper = Version(major + 1, 0, 0)
    elif minor > 0 or patch is None:
        upper = Version(0, minor + 1, 0)
    else:
        upper = Version(0, 0, patch + 1)
    return ((">=", _floor(partial)), ("<", upper))


def _parse_term(term: str, constraint: str) -> Alternative:
    if term in _WILDCARDS:
        return ()

    match = _TERM_RE.match(term)
    if not match:
        raise ConstraintSyntaxError(constraint, term)

    op = match.group(1) or ""
    partial = _parse_partial(match.group(2).strip(), constraint, term)

    if op == "^":
        return _caret(partial)
    if op.startswith("~"):
        return _tilde(partial)
    return _comparator(op, partial)


def _tokenize(group: str) -> List[str]:
    """Split a comparator group on whitespace, keeping ``>= 1.0`` together."""
    tokens: List[str] = []
    pending = ""
    for token in group.split():
        if token in _OPERATORS or token in ("=", "^", "~", "~>"):
            pending += token
            continue
        tokens.append(pending + token)
        pending = ""
    if pending:
        tokens.append(pending)
    return tokens


def _parse_alternative(alternative: str, constraint: str) -> Alternative:
    comparators: List[Comparator] = []

    for group in alternative.split(","):
        group = group.strip()
        hyphen = _HYPHEN_RE.match(group)
        if hyphen:
            lower = _parse_partial(hyphen.group(1).lstrip("vV"), constraint, group)
            upper = _parse_partial(hyphen.group(2).lstrip("vV"), constraint, group)
            comparators.extend(_comparator(">=", lower))
            comparators.extend(_comparator("<=", upper))
            continue

        for token in _tokenize(group):
            comparators.extend(_parse_term(token, constraint))

    return tuple(comparators)


@lru_cache(maxsize=128)
def parse_constraint(constraint: str) -> Tuple[Alternative, ...]:
    """Compile a constraint into alternatives of comparators.

    Raises:
        ConstraintSyntaxError: If a term cannot be parsed
    """
    return tuple(
        _parse_alternative(alternative, constraint)
        for alternative in _ALTERNATIVE_SPLIT.split(constraint.strip())
    )


def _satisfies(version: Version, alternatives: Tuple[Alternative, ...]) -> bool:
    return any(
        all(_OPERATORS[op](version, bound) for op, bound in alternative)
        for alternative in alternatives
    )


class VersionMatcher:
    """Decides which Node.js versions satisfy a constraint.

    Constraints follow the npm range dialect, including ``~``, even when
    they come from Composer-style package metadata.
    """

    def is_version_matching(self, version: str, constraint: str) -> bool:
        """Check whether ``version`` satisfies ``constraint``.

        Unparseable versions never match.

        Raises:
            ConstraintSyntaxError: If the constraint cannot be parsed
        """
        alternatives = parse_constraint(constraint)
        parsed = parse_version(version)
        if parsed is None:
            logger.debug("Ignoring invalid version '%s'", version)
            return False
        return _satisfies(parsed, alternatives)

    def find_best_matching_version(
        self,
        versions: Iterable[str],
        constraint: str,
    ) -> Optional[str]:
        """Return the highest version satisfying ``constraint``, or None.

        Raises:
            ConstraintSyntaxError: If the constraint cannot be parsed
        """
        alternatives = parse_constraint(constraint)

        best: Optional[Tuple[Version, str]] = None
        for version in versions:
            parsed = parse_version(version)
            if parsed is None or not _satisfies(parsed, alternatives):
                continue
            if best is None or parsed > best[0]:
                best = (parsed, version)

        return best[1] if best else None
