"""Pure functions for the ``env=`` directive in ``server.properties``.

The file is ini-like: it starts with a ``[General]`` line, and an ``env=Local``
line after it switches the workspace into Local mode.  Any other value, or no
directive at all, means Online.
"""

from propedit.constants import ENV_DIRECTIVE_PREFIX, GENERAL_SECTION, LOCAL_ENV_VALUE
from propedit.models import EnvironmentMode


def parse_mode(content: str) -> EnvironmentMode:
    """Return the mode declared by the first ``env=`` line.

    Only the text between the first ``=`` and a possible second ``=`` counts,
    after stripping, so ``env= Local`` and ``env=Local=x`` both mean Local
    while ``env=local`` does not.
    """
    for line in content.split("\n"):
        stripped = line.strip()
        if stripped.startswith(ENV_DIRECTIVE_PREFIX):
            value = stripped.split("=")[1].strip()
            return EnvironmentMode.LOCAL if value == LOCAL_ENV_VALUE else EnvironmentMode.ONLINE
    return EnvironmentMode.ONLINE


def rewrite_for_mode(content: str, mode: EnvironmentMode) -> str:
    """Return ``content`` rewritten so that it declares ``mode``.

    Every ``env=`` line and every blank line is dropped.  For Local mode a
    single ``env=Local`` line goes right after ``[General]``; if there is no
    ``[General]`` line, one is prepended and the directive is appended at the
    end.  The result always contains a ``[General]`` line, at position 0 when
    it had to be added.  Lines are joined with ``\\n`` and no trailing newline.
    """
    lines = [
        line
        for line in content.split("\n")
        if line.strip() and not line.strip().startswith(ENV_DIRECTIVE_PREFIX)
    ]
    directive = f"{ENV_DIRECTIVE_PREFIX}{LOCAL_ENV_VALUE}"

    if mode.is_local:
        general = _find_general(lines)
        if general is not None:
            lines.insert(general + 1, directive)
        else:
            lines.insert(0, GENERAL_SECTION)
            lines.append(directive)

    if _find_general(lines) is None:
        lines.insert(0, GENERAL_SECTION)

    return "\n".join(lines)


def _find_general(lines: list[str]) -> int | None:
    for index, line in enumerate(lines):
        if line.strip() == GENERAL_SECTION:
            return index
    return None
