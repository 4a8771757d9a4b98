"""Pure functions for the ``key=value`` properties format.

The codec is lossy on purpose: comments, blank lines and original spacing are
dropped on decode and never reconstructed on encode.  The only round-trip
guarantee is ``decode(encode(decode(text))) == decode(text)``.
"""

from propedit.models import ConfigEntry


def decode(text: str) -> list[ConfigEntry]:
    """Parse properties text into an ordered list of ConfigEntry instances.

    Each newline-separated line is processed:
    - Leading/trailing whitespace is stripped.
    - Blank lines and lines starting with ``#`` are skipped.
    - The line is split on the first ``=`` only, so values may themselves
      contain ``=``.  A line with nothing before the ``=`` (or no ``=`` at
      all) is skipped.
    - Key and value are both stripped.  Duplicate keys are kept in order.
    """
    entries: list[ConfigEntry] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        index = stripped.find("=")
        if index <= 0:
            continue
        key = stripped[:index].strip()
        value = stripped[index + 1 :].strip()
        entries.append(ConfigEntry(key=key, value=value))
    return entries


def encode(entries: list[ConfigEntry]) -> str:
    """Serialise entries as ``key=value`` lines, each terminated by a newline.

    Entries whose key is blank after stripping are dropped.  An empty list
    produces an empty string.
    """
    return "".join(
        f"{entry.key.strip()}={entry.value.strip()}\n" for entry in entries if entry.key.strip()
    )
