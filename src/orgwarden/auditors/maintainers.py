"""Parser for per-repository maintainers.txt files.

A maintainers file lists one maintainer identifier per line. Lines starting
with "#" name a notification channel (e.g. "#team-chat") and are skipped.
A missing or unreadable file reaches the parser as an empty string and
yields no maintainers.
"""

from orgwarden.models.aliases import AliasTable

CHANNEL_MARKER = "#"


def parse_maintainers_file(raw_text: str, aliases: AliasTable) -> list[str]:
    """Parse the raw contents of a maintainers file.

    Only the file as a whole is stripped; individual lines are matched
    exactly against the channel marker and the alias table.

    Args:
        raw_text: File contents
        aliases: Identifier -> alias table

    Returns:
        Maintainer aliases in file order, duplicates included
    """
    contents = raw_text.strip()
    if not contents:
        return []

    return [
        aliases.resolve(identifier)
        for identifier in contents.split("\n")
        if not identifier.startswith(CHANNEL_MARKER)
    ]
