"""Storage encodings for string-packed profile fields.

Education and achievements are persisted as single text columns. Inside the
wizard they are structured records; these functions are the only place that
knows the delimiter formats.

Education:
    Entries are separated by a blank line, fields (degree, school, year) by a
    single newline. Backslashes and newlines inside a field are escaped as
    ``\\\\`` and ``\\n`` so user text can never produce a delimiter. An empty
    field that is followed by a non-empty one is written as ``\\e``; trailing
    empty fields are omitted. Rows written before escaping existed decode
    as they were written unless they contain backslash sequences.

Achievements:
    Items are joined with ``"; "``; a literal ``;`` or backslash inside an
    item is escaped.

Company location:
    Composed from its parts once, on save. The result is not parsed back.
"""

from dataclasses import dataclass

EDUCATION_ENTRY_SEPARATOR = "\n\n"
EDUCATION_FIELD_SEPARATOR = "\n"
ACHIEVEMENT_SEPARATOR = "; "

_EMPTY_FIELD = "\\e"


@dataclass
class EducationEntry:
    """One education record in the professional flow."""

    degree: str = ""
    school: str = ""
    year: str = ""

    def is_blank(self) -> bool:
        return not (self.degree.strip() or self.school.strip() or self.year.strip())


# =============================================================================
# Escaping
# =============================================================================


def _escape(value: str, specials: str) -> str:
    out = []
    for char in value:
        if char == "\\":
            out.append("\\\\")
        elif char == "\n":
            out.append("\\n")
        elif char in specials:
            out.append("\\" + char)
        else:
            out.append(char)
    return "".join(out)


def _unescape(value: str) -> str:
    out = []
    chars = iter(value)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        escaped = next(chars, "")
        if escaped == "n":
            out.append("\n")
        elif escaped == "e":
            continue
        elif escaped in ("\\", ";"):
            out.append(escaped)
        else:
            # Unknown escape or dangling backslash in legacy text.
            out.append("\\" + escaped)
    return "".join(out)


def _split_unescaped(value: str, separator: str) -> list[str]:
    """Split on a single-character separator that is not backslash-escaped."""
    parts = []
    current = []
    escaping = False
    for char in value:
        if escaping:
            current.append(char)
            escaping = False
        elif char == "\\":
            current.append(char)
            escaping = True
        elif char == separator:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


# =============================================================================
# Education
# =============================================================================


def encode_education(entries: list[EducationEntry]) -> str:
    """Serialize education entries for the candidate_profiles.education column.

    Entries with no content at all are not persisted.

    Args:
        entries: Working-state education entries, in display order.

    Returns:
        Encoded string ("" when there is nothing to store).
    """
    encoded_entries = []
    for entry in entries:
        if entry.is_blank():
            continue
        fields = [entry.degree, entry.school, entry.year]
        while fields and not fields[-1]:
            fields.pop()
        encoded_entries.append(
            EDUCATION_FIELD_SEPARATOR.join(
                _escape(field, "") if field else _EMPTY_FIELD for field in fields
            )
        )
    return EDUCATION_ENTRY_SEPARATOR.join(encoded_entries)


def decode_education(value: str | None) -> list[EducationEntry]:
    """Parse the education column back into entries.

    Entries with fewer than three lines get "" for the missing positions;
    extra lines are ignored. Whitespace-only chunks are skipped.

    Args:
        value: Stored column value (may be None).

    Returns:
        Decoded entries, in stored order.
    """
    if not value:
        return []

    entries = []
    for chunk in value.split(EDUCATION_ENTRY_SEPARATOR):
        if not chunk.strip():
            continue
        lines = [_unescape(line) for line in chunk.split(EDUCATION_FIELD_SEPARATOR)]
        lines += [""] * (3 - len(lines))
        entries.append(EducationEntry(degree=lines[0], school=lines[1], year=lines[2]))
    return entries


# =============================================================================
# Achievements
# =============================================================================


def encode_achievements(items: list[str]) -> str:
    """Join achievements into the stored "; "-separated string."""
    kept = [item.strip() for item in items if item.strip()]
    return ACHIEVEMENT_SEPARATOR.join(_escape(item, ";") for item in kept)


def decode_achievements(value: str | None) -> list[str]:
    """Split the stored achievements string on ";", trimming and dropping empties."""
    if not value:
        return []
    items = (_unescape(part).strip() for part in _split_unescaped(value, ";"))
    return [item for item in items if item]


# =============================================================================
# Company location
# =============================================================================


def compose_location(
    address: str = "",
    city: str = "",
    state: str = "",
    country: str = "",
    postal_code: str = "",
) -> str:
    """Compose the stored company location string.

    Example: ("1 Main St", "Austin", "TX", "USA", "78701")
    -> "1 Main St, Austin, TX, USA 78701"
    """
    country_postal = f"{country.strip()} {postal_code.strip()}".strip()
    parts = [address.strip(), city.strip(), state.strip(), country_postal]
    return ", ".join(part for part in parts if part)
