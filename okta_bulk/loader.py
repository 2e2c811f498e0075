"""Reads the CSV input files for both run modes.

Assign files have no header: column 0 is the user login and column 1 the
group name.  Import files start with a header row naming profile attributes
(``login`` is mandatory) and every following row is one user.

Quoting follows the usual CSV rules, so group names may contain commas or
double quotes::

    user@domain.dev,group1
    otheruser@domain.dev,"group two"
    admin@domain.dev,"Sales, EMEA"
"""

import csv
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import FormatError


class Assignment:
    """One requested ``(login, group name)`` membership.

    ``user_id`` and ``group_id`` are filled in by the resolver; ``assigned``
    is set by the executor once the membership write succeeds.
    """

    def __init__(self, login: str, group_name: str, line: Optional[int] = None):
        self.login = login
        self.group_name = group_name
        self.line = line
        self.user_id: Optional[str] = None
        self.group_id: Optional[str] = None
        self.assigned = False

    @property
    def resolved(self) -> bool:
        """True when both Okta ids are known."""
        return bool(self.user_id) and bool(self.group_id)

    def __repr__(self):
        return f"Assignment({self.login!r}, {self.group_name!r}, assigned={self.assigned})"


def _read_rows(path: str) -> Iterator[Tuple[int, List[str]]]:
    """Yield ``(line_number, row)`` for every non-blank record in the file.

    ``OSError`` from opening the file is left to the caller.
    """
    # utf-8-sig drops the byte order mark spreadsheet exports like to add
    with open(path, "r", newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        for row in reader:
            if not row or all(not field.strip() for field in row):
                continue
            yield reader.line_num, row


def load_assignments(path: str) -> List[Assignment]:
    """Parse an assign-mode CSV into ``Assignment`` records, in file order."""
    records: List[Assignment] = []
    for line, row in _read_rows(path):
        if len(row) != 2:
            raise FormatError(
                f"Expected 2 columns (login, group name), found {len(row)}", line
            )
        login, group_name = row
        records.append(Assignment(login, group_name, line=line))
    return records


def load_profiles(path: str) -> List[Dict[str, str]]:
    """Parse an import-mode CSV into profile mappings keyed by the header names."""
    rows = _read_rows(path)
    try:
        header_line, header = next(rows)
    except StopIteration:
        raise FormatError("The csv file is empty; a header row is required") from None

    header = [name.strip() for name in header]
    if not all(header):
        raise FormatError("The header row has an empty column name", header_line)
    duplicates = sorted({name for name in header if header.count(name) > 1})
    if duplicates:
        raise FormatError(
            f"The header row repeats column name(s): {', '.join(duplicates)}", header_line
        )
    if "login" not in header:
        raise FormatError("The header row must include a 'login' column", header_line)

    profiles: List[Dict[str, str]] = []
    for line, row in rows:
        if len(row) != len(header):
            raise FormatError(
                f"Expected {len(header)} columns to match the header, found {len(row)}", line
            )
        profiles.append(dict(zip(header, row)))
    return profiles
