"""BibTeX format reader.

Entries: @<entrytype>{citekey, field = {value}, ...} (parentheses are
accepted as outer delimiters too). @STRING definitions are collected and
substituted into bare values; @PREAMBLE and @COMMENT are skipped. Text
outside entries is ignored, as in BibTeX itself.

Each entry becomes a flat, read-only record: the citation key under
``"key"``, the lower-cased entry type under ``"type"`` and every field
under its upper-cased name. Values have their outer delimiters removed
and whitespace runs collapsed to single spaces.

Reference: http://www.bibtex.org/Format/
"""

import re

from diffbib.models import ENTRY_TYPE_FIELD, IDENTIFIER_FIELD, BibRecord, freeze_record
from diffbib.parse.base import ParseResult

ENTRY_START_PATTERN = re.compile(r"@(\w+)\s*([{(])")
FIELD_NAME_PATTERN = re.compile(r"([\w\-:.]+)\s*=\s*")

SKIPPED_ENTRIES = frozenset({"preamble", "comment"})


def parse_bibtex(content: str) -> ParseResult:
    """Parse BibTeX text into flat records.

    Parameters
    ----------
    content : str
        Decoded file content with LF line endings.

    Returns
    -------
    ParseResult
        Records, warnings, and errors. An unclosed entry is an error;
        malformed entry headers, duplicate fields and stray text are
        warnings.
    """
    warnings: list[str] = []
    errors: list[str] = []
    records: list[BibRecord] = []
    macros: dict[str, str] = {}

    pos = 0
    while True:
        at = content.find("@", pos)
        if at == -1:
            break
        pos = at + 1

        line_no = content.count("\n", 0, at)
        line_start = content.rfind("\n", 0, at) + 1
        if content[line_start:at].strip():
            # '@' inside free text, e.g. an e-mail address in a comment
            continue

        match = ENTRY_START_PATTERN.match(content, at)
        if not match:
            line_end = content.find("\n", at)
            snippet = content[at:] if line_end == -1 else content[at:line_end]
            warnings.append(f"Line {line_no}: Malformed entry start: {snippet[:50]}")
            continue

        entry_type = match.group(1).lower()
        open_index = match.end() - 1

        closing = _find_entry_end(content, open_index)
        if closing == -1:
            errors.append(f"Line {line_no}: Unclosed entry @{entry_type}")
            continue

        body = content[open_index + 1 : closing]
        pos = closing + 1

        if entry_type in SKIPPED_ENTRIES:
            warnings.append(f"Line {line_no}: Skipping @{entry_type.upper()} entry")
            continue

        if entry_type == "string":
            fields, _ = _parse_fields(body, macros)
            for name, value in fields:
                macros[name.lower()] = value
            continue

        record = _build_record(entry_type, body, macros, line_no, warnings)
        records.append(record)

    return ParseResult(records, warnings, errors)


def _find_entry_end(content: str, open_index: int) -> int:
    closer = "}" if content[open_index] == "{" else ")"
    brace_depth = 0
    in_quotes = False
    i = open_index + 1

    while i < len(content):
        char = content[i]

        if char == "\\":
            i += 2
            continue

        if char == '"' and brace_depth == 0:
            in_quotes = not in_quotes
        elif char == "{":
            brace_depth += 1
        elif char == "}" and brace_depth > 0:
            brace_depth -= 1
        elif char == closer and brace_depth == 0 and not in_quotes:
            return i

        i += 1

    return -1


def _build_record(
    entry_type: str,
    body: str,
    macros: dict[str, str],
    line_no: int,
    warnings: list[str],
) -> BibRecord:
    citekey, _, fields_text = body.partition(",")
    citekey = citekey.strip()

    data: dict[str, str] = {ENTRY_TYPE_FIELD: entry_type}
    if citekey:
        data[IDENTIFIER_FIELD] = citekey
    else:
        warnings.append(f"Line {line_no}: @{entry_type} entry without citation key")

    fields, stray = _parse_fields(fields_text, macros)
    if stray:
        label = citekey or f"@{entry_type}"
        warnings.append(f"Line {line_no}: Ignored unparsable text in {label}: {stray[:50]!r}")

    for name, value in fields:
        field_name = name.upper()
        if field_name in data:
            warnings.append(f"Line {line_no}: Duplicate field {field_name} in {citekey!r} ignored")
            continue
        data[field_name] = " ".join(value.split())

    return freeze_record(data)


def _parse_fields(content: str, macros: dict[str, str]) -> tuple[list[tuple[str, str]], str]:
    fields: list[tuple[str, str]] = []
    stray: list[str] = []

    i = 0
    while i < len(content):
        # Skip whitespace and separators
        while i < len(content) and (content[i].isspace() or content[i] == ","):
            i += 1
        if i >= len(content):
            break

        field_match = FIELD_NAME_PATTERN.match(content, i)
        if not field_match:
            stray.append(content[i])
            i += 1
            continue

        field_name = field_match.group(1)
        i = field_match.end()

        pieces: list[str] = []
        while i < len(content):
            while i < len(content) and content[i].isspace():
                i += 1
            if i >= len(content):
                break

            if content[i] == "{":
                piece, i = _parse_braced_value(content, i)
            elif content[i] == '"':
                piece, i = _parse_quoted_value(content, i)
            else:
                piece, i = _parse_bare_value(content, i)
                piece = macros.get(piece.lower(), piece)
            pieces.append(piece)

            # '#' concatenates value pieces
            while i < len(content) and content[i] in " \t\n":
                i += 1
            if i < len(content) and content[i] == "#":
                i += 1
                continue
            break

        fields.append((field_name, "".join(pieces)))

    return fields, "".join(stray).strip()


def _parse_braced_value(content: str, start: int) -> tuple[str, int]:
    brace_depth = 0
    value_chars: list[str] = []
    i = start

    while i < len(content):
        char = content[i]
        if char == "{":
            brace_depth += 1
            if brace_depth > 1:
                value_chars.append(char)
        elif char == "}":
            brace_depth -= 1
            if brace_depth == 0:
                return "".join(value_chars), i + 1
            value_chars.append(char)
        else:
            value_chars.append(char)
        i += 1

    return "".join(value_chars), i


def _parse_quoted_value(content: str, start: int) -> tuple[str, int]:
    i = start + 1  # skip opening quote
    value_chars: list[str] = []
    brace_depth = 0

    while i < len(content):
        char = content[i]
        if char == "\\" and i + 1 < len(content):
            value_chars.append(char)
            value_chars.append(content[i + 1])
            i += 2
            continue
        if char == "{":
            brace_depth += 1
        elif char == "}":
            brace_depth -= 1
        elif char == '"' and brace_depth == 0:
            return "".join(value_chars), i + 1
        value_chars.append(char)
        i += 1

    return "".join(value_chars), i


def _parse_bare_value(content: str, start: int) -> tuple[str, int]:
    value_chars: list[str] = []
    i = start

    while i < len(content) and content[i] not in ",\n}#":
        value_chars.append(content[i])
        i += 1

    return "".join(value_chars).strip(), i
