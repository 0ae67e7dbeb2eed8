"""
Splits the sheet's CSV export into rows of plain string fields.

This is deliberately small: a quote toggles an "inside quotes" flag and the
delimiter only splits outside of quotes. Doubled quotes ("") are NOT treated
as an escaped quote, the exported sheet never produces them. No row is ever
rejected here; short or misaligned rows are the reconstructor's problem.
"""

QUOTE = '"'


def parse_line(line: str, delimiter: str = ",") -> list[str]:
    """Splits one line into trimmed fields, keeping quoted delimiters intact."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def parse_delimited_text(text: str, delimiter: str = ",") -> list[list[str]]:
    """
    Splits raw export text into rows.

    Lines are split on '\\n' first; a Windows '\\r' ends up trimmed off the
    last field. A quoted field spanning lines is therefore split across two
    rows, which matches how the sheet export is consumed.
    """
    return [parse_line(line, delimiter) for line in text.split("\n")]
