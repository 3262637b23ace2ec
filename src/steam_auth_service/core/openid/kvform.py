"""Key-Value Form parsing for check_authentication responses.

Steam answers with newline separated ``key:value`` lines::

    ns:http://specs.openid.net/auth/2.0
    is_valid:true

Parsing is lenient: lines without a colon are dropped and a missing key
is left for the caller to notice.
"""

import logging

logger = logging.getLogger(__name__)


def parse_key_values(body: str) -> dict[str, str]:
    """Parse a Key-Value Form body into an ordered dict.

    The first colon on each line separates key from value; keys and
    values are otherwise kept verbatim. Later duplicates win.
    """
    data: dict[str, str] = {}

    for line_num, line in enumerate(body.strip().split("\n"), start=1):
        key, sep, value = line.partition(":")
        if not sep:
            if line:
                logger.debug(f"Key-value line {line_num} has no colon, ignoring: {line!r}")
            continue
        data[key] = value

    return data
