"""Partition key derivation for point reads."""

import re

# Documents are written to a single partition. The modulus stays at 1 so the
# key matches what the loader computed at write time.
PARTITION_COUNT = 1

# Partition every document lives in; used when a query is not fanned out
DEFAULT_PARTITION_KEY = "0"

ID_PREFIXES = ("tt", "nm")
MAX_QUALIFYING_ID_LENGTH = 4

_LEADING_DIGITS = re.compile(r"\d+")


def get_partition_key(document_id: str) -> str:
    """Compute the partition key for a movie (tt...) or actor (nm...) id.

    Ids shorter than 5 characters with a known prefix have their numeric
    suffix reduced modulo ``PARTITION_COUNT``. Every other id, and any id
    whose suffix does not start with a digit, yields an empty key.

    Args:
        document_id: Document id

    Returns:
        Partition key string
    """
    if len(document_id) > MAX_QUALIFYING_ID_LENGTH or not document_id.startswith(ID_PREFIXES):
        return ""

    match = _LEADING_DIGITS.match(document_id[2:])
    if match is None:
        return ""

    return str(int(match.group()) % PARTITION_COUNT)
