"""Secret actions: decode."""

from __future__ import annotations

import base64
import binascii

from kubefuzzy.core.bindings import DECODE
from kubefuzzy.resources import ActionContext

RESOURCES = ["secrets", "secret"]


def flatten(data: dict[str, str]) -> list[str]:
    """Data map as alternating key/value tokens."""
    tokens = []
    for key, value in data.items():
        tokens.extend((key, value))
    return tokens


def decode_value(value: str) -> str:
    try:
        raw = base64.b64decode(value, validate=True)
    except binascii.Error:
        return f"<invalid base64: {value}>"
    return raw.decode("utf-8", errors="replace")


def decode(ctx: ActionContext) -> int:
    """Print the selected secret's data keys alongside their decoded values."""
    name = ctx.single("Can't decode the data of multiple secrets")
    tokens = flatten(ctx.kubectl.secret_data(name))

    print(f"Fetched values for {name}:")
    print(" ".join(tokens))
    print("")
    print(f"Decoded values for {name}:")
    for key, value in zip(tokens[::2], tokens[1::2]):
        print(f"{key}: {decode_value(value)}")
    return 0


ACTIONS = {
    DECODE: decode,
}
