"""Minimal ABI fragments.

Only the functions and events the client actually touches are described;
no full contract ABI is loaded. Encoding and decoding go through eth_abi.
"""

from dataclasses import dataclass
from typing import Any

from eth_abi import decode, encode
from eth_utils import decode_hex, keccak

ERROR_STRING_SELECTOR = bytes.fromhex("08c379a0")  # Error(string)
ZERO_ADDRESS_TOPIC = "0x" + "00" * 32


@dataclass(frozen=True)
class FunctionFragment:
    """One contract function: name, input types and output types."""

    name: str
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return keccak(text=self.signature)[:4]

    def encode_call(self, *args: Any) -> bytes:
        """Build call data: 4-byte selector followed by the ABI-encoded arguments."""
        if len(args) != len(self.inputs):
            raise ValueError(
                f"{self.signature} takes {len(self.inputs)} arguments, got {len(args)}"
            )
        return self.selector + encode(list(self.inputs), list(args))

    def decode_result(self, data: bytes) -> tuple[Any, ...]:
        return tuple(decode(list(self.outputs), data))


@dataclass(frozen=True)
class EventFragment:
    """One contract event. ``data_types`` are the non-indexed fields, in order."""

    name: str
    inputs: tuple[str, ...]
    data_types: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def topic(self) -> str:
        return "0x" + keccak(text=self.signature).hex()

    def decode_data(self, data: str) -> tuple[Any, ...]:
        return tuple(decode(list(self.data_types), decode_hex(data)))


def topic_to_int(topic: str) -> int:
    return int(topic, 16)


def decode_revert_reason(data: bytes) -> str | None:
    """Decode ``Error(string)`` revert data. Returns None for anything else."""
    if len(data) < 4 or data[:4] != ERROR_STRING_SELECTOR:
        return None
    try:
        (reason,) = decode(["string"], data[4:])
    except Exception:  # malformed payload is indistinguishable from no reason
        return None
    return reason
