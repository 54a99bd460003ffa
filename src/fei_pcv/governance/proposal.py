"""
Governance proposal descriptions.

A proposal is an ordered list of commands, each naming a target contract
from an address table, the ETH value to send, a Solidity method signature
and its arguments. Arguments may reference the address table with `{name}`
placeholders, or be produced by a callable that receives the table.
`ProposalDescription.encode` resolves everything and produces the calldata
the timelock would execute, in order.
"""

import json
import re
import textwrap
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple, Union

from eth_abi import encode as abi_encode
from eth_abi.exceptions import EncodingError
from eth_utils import (
    function_signature_to_4byte_selector,
    is_address,
    to_bytes,
    to_checksum_address,
)
from loguru import logger
from pydantic import BaseModel, Field, validator

from ..types import InvalidParameter

AddressTable = Dict[str, str]
ArgumentBuilder = Callable[[AddressTable], List[Any]]

_PLACEHOLDER = re.compile(r"^\{(\w+)\}$")
_ARRAY_SUFFIX = re.compile(r"^(.*)\[(\d*)\]$")


@dataclass
class EncodedCall:
    """One resolved call, ready for a timelock batch."""
    target: str
    value: int
    method: str
    calldata: str
    description: str


class ProposalCommand(BaseModel):
    """A single call in a proposal."""

    target: str = Field(..., description="Address table name (or literal address) of the contract to call")
    values: int = Field(default=0, ge=0, description="Wei sent with the call")
    method: str = Field(..., description="Solidity signature, e.g. setRedeemFee(uint256)")
    arguments: Union[List[Any], ArgumentBuilder] = Field(
        default_factory=list,
        description="Literal arguments with {name} placeholders, or a callable of the address table",
    )
    description: str = Field(default="", description="What the call does")

    @validator("values", pre=True)
    def parse_values(cls, v):
        """Values are usually written as decimal strings."""
        if isinstance(v, str):
            return int(v)
        return v

    @validator("method")
    def validate_method(cls, v):
        v = v.replace(" ", "")
        if not re.match(r"^\w+\(.*\)$", v):
            raise ValueError(f"Invalid method signature: {v}")
        return v

    @validator("description")
    def clean_description(cls, v):
        return textwrap.dedent(v).strip()

    def signature(self) -> Tuple[str, List[str]]:
        """Split the method into its name and ABI argument types."""
        name, _, rest = self.method.partition("(")
        inner = rest[:-1]
        if "(" in inner:
            raise InvalidParameter(f"Tuple arguments are not supported: {self.method}")
        types = [t for t in inner.split(",") if t] if inner else []
        return name, types

    def resolve_target(self, addresses: AddressTable) -> str:
        if self.target in addresses:
            return to_checksum_address(addresses[self.target])
        if is_address(self.target):
            return to_checksum_address(self.target)
        raise InvalidParameter(f"Unknown target: {self.target}")

    def resolve_arguments(self, addresses: AddressTable) -> List[Any]:
        if callable(self.arguments):
            return list(self.arguments(addresses))
        return [_resolve_placeholders(arg, addresses) for arg in self.arguments]

    def encode(self, addresses: AddressTable) -> EncodedCall:
        _, types = self.signature()
        args = self.resolve_arguments(addresses)
        if len(args) != len(types):
            raise InvalidParameter(
                f"{self.method} expects {len(types)} arguments, got {len(args)}"
            )
        coerced = [_coerce(abi_type, arg) for abi_type, arg in zip(types, args)]
        selector = function_signature_to_4byte_selector(self.method)
        try:
            calldata = selector + abi_encode(types, coerced)
        except EncodingError as e:
            raise InvalidParameter(f"Cannot encode arguments for {self.method}: {e}")
        return EncodedCall(
            target=self.resolve_target(addresses),
            value=self.values,
            method=self.method,
            calldata="0x" + calldata.hex(),
            description=self.description,
        )


class ProposalDescription(BaseModel):
    """Titled, ordered batch of commands."""

    title: str = Field(..., min_length=1)
    commands: List[ProposalCommand] = Field(default_factory=list)
    description: str = Field(default="")

    @validator("description")
    def clean_description(cls, v):
        return textwrap.dedent(v).strip()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ProposalDescription":
        with open(path) as f:
            return cls(**json.load(f))

    def encode(self, addresses: AddressTable) -> List[EncodedCall]:
        calls = []
        for index, command in enumerate(self.commands):
            try:
                calls.append(command.encode(addresses))
            except InvalidParameter as e:
                raise InvalidParameter(f"Command {index} ({command.method}): {e.message}")
        logger.debug(f"Encoded {len(calls)} calls for '{self.title}'")
        return calls


def _resolve_placeholders(value: Any, addresses: AddressTable) -> Any:
    if isinstance(value, list):
        return [_resolve_placeholders(item, addresses) for item in value]
    if isinstance(value, str):
        match = _PLACEHOLDER.match(value)
        if match:
            name = match.group(1)
            if name not in addresses:
                raise InvalidParameter(f"Unknown address name: {name}")
            return addresses[name]
    return value


def _coerce(abi_type: str, value: Any) -> Any:
    """Convert a JSON-ish literal into what eth_abi expects for `abi_type`."""
    array = _ARRAY_SUFFIX.match(abi_type)
    if array:
        if not isinstance(value, (list, tuple)):
            raise InvalidParameter(f"Expected a list for {abi_type}, got {value!r}")
        length = array.group(2)
        if length and len(value) != int(length):
            raise InvalidParameter(f"Expected {length} items for {abi_type}, got {len(value)}")
        return [_coerce(array.group(1), item) for item in value]

    try:
        if abi_type == "address":
            return to_checksum_address(value)
        if abi_type.startswith(("uint", "int")):
            if isinstance(value, bool):
                raise ValueError("bool is not an integer")
            return int(value)
        if abi_type == "bool":
            if isinstance(value, str):
                if value.lower() not in ("true", "false"):
                    raise ValueError(f"not a bool: {value}")
                return value.lower() == "true"
            return bool(value)
        if abi_type.startswith("bytes"):
            return to_bytes(hexstr=value) if isinstance(value, str) else bytes(value)
        if abi_type == "string":
            return str(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"Cannot encode {value!r} as {abi_type}: {e}")
    raise InvalidParameter(f"Unsupported ABI type: {abi_type}")
