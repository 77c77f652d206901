"""
Self-describing Huffman container

Layout (everything before the payload is ASCII):

    <L> ';' <H> <P> <payload>

  H        comma-joined "<byte value>:<code bits>" pairs, e.g. "97:0,99:10,98:11"
  L        len(H) in decimal
  P        one digit 0-7, the number of zero bits padding the last payload byte
  payload  the codes of the input bytes packed MSB-first
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import huffman as huff
from huffman import EmptyInputError, HuffmanError, MissingCodeError

HEADER_DELIMITER = b";"
PAIR_SEPARATOR = ","
CODE_SEPARATOR = ":"


class ContainerFormatError(HuffmanError, ValueError):
    pass


@dataclass
class Container:
    codes: Dict[int, str]
    pad_bits: int
    payload: bytes

    @property
    def header(self) -> str:
        return serialize_header(self.codes)

    def to_bytes(self) -> bytes:
        if not 0 <= self.pad_bits <= 7:
            raise ValueError(f"pad_bits must be in 0..7, got {self.pad_bits}")
        header = self.header.encode("ascii")
        return str(len(header)).encode("ascii") + HEADER_DELIMITER + header + str(self.pad_bits).encode("ascii") + self.payload

    @property
    def payload_bits(self) -> int:
        return len(self.payload) * 8 - self.pad_bits


def padding_for(bit_count: int) -> int:
    return (8 - bit_count % 8) % 8


def pack_bits_from_codes(data: bytes, code_map: Dict[int, str]) -> Tuple[bytes, int]:
    """
    Converts Huffman codes into packed bytes
    Returns (packed_bytes, pad_bits) where pad_bits is number of 0 bits added at the end
    """
    # code strings -> (value, length) once, so packing never touches characters
    int_codes = {symbol: (int(bits, 2), len(bits)) for symbol, bits in code_map.items()}

    out = bytearray()
    acc = 0
    acc_bits = 0

    for b in data:
        try:
            value, length = int_codes[b]
        except KeyError:
            raise MissingCodeError(b) from None
        acc = (acc << length) | value
        acc_bits += length
        while acc_bits >= 8:
            acc_bits -= 8
            out.append((acc >> acc_bits) & 0xFF)
        acc &= (1 << acc_bits) - 1

    pad_bits = padding_for(acc_bits)
    if acc_bits != 0:
        out.append((acc << pad_bits) & 0xFF)

    return bytes(out), pad_bits


def unpack_and_decode(packed: bytes, pad_bits: int, root: huff.HuffmanNode) -> bytes:
    """
    Decode packed bits using Huffman tree
    """
    total_bits = len(packed) * 8 - pad_bits
    decoded = bytearray()
    node = root
    bit_index = 0

    for byte in packed:
        for i in range(7, -1, -1):
            if bit_index >= total_bits:
                break
            bit = (byte >> i) & 1
            node = node.right if bit == 1 else node.left
            if node is None:
                raise ContainerFormatError(f"bit {bit_index} does not continue any code")

            # Leaf
            if node.is_leaf():
                decoded.append(node.symbol)
                node = root
            bit_index += 1

    if node is not root:
        raise ContainerFormatError("payload ends in the middle of a code")

    return bytes(decoded)


def serialize_header(code_map: Dict[int, str]) -> str:
    return PAIR_SEPARATOR.join(f"{symbol}{CODE_SEPARATOR}{bits}" for symbol, bits in code_map.items())


def parse_header(header: str) -> Dict[int, str]:
    if not header:
        raise ContainerFormatError("empty code table")

    codes: Dict[int, str] = {}
    for pair in header.split(PAIR_SEPARATOR):
        symbol_text, sep, bits = pair.partition(CODE_SEPARATOR)
        if not sep or not symbol_text.isdigit():
            raise ContainerFormatError(f"malformed code table entry {pair!r}")
        symbol = int(symbol_text)
        if symbol > 255:
            raise ContainerFormatError(f"symbol {symbol} is not a byte value")
        if symbol in codes:
            raise ContainerFormatError(f"symbol {symbol} appears twice in the code table")
        if not bits or set(bits) - {"0", "1"}:
            raise ContainerFormatError(f"invalid code {bits!r} for symbol {symbol}")
        codes[symbol] = bits

    if not huff.is_prefix_free(codes):
        raise ContainerFormatError("code table is not prefix-free")
    return codes


def parse_container(blob: bytes) -> Container:
    blob = bytes(blob)
    delim = blob.find(HEADER_DELIMITER)
    length_text = blob[:delim]
    if delim <= 0 or not length_text.isdigit():
        raise ContainerFormatError("missing header length prefix")

    start = delim + 1
    end = start + int(length_text)
    if end >= len(blob):
        raise ContainerFormatError("container truncated inside the header")

    try:
        header = blob[start:end].decode("ascii")
    except UnicodeDecodeError:
        raise ContainerFormatError("header is not ASCII") from None
    codes = parse_header(header)

    pad_digit = blob[end:end + 1]
    if not pad_digit.isdigit() or int(pad_digit) > 7:
        raise ContainerFormatError(f"invalid padding count {pad_digit!r}")
    pad_bits = int(pad_digit)

    payload = blob[end + 1:]
    if pad_bits and not payload:
        raise ContainerFormatError("padding declared for an empty payload")

    return Container(codes=codes, pad_bits=pad_bits, payload=payload)


def compress(data: bytes) -> bytes:
    if not data:
        raise EmptyInputError()
    data = bytes(data)
    code_map = huff.build_code_table(data)
    packed, pad_bits = pack_bits_from_codes(data, code_map)
    return Container(codes=code_map, pad_bits=pad_bits, payload=packed).to_bytes()


def decompress(blob: bytes) -> bytes:
    container = parse_container(blob)
    root = huff.build_decoding_tree(container.codes)
    return unpack_and_decode(container.payload, container.pad_bits, root)
