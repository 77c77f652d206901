"""
huffpack: compress files into self-describing .huffman containers

How to run:
  python huffpack.py compress notes.txt                 -> notes.txt_compressed.huffman
  python huffpack.py compress notes.txt -o notes.huffman
  python huffpack.py decompress notes.txt_compressed.huffman
  python huffpack.py inspect notes.txt_compressed.huffman
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import container
from huffman import HuffmanError

SUFFIX = ".huffman"
COMPRESSED_MARKER = "_compressed"


class NoFileSelectedError(HuffmanError):
    pass


def read_input(path: Optional[str]) -> bytes:
    if not path:
        raise NoFileSelectedError("Please select a file.")
    p = Path(path)
    if not p.is_file():
        raise NoFileSelectedError(f"not a file: {path}")
    return p.read_bytes()


def compressed_name(src: Path) -> Path:
    return src.with_name(f"{src.name}{COMPRESSED_MARKER}{SUFFIX}")


def decompressed_name(src: Path) -> Path:
    name = src.name
    if not name.endswith(SUFFIX):
        return src.with_name(name + ".out")
    name = name[:-len(SUFFIX)]
    if name.endswith(COMPRESSED_MARKER):
        name = name[:-len(COMPRESSED_MARKER)]
    return src.with_name(name or "output")


def write_output(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def cmd_compress(args) -> int:
    data = read_input(args.input)
    blob = container.compress(data)
    out = Path(args.output) if args.output else compressed_name(Path(args.input))
    write_output(out, blob)
    print(f"[huffpack] wrote {out}")
    print(f"[huffpack] {len(data)} -> {len(blob)} bytes ({len(blob) / len(data):.3f})")
    return 0


def cmd_decompress(args) -> int:
    blob = read_input(args.input)
    data = container.decompress(blob)
    out = Path(args.output) if args.output else decompressed_name(Path(args.input))
    write_output(out, data)
    print(f"[huffpack] wrote {out} ({len(data)} bytes)")
    return 0


def cmd_inspect(args) -> int:
    c = container.parse_container(read_input(args.input))
    print(f"[huffpack] symbols={len(c.codes)} payload={len(c.payload)} bytes pad_bits={c.pad_bits}")
    for symbol, bits in c.codes.items():
        shown = chr(symbol) if 32 <= symbol < 127 else "."
        print(f"  {symbol:3d} {shown!r:5} {bits}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="huffpack", description="Static Huffman file compressor")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compress", help="Compress a file into a .huffman container")
    p.add_argument("input", nargs="?", help="File to compress")
    p.add_argument("-o", "--output", help=f"Output path (default: <input>{COMPRESSED_MARKER}{SUFFIX})")
    p.set_defaults(func=cmd_compress)

    p = sub.add_parser("decompress", help="Restore the original bytes of a .huffman container")
    p.add_argument("input", nargs="?", help="Container to decompress")
    p.add_argument("-o", "--output", help="Output path (default: input name without the suffix)")
    p.set_defaults(func=cmd_decompress)

    p = sub.add_parser("inspect", help="Print the code table of a .huffman container")
    p.add_argument("input", nargs="?", help="Container to inspect")
    p.set_defaults(func=cmd_inspect)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except HuffmanError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
