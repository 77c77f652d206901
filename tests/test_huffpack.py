from pathlib import Path

import container
import huffpack


def test_compress_then_decompress_files(tmp_path):
    src = tmp_path / "notes.txt"
    original = b"the quick brown fox jumps over the lazy dog\n" * 40
    src.write_bytes(original)

    assert huffpack.main(["compress", str(src)]) == 0
    packed = tmp_path / "notes.txt_compressed.huffman"
    assert packed.is_file()
    assert packed.read_bytes() == container.compress(original)

    src.unlink()
    assert huffpack.main(["decompress", str(packed)]) == 0
    assert src.read_bytes() == original


def test_explicit_output_paths(tmp_path, capsys):
    src = tmp_path / "in.bin"
    src.write_bytes(bytes(range(256)) * 3)
    packed = tmp_path / "out" / "data.huffman"
    restored = tmp_path / "restored.bin"

    assert huffpack.main(["compress", str(src), "-o", str(packed)]) == 0
    assert huffpack.main(["decompress", str(packed), "-o", str(restored)]) == 0
    assert restored.read_bytes() == src.read_bytes()
    assert "[huffpack] wrote" in capsys.readouterr().out


def test_default_names():
    assert huffpack.compressed_name(Path("d/notes.txt")) == Path("d/notes.txt_compressed.huffman")
    assert huffpack.decompressed_name(Path("d/notes.txt_compressed.huffman")) == Path("d/notes.txt")
    assert huffpack.decompressed_name(Path("d/notes.huffman")) == Path("d/notes")
    assert huffpack.decompressed_name(Path("d/blob.bin")) == Path("d/blob.bin.out")


def test_no_file_selected(capsys):
    assert huffpack.main(["compress"]) == 1
    assert "Please select a file." in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert huffpack.main(["compress", str(tmp_path / "nope.txt")]) == 1
    assert "not a file" in capsys.readouterr().err


def test_empty_file_reported(tmp_path, capsys):
    src = tmp_path / "empty.txt"
    src.write_bytes(b"")
    assert huffpack.main(["compress", str(src)]) == 1
    assert "empty input" in capsys.readouterr().err


def test_corrupt_container_reported(tmp_path, capsys):
    bad = tmp_path / "bad.huffman"
    bad.write_bytes(b"garbage")
    assert huffpack.main(["decompress", str(bad)]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_inspect_lists_code_table(tmp_path, capsys):
    src = tmp_path / "v.txt"
    src.write_bytes(b"aaabbc")
    huffpack.main(["compress", str(src)])
    capsys.readouterr()

    assert huffpack.main(["inspect", str(tmp_path / "v.txt_compressed.huffman")]) == 0
    out = capsys.readouterr().out
    assert "symbols=3" in out
    assert "pad_bits=7" in out
    assert " 97 'a'   0" in out
