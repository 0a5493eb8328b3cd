import hashlib

import pytest

from vectors import (
    DEFAULT_VECTORS_PATH,
    Vector,
    VectorFormatError,
    check_vectors,
    load_vectors,
    main,
)


def _write(tmp_path, text):
    path = tmp_path / "vectors.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_bundled_vectors_all_pass():
    vectors = load_vectors(DEFAULT_VECTORS_PATH)
    results = check_vectors(vectors)

    assert len(results) >= 8
    assert [r.name for r in results if not r.passed] == []


def test_bundled_vectors_agree_with_hashlib():
    for vector in load_vectors(DEFAULT_VECTORS_PATH):
        assert hashlib.sha256(vector.message).hexdigest() == vector.digest, vector.name


def test_bundled_vectors_cover_multibyte_utf8():
    by_name = {v.name: v for v in load_vectors(DEFAULT_VECTORS_PATH)}

    emoji = by_name["emoji"]
    assert emoji.message.startswith("😀".encode("utf-8"))
    assert emoji.message == "😀 😃 😄 😁 😆 😅 😂".encode("utf-8")
    assert emoji.digest == "efbac19e898b65f12f8f394027453b39cd0a2cdb4c863d25bd76768e7e03ffee"

    superscript = by_name["superscript letters"]
    assert len(superscript.message) > len(superscript.message.decode("utf-8"))
    assert superscript.digest == "f31df27bb16a5e5ea676a6dc874a6539e53535bfeaccaa845b78df3d7847ef91"


def test_load_vectors_message_forms(tmp_path):
    path = _write(
        tmp_path,
        """
vectors:
  - name: text
    message: "abc"
    digest: ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad
  - name: hex
    message_hex: "616263"
    digest: ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad
  - name: repeated
    message: "ab"
    repeat: 3
    digest: e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855
""",
    )
    text, hexed, repeated = load_vectors(path)

    assert text == Vector(
        name="text",
        message=b"abc",
        digest="ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad",
    )
    assert hexed.message == text.message
    assert hexed.name == "hex"
    assert repeated.message == b"ababab"


def test_load_vectors_quoted_hex_keeps_leading_zeros(tmp_path):
    path = _write(
        tmp_path,
        "vectors:\n  - name: zeros\n    message_hex: '0012'\n    digest: '" + "0" * 64 + "'\n",
    )
    (vector,) = load_vectors(path)

    assert vector.message == b"\x00\x12"
    assert vector.digest == "0" * 64


def test_check_vectors_reports_mismatch(tmp_path):
    path = _write(
        tmp_path,
        """
vectors:
  - name: wrong
    message: "abd"
    digest: ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad
""",
    )
    (result,) = check_vectors(load_vectors(path))

    assert not result.passed
    assert result.expected == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert result.actual == hashlib.sha256(b"abd").hexdigest()


@pytest.mark.parametrize(
    "entry,match",
    [
        ('message: "a"', "missing 'digest'"),
        ("digest: " + "0" * 64, "exactly one of"),
        ('message: "a"\n    message_hex: "61"\n    digest: ' + "0" * 64, "exactly one of"),
        ('message_hex: "zz"\n    digest: ' + "0" * 64, "bad message_hex"),
        ('message: "a"\n    repeat: 0\n    digest: ' + "0" * 64, "positive integer"),
        # 65 characters: one hex digit too many.
        ('message: ""\n    digest: "' + "e" * 65 + '"', "64 lowercase hex"),
        ('message: ""\n    digest: "' + "E" * 64 + '"', "64 lowercase hex"),
        # Unquoted scalars that YAML does not load as text.
        ("message_hex: 0012\n    digest: '" + "0" * 64 + "'", "'message_hex' must be a string"),
        ("message:\n    digest: '" + "0" * 64 + "'", "'message' must be a string"),
        ("message: 42\n    digest: '" + "0" * 64 + "'", "'message' must be a string"),
        ('message: "a"\n    digest: ' + "1" * 64, "'digest' must be a string"),
    ],
)
def test_load_vectors_rejects_malformed_entries(tmp_path, entry, match):
    path = _write(tmp_path, "vectors:\n  - name: bad\n    " + entry + "\n")

    with pytest.raises(VectorFormatError, match=match):
        load_vectors(path)


def test_load_vectors_requires_top_level_list(tmp_path):
    path = _write(tmp_path, "name: not a vector file\n")

    with pytest.raises(VectorFormatError, match="top-level 'vectors' list"):
        load_vectors(path)


def test_main_exit_status(tmp_path, capsys):
    good = _write(
        tmp_path,
        "vectors:\n  - name: empty\n    message: ''\n"
        "    digest: e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855\n",
    )
    assert main([str(good)]) == 0
    out = capsys.readouterr().out
    assert "[OK]   empty" in out
    assert "1 passed, 0 failed" in out

    bad = tmp_path / "bad.yaml"
    bad.write_text("vectors:\n  - name: x\n    message: 'a'\n    digest: '" + "0" * 64 + "'\n")
    assert main([str(bad)]) == 1
    assert "[FAIL] x" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.yaml")]) == 1
    assert "Error loading vectors" in capsys.readouterr().err
