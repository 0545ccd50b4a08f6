import pytest

from rhovm.loader import RHOC_EXT, LoadError, load_from_file

MAGIC = bytes([0xFE, 0xED, 0xF0, 0x0D])


def test_load_appends_extension(tmp_path):
    payload = bytes([1, 2, 3])
    (tmp_path / "mod.rhoc").write_bytes(MAGIC + payload)
    assert load_from_file(str(tmp_path / "mod"), MAGIC) == payload


def test_extension_constant_used(tmp_path):
    (tmp_path / ("m" + RHOC_EXT)).write_bytes(MAGIC)
    assert load_from_file(str(tmp_path / "m"), MAGIC) == b""


def test_load_with_extension(tmp_path):
    path = tmp_path / "other.bin"
    path.write_bytes(MAGIC + b"xyz")
    assert load_from_file(str(path), MAGIC, True) == b"xyz"


def test_missing_file(tmp_path):
    with pytest.raises(LoadError) as info:
        load_from_file(str(tmp_path / "absent"), MAGIC)
    assert info.value.reason is LoadError.Reason.NOT_FOUND


def test_bad_signature(tmp_path):
    (tmp_path / "bad.rhoc").write_bytes(b"\x00\x00\x00\x00data")
    with pytest.raises(LoadError) as info:
        load_from_file(str(tmp_path / "bad"), MAGIC)
    assert info.value.reason is LoadError.Reason.INVALID_SIGNATURE


def test_truncated_file(tmp_path):
    (tmp_path / "short.rhoc").write_bytes(MAGIC[:2])
    with pytest.raises(LoadError) as info:
        load_from_file(str(tmp_path / "short"), MAGIC)
    assert info.value.reason is LoadError.Reason.INVALID_SIGNATURE


def test_without_extension_does_not_find_plain_name(tmp_path):
    (tmp_path / "plain").write_bytes(MAGIC)
    with pytest.raises(LoadError) as info:
        load_from_file(str(tmp_path / "plain"), MAGIC)
    assert info.value.name == str(tmp_path / "plain")