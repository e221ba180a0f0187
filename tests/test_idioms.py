import pytest

from core.exceptions import AcquisitionFailure, ReleaseFailure, UseFailure
from core.suppression import get_suppressed
from idioms import manual, scoped
from idioms.main import main
from resources.streams import FileLineSource
from scopes import with_resource

DATA = bytes(i % 251 for i in range(3000))


@pytest.fixture
def src(tmp_path):
    path = tmp_path / "src.bin"
    path.write_bytes(DATA)
    return path


# ============================================================================
# 复制
# ============================================================================


def test_scoped_copy_releases_sink_then_source(src, tmp_path, recorder):
    dst = tmp_path / "dst.bin"

    result = scoped.copy(src, dst, 1024, observers=[recorder])

    assert result.cycles == 3
    assert result.chunk_sizes == [1024, 1024, 952]
    assert dst.read_bytes() == DATA
    assert recorder.acquired == [str(src), str(dst)]
    assert recorder.released == [str(dst), str(src)]


def test_manual_copy_matches_scoped_copy(src, tmp_path):
    manual_result = manual.copy(src, tmp_path / "manual.bin", 1024)
    scoped_result = scoped.copy(src, tmp_path / "scoped.bin", 1024)

    assert manual_result == scoped_result
    assert (tmp_path / "manual.bin").read_bytes() == (tmp_path / "scoped.bin").read_bytes()


def test_scoped_copy_of_missing_source_does_not_create_sink(tmp_path):
    dst = tmp_path / "dst.bin"

    with pytest.raises(AcquisitionFailure):
        scoped.copy(tmp_path / "missing.bin", dst)

    assert not dst.exists()


# ============================================================================
# 读取第一行
# ============================================================================


def test_scoped_first_line_of_missing_file_returns_default(tmp_path):
    assert scoped.first_line_of_file(tmp_path / "missing.txt", "n/a") == "n/a"


def test_first_line_of_existing_file(tmp_path):
    path = tmp_path / "lines.txt"
    path.write_text("first\nsecond\n", encoding="utf-8")

    assert scoped.first_line_of_file(path, "n/a") == "first"
    assert manual.first_line_of_file(path) == "first"


def test_first_line_of_empty_file_is_none(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")

    assert scoped.first_line_of_file(path, "n/a") is None


def test_scoped_first_line_close_failure_is_not_defaulted(tmp_path, monkeypatch):
    path = tmp_path / "lines.txt"
    path.write_text("first\n", encoding="utf-8")
    cause = OSError("close failed")

    def failing_release(self):
        self._file.close()
        raise cause

    monkeypatch.setattr(FileLineSource, "_do_release", failing_release)

    with pytest.raises(ReleaseFailure) as info:
        scoped.first_line_of_file(path, "n/a")

    assert info.value.cause is cause


def test_manual_first_line_of_missing_file_raises(tmp_path):
    with pytest.raises(AcquisitionFailure):
        manual.first_line_of_file(tmp_path / "missing.txt")


def test_manual_first_byte_of_file(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"\x07rest")
    empty = tmp_path / "empty.bin"
    empty.write_bytes(b"")

    assert manual.first_byte_of_file(path) == 7
    assert manual.first_byte_of_file(empty) == -1


# ============================================================================
# 两种写法在释放失败时的差异
# ============================================================================


def test_finally_release_failure_replaces_body_failure(make_resource):
    resource = make_resource(
        "a", fail_use=OSError("device failed"), fail_release=OSError("device failed")
    )

    with pytest.raises(ReleaseFailure) as info:
        manual.release_in_finally(lambda: resource, lambda r: r.use())

    chain = []
    exc = info.value
    while exc is not None:
        chain.append(type(exc))
        exc = exc.__context__
    assert UseFailure in chain
    assert get_suppressed(info.value) == ()


def test_scoped_release_failure_is_kept_behind_body_failure(make_resource):
    resource = make_resource(
        "a", fail_use=OSError("device failed"), fail_release=OSError("device failed")
    )

    with pytest.raises(UseFailure) as info:
        with_resource(lambda: resource, lambda r: r.use())

    assert [type(s) for s in get_suppressed(info.value)] == [ReleaseFailure]


def test_greet_uses_demo_resource():
    assert scoped.greet() == "hello"


# ============================================================================
# 命令行
# ============================================================================


def test_cli_copy(src, tmp_path):
    dst = tmp_path / "dst.bin"

    assert main(["copy", str(src), str(dst), "--buffer-size", "1024"]) == 0
    assert dst.read_bytes() == DATA


def test_cli_manual_copy(src, tmp_path):
    dst = tmp_path / "dst.bin"

    assert main(["copy", str(src), str(dst), "--manual"]) == 0
    assert dst.read_bytes() == DATA


def test_cli_copy_of_missing_source_fails(tmp_path):
    assert main(["copy", str(tmp_path / "missing"), str(tmp_path / "dst")]) == 1


def test_cli_first_line_prints_default(tmp_path, capsys):
    assert main(["first-line", str(tmp_path / "missing.txt"), "--default", "fallback"]) == 0
    assert capsys.readouterr().out == "fallback\n"


def test_cli_greet(capsys):
    assert main(["greet"]) == 0
    assert capsys.readouterr().out == "hello\n"
