from m3u8_cli.storage.resume import filter_existing


def test_filter_drops_existing_segments_and_keeps_order(tmp_path):
    (tmp_path / "seg2.ts").write_bytes(b"partial")

    remaining = filter_existing(tmp_path, ["seg1.ts", "seg2.ts", "seg3.ts"])

    assert remaining == ["seg1.ts", "seg3.ts"]


def test_filter_is_idempotent(tmp_path):
    (tmp_path / "seg2.ts").write_bytes(b"")
    once = filter_existing(tmp_path, ["seg1.ts", "seg2.ts", "seg3.ts"])

    assert filter_existing(tmp_path, once) == once


def test_filter_with_every_segment_present(tmp_path):
    names = ["a.ts", "b.ts"]
    for name in names:
        (tmp_path / name).write_bytes(b"x")

    assert filter_existing(tmp_path, names) == []


def test_filter_with_missing_directory(tmp_path):
    names = ["a.ts", "b.ts"]
    assert filter_existing(tmp_path / "nowhere", names) == names
