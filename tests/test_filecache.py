import pytest

from deskbg.filecache import FileCache, FileKind


def test_lookup_missing_is_none():
    cache = FileCache()
    assert cache.lookup(FileKind.IMAGE, "/a") is None


def test_add_and_lookup():
    cache = FileCache()
    cache.add(FileKind.IMAGE, "/a", "pixels")
    assert cache.lookup(FileKind.IMAGE, "/a") == "pixels"
    assert cache.lookup(FileKind.THUMBNAIL, "/a") is None
    assert len(cache) == 1


def test_same_file_different_kinds():
    cache = FileCache()
    cache.add(FileKind.IMAGE, "/a", 1)
    cache.add(FileKind.THUMBNAIL, "/a", 2)
    assert cache.lookup(FileKind.IMAGE, "/a") == 1
    assert cache.lookup(FileKind.THUMBNAIL, "/a") == 2


def test_duplicate_add_raises():
    cache = FileCache()
    cache.add(FileKind.SLIDESHOW, "/s.xml", object())
    with pytest.raises(ValueError):
        cache.add(FileKind.SLIDESHOW, "/s.xml", object())


def test_oldest_entries_are_dropped():
    cache = FileCache()
    for name in ["/1", "/2", "/3", "/4"]:
        cache.add(FileKind.IMAGE, name, name)
    assert len(cache) < cache.size
    assert cache.lookup(FileKind.IMAGE, "/1") is None
    assert cache.lookup(FileKind.IMAGE, "/4") == "/4"
    assert cache.lookup(FileKind.IMAGE, "/3") == "/3"


def test_newest_entry_always_kept():
    cache = FileCache()
    for i in range(10):
        cache.add(FileKind.THUMBNAIL, f"/{i}", i)
        assert cache.lookup(FileKind.THUMBNAIL, f"/{i}") == i
    assert len(cache) == cache.size - 1


def test_remove_kind():
    cache = FileCache()
    cache.add(FileKind.IMAGE, "/a", 1)
    cache.add(FileKind.SLIDESHOW, "/b", 2)
    cache.add(FileKind.IMAGE, "/c", 3)
    cache.remove_kind(FileKind.IMAGE)
    assert len(cache) == 1
    assert cache.lookup(FileKind.SLIDESHOW, "/b") == 2
    assert cache.lookup(FileKind.IMAGE, "/a") is None


def test_clear():
    cache = FileCache()
    cache.add(FileKind.IMAGE, "/a", 1)
    cache.add(FileKind.THUMBNAIL, "/a", 2)
    cache.clear()
    assert len(cache) == 0
    assert cache.lookup(FileKind.IMAGE, "/a") is None


def test_can_re_add_after_remove():
    cache = FileCache()
    cache.add(FileKind.IMAGE, "/a", 1)
    cache.remove_kind(FileKind.IMAGE)
    cache.add(FileKind.IMAGE, "/a", 5)
    assert cache.lookup(FileKind.IMAGE, "/a") == 5