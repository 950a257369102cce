import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from index import IndexStore, MemoryRedis  # noqa: E402
from index_cli import IndexTool, main  # noqa: E402


def _tool() -> IndexTool:
    return IndexTool(IndexStore(MemoryRedis()))


def test_index_and_lookup(tmp_path, capsys):
    """Test indexing a file then querying it from the command line"""
    tool = _tool()
    page = tmp_path / "page.txt"
    page.write_text("cat cat dog", encoding="utf-8")

    main(["index", "http://a", str(page)], tool=tool)
    assert "Indexed http://a: 2 terms" in capsys.readouterr().out

    main(["count", "http://a", "cat"], tool=tool)
    assert capsys.readouterr().out.strip() == "2"

    main(["urls", "dog"], tool=tool)
    assert "http://a" in capsys.readouterr().out

    main(["counts", "cat"], tool=tool)
    out = capsys.readouterr().out
    assert "http://a" in out and "2" in out

    main(["indexed", "http://a"], tool=tool)
    assert "is indexed" in capsys.readouterr().out


def test_index_html(tmp_path, capsys):
    tool = _tool()
    page = tmp_path / "page.html"
    page.write_text("<p>Hello world</p><span>skip</span>", encoding="utf-8")

    main(["index", "http://a", str(page), "--html"], tool=tool)
    main(["terms"], tool=tool)
    out = capsys.readouterr().out
    assert "hello" in out and "world" in out
    assert "skip" not in out


def test_missing_count_is_reported(capsys):
    main(["count", "http://a", "cat"], tool=_tool())
    assert "❌" in capsys.readouterr().out


def test_dump_and_delete(capsys):
    tool = _tool()
    tool.index.index_page("http://a", {"cat": 1})

    main(["dump"], tool=tool)
    assert "cat" in capsys.readouterr().out

    main(["delete-all", "--yes"], tool=tool)
    assert "Deleted 2 keys" in capsys.readouterr().out
    assert tool.index.term_set() == set()


def test_delete_cancelled(monkeypatch, capsys):
    tool = _tool()
    tool.index.index_page("http://a", {"cat": 1})
    monkeypatch.setattr("builtins.input", lambda _: "n")

    main(["delete-url-sets"], tool=tool)
    assert "Cancel deletion" in capsys.readouterr().out
    assert tool.index.term_set() == {"cat"}


def test_redis_error_is_reported(capsys):
    """Test a Redis error is printed instead of escaping as a traceback"""
    tool = _tool()
    tool.index.redis_client.hset("URLSet:cat", "f", 1)

    main(["urls", "cat"], tool=tool)
    out = capsys.readouterr().out
    assert "❌" in out and "WRONGTYPE" in out
