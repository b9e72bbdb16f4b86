# Tests for fs/node.py: JSON serialization never leaks the password digest
# Created: 2026-10-19

import json

from filekeep.fs import SnapshotBuilder, VisibilityPolicy
from filekeep.fs.node import Node


def _walk(data):
    yield data
    for child in data.get("files", []) + data.get("dirs", []):
        yield from _walk(child)


class TestNodeSerialization:
    def test_file_node_shape(self):
        node = Node(name="a.txt", path="a.txt", parent=".", size=3)
        data = node.to_dict()
        assert data["name"] == "a.txt"
        assert data["size"] == 3
        assert data["protected"] is False
        assert "files" not in data
        assert "password_digest" not in data

    def test_directory_node_shape(self):
        child = Node(name="a.txt", path="d/a.txt", parent="d", size=3)
        node = Node(name="d", path="d", parent=".", is_dir=True, size=3, files_size=3, files=[child])
        data = json.loads(node.to_json())
        assert data["files_size"] == 3
        assert data["files"][0]["path"] == "d/a.txt"
        assert data["dirs"] == []

    def test_digest_not_in_repr(self):
        node = Node(name="a", path="a", parent=".", password_digest="deadbeef")
        assert "deadbeef" not in repr(node)

    def test_no_digest_anywhere_in_tree(self, tmp_path):
        (tmp_path / "sub" / "deeper").mkdir(parents=True)
        (tmp_path / "sub" / "f.txt").write_text("x")
        (tmp_path / "top.txt").write_text("x")
        (tmp_path / ".top.txt").write_text("pw-top")
        (tmp_path / ".sub").write_text("pw-sub")
        (tmp_path / "sub" / ".f.txt").write_text("pw-f")
        (tmp_path / "sub" / ".deeper").write_text("pw-deeper")

        root = SnapshotBuilder(tmp_path, VisibilityPolicy(hide_dots=True)).read(tmp_path)
        raw = root.to_json()
        data = json.loads(raw)

        nodes = list(_walk(data))
        assert len(nodes) == 5
        for item in nodes:
            assert "password_digest" not in item
        assert sum(1 for item in nodes if item["protected"]) == 4
        for secret in ("pw-top", "pw-sub", "pw-f", "pw-deeper"):
            assert secret not in raw
        for digest in (n.password_digest for n in [root, *root.files, *root.dirs]):
            if digest:
                assert digest not in raw

    def test_item_count(self):
        node = Node(
            name="d", path="d", parent=".", is_dir=True,
            files=[Node(name="a", path="d/a", parent="d")],
            dirs=[Node(name="s", path="d/s", parent="d", is_dir=True)],
        )
        assert node.item_count == 2
