"""Tests for upload validation and tool derivation."""

import json
from unittest.mock import MagicMock

import pytest

from zeromarket.core.errors import ValidationFailed
from zeromarket.domain.publishing import (
    ManifestEntry,
    Publisher,
    UploadedFile,
    content_type_for,
    derive_tools,
    parse_tags,
    read_manifest,
    validate_upload,
)

BASE = "wasm/acme/toolkit/1.0.0"


def _manifest(filename, /, **fields):
    return UploadedFile(filename, json.dumps(fields).encode())


class TestContentType:
    @pytest.mark.parametrize("name,expected", [
        ("tool.wasm", "application/wasm"),
        ("manifest.json", "application/json"),
        ("SKILL.md", "text/markdown"),
        ("README.MD", "text/markdown"),
        ("logo.png", "application/octet-stream"),
    ])
    def test_by_extension(self, name, expected):
        assert content_type_for(name) == expected


class TestParseTags:
    def test_json_list(self):
        assert parse_tags('["a", "b"]') == ["a", "b"]

    def test_not_a_list(self):
        assert parse_tags('{"a": 1}') == []

    def test_garbage(self):
        assert parse_tags("not json") == []

    def test_missing(self):
        assert parse_tags(None) == []


class TestValidateUpload:
    def test_everything_missing(self):
        with pytest.raises(ValidationFailed) as exc:
            validate_upload("", "", [])
        assert exc.value.message == "Slug is required. Display name is required. Add at least one file."

    def test_needs_wasm_and_skill_md(self):
        with pytest.raises(ValidationFailed) as exc:
            validate_upload("toolkit", "Toolkit", [UploadedFile("notes.txt", b"")])
        assert exc.value.message == "At least one .wasm file is required. SKILL.md is required."

    def test_nested_skill_md_accepted(self):
        validate_upload("toolkit", "Toolkit", [
            UploadedFile("toolkit.wasm", b"\0asm"),
            UploadedFile("docs/SKILL.md", b"# hi"),
        ])


class TestReadManifest:
    def test_name_from_manifest(self):
        entry = read_manifest(_manifest("manifest.json", name="search", description="Search"), "toolkit")
        assert entry == ManifestEntry(tool_name="search", name="search", description="Search")

    def test_name_from_filename(self):
        entry = read_manifest(_manifest("lookup.manifest.json", description="Lookup"), "toolkit")
        assert entry.tool_name == "lookup"

    def test_bare_manifest_falls_back_to_slug(self):
        entry = read_manifest(_manifest("manifest.json", description="x"), "toolkit")
        assert entry.tool_name == "toolkit"

    def test_malformed_is_skipped(self):
        assert read_manifest(UploadedFile("manifest.json", b"{nope"), "toolkit") is None

    def test_non_object_is_skipped(self):
        assert read_manifest(UploadedFile("manifest.json", b"[1, 2]"), "toolkit") is None

    def test_empty_name_is_kept(self):
        entry = read_manifest(_manifest("lookup.manifest.json", name=""), "toolkit")
        assert entry == ManifestEntry(tool_name="", name="", description=None)


class TestDeriveTools:
    def test_one_tool_per_wasm_in_upload_order(self):
        files = [
            UploadedFile("b.wasm", b""),
            UploadedFile("SKILL.md", b""),
            UploadedFile("dir/a.wasm", b""),
        ]
        tools = derive_tools(BASE, files, [ManifestEntry("a", None, "Alpha")])

        assert [t.name for t in tools] == ["b", "a"]
        assert tools[0].description == ""
        assert tools[1].description == "Alpha"
        assert tools[1].wasm_url == f"{BASE}/a.wasm"
        assert tools[1].manifest_url == f"{BASE}/manifest.json"

    def test_matches_manifest_by_declared_name(self):
        tools = derive_tools(BASE, [UploadedFile("x.wasm", b"")], [ManifestEntry("toolkit", "x", "Ex")])
        assert tools[0].description == "Ex"


class TestPublisher:
    def test_uploads_every_file_and_records_tools(self):
        repo, blobs = MagicMock(), MagicMock()
        repo.publish.return_value = "pkg_acme_toolkit_1"
        files = [
            UploadedFile("toolkit.wasm", b"\0asm"),
            _manifest("manifest.json", name="toolkit", description="Handy"),
            UploadedFile("SKILL.md", b"# toolkit"),
        ]

        result = Publisher(repo, blobs).publish(
            "acme", "42", slug="toolkit", display_name="Toolkit", version="1.0.0",
            tags=[], changelog="", files=files,
        )

        assert result == {"ok": True, "url": "/packages/acme/toolkit"}
        keys = [c.args[0] for c in blobs.put.call_args_list]
        assert keys == [f"{BASE}/toolkit.wasm", f"{BASE}/manifest.json", f"{BASE}/SKILL.md"]
        kwargs = repo.publish.call_args.kwargs
        assert kwargs["readme"] == "# toolkit"
        assert kwargs["author_id"] == "u_42"
        assert [t.description for t in kwargs["tools"]] == ["Handy"]

    def test_rejects_traversal_in_slug(self):
        repo, blobs = MagicMock(), MagicMock()
        with pytest.raises(ValidationFailed) as exc:
            Publisher(repo, blobs).publish(
                "acme", "42", slug="../etc", display_name="X", version="1.0.0",
                tags=[], changelog="",
                files=[UploadedFile("a.wasm", b""), UploadedFile("SKILL.md", b"")],
            )
        assert exc.value.message == "Invalid slug or namespace"
        blobs.put.assert_not_called()
        repo.publish.assert_not_called()

    @pytest.mark.parametrize("version", ["../../escaped", "1.0/evil", "..\\up", ".."])
    def test_rejects_version_outside_package_dir(self, version):
        repo, blobs = MagicMock(), MagicMock()
        with pytest.raises(ValidationFailed) as exc:
            Publisher(repo, blobs).publish(
                "acme", "42", slug="toolkit", display_name="X", version=version,
                tags=[], changelog="",
                files=[UploadedFile("a.wasm", b""), UploadedFile("SKILL.md", b"")],
            )
        assert exc.value.message == "Invalid version"
        blobs.put.assert_not_called()
        repo.publish.assert_not_called()
