"""Tests for manuscript reading and result writing."""

import json

import pytest
import yaml
from docx import Document
from craftlens.io import FileHandler


def test_read_text_and_markdown(tmp_path):
    handler = FileHandler()
    (tmp_path / "draft.md").write_text("# Title\n\nBody text.", encoding="utf-8")
    assert handler.read_file(tmp_path / "draft.md") == "# Title\n\nBody text."


def test_read_docx_paragraphs(tmp_path):
    path = tmp_path / "draft.docx"
    doc = Document()
    doc.add_paragraph("First paragraph.")
    doc.add_paragraph("")
    doc.add_paragraph("Second paragraph.")
    doc.save(str(path))

    assert FileHandler().read_file(path) == "First paragraph.\n\nSecond paragraph."


def test_write_json_and_yaml(tmp_path):
    handler = FileHandler()
    data = {"pattern": "mirror", "count": 5}

    handler.write_json(tmp_path / "out" / "result.json", data)
    handler.write_yaml(tmp_path / "result.yaml", data)

    assert json.loads((tmp_path / "out" / "result.json").read_text(encoding="utf-8")) == data
    assert handler.read_yaml(tmp_path / "result.yaml") == data


def test_unsupported_format():
    with pytest.raises(ValueError):
        FileHandler().dumps({}, "xml")


def test_empty_yaml_reads_as_mapping(tmp_path):
    (tmp_path / "empty.yaml").write_text("")
    assert FileHandler().read_yaml(tmp_path / "empty.yaml") == {}
    assert yaml.safe_load(FileHandler().dumps({"a": 1}, "yaml")) == {"a": 1}
