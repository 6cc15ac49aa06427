"""File handling utilities."""

import json
import yaml
from pathlib import Path
from typing import Any, Dict, Union
from docx import Document as DocxDocument


class FileHandler:
    """Reads manuscripts and writes analysis results."""

    def read_file(self, file_path: Union[str, Path]) -> str:
        """Read manuscript text from various file formats."""
        path = Path(file_path)

        if path.suffix.lower() == '.docx':
            return self._read_docx(path)
        # Markdown and anything else is read as plain text
        return path.read_text(encoding='utf-8')

    def write_file(self, file_path: Union[str, Path], content: str) -> None:
        """Write content to file."""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')

    def write_json(self, file_path: Union[str, Path], data: Dict[str, Any]) -> None:
        """Write JSON file."""
        self.write_file(file_path, self.dumps(data, "json"))

    def read_yaml(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """Read YAML file. An empty file reads as an empty mapping."""
        path = Path(file_path)
        with path.open('r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def write_yaml(self, file_path: Union[str, Path], data: Dict[str, Any]) -> None:
        """Write YAML file."""
        self.write_file(file_path, self.dumps(data, "yaml"))

    def dumps(self, data: Dict[str, Any], format_type: str) -> str:
        """Serialize a result dictionary as JSON or YAML."""
        if format_type == "json":
            return json.dumps(data, indent=2, ensure_ascii=False)
        if format_type == "yaml":
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
        raise ValueError(f"Unsupported format: {format_type}")

    def _read_docx(self, path: Path) -> str:
        """Read DOCX file, keeping each Word paragraph as its own text paragraph."""
        doc = DocxDocument(path)
        return '\n\n'.join(paragraph.text for paragraph in doc.paragraphs if paragraph.text.strip())
