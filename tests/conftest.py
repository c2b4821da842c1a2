from __future__ import annotations

import sys
from pathlib import Path

import openpyxl
import pytest

# Ensure the project root is importable when pytest runs without an install.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from hmi_translator.exceptions import TranslationError  # noqa: E402


class FakeTranslator:
    """Translator stub that records calls and answers from a mapping."""

    def __init__(self, responses=None, failures=None):
        self.responses = responses or {}
        self.failures = failures or {}
        self.calls = []

    def translate(self, text, source_lang, target_lang):
        self.calls.append(text)
        if text in self.failures:
            raise TranslationError(f"failed: {text}", self.failures[text])
        if text in self.responses:
            return self.responses[text]
        return f"<{target_lang}:{text}>"


@pytest.fixture
def fake_translator():
    return FakeTranslator()


@pytest.fixture
def make_workbook(tmp_path):
    """Creates an .xlsx file with the given rows and returns its path."""

    def _make(rows, name="texts.xlsx"):
        wb = openpyxl.Workbook()
        ws = wb.active
        for row in rows:
            ws.append(list(row))
        path = tmp_path / name
        wb.save(path)
        return path

    return _make


HEADERS = ["ID", "Name", "Class", "Group", "Ref-EN", "de-DE", "fr-FR"]


@pytest.fixture
def headers():
    return list(HEADERS)
