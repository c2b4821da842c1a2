"""
Glossary module (Glossary)

Reads an optional term list (xlsx) and turns it into text for the translation prompt.
- Source term -> target term mapping
- Markdown table for the system instruction
"""

import os
import pandas as pd


class Glossary:
    """
    Manages the term list file.

    Attributes:
        terms (list): Term pairs [(source, target), ...]
        is_loaded (bool): Whether a glossary file was read
    """

    def __init__(self, file_path=None):
        self.file_path = file_path
        self.terms = []
        self.is_loaded = False
        if file_path:
            self._load_glossary()

    def _load_glossary(self):
        """
        Loads the glossary file.

        Expected layout:
        - column 1: source term
        - column 2: target term
        - further columns: notes (ignored)
        """
        if not os.path.exists(self.file_path):
            return

        df = pd.read_excel(self.file_path)
        columns = df.columns.tolist()
        if len(columns) < 2:
            raise ValueError(f"Glossary needs at least two columns (source, target): {self.file_path}")

        source_col, target_col = columns[0], columns[1]
        for _, row in df.iterrows():
            source_term = str(row[source_col]).strip() if pd.notna(row[source_col]) else ""
            target_term = str(row[target_col]).strip() if pd.notna(row[target_col]) else ""

            if not source_term or not target_term:
                continue

            self.terms.append((source_term, target_term))

        self.is_loaded = True

    def get_prompt_text(self, max_terms=200):
        """
        Builds the glossary text injected into the prompt.

        Args:
            max_terms (int): Maximum number of terms (token cost)

        Returns:
            str: Markdown table, or an empty string when there are no terms
        """
        if not self.terms:
            return ""

        lines = ["| Source | Target |", "|--------|--------|"]
        for source, target in self.terms[:max_terms]:
            source_safe = source.replace("|", "\\|")
            target_safe = target.replace("|", "\\|")
            lines.append(f"| {source_safe} | {target_safe} |")

        return "\n".join(lines)

    def get_term_count(self):
        """Returns the number of terms."""
        return len(self.terms)
