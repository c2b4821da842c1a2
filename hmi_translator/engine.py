"""
Reuse engine module (Reuse Engine)

Decides, row by row, whether to skip, copy, reuse an earlier translation
fragment, or call the translator.
- Classification and the quick-mode gate come from the classifier
- Fragment reuse comes from the pattern matchers
- Every decision is returned as a RowOutcome; writing is the caller's job

Rows must be fed in ascending order: reuse depends on the outcome of the
immediately preceding row.
"""

from dataclasses import dataclass
from typing import Optional

from .classifier import Classification, COPY_CLASSIFICATIONS, classify, is_already_translated
from .config import MODE_FULL, MODE_QUICK, STRATEGY_ADJACENT, STRATEGY_PATTERN, REUSE_STRATEGIES
from .exceptions import TranslationError
from .patterns import (
    DELIMITER,
    UNDERSCORE,
    PatternCache,
    match_delimiter_prefix,
    match_underscore_base,
)
from .utils import is_integer


# ==============================================================================
# [Outcome values]
# ==============================================================================
class OutcomeKind:
    """Per-row result kinds"""
    COPY = "copy"
    REUSE = "reuse"
    TRANSLATED = "translated"
    FAILED = "failed"
    SKIPPED = "skipped"
    QUICK_SKIPPED = "quick_skipped"


# Kinds whose text is written to the target cell
WRITE_KINDS = (OutcomeKind.COPY, OutcomeKind.REUSE, OutcomeKind.TRANSLATED)


@dataclass
class RowOutcome:
    kind: str
    text: Optional[str] = None
    reason: str = ""
    error: Optional[TranslationError] = None
    calls: int = 0

    @property
    def should_write(self):
        return self.kind in WRITE_KINDS


@dataclass
class History:
    """The previous row's source text and its translation."""
    previous_text: Optional[str] = None
    previous_translation: Optional[str] = None

    def remember(self, text, translation):
        self.previous_text = text
        self.previous_translation = translation

    def clear(self):
        self.previous_text = None
        self.previous_translation = None

    @property
    def is_empty(self):
        return self.previous_text is None


class ReuseEngine:
    """
    Stateful per-row decision process.

    Args:
        translator: Object with translate(text, source_lang, target_lang) -> str
        source_lang (str): Source language name (the source column header)
        target_lang (str): Target language name (the target column header)
        mode (str): "full" or "quick"
        strategy (str): "adjacent" (history based) or "pattern" (pattern cache)
        history_tracks_reuse (bool): Reused rows also become the new history entry
        pattern_cache (PatternCache, optional): Cache for the pattern strategy
    """

    def __init__(self, translator, source_lang, target_lang, mode=MODE_FULL,
                 strategy=STRATEGY_ADJACENT, history_tracks_reuse=True, pattern_cache=None):
        if mode not in (MODE_FULL, MODE_QUICK):
            raise ValueError(f"unknown run mode: {mode}")
        if strategy not in REUSE_STRATEGIES:
            raise ValueError(f"unknown reuse strategy: {strategy}")

        self.translator = translator
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.mode = mode
        self.strategy = strategy
        self.history_tracks_reuse = history_tracks_reuse
        self.history = History()
        self.pattern_cache = pattern_cache if pattern_cache is not None else PatternCache()

    def process_row(self, row_index, text, target_text=None):
        """
        Produces the outcome for one row.

        Args:
            row_index (int): 0-based row index (0 is the header)
            text (str): Raw source cell text
            target_text (str, optional): Current target cell text (quick mode)

        Returns:
            RowOutcome: The decision for this row
        """
        text = (text or "").strip()
        if not text:
            return RowOutcome(OutcomeKind.SKIPPED, reason="empty")

        classification = classify(text, row_index)
        if classification == Classification.HEADER:
            return RowOutcome(OutcomeKind.SKIPPED, reason="header")
        if classification == Classification.NO_OP_DEFAULT:
            return RowOutcome(OutcomeKind.SKIPPED, reason="default text")
        if classification in COPY_CLASSIFICATIONS:
            return RowOutcome(OutcomeKind.COPY, text=text, reason=classification)

        if self.mode == MODE_QUICK and is_already_translated(target_text):
            return RowOutcome(OutcomeKind.QUICK_SKIPPED, reason="already translated")

        if self.strategy == STRATEGY_PATTERN:
            outcome = self._reuse_from_cache(text)
        else:
            outcome = self._reuse_from_history(text)

        if outcome is None:
            outcome = self._translate_full(text)
        return outcome

    # ------------------------------------------------------------------------------
    # Reuse steps
    # ------------------------------------------------------------------------------
    def _reuse_from_history(self, text):
        history = self.history
        if history.is_empty:
            return None

        if text == history.previous_text:
            return self._reused(text, history.previous_translation, "repeat of previous row")

        match = match_delimiter_prefix(text, history.previous_text, history.previous_translation)
        if match is not None:
            return self._recombine(text, match, DELIMITER, "delimiter prefix")

        match = match_underscore_base(text, history.previous_text, history.previous_translation)
        if match is not None:
            return self._recombine(text, match, UNDERSCORE, "underscore base")

        return None

    def _reuse_from_cache(self, text):
        translation = self.pattern_cache.lookup(text)
        if translation is None:
            return None
        return RowOutcome(OutcomeKind.REUSE, text=translation, reason="pattern cache")

    def _recombine(self, text, match, separator, reason):
        translated_head, suffix = match
        if is_integer(suffix) or not suffix:
            return self._reused(text, translated_head + separator + suffix, reason)

        try:
            suffix_translation = self.translator.translate(suffix, self.source_lang, self.target_lang)
        except TranslationError as e:
            return RowOutcome(OutcomeKind.FAILED, reason=f"{reason}, suffix '{suffix}'", error=e, calls=1)

        return self._reused(text, translated_head + separator + suffix_translation,
                            f"{reason}, translated suffix '{suffix}'", calls=1)

    def _reused(self, text, translation, reason, calls=0):
        if self.history_tracks_reuse:
            self.history.remember(text, translation)
        return RowOutcome(OutcomeKind.REUSE, text=translation, reason=reason, calls=calls)

    # ------------------------------------------------------------------------------
    # Fresh translation
    # ------------------------------------------------------------------------------
    def _translate_full(self, text):
        try:
            translation = self.translator.translate(text, self.source_lang, self.target_lang)
        except TranslationError as e:
            return RowOutcome(OutcomeKind.FAILED, error=e, calls=1)

        self.history.remember(text, translation)
        if self.strategy == STRATEGY_PATTERN:
            self.pattern_cache.learn(text, translation)
        return RowOutcome(OutcomeKind.TRANSLATED, text=translation, calls=1)
