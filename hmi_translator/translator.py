"""
Translator module (Translator)

Calls Google Gemini to translate a single HMI text.
- Fixed industrial-machine preamble (+ optional glossary) as system instruction
- Deterministic decoding (temperature 0)
- Hard timeout per call
- Errors classified into TranslationError kinds; no retries here
"""

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from .config import MODEL_NAME, API_TIMEOUT_SECONDS, TEMPERATURE, MAX_OUTPUT_TOKENS
from .exceptions import TranslationError
from .utils import strip_quotes


PROMPT_TRANSLATION_SYSTEM = (
    "You will be provided with a sentence in {source_lang}, and your task is to "
    "translate it into {target_lang}. These are messages concerning industrial "
    "machines. Right means the direction right. AC means AC motor. "
    "Reply with the translation only."
)

PROMPT_GLOSSARY = (
    "\n\nWhen one of these HMI/PLC terms appears, use the given translation"
    " and keep the plant-specific spelling:\n{glossary_text}"
)


def build_system_instruction(source_lang, target_lang, glossary_text=""):
    """
    Builds the instruction preamble sent with every request.

    Args:
        source_lang (str): Source language name
        target_lang (str): Target language name
        glossary_text (str): Markdown glossary table, may be empty

    Returns:
        str: The system instruction
    """
    instruction = PROMPT_TRANSLATION_SYSTEM.format(source_lang=source_lang, target_lang=target_lang)
    if glossary_text:
        instruction += PROMPT_GLOSSARY.format(glossary_text=glossary_text)
    return instruction


def classify_error(error):
    """
    Maps a client exception onto a TranslationError kind.

    Args:
        error (Exception): Exception raised by the Gemini client

    Returns:
        str: A TranslationError.KIND_* value
    """
    if isinstance(error, (google_exceptions.DeadlineExceeded, TimeoutError)):
        return TranslationError.KIND_TIMEOUT
    if isinstance(error, (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied)):
        return TranslationError.KIND_AUTH
    if isinstance(error, (google_exceptions.ResourceExhausted, google_exceptions.TooManyRequests)):
        return TranslationError.KIND_RATE_LIMIT

    # Transport layers do not always wrap timeouts in a typed exception
    error_msg = str(error).lower()
    if "timeout" in error_msg or "timed out" in error_msg or "deadline" in error_msg:
        return TranslationError.KIND_TIMEOUT
    if "429" in error_msg or "quota" in error_msg:
        return TranslationError.KIND_RATE_LIMIT
    if "api key" in error_msg or "401" in error_msg:
        return TranslationError.KIND_AUTH
    return TranslationError.KIND_TRANSPORT


class GeminiTranslator:
    """
    Translation port backed by the Gemini API.

    Attributes:
        calls (int): Number of requests sent during this run
    """

    def __init__(self, api_key, model_name=MODEL_NAME, timeout=API_TIMEOUT_SECONDS,
                 glossary_text="", model_factory=None):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.timeout = timeout
        self.glossary_text = glossary_text
        self.calls = 0
        self._model_factory = model_factory or genai.GenerativeModel
        self._models = {}

    def _get_model(self, source_lang, target_lang):
        # One model per language pair, since the system instruction embeds both
        key = (source_lang, target_lang)
        if key not in self._models:
            self._models[key] = self._model_factory(
                self.model_name,
                system_instruction=build_system_instruction(source_lang, target_lang, self.glossary_text),
                generation_config=genai.GenerationConfig(
                    temperature=TEMPERATURE,
                    max_output_tokens=MAX_OUTPUT_TOKENS,
                ),
            )
        return self._models[key]

    def translate(self, text, source_lang, target_lang):
        """
        Translates one text.

        Args:
            text (str): Text to translate
            source_lang (str): Source language name
            target_lang (str): Target language name

        Returns:
            str: The translation, trimmed of whitespace and surrounding quotes

        Raises:
            TranslationError: On timeout, auth, quota, transport or empty/blocked responses
        """
        model = self._get_model(source_lang, target_lang)
        self.calls += 1

        try:
            response = model.generate_content(
                text,
                request_options={"timeout": self.timeout},
            )
        except Exception as e:
            kind = classify_error(e)
            if kind == TranslationError.KIND_TIMEOUT:
                raise TranslationError(f"translation request timed out ({self.timeout}s)", kind) from e
            raise TranslationError(f"error during translation: {str(e)[:100]}", kind) from e

        try:
            result_text = response.text
        except ValueError as e:
            # Blocked or empty candidates raise on .text
            raise TranslationError(f"malformed response: {str(e)[:100]}", TranslationError.KIND_MALFORMED) from e

        result_text = strip_quotes(result_text or "")
        if not result_text:
            raise TranslationError("empty translation returned", TranslationError.KIND_MALFORMED)
        return result_text
