"""
Main module (Main Entry Point)

Interactive command line for translating one column of an HMI text table.
Picks the input workbook, the source/target columns and the run mode, then
runs the row driver in the background while the console shows progress.
"""

import argparse
import glob
import os
import queue
import sys
import threading
import traceback

from .config import (
    DEFAULT_SOURCE_COLUMN,
    DEFAULT_TARGET_COLUMN,
    FIRST_LANGUAGE_COLUMN,
    REFERENCE_COLUMN_PREFIX,
    INPUT_EXTENSION,
    OUTPUT_PREFIX,
    MODE_FULL,
    MODE_QUICK,
    RUN_MODES,
    STRATEGY_ADJACENT,
    REUSE_STRATEGIES,
    HISTORY_TRACKS_REUSE,
    PATTERN_CACHE_POLICY,
    CACHE_POLICY_OVERWRITE,
    ROW_DELAY_SECONDS,
    GLOSSARY_FILE_NAME,
    GLOSSARY_MAX_TERMS,
    SLACK_WEBHOOK_URL,
    resolve_api_key,
    validate_api_key,
    validate_config,
)
from .driver import RowDriver, run_in_background
from .engine import OutcomeKind, ReuseEngine
from .exceptions import ConfigurationError
from .glossary import Glossary
from .handlers import CsvSheet, XlsxSheet
from .observers import ConsoleRenderer, QueueObserver
from .patterns import PatternCache
from .slack_notifier import send_completion_notification, send_error_notification
from .translator import GeminiTranslator


# ==============================================================================
# [File selection]
# ==============================================================================
def list_input_files(directory="."):
    """
    Lists the workbooks that can be translated.

    Files produced by earlier runs (starting with "translated"), Excel lock
    files and the glossary are excluded.

    Args:
        directory (str): Folder to search

    Returns:
        list: Sorted file paths
    """
    pattern = os.path.join(directory, f"*{INPUT_EXTENSION}")
    files = []
    for path in sorted(glob.glob(pattern)):
        name = os.path.basename(path)
        if name.startswith("translated") or name.startswith("~$") or name == GLOSSARY_FILE_NAME:
            continue
        files.append(path)
    return files


def build_output_path(input_path, csv_output=False):
    """
    Builds the output path: "translated-" + input base name, next to the input.

    Examples:
        >>> build_output_path("texts/HMI_Texts.xlsx")
        'texts/translated-HMI_Texts.xlsx'
        >>> build_output_path("HMI_Texts.xlsx", csv_output=True)
        'translated-HMI_Texts.csv'
    """
    directory, file_name = os.path.split(input_path)
    base, _ = os.path.splitext(file_name)
    ext = ".csv" if csv_output else INPUT_EXTENSION
    return os.path.join(directory, f"{OUTPUT_PREFIX}{base}{ext}")


def parse_choice(answer, count, default=None):
    """
    Parses a 1-based menu choice.

    Args:
        answer (str): What the user typed
        count (int): Number of options
        default (int, optional): Used when the answer is empty

    Returns:
        int: The 1-based choice

    Raises:
        ConfigurationError: If the answer is not a valid option
    """
    answer = answer.strip()
    if not answer:
        if default is None:
            raise ConfigurationError("A selection is required.")
        return default
    try:
        choice = int(answer)
    except ValueError:
        raise ConfigurationError(f"Invalid selection: '{answer}'")
    if choice < 1 or choice > count:
        raise ConfigurationError(f"Invalid selection: {choice} (choose 1-{count})")
    return choice


def select_file(files, input_fn=input):
    print("Please select a file to translate:")
    for i, path in enumerate(files, start=1):
        print(f"{i}: {os.path.basename(path)}")
    choice = parse_choice(input_fn("Enter the number of the file: "), len(files))
    return files[choice - 1]


# ==============================================================================
# [Column selection]
# ==============================================================================
def language_columns(headers):
    """
    Returns the columns offered in the column picker.

    Args:
        headers (list): Header row

    Returns:
        list: [(1-based column number, header), ...]
    """
    columns = []
    for i, header in enumerate(headers, start=1):
        if i < FIRST_LANGUAGE_COLUMN:
            continue
        if header.lower().startswith(REFERENCE_COLUMN_PREFIX):
            continue
        columns.append((i, header))
    return columns


def select_column(headers, label, default, input_fn=input):
    """
    Asks for a column number.

    Returns:
        int: 0-based column index
    """
    print(f"\nPlease select the {label} language column:")
    for number, header in language_columns(headers):
        print(f"{number}: {header}")

    if default > len(headers):
        default = None
    hint = f" ([{default}]: {headers[default - 1]})" if default else ""
    choice = parse_choice(input_fn(f"Enter the number of the {label} language column{hint}: "),
                          len(headers), default)
    print(f"{label.capitalize()} language column: {headers[choice - 1]}")
    return choice - 1


def select_mode(input_fn=input):
    print("\nPlease select the run mode:")
    print(f"1: {MODE_FULL}  (translate every row)")
    print(f"2: {MODE_QUICK} (only rows whose target is empty or 'Text')")
    choice = parse_choice(input_fn("Enter the number of the mode ([1]): "), 2, default=1)
    return RUN_MODES[choice - 1]


# ==============================================================================
# [Run]
# ==============================================================================
def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Translate one column of an HMI/PLC text table with Gemini."
    )
    parser.add_argument("--csv", action="store_true",
                        help="Write the result as CSV instead of a workbook")
    parser.add_argument("--mode", choices=RUN_MODES,
                        help="Run mode (asked interactively when omitted)")
    parser.add_argument("--strategy", choices=REUSE_STRATEGIES, default=STRATEGY_ADJACENT,
                        help="Reuse strategy: previous-row history or numeric pattern cache")
    parser.add_argument("--dir", default=".",
                        help="Folder containing the workbooks (default: current folder)")
    return parser.parse_args(argv)


def load_sheet(file_path, csv_output):
    if csv_output:
        return CsvSheet.from_xlsx(file_path)
    return XlsxSheet(file_path)


def print_summary(summary):
    print("\n" + "=" * 60)
    print("📊 Run summary")
    print("=" * 60)
    print(f"   🌐 Translated: {summary.count(OutcomeKind.TRANSLATED)}")
    print(f"   ♻️ Reused: {summary.count(OutcomeKind.REUSE)}")
    print(f"   📋 Copied: {summary.count(OutcomeKind.COPY)}")
    print(f"   ⏭️ Skipped: {summary.count(OutcomeKind.SKIPPED)}")
    print(f"   ⏩ Already translated (quick mode): {summary.count(OutcomeKind.QUICK_SKIPPED)}")
    print(f"   ❌ Failed: {summary.count(OutcomeKind.FAILED)}")
    print(f"   📡 API calls: {summary.translation_calls}")
    if summary.cancelled:
        print(f"   ⚠️ Stopped early after {summary.processed_rows}/{summary.total_rows} rows")
    print("=" * 60)


def run(args, input_fn=input, translator=None):
    """
    Runs one interactive translation session.

    Args:
        args (argparse.Namespace): Parsed command line
        input_fn (callable): Prompt function
        translator: Translation port; a GeminiTranslator is built when omitted

    Returns:
        RunSummary: Result of the run

    Raises:
        ConfigurationError: On setup problems, before any row is processed
        OSError: If the output file could not be written
    """
    is_valid, message = validate_config()
    if not is_valid:
        raise ConfigurationError(message)

    if translator is None:
        api_key = resolve_api_key()
        is_valid, message = validate_api_key(api_key)
        if not is_valid:
            raise ConfigurationError(message)
        print("\n✅ API key validated")

        glossary = Glossary(os.path.join(args.dir, GLOSSARY_FILE_NAME))
        if glossary.is_loaded:
            print(f"✅ Glossary loaded: {glossary.get_term_count()} terms")
        translator = GeminiTranslator(api_key, glossary_text=glossary.get_prompt_text(GLOSSARY_MAX_TERMS))

    files = list_input_files(args.dir)
    if not files:
        raise ConfigurationError(f"No {INPUT_EXTENSION} files found to translate.")

    file_path = select_file(files, input_fn)
    print(f"You selected {os.path.basename(file_path)}")

    sheet = load_sheet(file_path, args.csv)
    rows = sheet.get_rows()
    if not rows:
        raise ConfigurationError("The selected workbook is empty.")

    headers = rows[0]
    source_col = select_column(headers, "source", DEFAULT_SOURCE_COLUMN, input_fn)
    target_col = select_column(headers, "target", DEFAULT_TARGET_COLUMN, input_fn)
    if source_col == target_col:
        raise ConfigurationError("Source and target columns must differ.")

    mode = args.mode or select_mode(input_fn)

    source_lang = headers[source_col]
    target_lang = headers[target_col]
    engine = ReuseEngine(
        translator,
        source_lang,
        target_lang,
        mode=mode,
        strategy=args.strategy,
        history_tracks_reuse=HISTORY_TRACKS_REUSE,
        pattern_cache=PatternCache(overwrite=PATTERN_CACHE_POLICY == CACHE_POLICY_OVERWRITE),
    )

    messages = queue.Queue()
    stop_event = threading.Event()
    observer = QueueObserver(messages)
    driver = RowDriver(sheet, engine, observer, source_col, target_col,
                       row_delay=ROW_DELAY_SECONDS, stop_event=stop_event)

    print(f"\n🚀 Translating {source_lang} → {target_lang} ({mode} mode, {args.strategy} reuse)")
    print("   (Ctrl+C to stop; rows already written are kept)")
    run_in_background(driver, observer.on_done)
    result = ConsoleRenderer(messages, stop_event).render()

    if isinstance(result, Exception):
        raise result

    summary = result
    output_path = build_output_path(file_path, args.csv)
    try:
        sheet.save(output_path)
    except OSError as e:
        raise OSError(f"could not write {output_path}: {e}") from e
    summary.output_path = output_path

    print_summary(summary)
    print(f"\nTranslation complete. File saved as {output_path}")

    send_completion_notification(SLACK_WEBHOOK_URL, os.path.basename(file_path), summary)
    return summary


def main(argv=None):
    """
    Entry point. Returns the process exit code.
    """
    print("=" * 60)
    print("🌐 HMI Text Table Translator")
    print("   Gemini translation with row reuse")
    print("=" * 60)

    args = parse_args(argv)
    try:
        run(args)
    except ConfigurationError as e:
        print(f"\n❌ Setup error: {e}")
        return 1
    except OSError as e:
        print(f"\n❌ File error: {e}")
        send_error_notification(SLACK_WEBHOOK_URL, f"*File error*: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\n⚠️ Interrupted by user.")
        return 1
    except Exception as e:
        print(f"\n❌ Unexpected error: {e}")
        traceback.print_exc()
        send_error_notification(SLACK_WEBHOOK_URL, f"*Error*: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
