"""
Slack notifier module (Slack Notifier)

Sends run completion / error notifications through a Slack webhook.
Failures are reported on the console and never stop the run.
"""

import requests
from datetime import datetime

from .engine import OutcomeKind


def send_slack_message(webhook_url, message):
    """
    Posts a message to a Slack webhook.

    Args:
        webhook_url (str): Incoming webhook URL; empty disables sending
        message (str): Message text (Slack markdown)

    Returns:
        bool: True on success
    """
    if not webhook_url:
        return False

    try:
        response = requests.post(webhook_url, json={"text": message}, timeout=10)
    except requests.exceptions.Timeout:
        print("   ⚠️ Slack notification timed out (10s)")
        return False
    except requests.exceptions.RequestException as e:
        print(f"   ⚠️ Slack notification failed: {e}")
        return False

    if response.status_code != 200:
        print(f"   ⚠️ Slack notification failed (HTTP {response.status_code}): {response.text}")
        return False

    print("   📨 Slack notification sent")
    return True


def format_completion_message(file_name, summary):
    """
    Builds the completion message for a run.

    Args:
        file_name (str): Input file name
        summary (RunSummary): Result of the run

    Returns:
        str: Message text
    """
    now = datetime.now().strftime("%Y.%m.%d %H:%M")
    status = "stopped early" if summary.cancelled else "completed"

    return f"""🔥 *HMI text translation {status}*
{now}

*File*
{file_name}

*Output*
{summary.output_path}

*Rows*: {summary.processed_rows}/{summary.total_rows}
*Translated*: {summary.count(OutcomeKind.TRANSLATED)} | *Reused*: {summary.count(OutcomeKind.REUSE)} | *Copied*: {summary.count(OutcomeKind.COPY)}
*Failed*: {summary.count(OutcomeKind.FAILED)} | *API calls*: {summary.translation_calls}
"""


def send_completion_notification(webhook_url, file_name, summary):
    """Sends the completion message for a run."""
    return send_slack_message(webhook_url, format_completion_message(file_name, summary))


def send_error_notification(webhook_url, error_message):
    """
    Sends an error notification.

    Args:
        webhook_url (str): Incoming webhook URL
        error_message (str): Error text (truncated to 500 characters)
    """
    now = datetime.now().strftime("%Y.%m.%d %H:%M")

    if len(error_message) > 500:
        error_message = error_message[:500] + "..."

    message = f"""🚨 *HMI text translation failed*
{now}

{error_message}
"""
    return send_slack_message(webhook_url, message)
