"""
Translation runner script (Translate Runner Script)

Translates one column of an HMI text table in the current folder.

Usage:
    python run_translate.py [--csv] [--mode full|quick] [--strategy adjacent|pattern]
"""

import sys

from hmi_translator.main import main

if __name__ == "__main__":
    sys.exit(main())
