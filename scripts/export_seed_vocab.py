#!/usr/bin/env python3
"""Export the built-in vocabulary as a CSV table the server can load."""

import argparse
import sys
from pathlib import Path

import pandas as pd

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.vocabulary import get_seed_data

# Canonical column name -> header written to the table
HEADERS = {
    'english': 'English',
    'vocalized': 'VocalizedForm',
    'unvocalized': 'UnvocalizedForm',
    'part_of_speech': 'PartOfSpeech',
    'topic': 'TopicCategory',
    'frequency': 'Frequency',
}


def build_frame() -> pd.DataFrame:
    df = pd.DataFrame(get_seed_data())
    return df.rename(columns=HEADERS)[list(HEADERS.values())]


def main():
    parser = argparse.ArgumentParser(description='Export the seed vocabulary to CSV')
    parser.add_argument('output', nargs='?', default='vocab_list.csv', help='Output CSV path')
    args = parser.parse_args()

    df = build_frame()
    df.to_csv(args.output, index=False, encoding='utf-8')
    print(f"Wrote {len(df)} rows to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
