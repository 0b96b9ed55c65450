"""CSV-backed vocabulary source."""

import logging
import os

import pandas as pd

from core.errors import DataLoadFailure
from core.interfaces import VocabularySource
from core.records import COLUMN_ALIASES, REQUIRED_COLUMNS, record_from_row

logger = logging.getLogger(__name__)


def map_columns(columns) -> dict:
    """Map table headers to canonical column names. Unknown headers are skipped."""
    mapping = {}
    for column in columns:
        key = str(column).strip().lower()
        for canonical, aliases in COLUMN_ALIASES.items():
            if key in aliases and canonical not in mapping.values():
                mapping[column] = canonical
                break
    return mapping


class CsvVocabularySource(VocabularySource):
    """Loads the vocabulary table from a CSV file with named columns."""

    def __init__(self, path: str = None):
        self.path = path or os.path.expanduser('~/.config/vocab-arcade/vocab_list.csv')

    def describe(self) -> str:
        return f"CSV file {self.path}"

    def read_frame(self) -> pd.DataFrame:
        if not os.path.exists(self.path):
            raise DataLoadFailure(f"Vocabulary file not found at {self.path}")
        try:
            df = pd.read_csv(self.path, dtype=str, keep_default_na=False, encoding='utf-8-sig')
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as e:
            raise DataLoadFailure(f"Could not parse {self.path}: {e}") from e

        mapping = map_columns(df.columns)
        df = df.rename(columns=mapping)[list(mapping.values())]
        # A lone script column (e.g. "Syriac") serves as the vocalized form
        for column in REQUIRED_COLUMNS:
            if column not in df.columns:
                if column in ('vocalized', 'unvocalized') and (
                        'vocalized' in df.columns or 'unvocalized' in df.columns):
                    df[column] = ''
                else:
                    raise DataLoadFailure(f"Vocabulary file {self.path} has no '{column}' column")
        return df

    def load(self) -> list:
        df = self.read_frame()
        records = [r for r in (record_from_row(row) for row in df.to_dict('records')) if r is not None]
        dropped = len(df) - len(records)
        logger.info(f"Loaded {len(records)} vocabulary records from {self.path} ({dropped} rows dropped)")
        return records
