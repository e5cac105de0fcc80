"""
Script to store the reference language profiles in the translator database.

Builds character-frequency profiles for the English, Portuguese, Spanish and
French reference paragraphs and writes them to the ``language_profiles``
table, optionally adding more profiles from text files.

Example usage:
    $ python -m translator.scripts.seed_profiles
    $ python -m translator.scripts.seed_profiles --overwrite
    $ python -m translator.scripts.seed_profiles --sample de=samples/german.txt

Environment variables:
    DATA_DIR: Directory for data files (default: api/data)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from translator.core.config import get_settings
from translator.db.database import TranslatorDatabase
from translator.services.language.classifier import LanguageClassifier
from translator.services.language.samples import seed_reference_profiles
from translator.services.language.store import SQLiteProfileStore, StoreError

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def parse_sample(value: str) -> Tuple[str, Path]:
    """Parse a ``code=path`` argument."""
    code, sep, path = value.partition("=")
    code = code.strip().lower()
    if not sep or not code or not path.strip():
        raise argparse.ArgumentTypeError(f"Expected CODE=PATH, got {value!r}")
    return code, Path(path.strip())


def main(
    overwrite: bool = False,
    samples: Optional[List[Tuple[str, Path]]] = None,
    db_path: Optional[str] = None,
) -> List[str]:
    """Seed the profile table.

    Returns:
        Language codes that were written.

    Raises:
        StoreError: If the database rejects a write.
    """
    database = TranslatorDatabase(db_path or get_settings().DATABASE_PATH)
    database.initialize()

    classifier = LanguageClassifier.bootstrap_from(SQLiteProfileStore(database))
    written = seed_reference_profiles(classifier, overwrite=overwrite)

    for lang_code, path in samples or []:
        if not overwrite and classifier.get_profile(lang_code) is not None:
            logger.info(f"Profile '{lang_code}' already present, skipping {path}")
            continue
        classifier.upsert_profile(lang_code, path.read_text(encoding="utf-8"))
        written.append(lang_code)

    logger.info(
        f"{len(written)} profile(s) written; catalog now holds "
        f"{', '.join(classifier.language_codes) or 'nothing'}"
    )
    return written


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed language profiles")
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace profiles that already exist",
    )
    parser.add_argument(
        "--sample",
        action="append",
        type=parse_sample,
        default=[],
        metavar="CODE=PATH",
        help="Additional profile built from a UTF-8 text file (repeatable)",
    )
    parser.add_argument("--db-path", help="Override the database path")
    args = parser.parse_args()

    try:
        main(overwrite=args.overwrite, samples=args.sample, db_path=args.db_path)
    except (StoreError, OSError) as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)
