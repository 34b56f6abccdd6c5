"""
Validate a law database file and preview how the fallback analyzer ranks it.
Reports skipped entries and categories, then runs one or more sample queries.
"""
import os
import sys
import json
import argparse
import logging

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from nyaya_lite.analyzer import analyze
from nyaya_lite.data.loader import DEFAULT_LAW_DB_PATH, list_categories, load_corpus
from nyaya_lite.errors import CorpusLoadError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("check_corpus")

SAMPLE_QUERIES = [
    "my phone was stolen on the street by a stranger",
    "my boss is threatening me with a knife, please help immediately",
    "seniors in college are ragging me in the hostel",
]

def main():
    parser = argparse.ArgumentParser(description="Validate a law database and run sample queries")
    parser.add_argument("--path", type=str, default=DEFAULT_LAW_DB_PATH, help="Path to lawdb.json")
    parser.add_argument("--query", action="append", help="Query to analyze (repeatable)")
    args = parser.parse_args()

    try:
        corpus = load_corpus(args.path)
    except CorpusLoadError as e:
        logger.error(f"Corpus check failed: {e}")
        sys.exit(1)

    logger.info(f"Categories: {', '.join(list_categories(corpus))}")
    for query in args.query or SAMPLE_QUERIES:
        result = analyze(query, corpus)
        preview = {
            "query": query,
            "ranked": [(m.record.title, m.score, m.relevance_reason.value) for m in result.scored],
            "analysis": result.to_dict()["analysis"],
        }
        print(json.dumps(preview, indent=2, ensure_ascii=False))

if __name__ == "__main__":
    main()
