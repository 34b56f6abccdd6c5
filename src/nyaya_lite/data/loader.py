import os
import json
import logging
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from nyaya_lite.errors import CorpusLoadError
from nyaya_lite.models import LawRecord, Lawyer

logger = logging.getLogger(__name__)

DATA_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LAW_DB_PATH = os.path.join(DATA_DIR, "lawdb.json")
DEFAULT_LAWYERS_PATH = os.path.join(DATA_DIR, "lawyers.json")

ModelT = TypeVar("ModelT", bound=BaseModel)


def _read_json_list(path: str, label: str) -> List[Any]:
    if not os.path.exists(path):
        raise CorpusLoadError(f"{label} not found at {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise CorpusLoadError(f"Invalid JSON in {label} {path}: {e}") from e
    except OSError as e:
        raise CorpusLoadError(f"Failed to read {label} {path}: {e}") from e
    if not isinstance(raw, list):
        raise CorpusLoadError(f"{label} {path} must contain a JSON list")
    return raw


def _validate_entries(raw: List[Any], model: Type[ModelT], label: str) -> List[ModelT]:
    records: List[ModelT] = []
    for idx, entry in enumerate(raw):
        if not isinstance(entry, dict):
            logger.warning("Skipping %s entry %d: expected object, got %s", label, idx, type(entry).__name__)
            continue
        try:
            records.append(model.model_validate(entry))
        except ValidationError as e:
            logger.warning("Skipping %s entry %d (%s): %s", label, idx,
                           entry.get("title") or entry.get("name"), e.errors()[0].get("msg"))
    return records


def load_corpus(path: Optional[str] = None) -> List[LawRecord]:
    """Load and validate the law database.

    Entries that fail validation are dropped with a warning so one bad record
    cannot take the rest of the corpus down with it.
    Raises CorpusLoadError if the file is missing, unreadable or not a JSON list.
    """
    path = path or DEFAULT_LAW_DB_PATH
    raw = _read_json_list(path, "Law database")
    records = _validate_entries(raw, LawRecord, "law")
    logger.info("Loaded %d laws from %s (%d skipped)", len(records), path, len(raw) - len(records))
    return records


def load_lawyers(path: Optional[str] = None) -> List[Lawyer]:
    """Load the lawyer directory; same failure rules as :func:`load_corpus`."""
    path = path or DEFAULT_LAWYERS_PATH
    raw = _read_json_list(path, "Lawyer directory")
    lawyers = _validate_entries(raw, Lawyer, "lawyer")
    logger.info("Loaded %d lawyers from %s (%d skipped)", len(lawyers), path, len(raw) - len(lawyers))
    return lawyers


def list_categories(corpus: List[LawRecord]) -> List[str]:
    """Distinct categories, in corpus order."""
    seen = set()
    out: List[str] = []
    for r in corpus:
        if r.category in seen:
            continue
        seen.add(r.category)
        out.append(r.category)
    return out


def search_laws(corpus: List[LawRecord], search: Optional[str] = None, category: Optional[str] = None) -> List[LawRecord]:
    """Filter by exact category and by case-insensitive substring of title or any keyword."""
    results = corpus
    if category:
        results = [r for r in results if r.category == category]
    if search:
        needle = search.lower()
        results = [
            r for r in results
            if needle in r.title.lower() or any(needle in k.lower() for k in r.keywords)
        ]
    return list(results)


def find_law(corpus: List[LawRecord], law_id: str) -> Optional[LawRecord]:
    for r in corpus:
        if r.id == law_id:
            return r
    return None


def filter_lawyers(lawyers: List[Lawyer], specialization: Optional[str] = None) -> List[Lawyer]:
    # "criminal" matches "Criminal Law"
    if not specialization:
        return list(lawyers)
    needle = specialization.lower()
    return [x for x in lawyers if needle in x.specialization.lower()]
