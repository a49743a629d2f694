#!/usr/bin/env python3
"""
Re-rank a saved batch of search results from the command line.

The input is JSON: either an object with a "results" list (the shape
returned by raw search APIs) or a bare list. Each result needs url,
title and extract; null or missing fields are treated as empty.

Usage:
    # Rank results saved to a file
    python scripts/rank_results.py --query "url" --input results.json

    # Read results from stdin
    curl -s "$SEARCH_API?s=url" | python scripts/rank_results.py --query "url"

    # Show scores and per-field features as JSON
    python scripts/rank_results.py --query "url" --input results.json \
        --format json --explain
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ranker.config import get_settings
from ranker.models.schemas import ResultItem
from ranker.ranking.query import InvalidQueryError
from ranker.ranking.session import RankingSession, compile_query

logger = logging.getLogger(__name__)


def load_results(input_path: Optional[Path]) -> List[ResultItem]:
    """
    Load results from a JSON file or stdin.

    Items that are not objects, or whose fields are not text, numbers or
    null, are skipped with a warning so one bad entry cannot sink the run.

    Args:
        input_path: Path to the JSON file, or None for stdin

    Returns:
        List of validated results, in input order
    """
    if input_path is None:
        data = json.load(sys.stdin)
    else:
        if not input_path.exists():
            raise FileNotFoundError(f"Results file not found: {input_path}")
        with open(input_path, "r", encoding="utf-8") as f:
            data = json.load(f)

    if isinstance(data, dict):
        data = data.get("results") or []

    if not isinstance(data, list):
        raise ValueError("Expected a list of results or an object with a 'results' list")

    items = []
    for position, raw in enumerate(data):
        try:
            items.append(ResultItem.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping result {position}: {e.error_count()} invalid field(s)")

    return items


def build_session(query: str, results: List[ResultItem], lowercase_terms: bool) -> RankingSession:
    """
    Create a session and add every result to it.

    Args:
        query: Search query
        results: Validated results
        lowercase_terms: Lower-case query terms before matching

    Returns:
        RankingSession holding the results
    """
    session = compile_query(query, lowercase_terms=lowercase_terms)
    for result in results:
        session.add_result(result.url, result.title, result.extract)
    return session


def print_text(session: RankingSession, explain: bool) -> None:
    """Print ranked results as numbered lines."""
    print(f"Query: {session.query}")
    print(f"Terms: {', '.join(session.query_terms())}")
    print()

    for position, (index, score) in enumerate(session.ranked_scores(), start=1):
        result = session.results[index]
        print(f"{position:3d}. [{index}] {result.title or '(no title)'}")
        print(f"     {result.url}")
        if explain:
            print(f"     score={score:.6g}")


def build_json(session: RankingSession, explain: bool) -> Dict[str, Any]:
    """Ranked results as a JSON-serializable dict."""
    output: Dict[str, Any] = {
        "query": session.query,
        "query_terms": session.query_terms(),
        "order": session.rank(),
        "results": [result.to_dict() for result in session.ranked_results()],
    }
    if explain:
        output["explanations"] = session.explain()
    return output


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Re-rank search results by relevance to a query"
    )
    parser.add_argument("--query", "-q", required=True, help="Search query")
    parser.add_argument(
        "--input", "-i", type=Path, default=None,
        help="JSON file with results (default: read stdin)",
    )
    parser.add_argument(
        "--format", choices=["text", "json"], default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--explain", action="store_true",
        help="Include scores and per-field features",
    )
    parser.add_argument(
        "--lowercase-query", action="store_true", default=None,
        help="Lower-case query terms so matching ignores case",
    )
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    lowercase_terms = settings.lowercase_query if args.lowercase_query is None else args.lowercase_query

    try:
        results = load_results(args.input)
        session = build_session(args.query, results, lowercase_terms)
    except InvalidQueryError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as e:
        print(f"✗ Could not load results: {e}", file=sys.stderr)
        return 1

    logger.info(f"Loaded {len(session)} results")

    if args.format == "json":
        print(json.dumps(build_json(session, args.explain), indent=2, ensure_ascii=False))
    else:
        print_text(session, args.explain)

    return 0


if __name__ == "__main__":
    sys.exit(main())
