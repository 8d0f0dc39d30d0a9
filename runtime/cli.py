#!/usr/bin/env python3
"""
Answer one learner query from the command line and print the learning path as JSON.

Services come from the environment (.env): DATA_SOURCE, CONTENT_JSON_PATH,
USERS_JSON_PATH, RECORDS_JSON_PATH, FIREBASE_CREDENTIALS_PATH, COMPLETION_PROVIDER
and the provider API key. Without an API key the keyword fallbacks are used.

Usage:
  From repo root:
    python -m runtime.cli "my triangle keeps getting stacked" --user u1

  Optional:
    --content data/content.json
    --query-id q-123
    --max-results 5
    --pipeline-config config.json
    --no-interpreter / --no-synthesizer
"""

import argparse
import json
import sys
import uuid
from dataclasses import replace
from pathlib import Path

from learning_path.stages.orchestrator import run_learning_path

from .config import get_config
from .state import AppState, configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a BJJ learning path for one query")
    parser.add_argument("query", help="Free-text learner question")
    parser.add_argument("--user", default="", help="User id (profile and history lookup)")
    parser.add_argument(
        "--query-id",
        default=None,
        help="Query id used as the persistence key (default: random)",
    )
    parser.add_argument(
        "--content",
        type=Path,
        default=None,
        help="Content JSON file (overrides CONTENT_JSON_PATH; implies DATA_SOURCE=json)",
    )
    parser.add_argument(
        "--pipeline-config",
        type=Path,
        default=None,
        help="JSON file merged into the pipeline defaults",
    )
    parser.add_argument("--max-results", type=int, default=None, help="Ranked items to keep (default: pipeline config)")
    parser.add_argument(
        "--no-interpreter",
        action="store_true",
        help="Skip the completion-backed interpretation (keyword fallback only)",
    )
    parser.add_argument(
        "--no-synthesizer",
        action="store_true",
        help="Return the fallback learning path shape instead of synthesizing",
    )
    parser.add_argument("--ranked", action="store_true", help="Include the ranked list")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    config = get_config()
    if args.content is not None:
        data_source = "json" if config.data_source == "memory" else config.data_source
        config = replace(config, content_json_path=args.content.resolve(), data_source=data_source)
    if args.pipeline_config is not None:
        config = replace(config, pipeline_config_path=args.pipeline_config.resolve())
    ok, errors = config.validate()
    if not ok:
        for error in errors:
            print(error, file=sys.stderr)
        return 1
    configure_logging(config.log_level)

    state = AppState(config)
    pipeline_config = state.pipeline_config
    if args.no_interpreter or args.no_synthesizer:
        pipeline_config = pipeline_config.model_copy(
            update={
                "enable_interpreter": pipeline_config.enable_interpreter and not args.no_interpreter,
                "enable_synthesizer": pipeline_config.enable_synthesizer and not args.no_synthesizer,
            }
        )

    try:
        result = run_learning_path(
            args.user,
            args.query,
            args.query_id or uuid.uuid4().hex[:12],
            state.content_store,
            state.services,
            config=pipeline_config,
            max_results=args.max_results,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    out = {
        "learning_path": result.learning_path.model_dump(mode="json"),
        "metadata": result.metadata,
    }
    if args.ranked:
        out["ranked"] = [
            {
                "rank": s.rank,
                "id": s.candidate_id,
                "title": s.candidate.title,
                "combined_score": round(s.combined_score, 2),
                "rationale": s.rationale,
            }
            for s in result.ranked
        ]
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
