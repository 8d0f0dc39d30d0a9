"""
Candidate retrieval under a strict no-substitution policy.

Branches (first applicable wins):
1. explicit technique → alias variants over title / technique name / tags.
   Zero hits returns an empty pool; it never falls through to other branches.
2. explicit position → title substring (falls through to 3 when nothing matches).
3. first keyword → title substring.
4. nothing to search → empty pool. No generic or random picks.

Hits are ordered by quality score (descending) and capped at candidate_pool_size.
The public entry point is get_candidate_pool.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..models.candidate import CandidateItem, CandidatePool
from ..models.config import DEFAULT_CONFIG, PipelineConfig
from ..models.understanding import Understanding
from ..stores import SEARCHABLE_FIELDS, ContentStore

logger = logging.getLogger(__name__)

ALIASES_PATH = Path(__file__).resolve().parent.parent / "data" / "technique_aliases.json"

AliasTable = Dict[str, Dict[str, List[str]]]


@lru_cache(maxsize=1)
def _packaged_aliases() -> AliasTable:
    with open(ALIASES_PATH) as f:
        return json.load(f)


def load_alias_table(config: PipelineConfig = DEFAULT_CONFIG) -> AliasTable:
    """Packaged alias families with config.technique_aliases merged over them."""
    table = {name: dict(family) for name, family in _packaged_aliases().items()}
    table.update(config.technique_aliases)
    return table


def get_technique_variations(technique: str, aliases: AliasTable) -> List[str]:
    """
    Lexical variants for a technique: the technique itself, plus the variants of
    every alias family whose trigger appears in it. Duplicates removed, order kept.
    """
    lowered = technique.strip().lower()
    variations = [lowered] if lowered else []
    for family in aliases.values():
        triggers = family.get("triggers", [])
        if any(t.lower() in lowered for t in triggers if t):
            variations.extend(v.lower() for v in family.get("variants", []) if v)
    return list(dict.fromkeys(variations))


def _sort_by_quality_and_cap(
    candidates: List[CandidateItem],
    config: PipelineConfig,
) -> List[CandidateItem]:
    """Sort by quality score (descending, stable) and return up to candidate_pool_size."""
    ordered = sorted(candidates, key=lambda c: c.quality_score, reverse=True)
    return ordered[: config.candidate_pool_size]


def _search(
    store: ContentStore,
    terms: Sequence[str],
    fields: Sequence[str],
    config: PipelineConfig,
) -> List[CandidateItem]:
    hits = store.search(list(terms), list(fields), config.candidate_pool_size)
    return _sort_by_quality_and_cap([c for c in hits if c.is_active], config)


def _retrieve(
    understanding: Understanding,
    store: ContentStore,
    config: PipelineConfig,
) -> CandidatePool:
    explicit = understanding.explicit

    if explicit.technique:
        variations = get_technique_variations(explicit.technique, load_alias_table(config))
        results = _search(store, variations, SEARCHABLE_FIELDS, config)
        if not results:
            logger.info(
                "[matcher] No items for technique %r - returning empty (no substitution)",
                explicit.technique,
            )
        return CandidatePool(candidates=results, strategy="technique", terms=variations)

    if explicit.position:
        results = _search(store, [explicit.position], ("title",), config)
        if results:
            return CandidatePool(
                candidates=results, strategy="position", terms=[explicit.position]
            )

    if explicit.keywords:
        keyword = explicit.keywords[0]
        results = _search(store, [keyword], ("title",), config)
        return CandidatePool(candidates=results, strategy="keyword", terms=[keyword])

    logger.info("[matcher] No specific criteria matched - returning empty pool")
    return CandidatePool(strategy="none")


def get_candidate_pool(
    understanding: Understanding,
    store: ContentStore,
    config: Optional[PipelineConfig] = None,
) -> CandidatePool:
    """
    Retrieve raw candidates for an Understanding.

    Store failures are logged and returned as an empty, degraded pool; they never
    raise to the caller.
    """
    config = config or DEFAULT_CONFIG
    try:
        pool = _retrieve(understanding, store, config)
    except Exception as e:
        logger.error("[matcher] Failed to get candidate items: %s: %s", type(e).__name__, e)
        return CandidatePool(strategy="error", degraded=True)
    logger.info(
        "[matcher] Retrieved %d candidates via %s terms=%s",
        len(pool.candidates), pool.strategy, pool.terms,
    )
    return pool
