"""
In-memory score fusion over branch results

Branch queries return typed BranchHit rows; everything after that (outer join by id,
weighted sum, phrase boost, ranking) happens here so it can be tested without a store.
"""

from typing import Dict, List, Mapping

from domain.rag.retrieval.types import BranchHit, Candidate

# Candidate fields that hold a branch score
VECTOR = "vector_score"
LEXICAL = "lexical_score"
RELEVANCE = "relevance_score"

JoinedCandidates = Dict[int, Candidate]


def _candidate_from_hit(hit: BranchHit, score_field: str) -> Candidate:
    candidate = Candidate(
        id=hit.id,
        content=hit.content,
        content_type=hit.content_type,
        metadata=dict(hit.metadata or {}),
        type_name=hit.type_name,
        library_name=hit.library_name,
    )
    setattr(candidate, score_field, hit.score)
    return candidate


def from_hits(hits: List[BranchHit], score_field: str) -> JoinedCandidates:
    """Seed a joined set from a single branch. Duplicate ids keep their first (best-ranked) row."""
    return outer_join({}, hits, score_field)


def outer_join(joined: JoinedCandidates, hits: List[BranchHit], score_field: str) -> JoinedCandidates:
    """
    Full outer join of an existing candidate set with one more branch, by document id.

    Documents present on only one side are kept; the missing side's score stays 0.0.
    Document fields from the left side win when both sides carry the document.
    Iteration order is left-side order followed by right-only documents in branch order.
    The input set is not modified.
    """
    result: JoinedCandidates = {doc_id: c.model_copy() for doc_id, c in joined.items()}
    seen_right = set()

    for hit in hits:
        if hit.id in seen_right:
            continue
        seen_right.add(hit.id)

        existing = result.get(hit.id)
        if existing is None:
            result[hit.id] = _candidate_from_hit(hit, score_field)
        else:
            setattr(existing, score_field, hit.score)

    return result


def weighted_sum(candidate: Candidate, weights: Mapping[str, float]) -> float:
    """Sum of branch scores times their weights. `weights` maps score field -> weight."""
    return sum(getattr(candidate, score_field) * weight for score_field, weight in weights.items())


def contains_phrase(content: str, query_text: str) -> bool:
    """Case-insensitive substring test (the ILIKE '%query%' check)"""
    return (query_text or "").lower() in (content or "").lower()


def phrase_boosted(score: float, content: str, query_text: str, boost: float) -> float:
    """Multiply the score by `boost` when the content contains the whole query text"""
    return score * boost if contains_phrase(content, query_text) else score


def rank(candidates: List[Candidate], top_k: int) -> List[Candidate]:
    """
    Sort by final score, descending, and keep the first `top_k`.

    The sort is stable: equal scores keep join order, so the vector branch's order
    breaks ties first, then lexical, then relevance.
    """
    return sorted(candidates, key=lambda c: c.score, reverse=True)[:top_k]
