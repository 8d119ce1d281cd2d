# core/tag_similarity.py

import re
from typing import Sequence

SUFFIX_PATTERN = re.compile(r's$|es$|ing$|ed$')
WORD_SEPARATOR_PATTERN = re.compile(r'[\s\-_]+')

MIN_STEM_LENGTH = 3
STEM_MATCH_SCORE = 0.8

EXACT_MATCH_WEIGHT = 0.5
SEMANTIC_WEIGHT = 0.5
MATCH_BONUS = 0.1
MATCH_BONUS_SEMANTIC_FLOOR = 0.1

def _stem(tag: str) -> str:
    # Strip at most one suffix; the leftmost match wins ("boxes" -> "box")
    return SUFFIX_PATTERN.sub('', tag, count=1)

def tag_similarity(tag1: str, tag2: str) -> float:
    """
    Semantic similarity between two tags, tolerant of plurals and variations

    Returns:
        Score in [0, 1]
    """
    t1 = tag1.lower().strip()
    t2 = tag2.lower().strip()

    if t1 == t2:
        return 1.0

    if t1 in t2 or t2 in t1:
        shorter = min(len(t1), len(t2))
        longer = max(len(t1), len(t2))
        return shorter / longer

    root1 = _stem(t1)
    root2 = _stem(t2)
    if root1 == root2 and len(root1) >= MIN_STEM_LENGTH:
        return STEM_MATCH_SCORE

    words1 = set(WORD_SEPARATOR_PATTERN.split(t1))
    words2 = set(WORD_SEPARATOR_PATTERN.split(t2))
    common = words1 & words2
    if common:
        return len(common) / max(len(words1), len(words2))

    return 0.0

def tag_set_similarity(reference: Sequence[str], candidate: Sequence[str]) -> float:
    """
    Similarity of a candidate tag list to a reference tag list

    Not symmetric: exact matches and best semantic matches are collected
    for each tag of ``reference``, while the exact-match ratio is divided
    by the longer of the two lists.
    """
    if not reference or not candidate:
        return 0.0

    candidate_lower = {t.lower() for t in candidate}
    exact_matches = sum(1 for tag in reference if tag.lower() in candidate_lower)

    best_scores = [
        max(tag_similarity(ref_tag, cand_tag) for cand_tag in candidate)
        for ref_tag in reference
    ]
    avg_semantic = sum(best_scores) / len(best_scores)

    exact_ratio = exact_matches / max(len(reference), len(candidate))
    score = exact_ratio * EXACT_MATCH_WEIGHT + avg_semantic * SEMANTIC_WEIGHT

    if exact_matches > 0 or avg_semantic > MATCH_BONUS_SEMANTIC_FLOOR:
        score += MATCH_BONUS

    return min(1.0, score)
