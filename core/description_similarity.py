# core/description_similarity.py

import re
from typing import Optional, Set

NON_WORD_PATTERN = re.compile(r'[^\w\s]')
MIN_WORD_LENGTH = 3

def description_words(text: Optional[str]) -> Set[str]:
    """Lowercased words of a description, ignoring punctuation and short words"""
    if not text:
        return set()
    cleaned = NON_WORD_PATTERN.sub(' ', text.lower())
    return {w for w in cleaned.split() if len(w) >= MIN_WORD_LENGTH}

def description_similarity(desc1: Optional[str], desc2: Optional[str]) -> float:
    """Jaccard similarity between the word sets of two descriptions"""
    words1 = description_words(desc1)
    words2 = description_words(desc2)

    if not words1 or not words2:
        return 0.0

    return len(words1 & words2) / len(words1 | words2)
