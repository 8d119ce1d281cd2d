# tests/test_description_similarity.py

import pytest
from core.description_similarity import description_similarity, description_words

def test_description_words():
    assert description_words("A beautiful beach, at sunset!") == {'beautiful', 'beach', 'sunset'}
    assert description_words(None) == set()
    assert description_words("") == set()

@pytest.mark.parametrize('other', [None, "", "a an of", "!!!"])
def test_empty_side_scores_zero(other):
    assert description_similarity("Beach at sunset", other) == 0.0
    assert description_similarity(other, "Beach at sunset") == 0.0

def test_jaccard_overlap():
    # {beautiful, beach, scene} vs {beach, sunset}
    assert description_similarity("A beautiful beach scene", "Beach at sunset") == pytest.approx(0.25)

def test_punctuation_is_ignored():
    score = description_similarity("Sunset, over the ocean!", "sunset over ocean")
    assert score == pytest.approx(3 / 4)

def test_identical_descriptions():
    assert description_similarity("Snowy mountain peak", "snowy MOUNTAIN peak") == 1.0

def test_disjoint_descriptions():
    assert description_similarity("Dense forest", "Snowy mountain peak") == 0.0
