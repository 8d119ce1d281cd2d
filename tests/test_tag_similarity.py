# tests/test_tag_similarity.py

import pytest
from core.tag_similarity import tag_similarity, tag_set_similarity

def test_exact_match_ignores_case_and_whitespace():
    assert tag_similarity('Beach', ' beach ') == 1.0

def test_containment_uses_length_ratio():
    assert tag_similarity('sun', 'sunset') == pytest.approx(3 / 6)
    assert tag_similarity('sunset', 'sun') == pytest.approx(3 / 6)

def test_shared_stem():
    """Test suffix stripping (plurals, -ing, -ed)"""
    assert tag_similarity('boxes', 'boxed') == 0.8
    assert tag_similarity('painted', 'paints') == 0.8

def test_short_stems_do_not_match():
    # Both reduce to "b"
    assert tag_similarity('bed', 'bes') == 0.0

def test_shared_words():
    assert tag_similarity('hot-dog', 'dog_park') == pytest.approx(0.5)
    assert tag_similarity('sea turtle', 'green turtle') == pytest.approx(0.5)

def test_unrelated_tags():
    assert tag_similarity('beach', 'mountain') == 0.0

def test_pairwise_similarity_is_symmetric():
    tags = ['beach', 'beaches', 'sun', 'sunset', 'boxes', 'boxed', 'hot-dog',
            'dog_park', 'sea turtle', 'green turtle', 'running', 'forest']
    for t1 in tags:
        for t2 in tags:
            assert tag_similarity(t1, t2) == tag_similarity(t2, t1)

def test_set_similarity_empty_lists():
    assert tag_set_similarity([], ['beach']) == 0.0
    assert tag_set_similarity(['beach'], []) == 0.0
    assert tag_set_similarity([], []) == 0.0

@pytest.mark.parametrize('tags', [
    ['beach'],
    ['beach', 'ocean', 'sunset'],
    ['beach', 'beach', 'sand'],
])
def test_set_similarity_with_itself(tags):
    assert tag_set_similarity(tags, tags) == 1.0

def test_set_similarity_no_overlap_has_no_bonus():
    assert tag_set_similarity(['beach', 'ocean', 'sunset'], ['forest']) == 0.0

def test_set_similarity_semantic_only():
    # No exact match, containment ratio 6/7 for the only pair, plus bonus
    expected = (6 / 7) * 0.5 + 0.1
    assert tag_set_similarity(['sunsets'], ['sunset']) == pytest.approx(expected)

def test_set_similarity_is_asymmetric():
    """Test that the reference list drives the score"""
    short = ['beach']
    long = ['beach', 'ocean', 'sunset']

    # 1 exact match out of max(1, 3), every reference tag matched
    assert tag_set_similarity(short, long) == pytest.approx(1 / 3 * 0.5 + 1.0 * 0.5 + 0.1)
    # 1 exact match out of max(3, 1), one of three reference tags matched
    assert tag_set_similarity(long, short) == pytest.approx(1 / 3 * 0.5 + 1 / 3 * 0.5 + 0.1)

def test_set_similarity_counts_duplicate_reference_tags():
    assert tag_set_similarity(['beach', 'beach'], ['beach']) == 1.0

def test_set_similarity_is_case_insensitive():
    assert tag_set_similarity(['Beach'], ['beach']) == 1.0
