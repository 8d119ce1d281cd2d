# tests/test_input_validation.py

import pytest
from core.models import SearchFilters
from core.search_pipeline import SearchPipeline
from security.input_validation import InputValidator

@pytest.mark.parametrize('value, expected', [
    ('#ffd700', '#FFD700'),
    ('  #00CED1 ', '#00CED1'),
    ('#FFF', None),
    ('FFD700', None),
    ('rgb(255, 0, 0)', None),
    (None, None),
    (123, None),
])
def test_normalize_hex_color(value, expected):
    assert InputValidator.normalize_hex_color(value) == expected

def test_normalize_tags_keeps_order_and_duplicates():
    tags = InputValidator.normalize_tags([' Beach', 'OCEAN ', '', 'beach', 7])
    assert tags == ('beach', 'ocean', 'beach')

def test_normalize_tags_rejects_non_lists():
    assert InputValidator.normalize_tags(None) == ()
    assert InputValidator.normalize_tags('beach') == ()

def test_normalize_description():
    assert InputValidator.normalize_description("  Beach   at\nsunset ") == "Beach   at\nsunset"
    assert InputValidator.normalize_description("   ") is None
    assert InputValidator.normalize_description(None) is None

def test_description_whitespace_is_not_rewritten_for_text_search():
    record = InputValidator.parse_record(
        {'id': 1, 'metadata': {'tags': ['coast'], 'description': "Beach\nat  sunset"}}
    )
    pipeline = SearchPipeline()
    assert pipeline.search([record], SearchFilters(text_query="beach at")) == []
    assert pipeline.search([record], SearchFilters(text_query="at  sunset")) == [record]

def test_normalize_colors_marks_malformed_entries():
    colors = InputValidator.normalize_colors(['#ffd700', 'blue', '#00CED1', '#FF6347'])
    # Capped at three entries, the malformed one kept as None
    assert colors == ('#FFD700', None, '#00CED1')

def test_parse_nested_metadata():
    """Test rows shaped like the data store's image-with-metadata join"""
    raw = {
        'id': 1,
        'filename': 'image-1.jpg',
        'metadata': {
            'tags': ['beach', 'ocean'],
            'description': 'A beautiful beach scene',
            'colors': ['#FFD700', '#00CED1'],
            'ai_processing_status': 'completed',
        },
    }
    record = InputValidator.parse_record(raw)

    assert record.id == 1
    assert record.tags == ('beach', 'ocean')
    assert record.description == 'A beautiful beach scene'
    assert record.colors == ('#FFD700', '#00CED1')
    assert record.has_metadata
    assert record.status == 'completed'
    assert record.extra == {'filename': 'image-1.jpg'}

def test_parse_flat_row():
    record = InputValidator.parse_record({'id': 'abc', 'tags': ['Snow'], 'colors': None})
    assert record.has_metadata
    assert record.tags == ('snow',)
    assert record.colors == ()
    assert record.description is None
    assert record.status is None

def test_parse_row_without_metadata():
    for raw in ({'id': 5, 'filename': 'test.jpg'}, {'id': 5, 'metadata': None}):
        record = InputValidator.parse_record(raw)
        assert record.id == 5
        assert not record.has_metadata

def test_parse_records_skips_unusable_rows():
    records = InputValidator.parse_records([{'id': 1, 'tags': []}, {'tags': ['x']}, 'junk', None])
    assert [r.id for r in records] == [1]
    assert InputValidator.parse_records(None) == []

def test_parse_filters():
    assert InputValidator.parse_filters(None) == SearchFilters()
    assert InputValidator.parse_filters({
        'textQuery': ' beach ', 'colorFilter': '#FFD700', 'similarToImageId': 3
    }) == SearchFilters(text_query='beach', color='#FFD700', similar_to=3)
    assert InputValidator.parse_filters({'text_query': '  ', 'color': ''}).is_empty

def test_parsed_records_search_end_to_end():
    raw = [
        {'id': 1, 'metadata': {'tags': ['beach'], 'description': 'Beach', 'colors': ['#ffd700']}},
        {'id': 2, 'metadata': {'tags': ['beach'], 'description': None, 'colors': ['bogus']}},
        {'id': 3},
    ]
    records = InputValidator.parse_records(raw)
    pipeline = SearchPipeline()

    assert [r.id for r in pipeline.search(records, SearchFilters(text_query='beach'))] == [1, 2]
    assert [r.id for r in pipeline.search(records, SearchFilters(color='#FFD700'))] == [1]
