"""
Fuzzy pattern and relevance scoring tests (no database).
"""
import re

from modules.search.fuzzy import (
    build_fuzzy_pattern,
    normalize_query,
    score_breakdown,
    score_fields,
)


class TestBuildFuzzyPattern:

    def test_single_word_interleaves_characters(self):
        assert build_fuzzy_pattern('cat') == 'c.*a.*t'

    def test_single_word_matches_loosely(self):
        regex = re.compile(build_fuzzy_pattern('sclpl'), re.IGNORECASE)
        assert regex.search('Disposable Scalpel Blade')

    def test_multi_word_requires_all_words_in_any_order(self):
        pattern = build_fuzzy_pattern('latex gloves')
        assert pattern == '(?=.*latex)(?=.*gloves).*'

        regex = re.compile(pattern, re.IGNORECASE)
        assert regex.search('Gloves, powder free LATEX')
        assert not regex.search('Nitrile gloves')

    def test_metacharacters_are_escaped(self):
        pattern = build_fuzzy_pattern('3.0 (mm)')
        regex = re.compile(pattern)
        assert regex.search('Suture 3.0 (mm) silk')
        assert not regex.search('Suture 390 mm')

    def test_whitespace_is_collapsed(self):
        assert build_fuzzy_pattern('  latex   gloves ') == build_fuzzy_pattern('latex gloves')

    def test_empty_query(self):
        assert build_fuzzy_pattern('   ') == ''
        assert build_fuzzy_pattern(None) == ''

    def test_idempotent(self):
        assert build_fuzzy_pattern('Dental Mirror') == build_fuzzy_pattern('Dental Mirror')


def test_normalize_query():
    assert normalize_query('  dental \t mirror\n') == 'dental mirror'
    assert normalize_query(42) == ''


class TestScoring:

    def test_exact_name_and_phrase_in_description(self):
        record = {'name': 'Dental Mirror', 'description': 'A dental mirror with handle'}

        breakdown = score_breakdown('dental mirror', record, ['name', 'description'])

        assert breakdown['name']['exact'] == 100
        assert breakdown['description']['exact'] == 0
        assert breakdown['description']['contains_phrase'] == 50
        assert breakdown['name']['exact'] + breakdown['description']['contains_phrase'] == 150

    def test_tiers_accumulate_over_fields(self):
        record = {'name': 'Dental Mirror', 'description': 'A dental mirror with handle'}
        # name: 100 + 75 + 50 + 25 + 10, description: 50 + 25 + 10
        assert score_fields('dental mirror', record, ['name', 'description']) == 345

    def test_case_insensitive(self):
        assert score_fields('FORCEPS', {'name': 'forceps'}, ['name']) == 260

    def test_list_fields_are_joined(self):
        record = {'tags': ['orthodontic', 'pliers']}
        breakdown = score_breakdown('pliers', record, ['tags'])
        assert breakdown['tags']['contains_phrase'] == 50
        assert breakdown['tags']['starts_with'] == 0

    def test_any_word_only(self):
        record = {'name': 'Surgical Gloves'}
        assert score_fields('latex gloves', record, ['name']) == 10

    def test_missing_fields_score_zero(self):
        assert score_fields('gloves', {'name': None}, ['name', 'description']) == 0

    def test_objects_are_supported(self):
        class Product:
            name = 'Bone Rongeur'
            description = ''

        assert score_fields('bone', Product(), ['name', 'description']) == 75 + 50 + 25 + 10

    def test_empty_query_scores_nothing(self):
        assert score_breakdown('', {'name': 'anything'}, ['name']) == {}
        assert score_fields('', {'name': 'anything'}, ['name']) == 0
