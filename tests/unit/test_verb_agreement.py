"""
Unit tests for verb number agreement.

Uses the lexicon analyzer from conftest so the expected tags are fixed.
"""

import pytest

from rewriting.verb_agreement import fix_verb_number, plural_verb_form
from rewriting.vocabulary_tables import get_irregular_verb_table


def fixed(analyzer, text, subject='he'):
    doc = analyzer.analyze(text)
    fix_verb_number(doc, subject, get_irregular_verb_table())
    return doc.render()


class TestPluralVerbForm:

    @pytest.mark.parametrize('verb, plural', [
        ('flies', 'fly'),
        ('goes', 'go'),
        ('squashes', 'squash'),
        ('watches', 'watch'),
        ('fixes', 'fix'),
        ('buzzes', 'buzz'),
        ('smokes', 'smoke'),
        ('makes', 'make'),
        ('Runs', 'Run'),
    ])
    def test_spelling_rules(self, verb, plural):
        assert plural_verb_form(verb) == (verb, plural)

    def test_es_rule_needs_sibilant_or_o_stem(self):
        # "mak" does not end in o/s/ch/sh/x/z, so only the trailing "s" goes
        assert plural_verb_form('makes')[1] == 'make'
        assert plural_verb_form('likes')[1] == 'like'

    def test_verb_without_s_is_left_alone(self):
        assert plural_verb_form('smoke') is None
        assert plural_verb_form('went') is None


class TestStatementForm:

    def test_irregular_verb(self, analyzer):
        assert fixed(analyzer, "He is happy") == "He are happy"

    def test_negated_irregular_verb_is_matched_whole(self, analyzer):
        assert fixed(analyzer, "He does not smoke") == "He do not smoke"
        assert fixed(analyzer, "He was not late") == "He were not late"

    def test_regular_verbs(self, analyzer):
        assert fixed(analyzer, "He smokes") == "He smoke"
        assert fixed(analyzer, "She flies daily", 'she') == "She fly daily"
        assert fixed(analyzer, "He goes home") == "He go home"

    def test_single_adverb_is_skipped(self, analyzer):
        assert fixed(analyzer, "He always smokes") == "He always smoke"
        assert fixed(analyzer, "He really has a car") == "He really have a car"

    def test_compound_subject(self, analyzer):
        assert fixed(analyzer, "He or she smokes", 'he or she') == "He or she smoke"

    def test_non_verb_after_subject_is_untouched(self, analyzer):
        assert fixed(analyzer, "Is he nervous?") == "Are he nervous?"
        assert fixed(analyzer, "He, as always, smokes") == "He, as always, smokes"

    def test_every_occurrence_is_fixed(self, analyzer):
        assert fixed(analyzer, "He smokes and he drinks.") == "He smoke and he drink."

    def test_acronym_subject_is_ignored(self, analyzer):
        assert fixed(analyzer, "HE smokes") == "HE smokes"


class TestQuestionForm:

    def test_irregular_verb_before_subject(self, analyzer):
        assert fixed(analyzer, "Does he smoke?") == "Do he smoke?"
        assert fixed(analyzer, "Has she left?", 'she') == "Have she left?"

    def test_lowercase_verb_stays_lowercase(self, analyzer):
        assert fixed(analyzer, "Why does he smoke?") == "Why do he smoke?"

    def test_question_and_statement_do_not_double_rewrite(self, analyzer):
        assert fixed(analyzer, "Is he happy? He is.") == "Are he happy? He are."
