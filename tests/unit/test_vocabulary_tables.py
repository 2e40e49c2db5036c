"""
Unit tests for the pronoun and irregular verb tables.

Both tables carry ordering invariants that are checked when they are built.
"""

import pytest

from rewriting.services.vocabulary_service import VocabularyService
from rewriting.vocabulary_tables import (
    IrregularVerbTable, PatternError, PronounTable, get_irregular_verb_table, get_pronoun_table,
    initialize_tables
)


class TestPronounTable:

    def test_default_table_lists_compounds_before_single_words(self):
        words = get_pronoun_table().words()
        first_single = next(i for i, w in enumerate(words) if ' ' not in w)
        assert all(' ' not in w for w in words[first_single:])
        assert words[0] == 'he or she'
        assert 'he' in words and 'himself or herself' in words

    def test_no_phrase_is_its_own_replacement(self):
        table = get_pronoun_table()
        replacements = set(table.values()) | set(table.determiner_forms.values())
        assert not replacements & set(table.words())

    def test_compound_after_single_word_is_rejected(self):
        with pytest.raises(PatternError):
            PronounTable([('he', 'they'), ('he or she', 'they')])

    def test_replacement_that_is_also_a_key_is_rejected(self):
        with pytest.raises(PatternError):
            PronounTable([('he', 'she'), ('she', 'they')])

    def test_malformed_phrase_is_rejected(self):
        with pytest.raises(PatternError):
            PronounTable([('he/she', 'they')])
        with pytest.raises(PatternError):
            PronounTable([('', 'they')])

    def test_determiner_form_requires_known_word(self):
        with pytest.raises(PatternError):
            PronounTable([('he', 'they')], {'her': 'their'})

    def test_table_is_read_only(self):
        table = PronounTable([('he', 'they')])
        with pytest.raises(TypeError):
            table['he'] = 'them'

    def test_replacement_for_uses_determiner_form_only_when_asked(self):
        table = get_pronoun_table()
        assert table.replacement_for('her') == 'them'
        assert table.replacement_for('her', determiner=True) == 'their'
        assert table.replacement_for('She', determiner=True) == 'they'


class TestIrregularVerbTable:

    def test_default_table_puts_negated_forms_first(self):
        pairs = get_irregular_verb_table().pairs
        singulars = [singular for singular, _ in pairs]
        assert singulars.index('is not') < singulars.index('is')
        assert singulars.index('does not') < singulars.index('does')
        assert ('has', 'have') in pairs

    def test_prefix_before_longer_form_is_rejected(self):
        with pytest.raises(PatternError):
            IrregularVerbTable([('is', 'are'), ('is not', 'are not')])

    def test_duplicate_form_is_rejected(self):
        with pytest.raises(PatternError):
            IrregularVerbTable([('is', 'are'), ('is', 'were')])

    def test_pair_shape_is_checked(self):
        with pytest.raises(PatternError):
            IrregularVerbTable([('is', 'are', 'were')])


class TestVocabularyService:

    def test_missing_file_gives_empty_vocabulary(self, tmp_path):
        service = VocabularyService(str(tmp_path))
        assert service.get_pronouns() == {}

    def test_tables_load_from_custom_directory(self, tmp_path):
        (tmp_path / 'pronouns.yaml').write_text(
            "compound_pronouns:\n  he or she: they\ngender_pronouns:\n  he: they\n",
            encoding='utf-8'
        )
        table = PronounTable.from_vocabulary(VocabularyService(str(tmp_path)).get_pronouns())
        assert table.words() == ('he or she', 'he')

    def test_non_mapping_file_is_ignored(self, tmp_path):
        (tmp_path / 'irregular_verbs.yaml').write_text("- just\n- a list\n", encoding='utf-8')
        assert VocabularyService(str(tmp_path)).get_irregular_verbs() == {}


class TestEmptyVocabularies:

    def test_empty_pronoun_vocabulary_is_rejected(self):
        with pytest.raises(PatternError):
            PronounTable.from_vocabulary({})
        with pytest.raises(PatternError):
            PronounTable.from_vocabulary({'compound_pronouns': None, 'gender_pronouns': {}})

    def test_empty_irregular_verb_vocabulary_is_rejected(self):
        with pytest.raises(PatternError):
            IrregularVerbTable.from_vocabulary({'irregular_verbs': []})

    def test_missing_files_fail_table_initialization(self, tmp_path):
        with pytest.raises(PatternError):
            initialize_tables(VocabularyService(str(tmp_path)))
