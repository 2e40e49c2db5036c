"""
Vocabulary Service

Loads and caches the YAML vocabularies used by the rewriter:
pronoun substitutions, irregular verb pairs, gendered terms and excluded domains.
"""

import logging
import yaml
from typing import Dict, Any, Optional
from pathlib import Path

from config import Config

logger = logging.getLogger(__name__)


class VocabularyService:
    """
    Service for managing rewriting vocabularies.

    Files are loaded lazily and cached for the life of the service.
    """

    def __init__(self, config_dir: Optional[str] = None):
        if config_dir is None:
            # Auto-detect config directory relative to this file
            current_dir = Path(__file__).parent
            config_dir = current_dir.parent / "config"

        self.config_dir = Path(config_dir)
        self._cache: Dict[str, Dict[str, Any]] = {}

    def _load_yaml_file(self, filename: str) -> Dict[str, Any]:
        """Load and cache a YAML vocabulary file."""
        if filename in self._cache:
            return self._cache[filename]

        file_path = self.config_dir / filename

        if not file_path.exists():
            logger.warning(f"Vocabulary file {file_path} not found. Using empty vocabulary.")
            self._cache[filename] = {}
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Error parsing vocabulary file {file_path}: {e}")
            self._cache[filename] = {}
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Vocabulary file {file_path} is not a mapping. Using empty vocabulary.")
            data = {}

        self._cache[filename] = data
        logger.info(f"Loaded vocabulary: {filename}")
        return data

    # === SPECIFIC VOCABULARY ACCESSORS ===

    def get_pronouns(self) -> Dict[str, Any]:
        """Get pronoun substitution vocabulary."""
        return self._load_yaml_file("pronouns.yaml")

    def get_irregular_verbs(self) -> Dict[str, Any]:
        """Get irregular verb pairs vocabulary."""
        return self._load_yaml_file("irregular_verbs.yaml")

    def get_gender_terms(self) -> Dict[str, Any]:
        """Get pronoun specification and gendered mention vocabulary."""
        return self._load_yaml_file("gender_terms.yaml")

    def get_excluded_domains(self) -> Dict[str, Any]:
        """Get excluded domains vocabulary."""
        return self._load_yaml_file("excluded_domains.yaml")


# === GLOBAL SERVICE INSTANCE ===

_vocabulary_service: Optional[VocabularyService] = None


def get_vocabulary_service() -> VocabularyService:
    """Get the vocabulary service instance."""
    global _vocabulary_service
    if _vocabulary_service is None:
        _vocabulary_service = VocabularyService(Config.VOCABULARY_DIR)
    return _vocabulary_service
