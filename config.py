"""
Configuration for the Gender-Neutral Page Rewriter.
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables (optional - only if .env file exists)
load_dotenv()


class Config:
    """Application configuration."""

    # Production/Development Mode
    DEBUG = os.environ.get('FLASK_ENV', 'production') == 'development'
    TESTING = False

    # Request Configuration
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 5 * 1024 * 1024))  # 5MB of page HTML

    # Rate limiting (Flask-Limiter reads these keys)
    RATELIMIT_ENABLED = os.environ.get('RATELIMIT_ENABLED', 'true').lower() == 'true'
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '60 per minute')

    # Page sessions kept in memory; the oldest is evicted beyond this
    MAX_PAGE_SESSIONS = int(os.environ.get('MAX_PAGE_SESSIONS', 100))

    # Rewriting Configuration
    EXPAND_CONTRACTIONS = os.environ.get('EXPAND_CONTRACTIONS', 'true').lower() == 'true'

    # Directory holding pronouns.yaml, irregular_verbs.yaml, gender_terms.yaml, excluded_domains.yaml
    VOCABULARY_DIR = os.environ.get('VOCABULARY_DIR')

    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # SpaCy model settings
    SPACY_MODEL = os.environ.get('SPACY_MODEL', 'en_core_web_sm')

    @staticmethod
    def init_app(app):
        """Initialize application"""
        # Configure logging
        if not app.debug:
            if not app.logger.handlers:
                handler = logging.StreamHandler()
                handler.setLevel(logging.INFO)
                formatter = logging.Formatter(
                    '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
                )
                handler.setFormatter(formatter)
                app.logger.addHandler(handler)
                app.logger.setLevel(logging.INFO)


# For testing only
class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    RATELIMIT_ENABLED = False
