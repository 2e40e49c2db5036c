"""
App Factory Module
Creates and configures the Flask application with all necessary components.
Implements the application factory pattern for better testing and modularity.
"""

import logging
from typing import Any, Dict, Optional

from flask import Flask
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from config import Config
from page_structure.page_session import PageSessionStore
from rewriting.pronoun_replacement import PronounReplacer
from rewriting.vocabulary_tables import initialize_tables
from .api_routes import setup_routes

logger = logging.getLogger(__name__)


def create_app(config_class=Config, services: Optional[Dict[str, Any]] = None):
    """
    Create and configure Flask application using the application factory pattern.

    ``services`` may supply 'replacer', 'highlighter' and 'exclusions'
    instances, or a 'vocabulary' service; missing ones fall back to the
    process-wide defaults.

    Raises:
        PatternError: if the pronoun or irregular verb vocabulary is unusable
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    config_class.init_app(app)

    # Initialize extensions
    CORS(app)

    limiter = Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=[app.config.get('RATELIMIT_DEFAULT', '60 per minute')],
        storage_uri="memory://",
        strategy="fixed-window"
    )
    app.limiter = limiter

    services = initialize_services(services)
    page_store = PageSessionStore(app.config.get('MAX_PAGE_SESSIONS', 100))

    setup_routes(app, page_store, services)

    # Store services in app context for access
    setattr(app, 'services', services)
    setattr(app, 'page_store', page_store)

    logger.info("Application created")
    return app


def initialize_services(services: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Collect rewriting services; None entries mean 'use the process-wide default'.

    Unless a replacer is supplied, the vocabulary tables are built and validated
    here so a broken vocabulary fails at startup rather than on the first page.
    An optional 'vocabulary' entry overrides the vocabulary service used.
    """
    services = dict(services or {})
    vocabulary = services.pop('vocabulary', None)
    if services.get('replacer') is None:
        pronoun_table, irregular_verbs = initialize_tables(vocabulary)
        services['replacer'] = PronounReplacer(pronoun_table, irregular_verbs)
    for name in ('replacer', 'highlighter', 'exclusions'):
        services.setdefault(name, None)
    return services
