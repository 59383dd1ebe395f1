"""ASGI entry point used by the Procfile."""
from eb_course.logging_config import configure_logging
from eb_course.main import create_app

configure_logging()

application = create_app()
