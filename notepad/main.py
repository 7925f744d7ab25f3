"""Main entry point for the Notepad web service."""

from notepad.services.logs import configure_logging, get_logger
from notepad.settings import Settings
from notepad.web import create_app


def main():
    """
    Run the Notepad development server.
    """
    settings = Settings.from_env()
    configure_logging(settings.data_dir, console=settings.debug or None)
    app = create_app(settings)
    get_logger(__name__).info(
        "server.starting", host=settings.host, port=settings.port, store=settings.store
    )
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
