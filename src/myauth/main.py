"""Application entry point for the myauth server."""

from myauth.app import App
from myauth.config import Config
from myauth.logging import setup_logging
from myauth.web.runner import run_server


def main() -> None:
    config = Config()  # type: ignore[call-arg]
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
