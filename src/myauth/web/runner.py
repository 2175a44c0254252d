"""Uvicorn server runner with custom configuration."""

import copy
from typing import Any

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from myauth.app import App
from myauth.config import Config
from myauth.web.server import create_fastapi_app


def build_log_config() -> dict[str, Any]:
    """Uvicorn logging config tagged with the service name; the access line carries the client address."""
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s myauth %(client_addr)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s myauth %(levelname)s - %(message)s"
    return log_config


def run_server(app: App, config: Config) -> None:
    """Run the Uvicorn server with custom logging configuration."""
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(fastapi_app, host=config.host, port=config.port, log_config=build_log_config(), access_log=True)
