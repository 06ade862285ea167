import logging
import sys
import structlog
import pydantic
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    log_level: str = pydantic.Field(
        "info",
        description="Logging level.",
    )
    log_file: str = pydantic.Field(
        "STDERR",
        description="Path to the log file, or STDOUT/STDERR.",
    )
    log_format: str = pydantic.Field(
        "text",
        description="Log format, text or json.",
    )
    default_source: str = pydantic.Field(
        "RIPE",
        description="Source set on records created from the command line.",
    )
    model_config = SettingsConfigDict(env_prefix="ripedb_")


def _stderr_logger(*args) -> structlog.PrintLogger:
    # sys.stderr is looked up per logger, it may be swapped after configure
    return structlog.PrintLogger(sys.stderr)


def configure_logging(config: Config) -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(),
    ]
    if config.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    if config.log_file == "STDOUT":
        factory = structlog.PrintLoggerFactory()
    elif config.log_file == "STDERR":
        factory = _stderr_logger
    else:
        factory = structlog.PrintLoggerFactory(file=open(config.log_file, "a"))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.log_level.upper())
        ),
        logger_factory=factory,
    )


def load_config(**overrides) -> Config:
    """
    Read settings from RIPEDB_* environment variables, apply overrides
    and set up structlog accordingly.
    """
    config = Config(**overrides)
    configure_logging(config)
    return config
