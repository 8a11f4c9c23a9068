"""Root Click group for the aml-rollout CLI."""

from __future__ import annotations

from typing import Optional

import click

from .. import __version__
from ..config.manager import ConfigManager
from ..logging import get_logger, setup_logging
from .commands import register_all
from .core import CommandRegistry
from .utils import report_failure


@click.group()
@click.version_option(__version__, prog_name="aml-rollout")
@click.option(
    "--config", "-c", type=click.Path(exists=False), help="Configuration file path"
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Overrides logging.level from the configuration",
)
@click.option(
    "--log-format",
    default=None,
    type=click.Choice(["console", "json"]),
    help="Overrides logging.format from the configuration",
)
@click.pass_context
def main(
    ctx: click.Context,
    config: Optional[str],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """aml-rollout - create Azure ML online deployments and shift endpoint traffic."""
    ctx.ensure_object(dict)

    try:
        config_manager = ConfigManager(config_path=config)
    except ValueError as e:
        report_failure(str(e))
        ctx.exit(1)
    ctx.obj["config"] = config_manager

    setup_logging(
        log_level=log_level or config_manager.logging.level,
        log_format=log_format or config_manager.logging.format,
        max_output_chars=config_manager.logging.max_output_chars,
    )

    logger = get_logger(__name__)
    logger.debug(
        "aml-rollout CLI initialized",
        config_path=str(config_manager.config_path),
    )


_registry = CommandRegistry()
register_all(_registry)
_registry.attach_to_main(main)


if __name__ == "__main__":  # pragma: no cover
    main()  # pylint: disable=no-value-for-parameter
