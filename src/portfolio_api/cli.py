# cli.py
import logging

import click
import uvicorn

from portfolio_api.config.settings import get_settings

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Portfolio API"""
    pass


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to HOST setting)")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to PORT setting)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host, port, reload):
    """Run the API with uvicorn"""
    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    logger.info(f"Serving Portfolio API on {host}:{port} ({settings.deployment_mode})")
    uvicorn.run(
        "portfolio_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    for key, value in settings.get_environment_dict().items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    cli()
