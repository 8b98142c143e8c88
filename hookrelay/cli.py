"""Command line interface for hookrelay."""

import asyncio
import json
import logging
import sys

import click

from hookrelay.config import settings
from hookrelay.errors import PayloadError, UnsupportedEventError
from hookrelay.logging_config import configure_logging
from hookrelay.routing import GitHubEventType

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="hookrelay")
def cli():
    """hookrelay - GitHub webhook event router."""
    configure_logging(settings.log_level)


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Bind address")
@click.option("--port", default=9000, show_default=True, type=int, help="Bind port")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
def serve(host: str, port: int, reload: bool):
    """Run the webhook receiver."""
    import uvicorn

    logger.info(f"Starting hookrelay on {host}:{port}")
    uvicorn.run("hookrelay.main:app", host=host, port=port, reload=reload)


@cli.command()
@click.argument("event", type=click.Choice([e.value for e in GitHubEventType]))
@click.argument("payload_file", type=click.File("r"))
def replay(event: str, payload_file):
    """Dispatch a saved webhook PAYLOAD_FILE as an EVENT."""
    from hookrelay.main import create_dispatcher

    try:
        payload = json.load(payload_file)
    except json.JSONDecodeError as e:
        logger.error(f"❌ {payload_file.name} is not valid JSON: {e}")
        sys.exit(1)

    async def run():
        try:
            dispatcher = create_dispatcher(settings)
            handled = await dispatcher.dispatch(event, payload)
            click.echo(f"Handled {event} event for {handled.repository}")
        except (PayloadError, UnsupportedEventError) as e:
            logger.error(f"❌ {e}")
            sys.exit(1)
        except Exception as e:
            logger.error(f"❌ Replay of {event} event failed: {e}", exc_info=True)
            sys.exit(1)

    asyncio.run(run())


@cli.command("list-events")
def list_events():
    """List the GitHub events hookrelay handles."""
    for event in GitHubEventType:
        click.echo(f"  {event.value}")
    click.echo()
    click.echo(f"Sensitive files: {', '.join(sorted(settings.sensitive_file_set))}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
