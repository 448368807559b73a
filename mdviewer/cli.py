import logging

import click

from .config import load_settings
from .errors import ConfigError
from .server import create_app

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-root", "--root", default=None, help="Root directory to scan for markdown files (default: .).")
@click.option("-port", "--port", type=int, default=None, help="HTTP port to listen on (default: 8080).")
@click.option("--host", default=None, help="Interface to bind (default: 127.0.0.1).")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="JSON config file (default: <root>/mdviewer.config.json).")
@click.option("--debug", is_flag=True, help="Verbose logging and Flask debug mode.")
def main(root, port, host, config_path, debug):
    """Serve the markdown files below ROOT to a browser."""
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT)
    try:
        settings = load_settings(root=root, port=port, host=host,
                                 debug=debug or None, config_path=config_path)
    except ConfigError as e:
        raise click.ClickException(str(e))

    app = create_app(settings.root)
    print(f"Markdown viewer running on http://localhost:{settings.port} (root: {settings.root})")
    app.run(host=settings.host, port=settings.port, debug=settings.debug)
