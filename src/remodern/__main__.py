from remodern.cli.app import cli

cli()
