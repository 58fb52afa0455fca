from codeguard.cli import cli

cli()
