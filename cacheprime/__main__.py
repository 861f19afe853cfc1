from cacheprime.main import cli

cli()
