import sys

import typer

import cli.cli

if __name__ == "__main__":
    # Access app attribute - it's a Typer instance defined in cli.cli module
    typer_app: typer.Typer = cli.cli.app
    typer_app(args=sys.argv[1:], prog_name="strava-rewriter")
