from opencommit.cli.main import run

run()
