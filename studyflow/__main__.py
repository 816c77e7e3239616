from studyflow.cli.main import run

run()
