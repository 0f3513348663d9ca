from monosplit.cli.main import app

app()
