from stdref.cli.main import app

app()
