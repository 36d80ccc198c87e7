from skillshelf.cli.main import app

app()
