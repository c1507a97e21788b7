from sitepipe.cli import app

app(prog_name="sitepipe")
