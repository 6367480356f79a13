from rwmap.cli.app import app

app(prog_name="rwmap")
