from taskboard.api import create_app

app = create_app()
