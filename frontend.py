from taskboard.web.app import create_frontend_app

app = create_frontend_app()
