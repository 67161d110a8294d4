from session_auth import create_app

app = create_app()

if __name__ == "__main__":
    port = app.config["PORT"]
    app.logger.info(f"http://localhost:{port}")
    app.run(port=port, threaded=True, use_reloader=False)
