from flask import render_template
from werkzeug.exceptions import HTTPException

ERROR_TITLES = {
    400: "Bad request",
    404: "Page not found",
    405: "Method not allowed",
    500: "Internal server error",
}


def error_response(code=500, reason=None):
    title = ERROR_TITLES.get(code, "Request failed")
    return render_template("errors.html", code=code, title=title, reason=reason), code


def register_error_handlers(app):
    # Unhandled exceptions reach here as InternalServerError after Flask has logged them
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return error_response(e.code or 500, e.description)
