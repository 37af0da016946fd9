import traceback

from dotenv import load_dotenv
load_dotenv()

from flask import Flask
from werkzeug.exceptions import HTTPException

from config import Config
from core.response import emit, emit_error, new_error_response
from utils.db_monitor import register_command_logger
from utils.request_metrics import start_request, finish_request


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Must happen before any MongoClient is created by the host application
    register_command_logger()

    # Request lifecycle hooks
    @app.before_request
    def _before_request_metrics():
        start_request()

    @app.after_request
    def _after_request_metrics(response):
        data = finish_request(status_code=response.status_code)
        if data:
            response.headers['X-Request-Time-ms'] = str(round(data.get('total_ms') or 0, 2))
            if app.config.get('LOG_PERF_DETAILS'):
                app.logger.info(
                    f"{data['method']} {data['path']} -> {response.status_code} | total={data['total_ms']:.1f}ms "
                    f"db={data['db_count']}/{data['db_ms']:.1f}ms cache={data['cache_reads']}/{data['cache_writes']}"
                )
        return response

    # Central error handler
    @app.errorhandler(Exception)
    def handle_any_exception(err):
        if isinstance(err, HTTPException):
            if err.response is not None:
                return err.response
            return emit_error(err.code or 500, err.description)

        show_details = app.debug or app.config.get('SHOW_DETAILED_ERRORS')
        if show_details:
            tb_str = ''.join(traceback.format_exception(type(err), err, err.__traceback__))
            app.logger.error(f"Unhandled exception: {tb_str}")
            return emit(new_error_response(500, 'An unexpected error occurred.', {'traceback': tb_str}))

        app.logger.error(f"Unhandled exception: {err}")
        return emit(new_error_response(500, 'An unexpected error occurred.'))

    from routes.api import init_api_blueprint
    if 'api_bp' not in app.blueprints:
        app.register_blueprint(init_api_blueprint())

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=True, host='0.0.0.0', port=5000)
