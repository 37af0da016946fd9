from flask import Blueprint, request

from core.response import MAX_STATUS, MIN_STATUS, emit, emit_error, emit_server_error, new_response


def init_api_blueprint():
    bp = Blueprint('api_bp', __name__, url_prefix='/api')

    @bp.route('/health')
    def health():
        out = new_response(200)
        out['ok'] = True
        out['message'] = 'alive'
        return emit(out)

    @bp.route('/status/<int:code>')
    def status(code):
        if not MIN_STATUS <= code <= MAX_STATUS:
            return emit_error(400, 'Unsupported status code', {'code': code})
        return emit_error(code, request.args.get('message'))

    @bp.route('/fail')
    def fail():
        emit_server_error('Simulated failure')

    # Same document as /health but never served as JSON-P
    @bp.route('/private')
    def private():
        out = new_response()
        out['ok'] = True
        return emit(out, allow_jsonp=False)

    return bp
